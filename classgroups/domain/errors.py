# classgroups/domain/errors.py


class ValidationError(ValueError):
    """
    A partition request the engines refuse to run.

    `condition` names the failed precondition so callers can show a
    specific message: invalid_group_count, insufficient_students,
    too_many_groups or duplicate_student_id.
    """

    def __init__(self, condition: str, message: str):
        super().__init__(message)
        self.condition = condition

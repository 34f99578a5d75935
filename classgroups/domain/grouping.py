# classgroups/domain/grouping.py

from typing import Callable, List, Sequence, TypeVar
from dataclasses import dataclass

from classgroups.domain.errors import ValidationError

StudentT = TypeVar("StudentT")

# a partition is an ordered list of groups; each group is a list of student records
Partition = List[List[StudentT]]

SEED_DISTANCE_STRATEGIES = ("nearest", "mean")


@dataclass(frozen=True)
class InterestOptions:
    first_seed_target: float = 0.3
    seed_distance_target: float = 0.55
    seed_distance: str = "nearest"
    size_penalty: float = 0.05
    # a group is trimmed only while it holds more than target + balance_tolerance members
    balance_tolerance: int = 1

    def __post_init__(self):
        if self.seed_distance not in SEED_DISTANCE_STRATEGIES:
            raise ValueError(f"seed_distance must be one of {SEED_DISTANCE_STRATEGIES}")
        if self.balance_tolerance < 0:
            raise ValueError("balance_tolerance must be >= 0")


@dataclass(frozen=True)
class MbtiOptions:
    underrepresented_bonus: int = 10
    same_type_penalty: int = 5
    group_size_penalty: int = 2


# each engine implements:
# def algorithm(roster: Sequence[Student], num_groups: int, options=None) -> Partition

Algorithm = Callable[..., Partition]


def validate_partition_request(roster: Sequence, num_groups: int) -> None:
    """
    Reject requests no engine can satisfy. Runs before any grouping work.

    >>> validate_partition_request(["a"], 2)
    Traceback (most recent call last):
    ...
    classgroups.domain.errors.ValidationError: At least 2 students are required for grouping
    """
    if num_groups < 1:
        raise ValidationError("invalid_group_count", "Number of groups must be at least 1")
    if len(roster) < 2:
        raise ValidationError("insufficient_students", "At least 2 students are required for grouping")
    if num_groups > len(roster):
        raise ValidationError(
            "too_many_groups", "Number of groups cannot exceed total number of students"
        )
    ids = [getattr(s, "id", None) for s in roster]
    if len(set(ids)) != len(ids):
        raise ValidationError("duplicate_student_id", "Roster contains the same student id more than once")

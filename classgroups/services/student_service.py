# classgroups/services/student_service.py
import logging
import uuid
from datetime import datetime, timezone
from typing import Dict, List, Optional, Union

from classgroups.config.settings import settings
from classgroups.domain import analytics
from classgroups.domain.mbti import derive_dimensions, describe_type, ensure_dimensions
from classgroups.domain.models import (
    ASSIGNMENT_KEYS,
    InterestStudent,
    InterestSubmission,
    MbtiStudent,
    MbtiSubmission,
    Mode,
)
from classgroups.infrastructure.repositories.assignment_repo import AssignmentRepo
from classgroups.infrastructure.repositories.student_repo import StudentRepo

logger = logging.getLogger(__name__)

Student = Union[InterestStudent, MbtiStudent]

STUDENT_MODELS = {
    Mode.INTERESTS: InterestStudent,
    Mode.MBTI: MbtiStudent,
}


class StudentNotFound(LookupError):
    pass


class DuplicateStudentName(ValueError):
    pass


def to_payload(student: Student) -> dict:
    return student.model_dump(mode="json", by_alias=True, exclude_none=True)


def from_payload(mode: Mode, payload: dict) -> Student:
    student = STUDENT_MODELS[mode].model_validate(payload)
    if mode == Mode.MBTI:
        student = ensure_dimensions(student)
    return student


class StudentService:
    """Survey submissions and the roster handed to the grouping engines."""

    def __init__(self, student_repo: StudentRepo = None, assignment_repo: AssignmentRepo = None):
        self.student_repo = student_repo or StudentRepo()
        self.assignment_repo = assignment_repo or AssignmentRepo(self.student_repo.db)

    # ----------------------------
    # Submissions
    # ----------------------------

    def submit_interest(self, submission: InterestSubmission) -> InterestStudent:
        student = InterestStudent(
            id=submission.id or uuid.uuid4().hex,
            name=submission.name,
            interests=submission.interests,
            birth_date=submission.birth_date,
            submit_time=datetime.now(timezone.utc),
        )
        return self._store(Mode.INTERESTS, student, submission.id)

    def submit_mbti(self, submission: MbtiSubmission) -> MbtiStudent:
        student = MbtiStudent(
            id=submission.id or uuid.uuid4().hex,
            name=submission.name,
            mbti_type=submission.mbti_type,
            mbti_dimensions=derive_dimensions(submission.mbti_type),
            mbti_confidence=submission.mbti_confidence,
            personality_description=submission.personality_description,
            submit_time=datetime.now(timezone.utc),
        )
        return self._store(Mode.MBTI, student, submission.id)

    @staticmethod
    def _same_person(mode: Mode, student: Student, stored: Student) -> bool:
        """Same name and birth date for interests, same name for MBTI (any case)."""
        if student.name.lower() != stored.name.lower():
            return False
        if mode == Mode.INTERESTS:
            return student.birth_date == stored.birth_date
        return True

    def _store(self, mode: Mode, student: Student, requested_id: Optional[str] = None) -> Student:
        """
        Save a submission. A resubmission (same id, or the same person under
        a new id) updates the stored record in place: the stored id and first
        submit time are kept and `updateCount` goes up by one.
        """
        same_name = [
            (r.student_id, from_payload(mode, r.payload))
            for r in self.student_repo.find_by_name(mode.value, student.name)
        ]

        previous = None
        if requested_id:
            row = self.student_repo.get(mode.value, requested_id)
            previous = from_payload(mode, row.payload) if row is not None else None
        if previous is None:
            previous = next((s for _, s in same_name if self._same_person(mode, student, s)), None)

        owner = previous.id if previous is not None else student.id
        if any(sid != owner for sid, _ in same_name):
            raise DuplicateStudentName("This name is already taken, please use a different name")

        if previous is None:
            student = student.model_copy(update={
                "original_submit_time": student.submit_time,
                "update_count": 0,
            })
        else:
            student = student.model_copy(update={
                "id": previous.id,
                "original_submit_time": previous.original_submit_time or previous.submit_time,
                "update_count": previous.update_count + 1,
            })

        self.student_repo.upsert(mode.value, student.id, student.name, to_payload(student))
        logger.info(
            "Stored %s submission %s (%s), update %d",
            mode.value, student.id, student.name, student.update_count,
        )
        return student

    # ----------------------------
    # Roster
    # ----------------------------

    def roster(self, mode: Mode) -> List[Student]:
        """Current records for `mode`, one per student id, in submission order."""
        return [from_payload(mode, r.payload) for r in self.student_repo.list_by_mode(mode.value)]

    def get(self, mode: Mode, student_id: str) -> Student:
        row = self.student_repo.get(mode.value, student_id)
        if row is None:
            raise StudentNotFound(f"Student {student_id} not found")
        return from_payload(mode, row.payload)

    def delete(self, mode: Mode, student_id: str) -> None:
        if not self.student_repo.delete(mode.value, student_id):
            raise StudentNotFound(f"Student {student_id} not found")
        logger.info("Deleted %s student %s", mode.value, student_id)

    def clear(self, mode: Mode) -> int:
        """Remove every submission of `mode` together with its saved groups."""
        removed = self.student_repo.clear(mode.value)
        self.assignment_repo.delete(ASSIGNMENT_KEYS[mode])
        logger.info("Cleared %d %s students", removed, mode.value)
        return removed

    # ----------------------------
    # Analytics
    # ----------------------------

    def analytics(self, mode: Mode) -> Dict:
        roster = self.roster(mode)
        if mode == Mode.INTERESTS:
            return self._interest_analytics(roster)
        return self._mbti_analytics(roster)

    def _interest_analytics(self, roster: List[InterestStudent]) -> Dict:
        birthdays = analytics.shared_birthdays(roster)
        return {
            "total_students": len(roster),
            "unique_interests": len(analytics.unique_interests(roster)),
            "unique_birthdays": len({s.birth_date.formatted for s in roster if s.birth_date}),
            "interest_distribution": [
                {"interest": interest, "count": count}
                for interest, count in analytics.interest_distribution(roster, settings.TOP_INTERESTS_LIMIT)
            ],
            "shared_birthdays": [
                {
                    "key": key,
                    "date": students[0].birth_date.display(),
                    "students": [s.name for s in students],
                }
                for key, students in birthdays.items()
            ],
        }

    def _mbti_analytics(self, roster: List[MbtiStudent]) -> Dict:
        total = len(roster)
        letters = analytics.dimension_distribution(roster)
        return {
            "total_students": total,
            "unique_types": len({s.mbti_type for s in roster}),
            "type_balance": analytics.type_balance(roster),
            "dimension_distribution": {
                letter: {"count": count, "percentage": analytics.percentage(count, total)}
                for letter, count in letters.items()
            },
            "type_distribution": [
                {
                    "type": mbti_type,
                    "description": describe_type(mbti_type),
                    "count": count,
                    "percentage": analytics.percentage(count, total),
                }
                for mbti_type, count in analytics.type_distribution(roster).items()
            ],
        }

# classgroups/services/grouping_service.py
import logging
from typing import Dict, List, Optional, Sequence, Tuple, Union

from classgroups.domain.grouping import Algorithm
from classgroups.domain.interest_grouping import partition_by_interest
from classgroups.domain.mbti_grouping import partition_by_mbti
from classgroups.domain.models import (
    ASSIGNMENT_KEYS,
    InterestGroupingResult,
    MbtiGroupingResult,
    Mode,
)
from classgroups.domain.statistics import interest_partition_stats, mbti_partition_stats
from classgroups.infrastructure.repositories.assignment_repo import AssignmentRepo
from classgroups.services.student_service import (
    Student,
    StudentNotFound,
    StudentService,
    from_payload,
    to_payload,
)

logger = logging.getLogger(__name__)

GroupingResult = Union[InterestGroupingResult, MbtiGroupingResult]

ENGINES: Dict[Mode, Algorithm] = {
    Mode.INTERESTS: partition_by_interest,
    Mode.MBTI: partition_by_mbti,
}


def build_result(mode: Mode, partition: Sequence[Sequence]) -> GroupingResult:
    groups = [list(g) for g in partition]
    if mode == Mode.INTERESTS:
        return InterestGroupingResult(groups=groups, statistics=interest_partition_stats(groups))
    return MbtiGroupingResult(groups=groups, statistics=mbti_partition_stats(groups))


class GroupingService:
    """
    Runs a grouping engine over the stored roster and saves the result
    under the mode's assignment key. Each call replaces the previous partition.
    """

    def __init__(self, student_service: StudentService = None, assignment_repo: AssignmentRepo = None):
        self.student_service = student_service or StudentService()
        self.assignment_repo = assignment_repo or self.student_service.assignment_repo

    def generate(self, mode: Mode, num_groups: int) -> GroupingResult:
        roster = self.student_service.roster(mode)
        partition = ENGINES[mode](roster, num_groups)
        result = build_result(mode, partition)

        self.assignment_repo.save(
            ASSIGNMENT_KEYS[mode],
            [[to_payload(s) for s in group] for group in partition],
        )
        logger.info(
            "Generated %d %s groups for %d students (sizes %s)",
            num_groups, mode.value, len(roster), [len(g) for g in partition],
        )
        return result

    def latest(self, mode: Mode) -> Optional[GroupingResult]:
        doc = self.assignment_repo.get(ASSIGNMENT_KEYS[mode])
        if doc is None:
            return None
        partition = [[from_payload(mode, p) for p in group] for group in doc.groups or []]
        return build_result(mode, partition)

    def group_of(self, mode: Mode, student_id: str) -> Tuple[int, List[Student]]:
        """
        1-based number of the saved group holding `student_id`, with its
        members sorted by name.
        """
        doc = self.assignment_repo.get(ASSIGNMENT_KEYS[mode])
        if doc is None:
            raise StudentNotFound("No groups generated yet")
        for number, group in enumerate(doc.groups or [], start=1):
            if any(p.get("id") == student_id for p in group):
                members = [from_payload(mode, p) for p in group]
                return number, sorted(members, key=lambda s: s.name.lower())
        raise StudentNotFound(f"Student {student_id} is not in any group")

# classgroups/domain/mbti_grouping.py
"""
MBTI-dimension partitioning.

Groups take turns (round robin) picking the best-fitting student left in
the pool. A candidate scores points for holding the letter its group is
short of on each axis, and loses points for repeating a type already in
the group and for joining a group that is already large. Because every
group receives at most one student per sweep, sizes never differ by more
than one.
"""
import logging
from typing import Dict, List, Optional, Sequence

from classgroups.domain.grouping import MbtiOptions, Partition, validate_partition_request
from classgroups.domain.mbti import AXES, dimensions_of, ensure_dimensions, tally_letters
from classgroups.domain.models import MbtiStudent

logger = logging.getLogger(__name__)


def score_candidate(candidate: MbtiStudent, group: Sequence[MbtiStudent],
                    options: Optional[MbtiOptions] = None,
                    tally: Optional[Dict[str, int]] = None) -> int:
    """
    Fit of `candidate` for `group`; higher is better.

    Example:
    >>> group = [MbtiStudent(id="1", name="Ann", mbtiType="ENFP")]
    >>> score_candidate(MbtiStudent(id="2", name="Bob", mbtiType="ISTJ"), group)
    38
    """
    options = options or MbtiOptions()
    dims = dimensions_of(candidate)
    if dims is None:
        return 0
    if tally is None:
        tally = tally_letters(group)

    score = 0
    for (first, second), letter in zip(AXES, dims.letters()):
        if tally[first] > tally[second] and letter == second:
            score += options.underrepresented_bonus
        if tally[second] > tally[first] and letter == first:
            score += options.underrepresented_bonus

    if any(member.mbti_type == candidate.mbti_type for member in group):
        score -= options.same_type_penalty

    score -= len(group) * options.group_size_penalty
    return score


def find_best_student(pool: Sequence[MbtiStudent], group: Sequence[MbtiStudent],
                      options: Optional[MbtiOptions] = None) -> Optional[int]:
    """Pool index of the best candidate for `group`; first one wins ties."""
    if not pool:
        return None
    tally = tally_letters(group)
    best_index, best_score = None, float("-inf")
    for i, candidate in enumerate(pool):
        score = score_candidate(candidate, group, options, tally)
        if score > best_score:
            best_score, best_index = score, i
    return best_index


def partition_by_mbti(roster: Sequence[MbtiStudent], num_groups: int,
                      options: Optional[MbtiOptions] = None) -> Partition:
    """
    Partition `roster` into `num_groups` groups balanced on the four MBTI axes.

    Records with missing or stale dimensions are returned with the
    dimensions re-derived from their type.
    Raises ValidationError when the request cannot be satisfied.
    """
    validate_partition_request(roster, num_groups)
    options = options or MbtiOptions()

    pool = [ensure_dimensions(s) for s in roster]
    groups: List[List[MbtiStudent]] = [[] for _ in range(num_groups)]

    while pool:
        for group in groups:
            if not pool:
                break
            best = find_best_student(pool, group, options)
            group.append(pool.pop(best))

    logger.debug("MBTI group sizes: %s", [len(g) for g in groups])
    return groups

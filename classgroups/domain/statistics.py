# classgroups/domain/statistics.py
"""
Group statistics for a finished partition.

All functions are pure: the same partition always yields the same numbers.
Scores are returned unrounded; rounding is left to whatever displays them.
"""
from itertools import combinations
from statistics import mean, pvariance
from typing import Dict, Sequence

from classgroups.domain.mbti import AXES, tally_letters
from classgroups.domain.models import (
    InterestGroupStats,
    InterestPartitionStats,
    InterestStudent,
    MbtiGroupStats,
    MbtiPartitionStats,
    MbtiStudent,
)
from classgroups.domain.similarity import interest_similarity


def size_balance_score(sizes: Sequence[int]) -> float:
    """
    100 for equal sizes, minus 20 per unit of size variance, floored at 0.

    >>> size_balance_score([3, 3])
    100.0
    >>> size_balance_score([2, 4])
    80.0
    """
    if not sizes:
        return 100.0
    return float(max(0, 100 - pvariance(sizes) * 20))


def group_similarity(group: Sequence[InterestStudent]) -> float:
    """Average pairwise interest similarity; 0 for groups under two members."""
    pairs = list(combinations(group, 2))
    if not pairs:
        return 0.0
    return sum(interest_similarity(a, b) for a, b in pairs) / len(pairs)


def interest_partition_stats(partition: Sequence[Sequence[InterestStudent]]) -> InterestPartitionStats:
    sizes = [len(g) for g in partition]
    group_stats = [
        InterestGroupStats(index=i, size=len(g), avg_similarity=group_similarity(g))
        for i, g in enumerate(partition)
    ]
    num_groups = len(partition)
    total = sum(sizes)
    return InterestPartitionStats(
        total_students=total,
        num_groups=num_groups,
        avg_group_size=total / num_groups if num_groups else 0.0,
        min_group_size=min(sizes, default=0),
        max_group_size=max(sizes, default=0),
        avg_intra_group_similarity=(
            sum(g.avg_similarity for g in group_stats) / num_groups if num_groups else 0.0
        ),
        balance_score=size_balance_score(sizes),
        groups=group_stats,
    )


def dimension_balance_score(tally: Dict[str, int], size: int) -> float:
    """
    100 minus 50 per unit of axis imbalance per member, floored at 0.
    An empty group has no imbalance and scores 100.
    """
    if size == 0:
        return 100.0
    imbalance = sum(abs(tally[a] - tally[b]) for a, b in AXES)
    return max(0.0, 100 - imbalance / size * 50)


def mbti_group_stats(group: Sequence[MbtiStudent], index: int = 0) -> MbtiGroupStats:
    tally = tally_letters(group)
    return MbtiGroupStats(
        index=index,
        size=len(group),
        dimensions=tally,
        balance_score=dimension_balance_score(tally, len(group)),
    )


def mbti_partition_stats(partition: Sequence[Sequence[MbtiStudent]]) -> MbtiPartitionStats:
    sizes = [len(g) for g in partition]
    group_stats = [mbti_group_stats(g, i) for i, g in enumerate(partition)]
    num_groups = len(partition)
    total = sum(sizes)
    return MbtiPartitionStats(
        total_students=total,
        num_groups=num_groups,
        avg_group_size=total / num_groups if num_groups else 0.0,
        min_group_size=min(sizes, default=0),
        max_group_size=max(sizes, default=0),
        overall_balance=mean(g.balance_score for g in group_stats) if group_stats else 100.0,
        groups=group_stats,
    )

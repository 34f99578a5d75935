# classgroups/domain/similarity.py
"""
Interest similarity between students.

Similarity is the Jaccard index over lower-cased, non-empty interest
tags. Pure functions only; the matrix is rebuilt for every partition.
"""
from typing import Iterable, List, Sequence, Set

from classgroups.domain.models import InterestStudent


def interest_tags(interests: Iterable[str]) -> Set[str]:
    return {i.strip().lower() for i in interests if i and i.strip()}


def jaccard(a: Set[str], b: Set[str]) -> float:
    union = a | b
    if not union:
        return 0.0
    return len(a & b) / len(union)


def interest_similarity(a: InterestStudent, b: InterestStudent) -> float:
    """
    Share of interests two students have in common.

    Example:
    >>> a = InterestStudent(id="1", name="Ann", interests=["Chess", "music"])
    >>> b = InterestStudent(id="2", name="Bob", interests=["chess", "art"])
    >>> round(interest_similarity(a, b), 3)
    0.333
    """
    return jaccard(interest_tags(a.interests), interest_tags(b.interests))


def similarity_matrix(students: Sequence[InterestStudent]) -> List[List[float]]:
    """Full n x n matrix; the diagonal is 1 by definition."""
    tags = [interest_tags(s.interests) for s in students]
    n = len(tags)
    matrix = [[0.0] * n for _ in range(n)]
    for i in range(n):
        matrix[i][i] = 1.0
        for j in range(i + 1, n):
            sim = jaccard(tags[i], tags[j])
            matrix[i][j] = sim
            matrix[j][i] = sim
    return matrix

# classgroups/domain/interest_grouping.py
"""
Interest-balanced partitioning.

Greedy seeded clustering over the interest similarity matrix:

1. pick one seed per group (moderate similarity, moderate distance
   between seeds),
2. assign the remaining students in roster order to the group with the
   highest average similarity minus a size penalty,
3. move students out of oversized groups into undersized ones.

All work is done on roster indices; records are only looked up when the
final partition is built. The result is approximate: group sizes are
balanced best-effort, not guaranteed equal.
"""
import logging
from dataclasses import dataclass
from functools import reduce
from typing import List, Optional, Sequence, Tuple

from classgroups.domain.grouping import InterestOptions, Partition, validate_partition_request
from classgroups.domain.models import InterestStudent
from classgroups.domain.similarity import similarity_matrix

logger = logging.getLogger(__name__)

Matrix = Sequence[Sequence[float]]


@dataclass(frozen=True)
class Move:
    student: int
    source: int
    target: int


def _seed_distance(matrix: Matrix, candidate: int, seeds: Sequence[int], strategy: str) -> float:
    distances = [1 - matrix[candidate][s] for s in seeds]
    if strategy == "mean":
        return sum(distances) / len(distances)
    return min(distances)


def find_seeds(matrix: Matrix, num_groups: int, options: Optional[InterestOptions] = None) -> List[int]:
    """
    Choose one starting student per group.

    The first seed is the student whose average similarity is closest to
    `first_seed_target`. Each further seed is the unselected student whose
    distance to the chosen seeds is closest to `seed_distance_target`.
    The first best score wins ties.
    """
    options = options or InterestOptions()
    n = len(matrix)

    first, best = 0, -1.0
    for i, row in enumerate(matrix):
        avg = sum(row) / n
        score = 1 - abs(avg - options.first_seed_target)
        if score > best:
            best, first = score, i
    seeds = [first]

    while len(seeds) < num_groups:
        chosen, best = None, -1.0
        for i in range(n):
            if i in seeds:
                continue
            distance = _seed_distance(matrix, i, seeds, options.seed_distance)
            score = 1 - abs(distance - options.seed_distance_target)
            if score > best:
                best, chosen = score, i
        seeds.append(chosen)

    return seeds


def find_best_group(student: int, groups: Sequence[Sequence[int]], matrix: Matrix,
                    options: Optional[InterestOptions] = None) -> int:
    """
    Index of the group with the highest average similarity to `student`,
    minus `size_penalty` per current member. Empty groups are skipped.
    """
    options = options or InterestOptions()
    best_index, best_score = 0, float("-inf")
    for gi, members in enumerate(groups):
        if not members:
            continue
        avg = sum(matrix[student][m] for m in members) / len(members)
        score = avg - len(members) * options.size_penalty
        if score > best_score:
            best_score, best_index = score, gi
    return best_index


def group_targets(total: int, num_groups: int) -> Tuple[int, List[int]]:
    """
    Ideal size and per-group target sizes; the first `total % num_groups`
    groups take one extra member.

    >>> group_targets(10, 3)
    (3, [4, 3, 3])
    """
    ideal, remainder = divmod(total, num_groups)
    return ideal, [ideal + (1 if i < remainder else 0) for i in range(num_groups)]


def plan_balancing_moves(groups: Sequence[Sequence[int]], tolerance: int = 1) -> List[Move]:
    """
    Moves that shrink oversized groups.

    Groups are visited in order. While a group holds more than its target
    plus `tolerance`, its last-added member goes to the first other group
    below the ideal size. When no such group exists the group is left as is.
    """
    working = [list(g) for g in groups]
    total = sum(len(g) for g in working)
    ideal, targets = group_targets(total, len(working))

    moves = []
    for i, members in enumerate(working):
        while len(members) > targets[i] + tolerance:
            dest = next((j for j, g in enumerate(working) if j != i and len(g) < ideal), None)
            if dest is None:
                break
            student = members.pop()
            working[dest].append(student)
            moves.append(Move(student=student, source=i, target=dest))
    return moves


def _apply_move(state: Tuple[Tuple[int, ...], ...], move: Move) -> Tuple[Tuple[int, ...], ...]:
    return tuple(
        tuple(m for m in g if m != move.student) if gi == move.source
        else g + (move.student,) if gi == move.target
        else g
        for gi, g in enumerate(state)
    )


def apply_moves(groups: Sequence[Sequence[int]], moves: Sequence[Move]) -> List[List[int]]:
    """Build a new grouping with every move applied; the input is left untouched."""
    result = reduce(_apply_move, moves, tuple(tuple(g) for g in groups))
    return [list(g) for g in result]


def partition_by_interest(roster: Sequence[InterestStudent], num_groups: int,
                          options: Optional[InterestOptions] = None) -> Partition:
    """
    Partition `roster` into `num_groups` groups of students with shared interests.

    Raises ValidationError when the request cannot be satisfied.
    """
    validate_partition_request(roster, num_groups)
    options = options or InterestOptions()
    students = list(roster)

    matrix = similarity_matrix(students)
    seeds = find_seeds(matrix, num_groups, options)
    logger.debug("Interest seeds: %s", [students[s].id for s in seeds])

    groups = [[seed] for seed in seeds]
    seeded = set(seeds)
    for idx in range(len(students)):
        if idx in seeded:
            continue
        groups[find_best_group(idx, groups, matrix, options)].append(idx)

    moves = plan_balancing_moves(groups, options.balance_tolerance)
    if moves:
        logger.debug("Balancing moves: %s", [(students[m.student].id, m.source, m.target) for m in moves])
    groups = apply_moves(groups, moves)

    return [[students[i] for i in g] for g in groups]

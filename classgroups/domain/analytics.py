# classgroups/domain/analytics.py
"""
Roster-level summaries shown on the class dashboards.
"""
from collections import Counter, defaultdict
from typing import Dict, List, Sequence, Tuple

from classgroups.domain.mbti import tally_letters
from classgroups.domain.models import MBTI_TYPES, InterestStudent, MbtiStudent


def unique_interests(roster: Sequence[InterestStudent]) -> List[str]:
    """Distinct interest strings in first-seen order (compared after stripping)."""
    seen = {}
    for s in roster:
        for interest in s.interests:
            interest = interest.strip()
            if interest and interest not in seen:
                seen[interest] = None
    return list(seen)


def interest_distribution(roster: Sequence[InterestStudent], limit: int = 15) -> List[Tuple[str, int]]:
    counts = Counter(
        interest.strip()
        for s in roster
        for interest in s.interests
        if interest.strip()
    )
    return counts.most_common(limit)


def shared_birthdays(roster: Sequence[InterestStudent]) -> Dict[str, List[InterestStudent]]:
    """Birth-date keys (MM-DD) held by more than one student, in calendar order."""
    by_date = defaultdict(list)
    for s in roster:
        if s.birth_date is not None:
            by_date[s.birth_date.formatted].append(s)
    return {key: by_date[key] for key in sorted(by_date) if len(by_date[key]) > 1}


def type_balance(roster: Sequence[MbtiStudent]) -> int:
    """
    Ratio of the rarest to the most common present type, as a percentage.

    >>> type_balance([])
    0
    """
    if not roster:
        return 0
    counts = Counter(s.mbti_type for s in roster)
    return round(min(counts.values()) / max(counts.values()) * 100)


def dimension_distribution(roster: Sequence[MbtiStudent]) -> Dict[str, int]:
    return tally_letters(roster)


def type_distribution(roster: Sequence[MbtiStudent]) -> Dict[str, int]:
    counts = {t: 0 for t in MBTI_TYPES}
    for s in roster:
        if s.mbti_type in counts:
            counts[s.mbti_type] += 1
    return counts


def percentage(count: int, total: int) -> int:
    return round(count / total * 100) if total else 0

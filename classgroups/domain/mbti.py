# classgroups/domain/mbti.py
"""
MBTI type helpers: dimension derivation and letter tallies.
"""
from typing import Dict, Iterable, Optional

from classgroups.domain.models import MBTI_DESCRIPTIONS, MBTI_TYPES, MbtiDimensions, MbtiStudent

AXES = [("E", "I"), ("S", "N"), ("T", "F"), ("J", "P")]
LETTERS = [letter for axis in AXES for letter in axis]


def derive_dimensions(mbti_type: str) -> MbtiDimensions:
    """
    Split a 4-letter type into its four dimensions.

    >>> derive_dimensions("ENFP").letters()
    ['E', 'N', 'F', 'P']
    """
    code = (mbti_type or "").strip().upper()
    if code not in MBTI_TYPES:
        raise ValueError(f"unknown MBTI type: {mbti_type!r}")
    e_i, s_n, t_f, j_p = code
    return MbtiDimensions(
        energy_direction=e_i,
        information_processing=s_n,
        decision_making=t_f,
        lifestyle_approach=j_p,
    )


def ensure_dimensions(student: MbtiStudent) -> MbtiStudent:
    """
    Return the student with dimensions matching its type.
    Records that are already consistent are returned as-is.
    """
    try:
        expected = derive_dimensions(student.mbti_type)
    except ValueError:
        return student
    if student.mbti_dimensions == expected:
        return student
    return student.model_copy(update={"mbti_dimensions": expected})


def dimensions_of(student: MbtiStudent) -> Optional[MbtiDimensions]:
    try:
        return derive_dimensions(student.mbti_type)
    except ValueError:
        return student.mbti_dimensions


def tally_letters(students: Iterable[MbtiStudent]) -> Dict[str, int]:
    counts = {letter: 0 for letter in LETTERS}
    for s in students:
        dims = dimensions_of(s)
        if dims is None:
            continue
        for letter in dims.letters():
            counts[letter] += 1
    return counts


def describe_type(mbti_type: str) -> str:
    return MBTI_DESCRIPTIONS.get(mbti_type, "Unknown")

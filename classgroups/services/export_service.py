# classgroups/services/export_service.py
"""
CSV and JSON exports of rosters and group results, laid out the way the
dashboards download them: one row per student, a blank row between groups,
then a statistics block.
"""
import csv
import io
from datetime import datetime, timezone
from typing import Dict, Optional, Sequence

from classgroups.domain import analytics
from classgroups.domain.mbti import dimensions_of, describe_type
from classgroups.domain.models import CONFIDENCE_TEXT, MBTI_TYPES, InterestStudent, MbtiStudent, Mode
from classgroups.domain.statistics import interest_partition_stats, mbti_group_stats
from classgroups.services.student_service import to_payload

DIMENSION_LABELS = [
    ("Energy Direction", "Extraversion (E)", "E"),
    ("Energy Direction", "Introversion (I)", "I"),
    ("Information Processing", "Sensing (S)", "S"),
    ("Information Processing", "Intuition (N)", "N"),
    ("Decision Making", "Thinking (T)", "T"),
    ("Decision Making", "Feeling (F)", "F"),
    ("Lifestyle Approach", "Judging (J)", "J"),
    ("Lifestyle Approach", "Perceiving (P)", "P"),
]


def _writer(buf: io.StringIO):
    return csv.writer(buf, lineterminator="\n")


def _birth_key(student: InterestStudent) -> str:
    return student.birth_date.formatted if student.birth_date else "00-00"


def interest_groups_csv(groups: Sequence[Sequence[InterestStudent]]) -> str:
    buf = io.StringIO()
    w = _writer(buf)
    w.writerow(["Group Number", "Student Name", "Birth Date", "Interests"])
    for gi, group in enumerate(groups):
        for s in sorted(group, key=_birth_key):
            birth = s.birth_date.display() if s.birth_date else "Not specified"
            w.writerow([f"Group {gi + 1}", s.name, birth, "; ".join(s.interests)])
        if gi < len(groups) - 1:
            w.writerow([])

    stats = interest_partition_stats(groups)
    w.writerow([])
    w.writerow([])
    w.writerow(["Group Statistics"])
    w.writerow(["Metric", "Value"])
    w.writerow(["Total Students", stats.total_students])
    w.writerow(["Number of Groups", stats.num_groups])
    w.writerow(["Average Group Size", f"{stats.avg_group_size:.1f}"])
    w.writerow(["Group Size Range", f"{stats.min_group_size} - {stats.max_group_size}"])
    w.writerow(["Average Interest Similarity", f"{stats.avg_intra_group_similarity * 100:.1f}%"])
    w.writerow(["Group Balance Score", f"{stats.balance_score:.1f}%"])
    return buf.getvalue()


def _dimension_text(student: MbtiStudent) -> str:
    dims = dimensions_of(student)
    if dims is None:
        return ""
    e_i, s_n, t_f, j_p = dims.letters()
    return f"{e_i}/{s_n}-{t_f}/{j_p}"


def mbti_groups_csv(groups: Sequence[Sequence[MbtiStudent]]) -> str:
    buf = io.StringIO()
    w = _writer(buf)
    w.writerow([
        "Group Number", "Student Name", "MBTI Type", "Type Description",
        "Dimensions (E/I-S/N-T/F-J/P)", "Confidence Level", "Personality Description",
    ])
    for gi, group in enumerate(groups):
        for s in sorted(group, key=lambda s: s.mbti_type):
            w.writerow([
                f"Group {gi + 1}",
                s.name,
                s.mbti_type,
                describe_type(s.mbti_type),
                _dimension_text(s),
                CONFIDENCE_TEXT.get(s.mbti_confidence, s.mbti_confidence or ""),
                s.personality_description or "",
            ])
        if gi < len(groups) - 1:
            w.writerow([])

    w.writerow([])
    w.writerow([])
    w.writerow(["Group Statistics"])
    w.writerow(["Group", "Size", "E", "I", "S", "N", "T", "F", "J", "P", "Balance Score"])
    for gi, group in enumerate(groups):
        stats = mbti_group_stats(group, gi)
        w.writerow(
            [f"Group {gi + 1}", stats.size]
            + [stats.dimensions[letter] for letter in "EISNTFJP"]
            + [f"{round(stats.balance_score)}%"]
        )
    return buf.getvalue()


def mbti_stats_csv(roster: Sequence[MbtiStudent]) -> str:
    total = len(roster)
    buf = io.StringIO()
    w = _writer(buf)
    w.writerow(["MBTI Statistics Report"])
    w.writerow([])
    w.writerow(["Overall Statistics"])
    w.writerow(["Metric", "Value"])
    w.writerow(["Total Students", total])
    w.writerow(["Unique MBTI Types", len({s.mbti_type for s in roster})])
    w.writerow(["Type Balance Score", f"{analytics.type_balance(roster)}%"])
    w.writerow([])

    letters = analytics.dimension_distribution(roster)
    w.writerow(["MBTI Dimension Distribution"])
    w.writerow(["Dimension", "Option", "Count", "Percentage"])
    for dimension, option, letter in DIMENSION_LABELS:
        count = letters[letter]
        w.writerow([dimension, option, count, f"{analytics.percentage(count, total)}%"])
    w.writerow([])

    types = analytics.type_distribution(roster)
    w.writerow(["MBTI Type Distribution"])
    w.writerow(["Type", "Description", "Count", "Percentage"])
    for mbti_type in MBTI_TYPES:
        count = types[mbti_type]
        w.writerow([mbti_type, describe_type(mbti_type), count, f"{analytics.percentage(count, total)}%"])
    return buf.getvalue()


def data_export(mode: Mode, roster: Sequence, groups: Optional[Sequence[Sequence]] = None) -> Dict:
    """Full JSON dump of a mode's roster and last partition."""
    groups = groups or []
    data = {
        "students": [to_payload(s) for s in roster],
        "groups": [[to_payload(s) for s in g] for g in groups],
        "exportTime": datetime.now(timezone.utc).isoformat(),
        "totalStudents": len(roster),
        "groupCount": len(groups),
    }
    if mode == Mode.MBTI:
        data["dataType"] = "mbti"
    return data


def export_filename(prefix: str, extension: str) -> str:
    return f"{prefix}_{datetime.now(timezone.utc).date().isoformat()}.{extension}"

# tests/test_services.py
import pytest

from classgroups.domain.errors import ValidationError
from classgroups.domain.models import (
    ASSIGNMENT_KEYS,
    InterestSubmission,
    MbtiGroupingResult,
    MbtiSubmission,
    Mode,
)
from classgroups.infrastructure.repositories.assignment_repo import AssignmentRepo
from classgroups.infrastructure.repositories.student_repo import StudentRepo
from classgroups.services.grouping_service import GroupingService
from classgroups.services.student_service import (
    DuplicateStudentName,
    StudentNotFound,
    StudentService,
)

FIVE = ["chess", "music", "art", "sports", "coding"]


@pytest.fixture
def students(db_session):
    return StudentService(StudentRepo(db_session), AssignmentRepo(db_session))


@pytest.fixture
def grouping(students):
    return GroupingService(students, students.assignment_repo)


def interest_sub(name, interests=FIVE, month=1, day=1, sid=None):
    return InterestSubmission(id=sid, name=name, birth_date={"month": month, "day": day}, interests=interests)


# -------------------------------
# Submissions and roster
# -------------------------------

def test_submit_assigns_id_and_time(students):
    student = students.submit_interest(interest_sub("Ann"))
    assert student.id
    assert student.submit_time is not None
    assert [s.id for s in students.roster(Mode.INTERESTS)] == [student.id]


def test_resubmission_replaces_record_in_place(students):
    students.submit_interest(interest_sub("Ann", sid="a"))
    students.submit_interest(interest_sub("Bob", sid="b"))
    students.submit_interest(interest_sub("Ann", interests=["x1", "x2", "x3", "x4", "x5"], sid="a"))

    roster = students.roster(Mode.INTERESTS)
    assert [s.id for s in roster] == ["a", "b"]
    assert roster[0].interests == ["x1", "x2", "x3", "x4", "x5"]


def test_name_taken_by_another_student(students):
    students.submit_interest(interest_sub("Ann", month=3, day=5, sid="a"))
    with pytest.raises(DuplicateStudentName):
        students.submit_interest(interest_sub("ANN", month=4, day=6))
    with pytest.raises(DuplicateStudentName):
        students.submit_interest(interest_sub("Ann", sid="b", month=4, day=6))


def test_renaming_onto_a_taken_name_rejected(students):
    students.submit_mbti(MbtiSubmission(id="a", name="Ann", mbti_type="ENFP"))
    students.submit_mbti(MbtiSubmission(id="b", name="Bob", mbti_type="ISTJ"))
    with pytest.raises(DuplicateStudentName):
        students.submit_mbti(MbtiSubmission(id="b", name="Ann", mbti_type="ISTJ"))


def test_same_person_resubmitting_updates_record(students):
    first = students.submit_interest(interest_sub("Ann", month=3, day=5))
    second = students.submit_interest(
        interest_sub("Ann", interests=["x1", "x2", "x3", "x4", "x5"], month=3, day=5)
    )

    assert second.id == first.id
    assert second.update_count == 1
    assert second.original_submit_time == first.submit_time
    assert first.update_count == 0

    roster = students.roster(Mode.INTERESTS)
    assert len(roster) == 1
    assert roster[0].interests == ["x1", "x2", "x3", "x4", "x5"]
    assert roster[0].update_count == 1


def test_mbti_resubmission_matches_name_in_any_case(students):
    first = students.submit_mbti(MbtiSubmission(id="a", name="Ann", mbti_type="ENFP"))
    students.submit_mbti(MbtiSubmission(name="ann", mbti_type="ISTJ"))
    third = students.submit_mbti(MbtiSubmission(id="zz", name="ANN", mbti_type="INTJ"))

    assert third.id == "a"
    assert third.update_count == 2
    assert third.original_submit_time == first.submit_time
    assert [(s.id, s.mbti_type) for s in students.roster(Mode.MBTI)] == [("a", "INTJ")]


def test_same_name_allowed_across_modes(students):
    students.submit_mbti(MbtiSubmission(id="a", name="Ann", mbti_type="ENFP"))
    students.submit_interest(interest_sub("Ann", sid="b"))
    assert len(students.roster(Mode.MBTI)) == len(students.roster(Mode.INTERESTS)) == 1


def test_mbti_submission_stores_dimensions(students):
    students.submit_mbti(MbtiSubmission(id="a", name="Ann", mbti_type="intj"))
    stored = students.get(Mode.MBTI, "a")
    assert stored.mbti_type == "INTJ"
    assert stored.mbti_dimensions.letters() == ["I", "N", "T", "J"]


def test_get_and_delete_missing_student(students):
    with pytest.raises(StudentNotFound):
        students.get(Mode.MBTI, "nope")
    with pytest.raises(StudentNotFound):
        students.delete(Mode.MBTI, "nope")


def test_delete_student(students):
    students.submit_mbti(MbtiSubmission(id="a", name="Ann", mbti_type="ENFP"))
    students.delete(Mode.MBTI, "a")
    assert students.roster(Mode.MBTI) == []


def test_interest_analytics(students):
    students.submit_interest(interest_sub("Ann", month=12, day=1, sid="a"))
    students.submit_interest(interest_sub("Bob", interests=["chess", "dance", "art", "cooking", "gaming"],
                                          month=12, day=1, sid="b"))
    data = students.analytics(Mode.INTERESTS)

    assert data["total_students"] == 2
    assert data["unique_interests"] == 8
    assert data["unique_birthdays"] == 1
    assert data["interest_distribution"][0] == {"interest": "chess", "count": 2}
    assert data["shared_birthdays"] == [{"key": "12-01", "date": "December 1", "students": ["Ann", "Bob"]}]


def test_mbti_analytics(students):
    for i, t in enumerate(["ENFP", "ENFP", "ISTJ", "INTJ"]):
        students.submit_mbti(MbtiSubmission(id=f"m{i}", name=f"Student {i}", mbti_type=t))
    data = students.analytics(Mode.MBTI)

    assert data["total_students"] == 4
    assert data["unique_types"] == 3
    assert data["type_balance"] == 50
    assert data["dimension_distribution"]["E"] == {"count": 2, "percentage": 50}
    enfp = next(t for t in data["type_distribution"] if t["type"] == "ENFP")
    assert enfp == {"type": "ENFP", "description": "Campaigner", "count": 2, "percentage": 50}


# -------------------------------
# Grouping
# -------------------------------

def test_generate_saves_and_replaces_partition(students, grouping):
    for i, t in enumerate(["ENFP", "ISTJ", "ENFP", "ISTJ"]):
        students.submit_mbti(MbtiSubmission(id=f"m{i}", name=f"Student {i}", mbti_type=t))

    result = grouping.generate(Mode.MBTI, 2)
    assert isinstance(result, MbtiGroupingResult)
    assert [[s.id for s in g] for g in result.groups] == [["m0", "m3"], ["m1", "m2"]]
    assert result.statistics.overall_balance == 100.0

    latest = grouping.latest(Mode.MBTI)
    assert latest == result

    grouping.generate(Mode.MBTI, 1)
    assert [len(g) for g in grouping.latest(Mode.MBTI).groups] == [4]


def test_generate_rejects_small_roster(students, grouping):
    students.submit_interest(interest_sub("Ann"))
    with pytest.raises(ValidationError) as exc:
        grouping.generate(Mode.INTERESTS, 2)
    assert exc.value.condition == "insufficient_students"
    assert grouping.latest(Mode.INTERESTS) is None


def test_clear_removes_roster_and_groups(students, grouping):
    students.submit_interest(interest_sub("Ann", sid="a"))
    students.submit_interest(interest_sub("Bob", sid="b"))
    grouping.generate(Mode.INTERESTS, 2)
    assert students.assignment_repo.get(ASSIGNMENT_KEYS[Mode.INTERESTS]) is not None

    assert students.clear(Mode.INTERESTS) == 2
    assert students.roster(Mode.INTERESTS) == []
    assert grouping.latest(Mode.INTERESTS) is None


def test_group_of_returns_number_and_members_sorted_by_name(students, grouping):
    for sid, name, t in [("m0", "Zoe", "ENFP"), ("m1", "Bob", "ISTJ"), ("m2", "Amy", "ENFP"), ("m3", "Cal", "ISTJ")]:
        students.submit_mbti(MbtiSubmission(id=sid, name=name, mbti_type=t))
    grouping.generate(Mode.MBTI, 2)

    # groups are [m0, m3] and [m1, m2]
    number, members = grouping.group_of(Mode.MBTI, "m2")
    assert number == 2
    assert [s.name for s in members] == ["Amy", "Bob"]

    number, members = grouping.group_of(Mode.MBTI, "m0")
    assert number == 1
    assert [s.id for s in members] == ["m3", "m0"]


def test_group_of_without_groups_or_membership(students, grouping):
    students.submit_interest(interest_sub("Ann", sid="a"))
    students.submit_interest(interest_sub("Bob", sid="b"))
    with pytest.raises(StudentNotFound):
        grouping.group_of(Mode.INTERESTS, "a")

    grouping.generate(Mode.INTERESTS, 1)
    assert grouping.group_of(Mode.INTERESTS, "a")[0] == 1
    with pytest.raises(StudentNotFound):
        grouping.group_of(Mode.INTERESTS, "nobody")

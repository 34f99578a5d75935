# tests/test_similarity.py
from classgroups.domain.models import InterestStudent
from classgroups.domain.similarity import interest_similarity, interest_tags, similarity_matrix


def student(sid, interests):
    return InterestStudent(id=sid, name=f"Student {sid}", interests=interests)


def test_identical_interests_are_fully_similar():
    a = student("a", ["chess", "music"])
    b = student("b", ["Music", "CHESS"])
    assert interest_similarity(a, b) == 1.0


def test_disjoint_interests_have_zero_similarity():
    a = student("a", ["chess", "music"])
    b = student("b", ["art", "sports"])
    assert interest_similarity(a, b) == 0.0


def test_empty_interests_do_not_divide_by_zero():
    assert interest_similarity(student("a", []), student("b", [])) == 0.0


def test_jaccard_value_and_symmetry():
    a = student("a", ["chess", "reading"])
    b = student("b", ["chess", "music"])
    assert interest_similarity(a, b) == interest_similarity(b, a) == 1 / 3


def test_similarity_is_symmetric_and_bounded(random_interest_roster):
    roster = random_interest_roster(20)
    for a in roster:
        for b in roster:
            sim = interest_similarity(a, b)
            assert 0.0 <= sim <= 1.0
            assert sim == interest_similarity(b, a)


def test_tags_ignore_blank_entries_and_case():
    assert interest_tags([" Chess ", "", "  ", "chess", "Art"]) == {"chess", "art"}


def test_matrix_diagonal_is_one_even_without_interests():
    roster = [student("a", []), student("b", ["art"]), student("c", ["art", "music"])]
    matrix = similarity_matrix(roster)
    assert [matrix[i][i] for i in range(3)] == [1.0, 1.0, 1.0]
    assert matrix[1][2] == matrix[2][1] == 0.5
    assert matrix[0][1] == 0.0

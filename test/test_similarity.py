import pytest

from book_summary.tools.similarity import similarity


@pytest.mark.parametrize(
    "a,b",
    [
        ("Dune", "Dune Messiah"),
        ("kitten", "sitting"),
        ("해리포터", "해리포터와 마법사의 돌"),
        ("The Hobbit", "the hobit"),
        ("", "Emma"),
    ],
)
def test_similarity_is_symmetric(a, b) -> None:
    assert similarity(a, b) == similarity(b, a)


def test_identical_ignoring_case_scores_one() -> None:
    assert similarity("The Great Gatsby", "the great GATSBY") == 1.0
    assert similarity("해리포터", "해리포터") == 1.0


def test_empty_against_non_empty_scores_zero() -> None:
    assert similarity("", "Emma") == 0.0
    assert similarity("Emma", "") == 0.0
    assert similarity(None, "Emma") == 0.0


def test_both_empty_scores_one() -> None:
    assert similarity("", "") == 1.0


def test_normalized_by_longer_string() -> None:
    # kitten -> sitting is the textbook distance of 3
    assert similarity("kitten", "sitting") == pytest.approx(1 - 3 / 7)


def test_score_stays_in_unit_interval() -> None:
    score = similarity("zzxq123nonexistent", "Pride and Prejudice")
    assert 0.0 <= score < 0.45

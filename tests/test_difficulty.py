import pytest

from app.services.difficulty import DifficultyLabel, difficulty_label, difficulty_label_or_none


@pytest.mark.parametrize(
    "score, expected",
    [
        (0, DifficultyLabel.EASY),
        (29, DifficultyLabel.EASY),
        (30, DifficultyLabel.DOABLE),
        (59, DifficultyLabel.DOABLE),
        (60, DifficultyLabel.HARD),
        (100, DifficultyLabel.HARD),
    ],
)
def test_difficulty_boundaries(score, expected):
    assert difficulty_label(score) == expected


def test_labels_compare_as_plain_strings():
    assert difficulty_label(10) == "Easy"
    assert difficulty_label(45).value == "Doable"


def test_total_over_out_of_range_scores():
    assert difficulty_label(-5) == DifficultyLabel.EASY
    assert difficulty_label(250) == DifficultyLabel.HARD


def test_missing_score_has_no_label():
    assert difficulty_label_or_none(None) is None
    assert difficulty_label_or_none(75) == DifficultyLabel.HARD

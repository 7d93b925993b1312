from enum import Enum
from typing import Optional


class DifficultyLabel(str, Enum):
    EASY = "Easy"
    DOABLE = "Doable"
    HARD = "Hard"


def difficulty_label(score: int) -> DifficultyLabel:
    """Bucket a 0-100 keyword difficulty score: <30 Easy, <60 Doable, else Hard."""
    if score < 30:
        return DifficultyLabel.EASY
    if score < 60:
        return DifficultyLabel.DOABLE
    return DifficultyLabel.HARD


def difficulty_label_or_none(score: Optional[int]) -> Optional[DifficultyLabel]:
    # Keywords stored without a score have no label
    if score is None:
        return None
    return difficulty_label(score)

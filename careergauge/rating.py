from __future__ import annotations

from typing import List, Tuple

# (floor, label), highest first
_RATINGS: List[Tuple[int, str]] = [
    (90, "Excellent"),
    (80, "Very Good"),
    (70, "Good"),
    (60, "Fair"),
]


def score_rating(score: float) -> str:
    for floor, label in _RATINGS:
        if score >= floor:
            return label
    return "Needs Improvement"


def score_color(score: float) -> str:
    if score >= 80:
        return "green"
    if score >= 60:
        return "yellow"
    return "red"

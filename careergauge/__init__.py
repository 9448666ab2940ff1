from .cover_letter import calculate_cover_letter_score
from .interview import calculate_interview_score
from .rating import score_color, score_rating
from .scoring import ATSScore, calculate_ats_score

__version__ = "0.1.0"

__all__ = [
    "calculate_ats_score",
    "calculate_cover_letter_score",
    "calculate_interview_score",
    "score_rating",
    "score_color",
    "ATSScore",
]

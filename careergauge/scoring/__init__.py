from .engine import aggregate, calculate_ats_score, rank_improvements
from .keywords import extract_keywords
from .matcher import match_keywords
from .types import ATSScore, KeywordDetails, ScoreBreakdown

__all__ = [
    "aggregate",
    "calculate_ats_score",
    "rank_improvements",
    "extract_keywords",
    "match_keywords",
    "ATSScore",
    "KeywordDetails",
    "ScoreBreakdown",
]

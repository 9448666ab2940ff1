from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class ScoreBreakdown:
    keyword_match: int
    formatting: int
    structure: int
    readability: int

    def to_dict(self) -> Dict[str, int]:
        return {
            "keywordMatch": self.keyword_match,
            "formatting": self.formatting,
            "structure": self.structure,
            "readability": self.readability,
        }


@dataclass(frozen=True)
class KeywordDetails:
    total_keywords: int
    matched_count: int
    # 0 when total_keywords == 0
    match_percentage: int

    def to_dict(self) -> Dict[str, int]:
        return {
            "totalKeywords": self.total_keywords,
            "matchedCount": self.matched_count,
            "matchPercentage": self.match_percentage,
        }


@dataclass(frozen=True)
class ATSScore:
    """
    Result of one resume scoring call.

    Value object: created fresh per call, never mutated. `to_dict()` is the
    shape rendered by the UI; `to_record()` is the `ats_scores` row shape.
    """
    overall: int
    breakdown: ScoreBreakdown
    details: KeywordDetails
    matched_keywords: Tuple[str, ...]
    missing_keywords: Tuple[str, ...]
    improvements: Tuple[str, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "overall": self.overall,
            "breakdown": self.breakdown.to_dict(),
            "details": self.details.to_dict(),
            "matchedKeywords": list(self.matched_keywords),
            "missingKeywords": list(self.missing_keywords),
            "improvements": list(self.improvements),
        }

    def to_record(self, job_description: Optional[str] = None) -> Dict[str, Any]:
        return {
            "overall_score": self.overall,
            "keyword_score": self.breakdown.keyword_match,
            "format_score": self.breakdown.formatting,
            "structure_score": self.breakdown.structure,
            "readability_score": self.breakdown.readability,
            "matched_keywords": list(self.matched_keywords),
            "missing_keywords": list(self.missing_keywords),
            "improvements": list(self.improvements),
            "job_description": job_description or None,
        }

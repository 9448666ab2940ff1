from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence, Tuple

from careergauge.config import DEFAULT_SCORING_CONFIG, DEFAULT_WEIGHTS, ScoringConfig
from careergauge.core.text_processing import dedupe_first_seen, tokenize_stream
from careergauge.core.validation import coerce_text
from careergauge.keyword_bank import DEFAULT_KEYWORD_BANK, KeywordBank
from careergauge.scoring.formatting import analyze_formatting
from careergauge.scoring.keywords import extract_keywords
from careergauge.scoring.matcher import (
    clamp100,
    keyword_match_score,
    match_keywords,
    round_half_up,
)
from careergauge.scoring.readability import analyze_readability
from careergauge.scoring.structure import analyze_structure
from careergauge.scoring.types import ATSScore, KeywordDetails, ScoreBreakdown

logger = logging.getLogger(__name__)

# Tie-break order for improvement categories with equal deficit and weight.
CATEGORY_ORDER: Tuple[str, ...] = ("keywordMatch", "structure", "formatting", "readability")

EMPTY_RESUME_MESSAGE = "Resume appears empty - add your experience, education, and skills."

# Missing keywords named in the improvement message.
MISSING_KEYWORDS_SHOWN = 5


def aggregate(
        keyword_match: int,
        formatting: int,
        structure: int,
        readability: int,
        *,
        weights: Optional[Dict[str, float]] = None,
) -> int:
    w = weights or DEFAULT_WEIGHTS
    total = (
            keyword_match * w["keywordMatch"]
            + formatting * w["formatting"]
            + structure * w["structure"]
            + readability * w["readability"]
    )
    return round_half_up(clamp100(total))


def missing_keywords_message(missing: Sequence[str]) -> Optional[str]:
    if not missing:
        return None
    shown = ", ".join(missing[:MISSING_KEYWORDS_SHOWN])
    noun = "keyword" if len(missing) == 1 else "keywords"
    return f"Add {len(missing)} missing {noun}: {shown}"


def rank_improvements(
        scores: Dict[str, int],
        issues: Dict[str, List[str]],
        *,
        weights: Optional[Dict[str, float]] = None,
        threshold: int = DEFAULT_SCORING_CONFIG.improvement_threshold,
) -> List[str]:
    """
    Flatten per-category issues, highest impact first.

    Categories below `threshold` come first, ordered by how far below they
    are (ties: larger weight, then CATEGORY_ORDER). Categories at or above
    the threshold follow in the same order, so no actionable message is lost.
    """
    w = weights or DEFAULT_WEIGHTS

    def key(cat: str):
        deficit = threshold - scores.get(cat, 0)
        return (deficit <= 0, -deficit, -w.get(cat, 0.0), CATEGORY_ORDER.index(cat))

    out: List[str] = []
    for cat in sorted(CATEGORY_ORDER, key=key):
        out.extend(issues.get(cat, []))
    return dedupe_first_seen(out)


def calculate_ats_score(
        resume_text: Optional[str],
        job_description: Optional[str] = "",
        *,
        bank: Optional[KeywordBank] = None,
        config: Optional[ScoringConfig] = None,
) -> ATSScore:
    """
    Score a plain-text resume, optionally against a job description.

    Pure: no I/O and no environment reads (pass `load_scoring_config()` to
    honor env overrides). Raises InvalidInputError for non-string input;
    empty text is a valid, low-scoring resume.
    """
    cfg = config or DEFAULT_SCORING_CONFIG
    kb = bank or DEFAULT_KEYWORD_BANK

    resume = coerce_text(
        resume_text, "resume_text",
        max_chars=cfg.max_input_chars, oversize_policy=cfg.oversize_policy,
    )
    job = coerce_text(
        job_description, "job_description",
        max_chars=cfg.max_input_chars, oversize_policy=cfg.oversize_policy,
    )

    keywords = extract_keywords(job, bank=kb, max_keywords=cfg.max_job_keywords)
    match = match_keywords(tokenize_stream(resume), keywords)
    total = match.total
    matched_count = len(match.matched)
    details = KeywordDetails(
        total_keywords=total,
        matched_count=matched_count,
        match_percentage=round_half_up(matched_count / total * 100) if total else 0,
    )

    if not resume.strip():
        logger.debug("empty resume; %d keywords reported missing", total)
        improvements = [EMPTY_RESUME_MESSAGE]
        kw_msg = missing_keywords_message(match.missing)
        if kw_msg:
            improvements.append(kw_msg)
        return ATSScore(
            overall=0,
            breakdown=ScoreBreakdown(keyword_match=0, formatting=0, structure=0, readability=0),
            details=details,
            matched_keywords=tuple(match.matched),
            missing_keywords=tuple(match.missing),
            improvements=tuple(improvements),
        )

    structure = analyze_structure(resume)
    formatting = analyze_formatting(resume)
    readability = analyze_readability(resume)
    kw_score = keyword_match_score(matched_count, total)

    overall = aggregate(
        kw_score, formatting.score, structure.score, readability.score, weights=cfg.weights,
    )

    kw_msg = missing_keywords_message(match.missing)
    improvements = rank_improvements(
        {
            "keywordMatch": kw_score,
            "formatting": formatting.score,
            "structure": structure.score,
            "readability": readability.score,
        },
        {
            "keywordMatch": [kw_msg] if kw_msg else [],
            "formatting": list(formatting.issues),
            "structure": list(structure.issues),
            "readability": list(readability.issues),
        },
        weights=cfg.weights,
        threshold=cfg.improvement_threshold,
    )

    return ATSScore(
        overall=overall,
        breakdown=ScoreBreakdown(
            keyword_match=kw_score,
            formatting=formatting.score,
            structure=structure.score,
            readability=readability.score,
        ),
        details=details,
        matched_keywords=tuple(match.matched),
        missing_keywords=tuple(match.missing),
        improvements=tuple(improvements),
    )

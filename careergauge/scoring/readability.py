from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List

from careergauge.core import signals
from careergauge.core.text_processing import split_lines
from careergauge.scoring.matcher import clamp100, round_half_up

_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+(?:\s+|$)")

MAX_AVG_UNIT_WORDS = 25
MIN_AVG_UNIT_WORDS = 5
LONG_UNITS_PENALTY = 15
SHORT_UNITS_PENALTY = 10

TARGET_ACTION_VERB_RATIO = 0.7
ACTION_VERB_PENALTY = 25

FIRST_PERSON_EACH = 3
FIRST_PERSON_MAX = 15
PASSIVE_EACH = 5
PASSIVE_MAX = 15

MIN_NUMBERS = 3
FEW_NUMBERS_PENALTY = 10


@dataclass(frozen=True)
class ReadabilityAnalysis:
    score: int
    avg_unit_length: float = 0.0
    action_verb_ratio: float = 0.0
    first_person_count: int = 0
    passive_count: int = 0
    issues: List[str] = field(default_factory=list)


def _units(lines: List[str]) -> List[str]:
    """Bullet texts, plus sentences from prose lines (headers excluded)."""
    out: List[str] = []
    for line in lines:
        if not line.strip() or signals.section_heading(line):
            continue
        if signals.is_bullet_line(line):
            out.append(signals.strip_bullet(line))
            continue
        for sentence in _SENTENCE_SPLIT_RE.split(line):
            if sentence.strip():
                out.append(sentence.strip())
    return out


def analyze_readability(resume_text: str) -> ReadabilityAnalysis:
    lines = split_lines(resume_text or "")
    units = _units(lines)
    if not units:
        return ReadabilityAnalysis(score=0, issues=["No readable content found."])

    text = "\n".join(lines)
    score = 100.0
    issues: List[str] = []

    avg = sum(len(u.split()) for u in units) / len(units)
    if avg > MAX_AVG_UNIT_WORDS:
        score -= LONG_UNITS_PENALTY
        issues.append(f"Sentences average {avg:.0f} words. Keep bullets under {MAX_AVG_UNIT_WORDS} words.")
    elif avg < MIN_AVG_UNIT_WORDS:
        score -= SHORT_UNITS_PENALTY
        issues.append("Bullets are very short. Add context and results to each one.")

    bullets = [signals.strip_bullet(line) for line in lines if signals.is_bullet_line(line)]
    sample = bullets or units
    ratio = sum(1 for u in sample if signals.starts_with_action_verb(u)) / len(sample)
    if ratio < TARGET_ACTION_VERB_RATIO:
        score -= round_half_up(ACTION_VERB_PENALTY * (TARGET_ACTION_VERB_RATIO - ratio) / TARGET_ACTION_VERB_RATIO)
        issues.append("Start more bullets with strong action verbs (Led, Built, Reduced, Delivered).")

    first_person = signals.count_first_person(text)
    if first_person:
        score -= min(FIRST_PERSON_MAX, FIRST_PERSON_EACH * first_person)
        issues.append('Remove first-person pronouns ("I", "my") - write in implied first person.')

    passive = signals.count_passive_constructions(text)
    if passive:
        score -= min(PASSIVE_MAX, PASSIVE_EACH * passive)
        issues.append("Replace passive voice with active statements of what you did.")

    if signals.count_numbers(text) < MIN_NUMBERS:
        score -= FEW_NUMBERS_PENALTY
        issues.append("Quantify achievements with numbers, percentages, or dollar amounts.")

    return ReadabilityAnalysis(
        score=round_half_up(clamp100(score)),
        avg_unit_length=round(avg, 2),
        action_verb_ratio=round(ratio, 3),
        first_person_count=first_person,
        passive_count=passive,
        issues=issues,
    )

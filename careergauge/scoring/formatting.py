from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from careergauge.core import signals
from careergauge.core.text_processing import split_lines
from careergauge.scoring.matcher import clamp100, round_half_up

BASE_SCORE = 90

# Penalties
TABLE_PENALTY = 20
COLUMN_PENALTY = 15
GRAPHIC_PENALTY = 15
CONTROL_CHAR_PENALTY = 10
GLYPH_PENALTY = 10
NO_BULLETS_PENALTY = 15
MIXED_BULLETS_PENALTY = 5
WALL_OF_TEXT_PENALTY = 10
NO_SPACING_PENALTY = 5
TOO_SHORT_PENALTY = 15
TOO_LONG_PENALTY = 10

# Rewards
CONSISTENT_BULLETS_BONUS = 5
CONTACT_AT_TOP_BONUS = 5

# Thresholds
MAX_UNSAFE_GLYPHS = 5
MIN_WORDS_FOR_BULLETS = 40
MIN_BULLET_LINES = 3
MAX_BULLET_STYLES = 2
MAX_LINE_WORDS = 60
MAX_PARAGRAPH_LINES = 12
MIN_LINES_FOR_SPACING = 15
MIN_WORDS = 150
MAX_WORDS = 1200
CONTACT_TOP_LINES = 5


@dataclass(frozen=True)
class FormattingAnalysis:
    score: int
    bullet_lines: int = 0
    bullet_styles: int = 0
    word_count: int = 0
    issues: List[str] = field(default_factory=list)


def _paragraph_line_counts(lines: List[str]) -> List[int]:
    counts: List[int] = []
    run = 0
    for line in lines:
        if line.strip() and not signals.is_bullet_line(line):
            run += 1
            continue
        if run:
            counts.append(run)
        run = 0
    if run:
        counts.append(run)
    return counts


def analyze_formatting(resume_text: str) -> FormattingAnalysis:
    """ATS-safety of the raw text layout."""
    raw = resume_text or ""
    raw_lines = raw.splitlines()
    lines = split_lines(raw)
    content = [line for line in lines if line.strip()]
    if not content:
        return FormattingAnalysis(score=0, issues=["Resume text is empty - nothing to format."])

    score = float(BASE_SCORE)
    issues: List[str] = []
    word_count = sum(len(line.split()) for line in content)

    # Extraction artifacts
    if any(signals.looks_like_table_row(line) for line in raw_lines):
        score -= TABLE_PENALTY
        issues.append("Tables detected - ATS may not parse them. Use simple text formatting.")
    if any(signals.has_column_gap(line) for line in raw_lines):
        score -= COLUMN_PENALTY
        issues.append("Multi-column layout detected. Use a single-column format.")
    if signals.has_graphic_placeholder(raw):
        score -= GRAPHIC_PENALTY
        issues.append("Graphics or images detected. Remove visual elements for ATS parsing.")
    if signals.has_control_characters(raw):
        score -= CONTROL_CHAR_PENALTY
        issues.append("Unreadable control characters found - re-export the resume as plain text.")
    if signals.count_unsafe_bullet_glyphs(raw) > MAX_UNSAFE_GLYPHS:
        score -= GLYPH_PENALTY
        issues.append("Excessive special characters detected. Use standard bullets (•, -, *).")

    # Bullets
    markers = [m for m in (signals.bullet_marker(line) for line in lines) if m]
    styles = len(set(markers))
    if not markers and word_count >= MIN_WORDS_FOR_BULLETS:
        score -= NO_BULLETS_PENALTY
        issues.append("No bullet points found. List achievements as bullets under each role.")
    elif styles > MAX_BULLET_STYLES:
        score -= MIXED_BULLETS_PENALTY
        issues.append(f"{styles} different bullet styles used. Pick one bullet character.")
    if len(markers) >= MIN_BULLET_LINES and styles <= MAX_BULLET_STYLES:
        score += CONSISTENT_BULLETS_BONUS

    # Visual breaks
    long_line = any(len(line.split()) > MAX_LINE_WORDS for line in content)
    long_paragraph = any(n > MAX_PARAGRAPH_LINES for n in _paragraph_line_counts(lines))
    if long_line or long_paragraph:
        score -= WALL_OF_TEXT_PENALTY
        issues.append("Long paragraphs detected. Break dense text into short bullets.")
    if len(content) >= MIN_LINES_FOR_SPACING and len(content) == len(lines):
        score -= NO_SPACING_PENALTY
        issues.append("Add blank lines between sections for better readability.")

    # Length band
    if word_count < MIN_WORDS:
        score -= TOO_SHORT_PENALTY
        issues.append(f"Resume is thin ({word_count} words). Aim for at least {MIN_WORDS} words of content.")
    elif word_count > MAX_WORDS:
        score -= TOO_LONG_PENALTY
        issues.append(f"Resume is long ({word_count} words). Trim to the most relevant {MAX_WORDS} words.")

    top = "\n".join(content[:CONTACT_TOP_LINES])
    if signals.has_email(top) or signals.has_phone(top):
        score += CONTACT_AT_TOP_BONUS

    return FormattingAnalysis(
        score=round_half_up(clamp100(score)),
        bullet_lines=len(markers),
        bullet_styles=styles,
        word_count=word_count,
        issues=issues,
    )

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple

from careergauge.core import signals
from careergauge.core.text_processing import split_lines
from careergauge.scoring.matcher import clamp100, round_half_up

CANONICAL_SECTIONS: Tuple[str, ...] = ("summary", "experience", "education", "skills")

# Expected relative order when present.
_ORDERED_SECTIONS: Tuple[str, ...] = ("summary", "experience", "education")

# Point shares (sum to 100).
CONTACT_POINTS = 20.0
EMAIL_SHARE = 0.5
PHONE_SHARE = 0.3
NAME_SHARE = 0.2
SECTIONS_POINTS = 70.0
ORDER_BONUS = 10.0

_SECTION_MESSAGES = {
    "experience": 'Missing "Experience" section - ATS systems rank work history first.',
    "skills": 'Missing "Skills" section - ATS heavily weights a dedicated skills list.',
    "education": 'Missing "Education" section - add your academic background.',
    "summary": 'Consider adding a "Professional Summary" at the top.',
}

# Severity order for the missing-section messages.
_MISSING_PRIORITY = ("experience", "skills", "education", "summary")


@dataclass(frozen=True)
class StructureAnalysis:
    score: int
    found_sections: Tuple[str, ...]
    missing_sections: Tuple[str, ...]
    has_email: bool = False
    has_phone: bool = False
    has_name: bool = False
    in_order: bool = False
    issues: List[str] = field(default_factory=list)


def _first_content_line(lines: List[str]) -> str:
    for line in lines:
        if line.strip():
            return line.strip()
    return ""


def analyze_structure(resume_text: str) -> StructureAnalysis:
    """
    Section and contact-info analysis.

    score = contact (email/phone/name) + equal share per canonical section
            + bonus when summary / experience / education appear in that order.
    """
    lines = split_lines(resume_text or "")
    if not any(line.strip() for line in lines):
        return StructureAnalysis(
            score=0,
            found_sections=(),
            missing_sections=CANONICAL_SECTIONS,
            issues=["No sections detected - the resume appears to be empty."],
        )

    positions = signals.sections_in_order(lines)
    found = tuple(s for s in CANONICAL_SECTIONS if s in positions)
    missing = tuple(s for s in CANONICAL_SECTIONS if s not in positions)

    text = "\n".join(lines)
    email = signals.has_email(text)
    phone = signals.has_phone(text)
    first = _first_content_line(lines)
    name = signals.looks_like_name_line(first) and signals.section_heading(first) is None

    score = CONTACT_POINTS * (
        (EMAIL_SHARE if email else 0.0)
        + (PHONE_SHARE if phone else 0.0)
        + (NAME_SHARE if name else 0.0)
    )
    score += SECTIONS_POINTS * len(found) / len(CANONICAL_SECTIONS)

    ordered_present = [s for s in _ORDERED_SECTIONS if s in positions]
    in_order = len(ordered_present) >= 2 and all(
        positions[a] < positions[b] for a, b in zip(ordered_present, ordered_present[1:])
    )
    if in_order:
        score += ORDER_BONUS

    issues: List[str] = []
    for sec in _MISSING_PRIORITY:
        if sec in missing:
            issues.append(_SECTION_MESSAGES[sec])
    if len(ordered_present) >= 2 and not in_order:
        issues.append("Reorder sections as Summary, Experience, then Education for better impact.")
    if not email:
        issues.append("No email address detected. Add contact information at the top.")
    if not phone:
        issues.append("No phone number detected. Include your contact number.")

    return StructureAnalysis(
        score=round_half_up(clamp100(score)),
        found_sections=found,
        missing_sections=missing,
        has_email=email,
        has_phone=phone,
        has_name=name,
        in_order=in_order,
        issues=issues,
    )

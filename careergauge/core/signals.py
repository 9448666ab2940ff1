from __future__ import annotations

import re
from typing import Dict, FrozenSet, Optional

# One predicate per heuristic. Analyzers combine these; each one is small
# enough to test in isolation.

# The local part starts at a token boundary.
_EMAIL_RE = re.compile(r"(?<![\w.+-])[\w.+-]+@[\w-]+(?:\.[\w-]+)+")
_PHONE_RE = re.compile(r"(?:\+?\d{1,3}[\s.-]?)?\(?\d{3}\)?[\s.-]?\d{3}[\s.-]?\d{4}\b")
_NAME_WORD_RE = re.compile(r"^[A-Z][A-Za-z.'-]*$")

# "• text", "- text", "* text", "1. text", "2) text"
_BULLET_RE = re.compile(r"^\s*([•\-*–·▪●◦‣○]|\d{1,2}[.)])\s+\S")

_TABLE_ROW_RE = re.compile(
    r"^\s*\|.*\|\s*$"
    r"|^\s*\+(?:[-=]{3,}\+)+\s*$"
    r"|^\s*:?-{3,}:?(?:\s*\|\s*:?-{3,}:?)+\s*$"
)
_COLUMN_GAP_RE = re.compile(r"\S(?:\t{2,}| {4,}|\t {2,})\S")
_GRAPHIC_RE = re.compile(r"\[(?:image|graphic|chart|logo|photo|picture|figure)\]", re.IGNORECASE)
_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f\ufffd]")

# Glyphs that PDF/DOCX extraction tends to mangle or that ATS parsers drop.
UNSAFE_BULLET_GLYPHS: FrozenSet[str] = frozenset("►▸➤➜→★✦✓✔⬤◆◇■□")

_PASSIVE_RE = re.compile(
    r"\b(?:was|were|is|are|been|being|be)\s+(?:\w+ly\s+)?(?:\w+ed|built|done|made|given|taken|"
    r"written|chosen|led|run|shown|seen|known|held|sent|kept|brought|bought|found)\b",
    re.IGNORECASE,
)
# "i.e." and "I/O" are not pronouns.
_FIRST_PERSON_RE = re.compile(r"\b(?:i|me|my|mine|myself)\b(?![./]\w)", re.IGNORECASE)
_NUMBER_RE = re.compile(r"\d+")
_LEADING_WORD_RE = re.compile(r"[A-Za-z]+")

ACTION_VERBS: FrozenSet[str] = frozenset({
    "accelerated", "achieved", "administered", "analyzed", "architected", "automated", "built",
    "championed", "coached", "collaborated", "consolidated", "coordinated", "created", "cut",
    "decreased", "delivered", "deployed", "designed", "developed", "directed", "drove",
    "eliminated", "engineered", "established", "exceeded", "expanded", "generated", "grew",
    "headed", "identified", "implemented", "improved", "increased", "initiated", "introduced",
    "launched", "led", "managed", "mentored", "migrated", "modernized", "negotiated",
    "optimized", "orchestrated", "organized", "overhauled", "owned", "pioneered", "planned",
    "produced", "reduced", "redesigned", "refactored", "resolved", "saved", "scaled",
    "shipped", "spearheaded", "streamlined", "strengthened", "supervised", "trained",
    "transformed", "won", "wrote",
})

# Canonical section -> accepted header text (lower-case, "&" written as "and").
SECTION_ALIASES: Dict[str, FrozenSet[str]] = {
    "summary": frozenset({
        "summary", "professional summary", "executive summary", "career summary", "objective",
        "career objective", "profile", "professional profile", "about me", "about",
    }),
    "experience": frozenset({
        "experience", "work experience", "professional experience", "employment",
        "employment history", "work history", "relevant experience", "career history",
    }),
    "education": frozenset({
        "education", "academic background", "education and training", "academics",
        "education and certifications",
    }),
    "skills": frozenset({
        "skills", "technical skills", "core skills", "key skills", "core competencies",
        "competencies", "skills and abilities", "areas of expertise", "expertise",
    }),
}

_HEADING_MAX_CHARS = 60


def has_email(text: str) -> bool:
    text = text or ""
    return "@" in text and bool(_EMAIL_RE.search(text))


def has_phone(text: str) -> bool:
    return bool(_PHONE_RE.search(text or ""))


def looks_like_name_line(line: str) -> bool:
    """2-4 capitalized words, no digits or contact punctuation ("Jane Q. Doe")."""
    words = (line or "").split()
    if not 2 <= len(words) <= 4:
        return False
    return all(_NAME_WORD_RE.match(w) for w in words)


def bullet_marker(line: str) -> Optional[str]:
    """The bullet style of a line ("•", "-", "1."), or None for non-bullet lines."""
    m = _BULLET_RE.match(line or "")
    if not m:
        return None
    marker = m.group(1)
    return "1." if marker[0].isdigit() else marker


def is_bullet_line(line: str) -> bool:
    return bullet_marker(line) is not None


def strip_bullet(line: str) -> str:
    m = _BULLET_RE.match(line or "")
    if not m:
        return (line or "").strip()
    return line[m.end(1):].strip()


def looks_like_table_row(line: str) -> bool:
    return bool(_TABLE_ROW_RE.search(line or ""))


def has_column_gap(line: str) -> bool:
    """Text separated by runs of tabs/spaces: a sign of multi-column layout."""
    return bool(_COLUMN_GAP_RE.search(line or ""))


def has_graphic_placeholder(text: str) -> bool:
    return bool(_GRAPHIC_RE.search(text or ""))


def has_control_characters(text: str) -> bool:
    return bool(_CONTROL_RE.search(text or ""))


def count_unsafe_bullet_glyphs(text: str) -> int:
    return sum(1 for ch in (text or "") if ch in UNSAFE_BULLET_GLYPHS)


def count_passive_constructions(text: str) -> int:
    """`was/were/is/are/been/being/be` followed by a past participle."""
    return len(_PASSIVE_RE.findall(text or ""))


def count_first_person(text: str) -> int:
    return len(_FIRST_PERSON_RE.findall(text or ""))


def count_numbers(text: str) -> int:
    return len(_NUMBER_RE.findall(text or ""))


def starts_with_action_verb(text: str, verbs: FrozenSet[str] = ACTION_VERBS) -> bool:
    m = _LEADING_WORD_RE.search(strip_bullet(text))
    if not m or m.start() > 0:
        return False
    return m.group(0).lower() in verbs


def section_heading(line: str) -> Optional[str]:
    """
    Canonical section name if `line` is a section header, else None.

    Accepts "EXPERIENCE", "Work Experience:", "Technical Skills: Python, SQL".
    """
    raw = (line or "").strip()
    if not raw or len(raw) > 200:
        return None
    head = raw.split(":", 1)[0] if ":" in raw else raw
    head = head.strip().strip("#*=_-").strip().lower().replace("&", "and")
    head = " ".join(head.split())
    if not head or len(head) > _HEADING_MAX_CHARS:
        return None
    for section, aliases in SECTION_ALIASES.items():
        if head in aliases:
            return section
    return None


def sections_in_order(lines) -> Dict[str, int]:
    """First line index of each canonical section header found in `lines`."""
    found: Dict[str, int] = {}
    for i, line in enumerate(lines):
        sec = section_heading(line)
        if sec and sec not in found:
            found[sec] = i
    return found

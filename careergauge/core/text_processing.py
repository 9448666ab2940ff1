from __future__ import annotations

import re
import unicodedata
from typing import FrozenSet, Iterable, List, Set

# NOTE: This module is the shared tokenizer. Keyword extraction, matching,
# and the cover-letter / interview scorers all depend on it rather than
# re-implementing tokenization.

# Token pattern (applied to lower-cased text):
# - runs of letters/digits
# - internal separators . / + # - between alphanumerics (node.js, ci/cd, 3.8, test-driven)
# - trailing ++ or # (c++, c#, f#)
# Every repetition must consume a separator, so matching is linear.
_WORD_RE = re.compile(r"[^\W_]+(?:[./+#-][^\W_]+)*(?:\+\+|#)?")

# Stopwords used when deriving keywords from free text. Never applied by
# tokenize_stream itself.
STOPWORDS: FrozenSet[str] = frozenset({
    "a", "an", "the", "and", "or", "to", "of", "in", "for", "on", "with", "as", "at", "by", "from",
    "is", "are", "be", "been", "being", "was", "were", "am", "has", "have", "had", "he", "she",
    "do", "does", "did", "this", "that", "these", "those", "it", "its", "they", "them", "their",
    "you", "your", "we", "our", "us", "i", "me", "my",
    "will", "can", "may", "must", "should", "could", "would",
    "not", "no", "yes", "all", "any", "some", "each", "other", "more", "most", "very", "etc",
    "into", "over", "under", "between", "within", "without", "across", "per", "plus",
    "about", "also", "such", "than", "then", "there", "here", "what", "which", "who", "how",
    "if", "but", "so", "up", "out", "whom", "while", "where", "when",
    "strong", "good", "great", "excellent", "ability", "abilities", "able",
    "years", "year", "least", "related", "field", "equivalent", "including", "like",
    "knowledge", "familiarity", "understanding", "proficiency", "proficient", "using", "use",
    # common boilerplate words in listings
    "role", "roles", "job", "jobs", "position", "positions", "responsibilities", "responsibility",
    "requirements", "required", "requirement", "preferred", "skills", "skill", "experience",
    "experienced", "team", "teams", "work", "working", "join", "joining", "growing",
    # recruitment process noise
    "apply", "applying", "applicant", "applicants", "application", "applications", "submit", "submission",
    "candidate", "candidates", "qualified", "successful", "shortlisted", "ideal",
    "interview", "interviewing", "hire", "hiring", "onboard", "onboarding",
    "competitive", "opportunity", "opportunities", "benefit", "benefits", "package",
    "responsible", "seeking", "looking", "welcome", "encouraged",
    "bonus", "nice", "company",
    # URL noise
    "https", "http", "www", "com",
})


def normalize_text(text: str) -> str:
    """
    Deterministic normalization for downstream tokenization.

    - stable across platforms
    - removes unicode quirks (smart quotes, non-breaking spaces)
    - collapses whitespace (line structure is NOT preserved; see split_lines)
    """
    if not text:
        return ""
    t = unicodedata.normalize("NFKC", text)
    t = t.replace("\u00a0", " ")
    t = re.sub(r"[\u2010-\u2015]", "-", t)
    t = " ".join(t.split())
    return t


def split_lines(text: str) -> List[str]:
    """Per-line normalization that keeps line boundaries (blank lines become "")."""
    if not text:
        return []
    return [normalize_text(line) for line in text.splitlines()]


def tokenize_stream(text: str) -> List[str]:
    """Ordered, lower-cased token stream. No stemming, no stopword removal."""
    if not text:
        return []
    normalized = normalize_text(text).lower()
    return [m.group(0) for m in _WORD_RE.finditer(normalized)]


def tokenize(text: str) -> Set[str]:
    """Token set (deterministic), derived from tokenize_stream."""
    return set(tokenize_stream(text))


def content_tokens(tokens: Iterable[str], stopwords: FrozenSet[str] = STOPWORDS) -> List[str]:
    """Drop stopwords and single-character tokens (keeps order)."""
    out: List[str] = []
    for tok in tokens:
        if len(tok) < 2 and not tok.endswith(("+", "#")):
            continue
        if tok in stopwords:
            continue
        out.append(tok)
    return out


def dedupe_first_seen(items: Iterable[str]) -> List[str]:
    seen = set()
    out: List[str] = []
    for it in items:
        if it and it not in seen:
            out.append(it)
            seen.add(it)
    return out


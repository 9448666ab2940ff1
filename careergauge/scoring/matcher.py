from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Iterable, List, Sequence, Set, Tuple

from careergauge.core.text_processing import tokenize_stream

# Hyphen/slash compounds match their parts: "problem-solving" ~ "problem solving",
# "html/css" ~ "html".
_PART_SPLIT_RE = re.compile(r"[-/]")

# Suffixes stripped by stem(), longest first. (suffix, replacement)
_SUFFIXES: Tuple[Tuple[str, str], ...] = (
    ("ments", ""),
    ("ment", ""),
    ("ing", ""),
    ("ies", "y"),
    ("ied", "y"),
    ("ed", ""),
)

_MIN_STEM = 3

# Multi-word keywords longer than this never match (keeps the index bounded).
MAX_KEYWORD_WORDS = 6


def clamp100(x: float) -> float:
    return 0.0 if x < 0.0 else (100.0 if x > 100.0 else x)


def round_half_up(x: float) -> int:
    """Round .5 away from zero for non-negative scores (round() rounds half to even)."""
    return int(x + 0.5) if x >= 0 else -int(-x + 0.5)


def stem(token: str) -> str:
    """
    Light, deterministic morphological folding.

    managed / managing / management / manage -> "manag"
    database / databases -> "databas"
    technology / technologies -> "technology"

    Tokens containing digits or technical characters (node.js, c++, 3.8) are
    returned unchanged.
    """
    if not token.isalpha():
        return token
    out = token
    for suffix, repl in _SUFFIXES:
        if out.endswith(suffix) and len(out) - len(suffix) + len(repl) >= _MIN_STEM:
            out = out[: len(out) - len(suffix)] + repl
            break
    else:
        if out.endswith("s") and not out.endswith(("ss", "us", "is")) and len(out) - 1 >= _MIN_STEM:
            out = out[:-1]
    if out.endswith("e") and len(out) - 1 >= _MIN_STEM:
        out = out[:-1]
    return out


def split_parts(tokens: Iterable[str]) -> List[str]:
    out: List[str] = []
    for tok in tokens:
        if "-" in tok or "/" in tok:
            out.extend(p for p in _PART_SPLIT_RE.split(tok) if p)
        else:
            out.append(tok)
    return out


def match_key(tokens: Sequence[str]) -> Tuple[str, ...]:
    """Canonical form used for both matching and keyword deduplication."""
    return tuple(stem(t) for t in split_parts(tokens))


def keyword_key(keyword: str) -> Tuple[str, ...]:
    return match_key(tokenize_stream(keyword))


class NgramIndex:
    """
    Set of every stemmed n-gram (n <= max_n) of a token stream.

    Built once per text; membership checks are O(1), so matching k keywords
    costs O(len(tokens) * max_n + k).
    """

    def __init__(self, tokens: Sequence[str], max_n: int = MAX_KEYWORD_WORDS) -> None:
        self.stems: List[str] = list(match_key(tokens))
        stems = self.stems
        self._grams: Set[Tuple[str, ...]] = set()
        self._counts: Dict[Tuple[str, ...], int] = {}
        self._first: Dict[Tuple[str, ...], int] = {}
        for n in range(1, max_n + 1):
            for i in range(0, len(stems) - n + 1):
                gram = tuple(stems[i : i + n])
                self._grams.add(gram)
                self._counts[gram] = self._counts.get(gram, 0) + 1
                self._first.setdefault(gram, i)

    def __contains__(self, key: Tuple[str, ...]) -> bool:
        return bool(key) and key in self._grams

    def count(self, key: Tuple[str, ...]) -> int:
        return self._counts.get(key, 0)

    def first_position(self, key: Tuple[str, ...]) -> int:
        return self._first.get(key, -1)


@dataclass(frozen=True)
class KeywordMatch:
    matched: List[str]
    missing: List[str]

    @property
    def total(self) -> int:
        return len(self.matched) + len(self.missing)


def match_keywords(resume_tokens: Sequence[str], keywords: Sequence[str]) -> KeywordMatch:
    """
    Split `keywords` into matched / missing against the resume token stream.

    A keyword matches when its stemmed token sequence appears contiguously in
    the resume (order preserved, no gaps). Keyword order is kept; keywords that
    share a match key are reported once.
    """
    index = NgramIndex(resume_tokens)
    matched: List[str] = []
    missing: List[str] = []
    seen: Set[Tuple[str, ...]] = set()

    for kw in keywords:
        key = keyword_key(kw)
        if key in seen:
            continue
        seen.add(key)
        if len(key) <= MAX_KEYWORD_WORDS and key in index:
            matched.append(kw)
        else:
            missing.append(kw)

    return KeywordMatch(matched=matched, missing=missing)


def keyword_match_score(matched_count: int, total: int) -> int:
    # No keywords to miss => perfect by convention.
    if total <= 0:
        return 100
    return round_half_up(clamp100(matched_count / total * 100))

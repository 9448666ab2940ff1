from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Set, Tuple

from careergauge.config import DEFAULT_MAX_JOB_KEYWORDS
from careergauge.core.text_processing import content_tokens, tokenize_stream
from careergauge.keyword_bank import DEFAULT_KEYWORD_BANK, KeywordBank
from careergauge.scoring.matcher import MAX_KEYWORD_WORDS, NgramIndex, keyword_key, match_key

# Acronyms as written in the posting (AWS, SQL, GCP, ETL).
_ACRONYM_RE = re.compile(r"\b[A-Z][A-Z0-9]{1,9}\b")

# Technical token shape: node.js, c++, c#, ci/cd
_TECH_CHARS = frozenset("./+#")

# Specificity multipliers used for ranking.
TECHNICAL_TERM = 2.0
SOFT_SKILL = 1.5
TECHNICAL_SHAPE = 1.5
PLAIN_WORD = 1.0
EXTRA_WORD_BONUS = 0.5

# Below this many content tokens every content word is a candidate;
# at or above it a word must occur at least twice.
SHORT_DESCRIPTION_TOKENS = 30

_MIN_WORD_LEN = 3


@dataclass
class _Candidate:
    surface: str
    key: Tuple[str, ...]
    specificity: float
    count: int
    position: int


def _display(term: str) -> str:
    return " ".join(tokenize_stream(term))


def _is_numeric(tok: str) -> bool:
    return tok.replace(".", "").replace("/", "").replace("-", "").isdigit()


def generic_keywords(bank: KeywordBank = DEFAULT_KEYWORD_BANK) -> List[str]:
    """Baseline keyword set (bank order, normalized, deduplicated)."""
    out: List[str] = []
    seen = set()
    for term in bank.generic_keywords:
        surface = _display(term)
        key = keyword_key(surface)
        if not key or key in seen:
            continue
        seen.add(key)
        out.append(surface)
    return out


def extract_keywords(
        job_description: Optional[str] = None,
        *,
        bank: KeywordBank = DEFAULT_KEYWORD_BANK,
        max_keywords: int = DEFAULT_MAX_JOB_KEYWORDS,
) -> List[str]:
    """
    Ranked, deduplicated keywords for a job description.

    Without a description (None, "" or whitespace) the bank's generic keywords
    are returned instead. With one, candidates come from:
      1. bank terms found in the text (multi-word phrases preferred)
      2. acronyms written in capitals
      3. technical-shaped tokens (node.js, c++)
      4. content words, frequency-filtered against the stopword list
    and are ranked by frequency * specificity, ties broken by first position.
    """
    if job_description is None or not job_description.strip():
        return generic_keywords(bank)

    tokens = tokenize_stream(job_description)
    index = NgramIndex(tokens)
    candidates: Dict[Tuple[str, ...], _Candidate] = {}

    def add(surface: str, key: Tuple[str, ...], specificity: float) -> None:
        if not key or len(key) > MAX_KEYWORD_WORDS:
            return
        count = index.count(key)
        if count <= 0:
            return
        existing = candidates.get(key)
        if existing is not None:
            existing.specificity = max(existing.specificity, specificity)
            return
        candidates[key] = _Candidate(
            surface=surface,
            key=key,
            specificity=specificity,
            count=count,
            position=index.first_position(key),
        )

    # 1. curated bank
    for terms, base in ((bank.technical_terms, TECHNICAL_TERM), (bank.soft_skills, SOFT_SKILL)):
        for term in terms:
            surface = _display(term)
            words = len(surface.split())
            add(surface, keyword_key(surface), base + EXTRA_WORD_BONUS * (words - 1))

    # 2. acronyms
    for m in _ACRONYM_RE.finditer(job_description):
        acronym = m.group(0).lower()
        if acronym in bank.stopwords or _is_numeric(acronym):
            continue
        add(acronym, match_key([acronym]), TECHNICAL_SHAPE)

    # 3 + 4. single tokens
    words = content_tokens(tokens, bank.stopwords)
    min_count = 1 if len(words) < SHORT_DESCRIPTION_TOKENS else 2
    for tok in words:
        if _is_numeric(tok):
            continue
        key = match_key([tok])
        if any(ch in _TECH_CHARS for ch in tok):
            add(tok, key, TECHNICAL_SHAPE)
        elif len(tok) >= _MIN_WORD_LEN and index.count(key) >= min_count:
            add(tok, key, PLAIN_WORD)

    kept = _drop_contained(list(candidates.values()), index.stems)
    kept.sort(key=lambda c: (-(c.count * c.specificity), c.position, c.surface))
    return [c.surface for c in kept[: max(0, max_keywords)]]


def _drop_contained(candidates: List[_Candidate], stems: Sequence[str]) -> List[_Candidate]:
    """
    Drop a candidate when every occurrence of it sits inside longer candidate
    phrases ("management" inside "project management").

    Coverage is counted per position in the stem stream, so overlapping
    phrases ("restful api", "api design") cover a shared word once.
    """
    longer = {c.key for c in candidates if len(c.key) > 1}
    if not longer:
        return list(candidates)
    max_n = max(len(k) for k in longer)

    covered: Set[Tuple[int, int]] = set()
    for i in range(len(stems)):
        for n in range(2, min(max_n, len(stems) - i) + 1):
            if tuple(stems[i : i + n]) not in longer:
                continue
            for start in range(i, i + n):
                for m in range(1, i + n - start + 1):
                    if m < n:
                        covered.add((start, m))

    covering: Dict[Tuple[str, ...], int] = {}
    for start, m in covered:
        gram = tuple(stems[start : start + m])
        covering[gram] = covering.get(gram, 0) + 1

    return [c for c in candidates if covering.get(c.key, 0) < c.count]

# careergauge/config.py
from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

# --- Scoring weights ---

# Overall = weighted sum of the four resume sub-scores. Keys follow the
# breakdown field names rendered by the UI.
DEFAULT_WEIGHTS: Dict[str, float] = {
    "keywordMatch": 0.40,
    "formatting": 0.25,
    "structure": 0.20,
    "readability": 0.15,
}

# Sub-scores below this value are reported first in `improvements`.
DEFAULT_IMPROVEMENT_THRESHOLD = 70

# --- Guardrails ---

# Inputs longer than this are truncated (or rejected, see OVERSIZE_POLICY).
DEFAULT_MAX_INPUT_CHARS = 100_000

# "truncate" | "reject"
DEFAULT_OVERSIZE_POLICY = "truncate"

# Upper bound on keywords extracted from one job description.
DEFAULT_MAX_JOB_KEYWORDS = 30

# --- Local persistence ---

DEFAULT_HISTORY_DIR = ".careergauge"


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _parse_weights(raw: Optional[str]) -> Dict[str, float]:
    """
    Parses: "keywordMatch=0.4,formatting=0.25,structure=0.2,readability=0.15"
    -> {"keywordMatch": 0.4, ...}

    Unknown keys and malformed numbers are ignored; missing keys keep their
    default. The result is renormalized so the weights always sum to 1.
    """
    weights = dict(DEFAULT_WEIGHTS)
    if not raw:
        return weights
    for part in raw.split(","):
        part = part.strip()
        if not part or "=" not in part:
            continue
        key, value = part.split("=", 1)
        key = key.strip()
        if key not in weights:
            continue
        try:
            w = float(value.strip())
        except ValueError:
            continue
        if w < 0:
            continue
        weights[key] = w

    total = sum(weights.values())
    if total <= 0:
        return dict(DEFAULT_WEIGHTS)
    return {k: v / total for k, v in weights.items()}


@dataclass(frozen=True)
class ScoringConfig:
    weights: Dict[str, float] = field(default_factory=lambda: dict(DEFAULT_WEIGHTS))
    improvement_threshold: int = DEFAULT_IMPROVEMENT_THRESHOLD
    max_input_chars: int = DEFAULT_MAX_INPUT_CHARS
    oversize_policy: str = DEFAULT_OVERSIZE_POLICY
    max_job_keywords: int = DEFAULT_MAX_JOB_KEYWORDS


# Environment-independent defaults. The engine uses this unless the caller
# passes a config explicitly, so scores never depend on the shell.
DEFAULT_SCORING_CONFIG = ScoringConfig()


def load_scoring_config() -> ScoringConfig:
    policy = os.getenv("CAREERGAUGE_OVERSIZE_POLICY", DEFAULT_OVERSIZE_POLICY).strip().lower()
    if policy not in ("truncate", "reject"):
        policy = DEFAULT_OVERSIZE_POLICY

    max_chars = _env_int("CAREERGAUGE_MAX_INPUT_CHARS", DEFAULT_MAX_INPUT_CHARS)
    if max_chars <= 0:
        max_chars = DEFAULT_MAX_INPUT_CHARS

    max_keywords = _env_int("CAREERGAUGE_MAX_JOB_KEYWORDS", DEFAULT_MAX_JOB_KEYWORDS)
    if max_keywords <= 0:
        max_keywords = DEFAULT_MAX_JOB_KEYWORDS

    threshold = _env_int("CAREERGAUGE_IMPROVEMENT_THRESHOLD", DEFAULT_IMPROVEMENT_THRESHOLD)
    threshold = min(100, max(0, threshold))

    return ScoringConfig(
        weights=_parse_weights(os.getenv("CAREERGAUGE_WEIGHTS")),
        improvement_threshold=threshold,
        max_input_chars=max_chars,
        oversize_policy=policy,
        max_job_keywords=max_keywords,
    )


def history_dir() -> Path:
    """Directory for the local score history (scores.jsonl)."""
    raw = os.environ.get("CAREERGAUGE_HISTORY_DIR", "").strip()
    return Path(raw or DEFAULT_HISTORY_DIR)

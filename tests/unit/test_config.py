"""
tests/unit/test_config.py

Environment overrides for scoring configuration. The engine itself never
reads the environment; only load_scoring_config() does.
"""
from pathlib import Path

import pytest

from careergauge import config
from careergauge.config import DEFAULT_SCORING_CONFIG, DEFAULT_WEIGHTS, load_scoring_config

_ENV_VARS = (
    "CAREERGAUGE_WEIGHTS",
    "CAREERGAUGE_IMPROVEMENT_THRESHOLD",
    "CAREERGAUGE_MAX_INPUT_CHARS",
    "CAREERGAUGE_OVERSIZE_POLICY",
    "CAREERGAUGE_MAX_JOB_KEYWORDS",
    "CAREERGAUGE_HISTORY_DIR",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults_without_env() -> None:
    cfg = load_scoring_config()
    assert cfg == DEFAULT_SCORING_CONFIG
    assert cfg.weights == DEFAULT_WEIGHTS
    assert sum(cfg.weights.values()) == pytest.approx(1.0)
    assert cfg.improvement_threshold == 70


def test_weights_are_parsed_and_renormalized(monkeypatch) -> None:
    monkeypatch.setenv("CAREERGAUGE_WEIGHTS", "keywordMatch=1,formatting=1,structure=1,readability=1")
    cfg = load_scoring_config()
    assert cfg.weights == {k: 0.25 for k in DEFAULT_WEIGHTS}


def test_malformed_weights_keep_defaults_for_bad_entries(monkeypatch) -> None:
    monkeypatch.setenv("CAREERGAUGE_WEIGHTS", "keywordMatch=abc,bogus=3,readability=-1,,formatting")
    assert load_scoring_config().weights == pytest.approx(DEFAULT_WEIGHTS)


def test_all_zero_weights_fall_back(monkeypatch) -> None:
    monkeypatch.setenv("CAREERGAUGE_WEIGHTS", "keywordMatch=0,formatting=0,structure=0,readability=0")
    assert load_scoring_config().weights == DEFAULT_WEIGHTS


def test_guardrails_from_env(monkeypatch) -> None:
    monkeypatch.setenv("CAREERGAUGE_MAX_INPUT_CHARS", "5000")
    monkeypatch.setenv("CAREERGAUGE_OVERSIZE_POLICY", "REJECT")
    monkeypatch.setenv("CAREERGAUGE_MAX_JOB_KEYWORDS", "12")
    monkeypatch.setenv("CAREERGAUGE_IMPROVEMENT_THRESHOLD", "150")
    cfg = load_scoring_config()
    assert cfg.max_input_chars == 5000
    assert cfg.oversize_policy == "reject"
    assert cfg.max_job_keywords == 12
    assert cfg.improvement_threshold == 100


def test_invalid_guardrails_fall_back(monkeypatch) -> None:
    monkeypatch.setenv("CAREERGAUGE_MAX_INPUT_CHARS", "-1")
    monkeypatch.setenv("CAREERGAUGE_OVERSIZE_POLICY", "explode")
    monkeypatch.setenv("CAREERGAUGE_MAX_JOB_KEYWORDS", "lots")
    cfg = load_scoring_config()
    assert cfg.max_input_chars == config.DEFAULT_MAX_INPUT_CHARS
    assert cfg.oversize_policy == "truncate"
    assert cfg.max_job_keywords == config.DEFAULT_MAX_JOB_KEYWORDS


def test_history_dir(monkeypatch, tmp_path: Path) -> None:
    assert config.history_dir() == Path(".careergauge")
    monkeypatch.setenv("CAREERGAUGE_HISTORY_DIR", str(tmp_path))
    assert config.history_dir() == tmp_path

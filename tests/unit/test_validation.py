from __future__ import annotations

import logging

import pytest

from careergauge.core.validation import InputTooLargeError, InvalidInputError, coerce_text


def test_none_means_absent() -> None:
    assert coerce_text(None, "job_description") == ""


def test_strings_pass_through() -> None:
    assert coerce_text("  keep me  ", "resume_text") == "  keep me  "


@pytest.mark.parametrize("bad", [b"bytes", 1, 1.5, ["x"], ("x",), {"x": 1}])
def test_non_strings_raise_with_field_name(bad) -> None:
    with pytest.raises(InvalidInputError, match="resume_text"):
        coerce_text(bad, "resume_text")


def test_truncation_logs_a_warning(caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="careergauge.core.validation"):
        out = coerce_text("x" * 20, "resume_text", max_chars=5)
    assert out == "xxxxx"
    assert "truncated" in caplog.text


def test_reject_policy() -> None:
    with pytest.raises(InputTooLargeError):
        coerce_text("x" * 20, "resume_text", max_chars=5, oversize_policy="reject")
    assert issubclass(InputTooLargeError, InvalidInputError)
    assert issubclass(InvalidInputError, ValueError)

from __future__ import annotations

import logging
from typing import Any

from careergauge.config import DEFAULT_MAX_INPUT_CHARS, DEFAULT_OVERSIZE_POLICY

logger = logging.getLogger(__name__)


class InvalidInputError(ValueError):
    """Raised when a scorer receives input it cannot interpret as text."""


class InputTooLargeError(InvalidInputError):
    """Raised under the "reject" oversize policy."""


def coerce_text(
        value: Any,
        field: str,
        *,
        max_chars: int = DEFAULT_MAX_INPUT_CHARS,
        oversize_policy: str = DEFAULT_OVERSIZE_POLICY,
) -> str:
    """
    Return `value` as a bounded string.

    - None means "not supplied" and becomes "".
    - Any other non-str (bytes, numbers, lists) raises InvalidInputError.
    - Text longer than max_chars is truncated, or rejected when
      oversize_policy == "reject".
    """
    if value is None:
        return ""
    if not isinstance(value, str):
        raise InvalidInputError(
            f"{field} must be a string, got {type(value).__name__}"
        )
    if len(value) <= max_chars:
        return value
    if oversize_policy == "reject":
        raise InputTooLargeError(
            f"{field} is {len(value)} characters; the limit is {max_chars}"
        )
    logger.warning("%s truncated from %d to %d characters", field, len(value), max_chars)
    return value[:max_chars]

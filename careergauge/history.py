from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol

from careergauge.config import history_dir

logger = logging.getLogger(__name__)

# Kinds of score tracked, matching the persisted record shapes.
KINDS = ("resume", "cover_letter", "interview")


def _ensure_dir(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


def _best_effort_lockdown_file_permissions(path: Path) -> None:
    """
    Best-effort privacy: on Unix, set 600. On Windows, no-op.
    """
    try:
        os.chmod(path, 0o600)
    except OSError:
        pass


def _check_kind(kind: str) -> None:
    if kind not in KINDS:
        raise ValueError(f"unknown score kind {kind!r}; expected one of {', '.join(KINDS)}")


@dataclass(frozen=True)
class ProgressSummary:
    kind: str
    sessions: int
    average: float
    best: int
    last: int
    # last - first overall score; 0 with fewer than two sessions
    improvement: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind,
            "sessions": self.sessions,
            "average": self.average,
            "best": self.best,
            "last": self.last,
            "improvement": self.improvement,
        }


class ScoreHistory(Protocol):
    def load(self, kind: Optional[str] = None) -> List[Dict[str, Any]]:
        ...

    def record(self, kind: str, record: Dict[str, Any]) -> None:
        ...

    def progress(self, kind: str) -> ProgressSummary:
        ...


class JsonScoreHistory:
    """
    Local score history using JSON lines.

    Layout:
      <base_dir>/
        scores.jsonl -> {"kind": "resume", "recorded_at": "...", "record": {...}}
    """

    def __init__(self, base_dir: Path) -> None:
        self.base_dir = base_dir
        self.scores_path = base_dir / "scores.jsonl"
        _ensure_dir(self.base_dir)

    def load(self, kind: Optional[str] = None) -> List[Dict[str, Any]]:
        if kind is not None:
            _check_kind(kind)
        if not self.scores_path.exists():
            return []

        entries: List[Dict[str, Any]] = []
        with self.scores_path.open("r", encoding="utf-8") as f:
            for lineno, line in enumerate(f, start=1):
                line = line.strip()
                if not line:
                    continue
                try:
                    entry = json.loads(line)
                except json.JSONDecodeError as e:
                    logger.warning("skipping unreadable line %d in %s: %s", lineno, self.scores_path, e)
                    continue
                if not isinstance(entry, dict):
                    logger.warning("skipping non-object line %d in %s", lineno, self.scores_path)
                    continue
                if kind is None or entry.get("kind") == kind:
                    entries.append(entry)
        return entries

    def record(self, kind: str, record: Dict[str, Any], *, recorded_at: Optional[datetime] = None) -> None:
        _check_kind(kind)
        entry = {
            "kind": kind,
            "recorded_at": (recorded_at or datetime.now(timezone.utc)).isoformat(),
            "record": record,
        }
        line = json.dumps(entry, sort_keys=True)
        with self.scores_path.open("a", encoding="utf-8") as f:
            f.write(line + "\n")
        _best_effort_lockdown_file_permissions(self.scores_path)

    def progress(self, kind: str) -> ProgressSummary:
        scores = [
            int(e["record"].get("overall_score", 0))
            for e in self.load(kind)
            if isinstance(e.get("record"), dict)
        ]
        if not scores:
            return ProgressSummary(kind=kind, sessions=0, average=0.0, best=0, last=0, improvement=0)
        return ProgressSummary(
            kind=kind,
            sessions=len(scores),
            average=round(sum(scores) / len(scores), 1),
            best=max(scores),
            last=scores[-1],
            improvement=scores[-1] - scores[0],
        )


def default_history_dir() -> Path:
    """
    Default local history dir (CAREERGAUGE_HISTORY_DIR or ./.careergauge).
    """
    return history_dir()

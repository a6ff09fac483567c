"""Persistent top-N table of completed runs."""

from __future__ import annotations

import json
import logging
import uuid
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from pathlib import Path

logger = logging.getLogger(__name__)


def format_time(ms: float) -> str:
    """Render a duration as ``MM:SS.cc``."""
    total = max(0, round(ms))
    minutes = total // 60_000
    seconds = (total % 60_000) // 1000
    centis = (total % 1000) // 10
    return f"{minutes:02d}:{seconds:02d}.{centis:02d}"


@dataclass(frozen=True)
class HighScoreEntry:
    """One completed run."""

    id: str
    score: int
    time_ms: float
    date: str

    def sort_key(self) -> tuple[int, float]:
        # Higher score first, faster run wins a tie.
        return (-self.score, self.time_ms)


class HighScoreTable:
    """Ranked list of the best ``limit`` runs, optionally backed by a JSON file.

    With ``path=None`` the table lives in memory only.
    """

    def __init__(self, path: str | Path | None = None, limit: int = 5) -> None:
        if limit < 1:
            raise ValueError("limit must be at least 1.")
        self.path = Path(path) if path is not None else None
        self.limit = limit
        self.last_id: str | None = None
        self._entries: list[HighScoreEntry] = self._load()

    def entries(self) -> list[HighScoreEntry]:
        return list(self._entries)

    def is_last(self, entry: HighScoreEntry) -> bool:
        """Whether *entry* is the most recently recorded run."""
        return entry.id == self.last_id

    def add(self, score: int, time_ms: float) -> list[HighScoreEntry]:
        """Record a run and return the updated ranking."""
        if score < 0:
            raise ValueError("score must be non-negative.")
        entry = HighScoreEntry(
            id=uuid.uuid4().hex,
            score=int(score),
            time_ms=float(time_ms),
            date=datetime.now(timezone.utc).isoformat(),
        )
        ranked = sorted([*self._entries, entry], key=HighScoreEntry.sort_key)
        self._entries = ranked[: self.limit]
        self.last_id = entry.id
        self._save()
        logger.info(
            "Recorded run: score=%d time=%s (ranked=%s).",
            entry.score, format_time(entry.time_ms), self.is_last_ranked(),
        )
        return self.entries()

    def is_last_ranked(self) -> bool:
        """Whether the most recent run made it into the table."""
        return any(self.is_last(e) for e in self._entries)

    def to_dict(self) -> dict:
        return {
            "entries": [asdict(e) for e in self._entries],
            "last_id": self.last_id,
        }

    def _load(self) -> list[HighScoreEntry]:
        if self.path is None or not self.path.exists():
            return []
        try:
            raw = json.loads(self.path.read_text())
            self.last_id = raw.get("last_id")
            entries = [HighScoreEntry(**item) for item in raw.get("entries", [])]
        except (OSError, ValueError, TypeError, AttributeError):
            logger.warning("Ignoring unreadable high-score file %s.", self.path)
            self.last_id = None
            return []
        return sorted(entries, key=HighScoreEntry.sort_key)[: self.limit]

    def _save(self) -> None:
        if self.path is None:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(self.to_dict(), indent=2))

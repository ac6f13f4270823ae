"""Per-invocation savings measurement.

``TimedExecution`` wraps one jj-saver run: it measures the raw and compact
sizes, builds a ``SavingsRecord`` and hands it to the savings store. Storage
problems are logged and never reach the caller.
"""

import logging
import sqlite3
import time
from dataclasses import dataclass

from . import config
from .errors import PersistenceFailure

_log = logging.getLogger("jj-saver.savings")


@dataclass(frozen=True)
class SavingsRecord:
    command: str
    rewritten_command: str
    raw_size: int
    compact_size: int
    timestamp: float
    strategy: str = "passthrough"
    duration_ms: int = 0

    @property
    def saved(self) -> int:
        return self.raw_size - self.compact_size


def _default_store():
    from .tracker import SavingsTracker  # noqa: PLC0415

    return SavingsTracker()


class TimedExecution:
    """Times one operation and records its savings."""

    def __init__(self, store_factory=None):
        self._store_factory = store_factory or _default_store
        self._started = time.monotonic()

    @classmethod
    def start(cls, store_factory=None) -> "TimedExecution":
        return cls(store_factory)

    def _elapsed_ms(self) -> int:
        return int((time.monotonic() - self._started) * 1000)

    def track(
        self, command: str, rewritten: str, raw: str, compact: str, strategy: str
    ) -> SavingsRecord:
        """Record one compaction; sizes are UTF-8 byte lengths."""
        record = SavingsRecord(
            command=command,
            rewritten_command=rewritten,
            raw_size=len(raw.encode("utf-8")),
            compact_size=len(compact.encode("utf-8")),
            timestamp=time.time(),
            strategy=strategy,
            duration_ms=self._elapsed_ms(),
        )
        self._persist(record)
        return record

    def track_passthrough(self, command: str, rewritten: str) -> SavingsRecord:
        """Record a run where no compaction was applied (zero savings)."""
        record = SavingsRecord(
            command=command,
            rewritten_command=rewritten,
            raw_size=0,
            compact_size=0,
            timestamp=time.time(),
            duration_ms=self._elapsed_ms(),
        )
        self._persist(record)
        return record

    def _persist(self, record: SavingsRecord):
        if not config.get("tracking_enabled"):
            return
        try:
            store = self._store_factory()
            try:
                store.record(record)
            finally:
                store.close()
        except (PersistenceFailure, sqlite3.Error, OSError) as e:
            _log.warning("Could not record savings for %r: %s", record.command, e)

"""SQLite-based savings history with thread safety and auto-pruning.

Several jj-saver processes may append at once; they rely on SQLite's own
file locking (WAL mode, busy timeout) and nothing else.
"""

import contextlib
import logging
import os
import sqlite3
import threading
import time
import uuid

from .errors import PersistenceFailure
from .savings import SavingsRecord

_log = logging.getLogger("jj-saver.tracker")

_SCHEMA = """
    CREATE TABLE IF NOT EXISTS savings (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        timestamp REAL NOT NULL,
        session_id TEXT NOT NULL,
        command TEXT NOT NULL,
        rewritten_command TEXT NOT NULL,
        strategy TEXT NOT NULL,
        raw_size INTEGER NOT NULL,
        compact_size INTEGER NOT NULL,
        duration_ms INTEGER NOT NULL DEFAULT 0
    );
    CREATE TABLE IF NOT EXISTS sessions (
        session_id TEXT PRIMARY KEY,
        first_seen REAL NOT NULL,
        last_seen REAL NOT NULL,
        total_raw INTEGER DEFAULT 0,
        total_compact INTEGER DEFAULT 0,
        command_count INTEGER DEFAULT 0
    );
    CREATE INDEX IF NOT EXISTS idx_savings_session ON savings(session_id);
    CREATE INDEX IF NOT EXISTS idx_savings_timestamp ON savings(timestamp);
"""


def _ratio(raw: int, compact: int) -> float:
    return round((raw - compact) / raw * 100, 1) if raw > 0 else 0.0


class SavingsTracker:
    """Append-only savings history in a local SQLite database.

    Thread-safe via a reentrant lock on all DB operations.
    Automatically prunes old records on startup. Runs less than
    ``session_idle_minutes`` apart share a session unless JJ_SAVER_SESSION
    names one.
    """

    @staticmethod
    def _default_db_dir():
        from jj_saver import data_dir  # noqa: PLC0415

        return data_dir()

    # Class-level overrides (tests, JJ_SAVER_DB_DIR)
    DB_DIR = None
    DB_PATH = None

    _lock = threading.RLock()

    def __init__(self, session_id: str | None = None, prune_days: int | None = None):
        from jj_saver import config  # noqa: PLC0415

        self.prune_days = prune_days if prune_days is not None else config.get("db_prune_days")
        self.session_idle = config.get("session_idle_minutes") * 60
        env_dir = os.environ.get("JJ_SAVER_DB_DIR")
        self.db_dir = self.DB_DIR or env_dir or self._default_db_dir()
        self.db_path = self.DB_PATH or os.path.join(self.db_dir, "savings.db")
        os.makedirs(os.path.dirname(self.db_path) or ".", exist_ok=True)
        self._open_connection()
        self._init_db()
        self._maybe_prune()
        self.session_id = (
            session_id or os.environ.get("JJ_SAVER_SESSION") or self._current_session()
        )

    def _current_session(self) -> str:
        """Resume the latest session unless it has been idle too long."""
        cutoff = time.time() - self.session_idle
        try:
            with self._lock:
                row = self.conn.execute(
                    "SELECT session_id FROM sessions WHERE last_seen >= ? "
                    "ORDER BY last_seen DESC LIMIT 1",
                    (cutoff,),
                ).fetchone()
        except sqlite3.Error:
            _log.debug("Session lookup failed, starting a new session", exc_info=True)
            row = None
        if row:
            return row["session_id"]
        return str(uuid.uuid4())[:12]

    def _connect(self):
        self.conn = sqlite3.connect(self.db_path, timeout=10, check_same_thread=False)
        self.conn.row_factory = sqlite3.Row
        self.conn.execute("PRAGMA journal_mode=WAL")

    def _open_connection(self):
        """Open SQLite connection, handling corrupted DB files."""
        try:
            self._connect()
        except sqlite3.DatabaseError:
            _log.warning("Savings database %s is corrupted, recreating", self.db_path)
            with contextlib.suppress(OSError):
                os.remove(self.db_path)
            self._connect()

    def _init_db(self):
        with self._lock:
            try:
                self.conn.executescript(_SCHEMA)
            except sqlite3.DatabaseError:
                self.conn.close()
                with contextlib.suppress(OSError):
                    os.remove(self.db_path)
                self._connect()
                self.conn.executescript(_SCHEMA)

    def _maybe_prune(self):
        """Drop records older than ``prune_days``."""
        try:
            with self._lock:
                cutoff = time.time() - (self.prune_days * 86400)
                self.conn.execute("DELETE FROM savings WHERE timestamp < ?", (cutoff,))
                self.conn.execute("DELETE FROM sessions WHERE last_seen < ?", (cutoff,))
                self.conn.commit()
        except sqlite3.Error:
            _log.debug("Pruning skipped", exc_info=True)

    def record(self, record: SavingsRecord):
        """Append one record. Raises PersistenceFailure if the write fails."""
        with self._lock:
            try:
                self.conn.execute(
                    "INSERT INTO savings (timestamp, session_id, command, rewritten_command, "
                    "strategy, raw_size, compact_size, duration_ms) "
                    "VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
                    (
                        record.timestamp,
                        self.session_id,
                        record.command[:500],
                        record.rewritten_command[:500],
                        record.strategy,
                        record.raw_size,
                        record.compact_size,
                        record.duration_ms,
                    ),
                )
                self.conn.execute(
                    """
                    INSERT INTO sessions (session_id, first_seen, last_seen,
                                          total_raw, total_compact, command_count)
                    VALUES (?, ?, ?, ?, ?, 1)
                    ON CONFLICT(session_id) DO UPDATE SET
                        last_seen = ?,
                        total_raw = total_raw + ?,
                        total_compact = total_compact + ?,
                        command_count = command_count + 1
                """,
                    (
                        self.session_id,
                        record.timestamp,
                        record.timestamp,
                        record.raw_size,
                        record.compact_size,
                        record.timestamp,
                        record.raw_size,
                        record.compact_size,
                    ),
                )
                self.conn.commit()
            except sqlite3.Error as e:
                with contextlib.suppress(sqlite3.Error):
                    self.conn.rollback()
                raise PersistenceFailure(str(e)) from e

    def get_session_stats(self, session_id: str | None = None) -> dict:
        """Get stats for a session."""
        sid = session_id or self.session_id
        with self._lock:
            row = self.conn.execute(
                "SELECT * FROM sessions WHERE session_id = ?", (sid,)
            ).fetchone()
        if not row:
            return {"commands": 0, "raw": 0, "compact": 0, "saved": 0, "ratio": 0.0}
        raw = row["total_raw"]
        compact = row["total_compact"]
        return {
            "commands": row["command_count"],
            "raw": raw,
            "compact": compact,
            "saved": raw - compact,
            "ratio": _ratio(raw, compact),
        }

    def get_lifetime_stats(self) -> dict:
        """Get aggregated stats across all sessions."""
        with self._lock:
            row = self.conn.execute("""
                SELECT
                    COUNT(*) as session_count,
                    COALESCE(SUM(total_raw), 0) as total_raw,
                    COALESCE(SUM(total_compact), 0) as total_compact,
                    COALESCE(SUM(command_count), 0) as total_commands
                FROM sessions
            """).fetchone()
        raw = row["total_raw"]
        compact = row["total_compact"]
        return {
            "sessions": row["session_count"],
            "commands": row["total_commands"],
            "raw": raw,
            "compact": compact,
            "saved": raw - compact,
            "ratio": _ratio(raw, compact),
        }

    def get_top_strategies(self, limit: int = 5) -> list[dict]:
        """Get the strategies that saved the most."""
        with self._lock:
            rows = self.conn.execute(
                """
                SELECT strategy,
                       COUNT(*) as count,
                       SUM(raw_size - compact_size) as total_saved
                FROM savings
                GROUP BY strategy
                ORDER BY total_saved DESC
                LIMIT ?
            """,
                (limit,),
            ).fetchall()
        return [
            {"strategy": r["strategy"], "count": r["count"], "saved": r["total_saved"]}
            for r in rows
        ]

    def get_history(self, limit: int = 20) -> list[SavingsRecord]:
        """Most recent records first."""
        with self._lock:
            rows = self.conn.execute(
                """
                SELECT command, rewritten_command, raw_size, compact_size,
                       timestamp, strategy, duration_ms
                FROM savings
                ORDER BY timestamp DESC, id DESC
                LIMIT ?
            """,
                (limit,),
            ).fetchall()
        return [
            SavingsRecord(
                command=r["command"],
                rewritten_command=r["rewritten_command"],
                raw_size=r["raw_size"],
                compact_size=r["compact_size"],
                timestamp=r["timestamp"],
                strategy=r["strategy"],
                duration_ms=r["duration_ms"],
            )
            for r in rows
        ]

    def close(self):
        with self._lock, contextlib.suppress(sqlite3.Error):
            self.conn.close()

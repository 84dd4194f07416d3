from __future__ import annotations

import logging
import os
import sqlite3
import threading
from typing import Any, Iterable, Optional

from app.core.config import settings


_LOGGER = logging.getLogger(__name__)

_db_lock = threading.Lock()

TABLE = "wazuh_logs"

# (column, FIM row key)
COLUMNS = (
    ("id", "id"),
    ("timestamp", "timestamp"),
    ("agent_name", "agentName"),
    ("username", "username"),
    ("syscheck_path", "syscheckPath"),
    ("syscheck_event", "syscheckEvent"),
    ("rule_description", "ruleDescription"),
    ("rule_level", "ruleLevel"),
    ("rule_id", "ruleId"),
    ("file_diff", "fileDiff"),
)

_INSERT_SQL = (
    f"INSERT INTO {TABLE} ({', '.join(col for col, _ in COLUMNS)}) "
    f"VALUES ({', '.join('?' for _ in COLUMNS)}) "
    "ON CONFLICT (id) DO NOTHING"
)


def connect_db(db_path: Optional[str] = None) -> sqlite3.Connection:
    path = db_path or settings.events_db_path
    if path != ":memory:":
        os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)
    conn = sqlite3.connect(path, check_same_thread=False)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA journal_mode=WAL;")
    conn.execute("PRAGMA busy_timeout=5000;")
    return conn


def init_db(conn: sqlite3.Connection) -> None:
    with _db_lock:
        conn.execute(
            f"""
            CREATE TABLE IF NOT EXISTS {TABLE} (
                id TEXT PRIMARY KEY,
                timestamp TEXT,
                agent_name TEXT,
                username TEXT,
                syscheck_path TEXT,
                syscheck_event TEXT,
                rule_description TEXT,
                rule_level INTEGER,
                rule_id TEXT,
                file_diff TEXT
            )
            """
        )
        conn.execute(f"CREATE INDEX IF NOT EXISTS idx_{TABLE}_timestamp ON {TABLE} (timestamp)")
        conn.commit()


def _row_values(event: dict[str, Any]) -> tuple[Any, ...]:
    values = []
    for column, key in COLUMNS:
        value = event.get(key)
        if column == "rule_id" and value is not None:
            value = str(value)
        values.append(value)
    return tuple(values)


def save_events(events: Iterable[dict[str, Any]], db_path: Optional[str] = None) -> int:
    """
    Insert FIM rows, skipping ids already stored.

    Returns the number of rows actually inserted. Rows without an id are skipped.
    """
    rows = [_row_values(e) for e in events if isinstance(e, dict) and e.get("id")]
    if not rows:
        return 0

    conn = connect_db(db_path)
    try:
        init_db(conn)
        with _db_lock:
            before = conn.total_changes
            conn.executemany(_INSERT_SQL, rows)
            conn.commit()
            return conn.total_changes - before
    finally:
        conn.close()


def save_events_safely(events: list[dict[str, Any]]) -> None:
    """Background-task wrapper: persistence failures are logged, never raised."""
    try:
        inserted = save_events(events)
        _LOGGER.info("stored fim events inserted=%s received=%s", inserted, len(events))
    except (sqlite3.Error, OSError) as exc:
        _LOGGER.error("storing fim events failed: %s", exc)


def fetch_history(limit: int = 100, db_path: Optional[str] = None) -> list[dict[str, Any]]:
    conn = connect_db(db_path)
    try:
        init_db(conn)
        cursor = conn.execute(
            f"SELECT * FROM {TABLE} ORDER BY timestamp DESC LIMIT ?",
            (max(1, int(limit)),),
        )
        return [dict(row) for row in cursor.fetchall()]
    finally:
        conn.close()

# spike_engine/io/chat_log.py
"""
Chat log loading.

Reads recorded chat streams for replay. Two layouts are accepted:

- ``.json``:  a JSON array of objects
- ``.jsonl``: one JSON object per line (malformed lines are skipped)

Each record needs a message and a timestamp. Field names default to
``msg`` / ``ts`` with ``message``/``text`` and ``timestamp`` as fallbacks.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Optional

logger = logging.getLogger(__name__)

MESSAGE_FIELDS = ("msg", "message", "text")
TIMESTAMP_FIELDS = ("ts", "timestamp", "time")


@dataclass(frozen=True)
class ChatRecord:
    msg: str
    ts: datetime
    extra: Dict[str, Any] = field(default_factory=dict)


def parse_timestamp(val: Any) -> Optional[datetime]:
    """
    Parse various timestamp formats to UTC datetime.

    Accepts:
    - float/int epoch seconds
    - numeric strings (e.g., "1723558387.598")
    - ISO-8601 strings (with or without Z)

    Returns:
        Timezone-aware UTC datetime or None on failure
    """
    if val is None or isinstance(val, bool):
        return None

    if isinstance(val, datetime):
        return val.replace(tzinfo=timezone.utc) if val.tzinfo is None else val.astimezone(timezone.utc)

    if isinstance(val, (int, float)):
        try:
            return datetime.fromtimestamp(float(val), tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None

    s = str(val).strip()
    if not s:
        return None

    if s.replace(".", "", 1).isdigit():
        try:
            return datetime.fromtimestamp(float(s), tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None

    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    try:
        dt = datetime.fromisoformat(s)
    except ValueError:
        return None

    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def stream_jsonl(path: Path) -> Iterator[Dict[str, Any]]:
    """Stream a JSONL file line by line, skipping malformed lines."""
    bad = 0
    with path.open("r", encoding="utf-8") as f:
        for lineno, line in enumerate(f, start=1):
            line = line.strip()
            if not line:
                continue
            try:
                row = json.loads(line)
            except json.JSONDecodeError:
                bad += 1
                logger.debug("skipping malformed line %d in %s", lineno, path)
                continue
            if isinstance(row, dict):
                yield row
    if bad:
        logger.warning("skipped %d malformed lines in %s", bad, path)


def _first(row: Dict[str, Any], names: Iterable[str]) -> Any:
    for name in names:
        if row.get(name) is not None:
            return row[name]
    return None


def to_records(rows: Iterable[Dict[str, Any]]) -> List[ChatRecord]:
    """Convert raw rows to ``ChatRecord``s, dropping rows without a usable timestamp."""
    records: List[ChatRecord] = []
    dropped = 0
    for row in rows:
        ts = parse_timestamp(_first(row, TIMESTAMP_FIELDS))
        msg = _first(row, MESSAGE_FIELDS)
        if ts is None or msg is None:
            dropped += 1
            continue
        extra = {k: v for k, v in row.items() if k not in MESSAGE_FIELDS and k not in TIMESTAMP_FIELDS}
        records.append(ChatRecord(msg=str(msg), ts=ts, extra=extra))
    if dropped:
        logger.warning("dropped %d chat rows without message or timestamp", dropped)
    return records


def load_chats(path: Path) -> List[ChatRecord]:
    """
    Load a chat log from ``path`` (.json array or .jsonl).

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If a .json file does not hold an array of objects
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"chat log not found: {path}")

    if path.suffix.lower() == ".jsonl":
        rows: Iterable[Dict[str, Any]] = stream_jsonl(path)
    else:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, list):
            raise ValueError(f"{path} must contain a JSON array of chat objects")
        rows = [row for row in data if isinstance(row, dict)]

    records = to_records(rows)
    logger.info("loaded %d chats from %s", len(records), path)
    return records


__all__ = [
    'MESSAGE_FIELDS',
    'TIMESTAMP_FIELDS',
    'ChatRecord',
    'parse_timestamp',
    'stream_jsonl',
    'to_records',
    'load_chats',
]

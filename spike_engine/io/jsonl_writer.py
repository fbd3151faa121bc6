# spike_engine/io/jsonl_writer.py
"""
Append-only JSONL writer for detection results.

Each record is written as one line and flushed immediately so a crashed
replay still leaves every burst found so far on disk.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Iterable

logger = logging.getLogger(__name__)


def append_jsonl(path: Path, record: Dict[str, Any]) -> None:
    """
    Append one record to a JSONL file.

    Raises:
        OSError: Re-raised after logging for caller to handle
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("a", encoding="utf-8") as f:
            f.write(json.dumps(record, default=str, ensure_ascii=False) + "\n")
            f.flush()
            os.fsync(f.fileno())
    except OSError as e:
        logger.error(f"Failed to write to {path}: {e}", extra={
            "path": str(path),
            "error": str(e),
            "record_keys": list(record.keys()),
        })
        raise


def write_jsonl(path: Path, records: Iterable[Dict[str, Any]]) -> int:
    """Append several records; return how many were written."""
    n = 0
    for record in records:
        append_jsonl(path, record)
        n += 1
    return n


__all__ = [
    'append_jsonl',
    'write_jsonl',
]

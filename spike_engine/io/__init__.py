# io module
"""Loading recorded chat streams and writing detection results."""

from spike_engine.io.chat_log import (
    MESSAGE_FIELDS,
    TIMESTAMP_FIELDS,
    ChatRecord,
    parse_timestamp,
    stream_jsonl,
    to_records,
    load_chats,
)
from spike_engine.io.jsonl_writer import (
    append_jsonl,
    write_jsonl,
)

__all__ = [
    # Chat logs
    'MESSAGE_FIELDS',
    'TIMESTAMP_FIELDS',
    'ChatRecord',
    'parse_timestamp',
    'stream_jsonl',
    'to_records',
    'load_chats',
    # Results
    'append_jsonl',
    'write_jsonl',
]

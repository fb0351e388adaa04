"""
core/comments.py
----------------
Append-only comment transcript.

Storage keeps the transcript as one text blob, one entry per line:

    [2025-01-10 09:30:00] first comment
    [2025-01-10 11:02:17] second comment

Callers only ever see an ordered list of Comment records. Lines that do not
carry the bracketed timestamp (legacy data, hand edits, multi-line comment
bodies) are passed through with timestamp=None rather than dropped.
"""

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Optional

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
SEPARATOR = "\n"

_ENTRY = re.compile(r"^\[(\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2})\] ?(.*)$")


@dataclass(frozen=True)
class Comment:
    timestamp: Optional[datetime]
    text: str

    @property
    def parsed(self) -> bool:
        return self.timestamp is not None


def format_entry(text: str, now: datetime) -> str:
    if now.tzinfo is not None:
        now = now.astimezone(timezone.utc)
    return f"[{now.strftime(TIMESTAMP_FORMAT)}] {text}"


def append_entry(log: Optional[str], text: str, now: datetime) -> str:
    entry = format_entry(text, now)
    if not log:
        return entry
    return log + SEPARATOR + entry


def parse_line(line: str) -> Comment:
    match = _ENTRY.match(line)
    if match is None:
        return Comment(timestamp=None, text=line)
    try:
        stamp = datetime.strptime(match.group(1), TIMESTAMP_FORMAT)
    except ValueError:
        # shaped like a timestamp but not a real date, e.g. month 13
        return Comment(timestamp=None, text=line)
    return Comment(timestamp=stamp.replace(tzinfo=timezone.utc), text=match.group(2))


def parse_log(log: Optional[str]) -> List[Comment]:
    if not log:
        return []
    return [parse_line(line) for line in log.split(SEPARATOR)]

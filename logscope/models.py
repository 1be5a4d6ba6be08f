"""Normalized log record dataclasses — every line shape maps to this schema."""

from dataclasses import dataclass, fields
from datetime import datetime
from typing import Any, Union

# Heuristic priority order, highest severity first
LEVELS = ("FATAL", "ERROR", "WARN", "INFO", "DEBUG", "TRACE")

JsonValue = Union[None, bool, int, float, str, list, dict]
JsonObject = dict[str, JsonValue]

# Candidate keys, first present wins
TIMESTAMP_KEYS = ("timestamp", "@timestamp", "time", "ts")
SOURCE_KEYS = ("source", "logger", "module", "service")
THREAD_KEYS = ("thread", "process", "correlationId")
EMBEDDED_LEVEL_KEYS = ("level", "severity", "lvl")


@dataclass(frozen=True)
class LogRecord:
    id: str
    message: str
    raw_line: str
    line_number: int

    timestamp: datetime | None = None
    level: str | None = None
    source: str | None = None
    thread: str | None = None
    metadata: JsonObject | None = None


@dataclass(frozen=True)
class ParsedLog:
    entries: tuple[LogRecord, ...]
    total_lines: int
    filename: str
    detected_format: str


def record_id(line_number: int) -> str:
    return f"line-{line_number}"


def pick(obj: JsonObject, keys) -> JsonValue:
    """Return the value of the first key in *keys* that is present and not null."""
    for key in keys:
        value = obj.get(key)
        if value is not None:
            return value
    return None


def pick_str(obj: JsonObject, keys) -> str | None:
    """Like pick(), but only a string result counts."""
    value = pick(obj, keys)
    return value if isinstance(value, str) else None


def record_to_dict(record: LogRecord) -> dict[str, Any]:
    """Convert a LogRecord to a JSON-ready dict, dropping None values."""
    # Shallow: metadata may nest past the recursion limit of asdict()
    data = {
        f.name: getattr(record, f.name) for f in fields(record)
        if getattr(record, f.name) is not None
    }
    if record.timestamp is not None:
        data["timestamp"] = record.timestamp.isoformat()
    return data

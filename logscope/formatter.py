"""Output formatters — text, raw, JSON (NDJSON), colorized (ANSI)."""

import json
from typing import Callable

from logscope.models import LogRecord, record_to_dict

# ANSI color codes
COLORS = {
    "TRACE": "\033[90m",   # grey
    "DEBUG": "\033[36m",   # cyan
    "INFO": "\033[32m",    # green
    "WARN": "\033[33m",    # yellow
    "ERROR": "\033[31m",   # red
    "FATAL": "\033[35m",   # magenta
}
RESET = "\033[0m"

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def _columns(record: LogRecord, level: str) -> str:
    parts = [f"{record.line_number:>6}"]
    if record.timestamp is not None:
        parts.append(record.timestamp.strftime(TIMESTAMP_FORMAT))
    parts.append(f"[{level}]")
    if record.source:
        parts.append(f"({record.source})")
    parts.append(record.message)
    return " ".join(parts)


def format_text(record: LogRecord) -> str:
    """Line number, timestamp, level, source and message on one line."""
    return _columns(record, record.level or "-")


def format_raw(record: LogRecord) -> str:
    """Return the original log line."""
    return record.raw_line


def format_json(record: LogRecord) -> str:
    """Return NDJSON — one JSON object per line, compatible with jq."""
    return json.dumps(record_to_dict(record), ensure_ascii=False)


def format_color(record: LogRecord) -> str:
    """Same as format_text, with the level colored by severity."""
    level = record.level or "-"
    color = COLORS.get(level, "")
    return _columns(record, f"{color}{level}{RESET}" if color else level)


def get_formatter(output_format: str = "text", color: bool = False) -> Callable[[LogRecord], str]:
    """Factory that returns the right formatter based on args."""
    if output_format == "json":
        return format_json
    if output_format == "raw":
        return format_raw
    if color:
        return format_color
    return format_text

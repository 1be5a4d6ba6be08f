"""JSON log handling — whole-line objects and objects embedded in free text."""

import json
import logging
from dataclasses import dataclass, replace

from logscope.levels import coerce_level
from logscope.models import (
    EMBEDDED_LEVEL_KEYS,
    SOURCE_KEYS,
    THREAD_KEYS,
    TIMESTAMP_KEYS,
    JsonObject,
    LogRecord,
    pick,
    pick_str,
    record_id,
)
from logscope.summary import DEFAULT_MESSAGE, build_summary, summarize
from logscope.timestamps import parse_timestamp

logger = logging.getLogger(__name__)

JSON_FORMAT = "JSON format"


def _reject_constant(name: str):
    raise ValueError(f"non-standard JSON constant: {name}")


def _load_object(text: str) -> JsonObject | None:
    try:
        data = json.loads(text, parse_constant=_reject_constant)
    except (ValueError, RecursionError) as e:
        logger.debug("JSON decode failed: %s", e)
        return None
    return data if isinstance(data, dict) else None


def parse_json_line(line: str, line_number: int) -> LogRecord | None:
    """Parse a trimmed line that is a whole JSON object. None if it is not."""
    data = _load_object(line)
    if data is None:
        return None

    return LogRecord(
        id=record_id(line_number),
        timestamp=parse_timestamp(pick(data, TIMESTAMP_KEYS)),
        level=coerce_level(data.get("level")),
        message=build_summary(data),
        raw_line=line,
        line_number=line_number,
        source=pick_str(data, SOURCE_KEYS),
        thread=pick_str(data, THREAD_KEYS),
        metadata=data,
    )


@dataclass(frozen=True)
class EmbeddedJson:
    data: JsonObject
    start: int
    end: int  # index of the closing brace


def extract_first_json_object(text: str, start: int = 0) -> EmbeddedJson | None:
    """Find the first balanced {...} at or after *start* and decode it.

    Braces inside string literals (with backslash escapes) do not count
    toward the depth. Returns None when no balanced span exists or when the
    span is not a valid JSON object.
    """
    if not text:
        return None
    begin = text.find("{", start)
    if begin == -1:
        return None

    in_string = False
    escaped = False
    depth = 0
    for i in range(begin, len(text)):
        ch = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue

        if ch == '"':
            in_string = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                data = _load_object(text[begin:i + 1])
                if data is None:
                    return None
                return EmbeddedJson(data, begin, i)
    return None


def enrich_from_embedded_json(record: LogRecord) -> LogRecord:
    """Backfill unset fields of *record* from a JSON object in its message.

    Fields that already have a value are never overwritten. The record is
    returned unchanged if it already has metadata or no object is found.
    """
    if record.metadata is not None:
        return record
    found = extract_first_json_object(record.message)
    if found is None:
        return record

    data = found.data
    changes = {"metadata": data}

    if record.timestamp is None:
        ts = pick(data, TIMESTAMP_KEYS)
        if isinstance(ts, (str, int, float)) and not isinstance(ts, bool):
            changes["timestamp"] = parse_timestamp(ts)
    if record.level is None:
        changes["level"] = coerce_level(pick(data, EMBEDDED_LEVEL_KEYS))
    if record.source is None:
        changes["source"] = pick_str(data, SOURCE_KEYS)
    if record.thread is None:
        changes["thread"] = pick_str(data, THREAD_KEYS)

    message = summarize(data)
    if not message:
        before = record.message[:found.start].strip()
        after = record.message[found.end + 1:].strip()
        message = before or after or DEFAULT_MESSAGE
    changes["message"] = message

    return replace(record, **changes)

"""Parse driver — turns a whole log file's text into a ParsedLog.

Per non-blank line:
  1. Starts with '{' -> whole-line JSON object
  2. Line-shape registry, first match wins
  3. Plain text fallback
then any JSON object embedded in the message backfills unset fields.

detected_format is file-global: it names the strategy that classified the
most recent line, so a file with mixed shapes reports only the last one.
"""

import logging

from logscope.json_parser import JSON_FORMAT, enrich_from_embedded_json, parse_json_line
from logscope.levels import detect_level
from logscope.models import LogRecord, ParsedLog, record_id
from logscope.patterns import LINE_PATTERNS, PatternMatch, match_line
from logscope.timestamps import parse_timestamp

logger = logging.getLogger(__name__)

PLAIN_TEXT = "Plain text"
UNKNOWN_FORMAT = "Unknown"


def _record_from_match(match: PatternMatch, line: str, line_number: int) -> LogRecord:
    fields = match.fields
    level = fields.get("level")
    return LogRecord(
        id=record_id(line_number),
        timestamp=parse_timestamp(fields["timestamp"]) if "timestamp" in fields else None,
        level=level.upper() if level else detect_level(line),
        message=fields.get("message") or line,
        raw_line=line,
        line_number=line_number,
        source=fields.get("source"),
        thread=fields.get("thread"),
    )


def _plain_record(line: str, line_number: int) -> LogRecord:
    return LogRecord(
        id=record_id(line_number),
        level=detect_level(line),
        message=line,
        raw_line=line,
        line_number=line_number,
    )


def classify_line(line: str, line_number: int, patterns=LINE_PATTERNS) -> tuple[LogRecord, str]:
    """Build the record for one trimmed, non-blank line.

    Returns (record, format name of the strategy that produced it).
    """
    record = None
    fmt = PLAIN_TEXT

    if line.startswith("{"):
        record = parse_json_line(line, line_number)
        if record is not None:
            fmt = JSON_FORMAT

    if record is None:
        match = match_line(line, patterns)
        if match is not None:
            record = _record_from_match(match, line, line_number)
            fmt = match.name

    if record is None:
        record = _plain_record(line, line_number)

    return enrich_from_embedded_json(record), fmt


def parse_log_file(content: str, filename: str, patterns=LINE_PATTERNS) -> ParsedLog:
    """Parse the full text of one log file. Never raises on malformed lines."""
    lines = content.split("\n")
    entries = []
    detected_format = UNKNOWN_FORMAT

    for index, raw in enumerate(lines):
        line = raw.strip()
        if not line:
            continue
        record, detected_format = classify_line(line, index + 1, patterns)
        entries.append(record)

    logger.info(
        "Parsed %s: %d records from %d lines (%s)",
        filename, len(entries), len(lines), detected_format,
    )
    return ParsedLog(
        entries=tuple(entries),
        total_lines=len(lines),
        filename=filename,
        detected_format=detected_format,
    )

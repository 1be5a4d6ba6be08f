"""Line-shape registry — ordered structural matchers for non-JSON log lines.

Evaluation is first-match-wins in declaration order:
  1. ISO with level      2023-12-01T10:30:45.123Z [INFO] Message
  2. Standard format     2023-12-01 10:30:45 INFO Message
  3. Syslog format       Dec 01 10:30:45 hostname program[pid]: message
  4. Apache access       IP - - [timestamp] "request" status size ["ref"] ["agent"]
  5. Simple timestamp    [10:30:45] Message

Each pattern uses named groups; the group names are the record fields they
fill (timestamp, level, message, source, thread). Groups with other names
are captured but not mapped.
"""

import re
from dataclasses import dataclass

RECORD_FIELDS = ("timestamp", "level", "message", "source", "thread")


@dataclass(frozen=True)
class PatternMatch:
    name: str
    fields: dict[str, str]


@dataclass(frozen=True)
class LinePattern:
    name: str
    regex: re.Pattern

    def match(self, line: str) -> PatternMatch | None:
        m = self.regex.match(line)
        if not m:
            return None
        fields = {
            k: v for k, v in m.groupdict().items()
            if k in RECORD_FIELDS and v is not None
        }
        return PatternMatch(self.name, fields)


LINE_PATTERNS = (
    LinePattern(
        "ISO with level",
        re.compile(
            r'^(?P<timestamp>\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(?:\.\d{3})?Z?)'
            r'\s*\[?(?P<level>[A-Z]+)\]?'
            r'\s*(?P<message>.*)$',
            re.ASCII,
        ),
    ),
    LinePattern(
        "Standard format",
        re.compile(
            r'^(?P<timestamp>\d{4}-\d{2}-\d{2}\s+\d{2}:\d{2}:\d{2}(?:\.\d{3})?)'
            r'\s+(?P<level>[A-Z]+)'
            r'\s+(?P<message>.*)$',
            re.ASCII,
        ),
    ),
    LinePattern(
        "Syslog format",
        re.compile(
            r'^(?P<timestamp>[A-Z][a-z]{2}\s+\d{1,2}\s+\d{2}:\d{2}:\d{2})'
            r'\s+(?P<source>\w+)'
            r'\s+(?P<thread>[^:]+):'
            r'\s*(?P<message>.*)$',
            re.ASCII,
        ),
    ),
    # "level" here is the HTTP status code, not a severity
    LinePattern(
        "Apache access",
        re.compile(
            r'^(?P<source>\S+)\s+\S+\s+\S+'
            r'\s+\[(?P<timestamp>[^\]]+)\]'
            r'\s+"(?P<message>[^"]*)"?'
            r'\s+(?P<level>\d+)'
            r'\s+(?P<size>\S+)'
            r'(?:\s+"(?P<referrer>[^"]*)")?'
            r'(?:\s+"(?P<agent>[^"]*)")?',
            re.ASCII,
        ),
    ),
    LinePattern(
        "Simple timestamp",
        re.compile(
            r'^\[(?P<timestamp>\d{2}:\d{2}:\d{2}(?:\.\d{3})?)\]'
            r'\s*(?P<message>.*)$',
            re.ASCII,
        ),
    ),
)


def match_line(line: str, patterns=LINE_PATTERNS) -> PatternMatch | None:
    """Return the first pattern match for *line*, or None."""
    for pattern in patterns:
        result = pattern.match(line)
        if result:
            return result
    return None

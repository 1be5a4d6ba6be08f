"""Statistics — level counts and the distinct metadata values used as filters."""

import json
from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable

from logscope.models import LEVELS, LogRecord


@dataclass
class LogStats:
    total_entries: int = 0
    level_counts: dict[str, int] = field(default_factory=dict)
    modules: list[str] = field(default_factory=list)
    features: list[str] = field(default_factory=list)
    users: list[str] = field(default_factory=list)


def _distinct(records: list[LogRecord], key: str) -> list[str]:
    values = set()
    for record in records:
        if record.metadata:
            value = record.metadata.get(key)
            if value and isinstance(value, str):
                values.add(value)
    return sorted(values)


def compute_stats(records: Iterable[LogRecord]) -> LogStats:
    """Consume a record stream and produce aggregated statistics.

    Only the six known levels are counted; Apache status codes and other
    captured tokens are ignored.
    """
    records = list(records)
    counter = Counter(r.level for r in records if r.level in LEVELS)

    return LogStats(
        total_entries=len(records),
        level_counts={level: counter.get(level, 0) for level in LEVELS},
        modules=_distinct(records, "module"),
        features=_distinct(records, "feature"),
        users=_distinct(records, "user.login"),
    )


def format_stats_text(stats: LogStats, detected_format: str | None = None) -> str:
    """Human-readable stats summary."""
    lines = []
    if detected_format:
        lines.append(f"Detected format: {detected_format}")
    lines.append(f"Total entries: {stats.total_entries}")
    lines.append("")

    lines.append("Level counts:")
    for level, count in stats.level_counts.items():
        lines.append(f"  {level:8s} {count}")

    for title, values in (("Modules", stats.modules), ("Features", stats.features), ("Users", stats.users)):
        if values:
            lines.append("")
            lines.append(f"{title} ({len(values)}):")
            for value in values:
                lines.append(f"  - {value}")

    return "\n".join(lines)


def format_stats_json(stats: LogStats, detected_format: str | None = None) -> str:
    """JSON stats output."""
    return json.dumps({
        "detected_format": detected_format,
        "total_entries": stats.total_entries,
        "level_counts": stats.level_counts,
        "modules": stats.modules,
        "features": stats.features,
        "users": stats.users,
    }, indent=2)

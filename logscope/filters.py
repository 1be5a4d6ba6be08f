"""Filter predicates for parsed records — level, search, metadata, date range."""

from datetime import date, datetime, time
from typing import Callable, Iterable

from logscope.models import LogRecord

# Metadata keys exposed as CLI filters: attribute name -> metadata key
METADATA_FILTERS = {
    "module": "module",
    "feature": "feature",
    "user": "user.login",
}


def filter_by_level(record: LogRecord, level: str) -> bool:
    """True if record level matches exactly (level argument is case-insensitive)."""
    return record.level == level.upper()


def filter_by_search(record: LogRecord, keyword: str) -> bool:
    """True if keyword appears in the message (case-insensitive)."""
    return keyword.lower() in record.message.lower()


def filter_by_metadata(record: LogRecord, key: str, value: str) -> bool:
    """True if the record's metadata has *key* equal to *value*."""
    if record.metadata is None:
        return False
    return record.metadata.get(key) == value


def _comparable(ts: datetime, bound: datetime) -> datetime:
    # Aware record timestamps are compared in local wall-clock time
    if ts.tzinfo is not None and bound.tzinfo is None:
        return ts.astimezone().replace(tzinfo=None)
    return ts


def filter_by_date_from(record: LogRecord, start: date) -> bool:
    """True if the record is on or after the start of *start*.

    Records without a timestamp always pass.
    """
    if record.timestamp is None:
        return True
    bound = datetime.combine(start, time.min)
    return _comparable(record.timestamp, bound) >= bound


def filter_by_date_to(record: LogRecord, end: date) -> bool:
    """True if the record is on or before the end of *end* (inclusive)."""
    if record.timestamp is None:
        return True
    bound = datetime.combine(end, time.max)
    return _comparable(record.timestamp, bound) <= bound


def build_filter_chain(args) -> Callable[[LogRecord], bool]:
    """Combine all active filters from parsed args into a single callable.

    Returns a function that ANDs all active predicates together.
    """
    predicates = []

    if getattr(args, "level", None):
        level = args.level
        predicates.append(lambda r, l=level: filter_by_level(r, l))

    if getattr(args, "search", None):
        keyword = args.search
        predicates.append(lambda r, k=keyword: filter_by_search(r, k))

    for attr, key in METADATA_FILTERS.items():
        value = getattr(args, attr, None)
        if value:
            predicates.append(lambda r, k=key, v=value: filter_by_metadata(r, k, v))

    if getattr(args, "date_from", None):
        start = args.date_from
        predicates.append(lambda r, d=start: filter_by_date_from(r, d))

    if getattr(args, "date_to", None):
        end = args.date_to
        predicates.append(lambda r, d=end: filter_by_date_to(r, d))

    if not predicates:
        return lambda r: True

    def combined(record: LogRecord) -> bool:
        return all(p(record) for p in predicates)

    return combined


def apply_filters(records: Iterable[LogRecord], args) -> tuple[LogRecord, ...]:
    """Return the records that pass every active filter. The input is untouched."""
    keep = build_filter_chain(args)
    return tuple(r for r in records if keep(r))

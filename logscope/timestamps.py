"""Timestamp normalizer — turns a format-specific token into a datetime.

Interpretations are tried in order until one yields a valid instant:
  1. ISO 8601 / "YYYY-MM-DD HH:MM:SS[.mmm]"
  2. Syslog "Mon DD HH:MM:SS" with the current year prepended
  3. Apache "DD/Mon/YYYY:HH:MM:SS [+zone]" reordered to "YYYY-Mon-DD HH:MM:SS"
  4. Bare "HH:MM:SS[.mmm]" with today's date prepended
"""

import logging
import re
from datetime import date, datetime, timezone

logger = logging.getLogger(__name__)

_APACHE_DATE_RE = re.compile(r"(\d{2})/([A-Z][a-z]{2})/(\d{4}):", re.ASCII)
_BARE_TIME_RE = re.compile(r"^\d{2}:\d{2}:\d{2}", re.ASCII)


def _from_iso(ts: str) -> datetime:
    # fromisoformat only understands a trailing "Z" on 3.11+
    if ts.endswith("Z"):
        ts = ts[:-1] + "+00:00"
    return datetime.fromisoformat(ts)


def _from_syslog(ts: str) -> datetime:
    year = datetime.now().year
    return datetime.strptime(f"{year} {ts}", "%Y %b %d %H:%M:%S")


def _from_apache(ts: str) -> datetime:
    reordered = _APACHE_DATE_RE.sub(r"\3-\2-\1 ", ts, count=1)
    try:
        return datetime.strptime(reordered, "%Y-%b-%d %H:%M:%S %z")
    except ValueError:
        return datetime.strptime(reordered, "%Y-%b-%d %H:%M:%S")


def _from_bare_time(ts: str) -> datetime:
    if not _BARE_TIME_RE.match(ts):
        raise ValueError(f"not a bare time: {ts!r}")
    return datetime.fromisoformat(f"{date.today().isoformat()}T{ts}")


_INTERPRETERS = (_from_iso, _from_syslog, _from_apache, _from_bare_time)


def parse_timestamp(value) -> datetime | None:
    """Interpret *value* as an instant, or return None. Never raises.

    Numbers (not bools) are epoch milliseconds, as JSON loggers emit them.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            logger.debug("Epoch timestamp out of range: %r", value)
            return None
    if not isinstance(value, str):
        return None

    ts = value.strip()
    if not ts:
        return None

    for interpret in _INTERPRETERS:
        try:
            return interpret(ts)
        except (ValueError, OverflowError):
            continue

    logger.debug("Unrecognized timestamp: %r", ts)
    return None

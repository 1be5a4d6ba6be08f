"""Display-message synthesis for JSON log objects.

A summary is a "head" of module • feature • type • status picks, followed by
the message text:  "auth-service • login — User logged in".
"""

import json

from logscope.models import JsonObject, JsonValue, pick

MODULE_KEYS = ("module", "service", "source", "logger")
FEATURE_KEYS = ("feature", "action", "event", "endpoint")
TYPE_KEYS = ("type", "category")
STATUS_KEYS = ("status", "statusCode", "code")
MESSAGE_KEYS = ("message", "msg", "text")

HEAD_SEPARATOR = " • "
MESSAGE_SEPARATOR = " — "
DEFAULT_MESSAGE = "Log entry"


def _shown(value: JsonValue) -> bool:
    # Containers always show, scalars only when truthy (0, "" and false are blank)
    if isinstance(value, (list, dict)):
        return True
    return bool(value)


def as_text(value: JsonValue) -> str:
    """Render a JSON value the way it reads in a log viewer."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, dict)):
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False)
    return str(value)


def summarize(obj: JsonObject) -> str | None:
    """Return "<head> — <message>", just the head, just the message, or None."""
    module = pick(obj, MODULE_KEYS)
    feature = pick(obj, FEATURE_KEYS)
    kind = pick(obj, TYPE_KEYS)
    status = pick(obj, STATUS_KEYS)
    msg = pick(obj, MESSAGE_KEYS)

    text = as_text(msg) if _shown(msg) else ""

    parts = []
    if _shown(module):
        parts.append(as_text(module))
    if _shown(feature):
        parts.append(as_text(feature))
    if _shown(kind) and (not text or as_text(kind).lower() != text.lower()):
        parts.append(as_text(kind))
    if _shown(status):
        parts.append(as_text(status))

    head = HEAD_SEPARATOR.join(p for p in parts if p)
    if head and text:
        return f"{head}{MESSAGE_SEPARATOR}{text}"
    return head or text or None


def build_summary(obj: JsonObject) -> str:
    """summarize(), falling back to the generic "Log entry" label."""
    return summarize(obj) or DEFAULT_MESSAGE

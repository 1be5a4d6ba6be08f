"""Export of a record subset back to plain log text."""

import logging
import os
import tempfile
from typing import Iterable

from logscope.models import LogRecord

logger = logging.getLogger(__name__)


def export_text(records: Iterable[LogRecord]) -> str:
    """Join the original lines of *records* with newlines."""
    return "\n".join(r.raw_line for r in records)


def export_filename(filename: str) -> str:
    return f"filtered-{os.path.basename(filename)}"


def write_export(records: Iterable[LogRecord], filename: str, output_dir: str) -> str:
    """Write the exported text to output_dir atomically. Returns the target path."""
    os.makedirs(output_dir, exist_ok=True)
    target = os.path.join(output_dir, export_filename(filename))
    tmp_fd, tmp_path = tempfile.mkstemp(dir=output_dir, suffix=".tmp")
    try:
        with os.fdopen(tmp_fd, "w", encoding="utf-8") as f:
            f.write(export_text(records))
        os.replace(tmp_path, target)
    except Exception:
        if os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise

    logger.info("Exported to %s", target)
    return target

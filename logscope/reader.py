"""Log file acquisition — loads one text file for the parser."""

import logging
import os

logger = logging.getLogger(__name__)

TEXT_EXTENSIONS = (".log", ".txt")


class LogFileError(Exception):
    """The file is missing, unreadable, or not text."""


def read_log_file(path: str) -> tuple[str, str]:
    """Return (content, filename) for a UTF-8 text file.

    Raises LogFileError if the file doesn't exist or isn't text.
    """
    if not os.path.isfile(path):
        raise LogFileError(f"File not found: {path}")

    try:
        with open(path, "rb") as f:
            data = f.read()
    except OSError as e:
        raise LogFileError(f"Failed to read {path}: {e}") from e

    if b"\x00" in data and not path.endswith(TEXT_EXTENSIONS):
        raise LogFileError(f"Not a text or log file: {path}")

    try:
        content = data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise LogFileError(f"Not a UTF-8 text file: {path}") from e

    filename = os.path.basename(path)
    logger.debug("Loaded %s (%d bytes)", filename, len(data))
    return content, filename

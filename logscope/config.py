"""Configuration — defaults, optional YAML file, then environment variables."""

import logging
import os
from dataclasses import dataclass, fields, replace

import yaml

logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ("text", "raw", "json")


@dataclass(frozen=True)
class Config:
    log_level: str = "WARNING"
    output: str = "text"
    color: bool = False
    export_dir: str = "."


def _as_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("1", "true", "yes", "on")


def load_yaml(path: str) -> dict:
    """Load the ``logscope`` section (or the whole document) of a YAML file.

    A missing file yields an empty dict; invalid YAML is logged and ignored.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        logger.warning("Config file not found: %s", path)
        return {}
    except yaml.YAMLError as e:
        logger.warning("Invalid YAML in %s, using defaults: %s", path, e)
        return {}

    if not isinstance(data, dict):
        return {}
    section = data.get("logscope", data)
    return section if isinstance(section, dict) else {}


def load_config(path: str | None = None) -> Config:
    """Build Config from defaults, a YAML file, and LOGSCOPE_* env vars.

    The file path comes from *path*, else the LOGSCOPE_CONFIG variable.
    """
    config = Config()
    known = {f.name for f in fields(Config)}

    path = path or os.environ.get("LOGSCOPE_CONFIG")
    if path:
        overrides = {k: v for k, v in load_yaml(path).items() if k in known}
        config = replace(config, **overrides)

    env = {}
    for name in known:
        value = os.environ.get(f"LOGSCOPE_{name.upper()}")
        if value is not None:
            env[name] = value
    config = replace(config, **env)

    output = str(config.output).lower()
    if output not in OUTPUT_FORMATS:
        logger.warning("Unknown output format %r, using text", config.output)
        output = "text"

    return replace(
        config,
        log_level=str(config.log_level).upper(),
        output=output,
        color=_as_bool(config.color),
        export_dir=str(config.export_dir),
    )

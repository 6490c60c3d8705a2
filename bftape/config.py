"""
Runtime configuration.

Values are layered: dataclass defaults, then an optional YAML file, then
BF_* environment variables (a local .env file is loaded first without
overriding variables already set). Command-line flags are applied on top by
the CLI.

Example config.yaml:

    tape_size: 32
    step_limit: 100000
    prompt: "bf> "
"""

import os
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Mapping, Optional

import yaml
from dotenv import find_dotenv, load_dotenv

from .errors import UsageError
from .tape import DEFAULT_TAPE_SIZE, MAX_TAPE_SIZE

ENV_PREFIX = "BF_"


@dataclass
class Config:
    tape_size: int = DEFAULT_TAPE_SIZE
    step_limit: Optional[int] = None
    debug: bool = False
    prompt: str = ">>> "
    log_level: str = "WARNING"


def parse_tape_size(value: Any) -> int:
    """Validate a tape size; raises UsageError unless it is a positive integer."""
    try:
        size = int(value)
    except (TypeError, ValueError):
        raise UsageError(f"Tape size must be a positive integer, got {value!r}") from None
    if isinstance(value, float) and value != size:
        raise UsageError(f"Tape size must be a positive integer, got {value!r}")
    if size < 1:
        raise UsageError(f"Tape size must be a positive integer, got {value!r}")
    if size > MAX_TAPE_SIZE:
        raise UsageError(f"Tape size must be at most {MAX_TAPE_SIZE}, got {value!r}")
    return size


def parse_step_limit(value: Any) -> Optional[int]:
    if value is None or (isinstance(value, str) and value.strip().lower() in ("", "none", "0")):
        return None
    try:
        limit = int(value)
    except (TypeError, ValueError):
        raise UsageError(f"Step limit must be an integer, got {value!r}") from None
    if limit < 0:
        raise UsageError(f"Step limit must not be negative, got {value!r}")
    return limit or None


def parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in ("1", "true", "yes", "on"):
        return True
    if text in ("0", "false", "no", "off", ""):
        return False
    raise UsageError(f"Expected a boolean, got {value!r}")


_PARSERS = {
    "tape_size": parse_tape_size,
    "step_limit": parse_step_limit,
    "debug": parse_bool,
    "prompt": str,
    "log_level": lambda v: str(v).upper(),
}


def _apply(config: Config, values: Mapping[str, Any], origin: str) -> Config:
    known = {f.name for f in fields(Config)}
    updates: Dict[str, Any] = {}
    for key, value in values.items():
        if key not in known:
            raise UsageError(f"Unknown configuration key '{key}' in {origin}")
        updates[key] = _PARSERS[key](value)
    return replace(config, **updates)


def load_yaml_config(path: str) -> Dict[str, Any]:
    """Read a YAML mapping of config keys; an empty file yields {}."""
    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise UsageError(f"Cannot read config file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise UsageError(f"Invalid YAML in {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise UsageError(f"Config file {path} must contain a mapping")
    return data


def env_overrides(environ: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
    environ = os.environ if environ is None else environ
    values = {}
    for f in fields(Config):
        key = ENV_PREFIX + f.name.upper()
        if key in environ:
            values[f.name] = environ[key]
    return values


def load_config(path: Optional[str] = None, environ: Optional[Mapping[str, str]] = None,
                use_dotenv: bool = True) -> Config:
    """Build a Config from defaults, an optional YAML file and the environment."""
    if use_dotenv and environ is None:
        load_dotenv(find_dotenv(usecwd=True), override=False)
    config = Config()
    if path:
        config = _apply(config, load_yaml_config(path), path)
    return _apply(config, env_overrides(environ), "environment")

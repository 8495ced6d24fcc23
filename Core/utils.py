"""
Shared utilities for logging setup and string-option handling.
"""

from typing import Dict, Iterable, Mapping, Optional, Sequence
import logging
import sys
import time
from pathlib import Path

Options = Mapping[str, str]

_TRUE_VALUES = {"true", "1", "yes", "on"}
_FALSE_VALUES = {"false", "0", "no", "off"}


def setup_logging(log_type: str, problem_name: str, log_dir: Optional[str] = None,
                  level: int = logging.INFO) -> logging.Logger:
    """Sets up the logger used by a run; messages go to stderr and optionally to `log_dir`."""
    logger = logging.getLogger(f"{log_type}_{problem_name}_logger")
    logger.setLevel(level)
    # Has its own handlers; module loggers go through the root logger.
    logger.propagate = False

    # Prevent adding multiple handlers if the logger already exists
    if not logger.handlers:
        session_id = int(time.time())
        formatter = logging.Formatter(f'%(asctime)s - %(levelname)s - [Session: {session_id}]-[Problem: {{problem_name}}] - %(message)s'.format(problem_name=problem_name))

        handlers = [logging.StreamHandler(sys.stderr)]
        if log_dir:
            log_dir_path = Path(log_dir)
            log_dir_path.mkdir(parents=True, exist_ok=True)
            handlers.append(logging.FileHandler(log_dir_path / f"{log_type}_logs.log", mode='a'))  # Append mode

        for handler in handlers:
            handler.setFormatter(formatter)
            logger.addHandler(handler)

    return logger


def parse_key_value_options(pairs: Iterable[str]) -> Dict[str, str]:
    """Parse `key=value` strings into a dictionary; later keys win."""
    options: Dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        key = key.strip()
        if not sep or not key:
            raise ValueError(f"Options must look like key=value, got {pair!r}")
        options[key] = value.strip()
    return options


def option_int(options: Options, key: str, default: int, *, min_value: Optional[int] = None) -> int:
    raw = options.get(key)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"{key} must be an integer: {raw!r}") from exc
    if min_value is not None and value < min_value:
        raise ValueError(f"{key} must be at least {min_value}, got {value}")
    return value


def option_float(options: Options, key: str, default: float) -> float:
    raw = options.get(key)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"{key} must be a number: {raw!r}") from exc


def option_probability(options: Options, key: str, default: float) -> float:
    value = option_float(options, key, default)
    if not 0.0 <= value <= 1.0:
        raise ValueError(f"{key} must lie in [0, 1], got {value}")
    return value


def option_bool(options: Options, key: str, default: bool) -> bool:
    raw = options.get(key)
    if raw is None or raw == "":
        return default
    lowered = raw.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ValueError(f"{key} must be true or false: {raw!r}")


def option_choice(options: Options, key: str, default: str, choices: Sequence[str]) -> str:
    raw = options.get(key) or default
    if raw not in choices:
        raise ValueError(f"{key} must be one of {', '.join(choices)}; got {raw!r}")
    return raw

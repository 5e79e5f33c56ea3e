#!/usr/bin/env python3
"""
Load user settings for tdh.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import tomllib

CONFIG_PATH_ENV = "TDH_CONFIG_PATH"
DATA_PATH_ENV = "TDH_DATA_PATH"
NO_COLOR_ENV = "NO_COLOR"
DATA_FILE_NAME = "todos.json"


@dataclass(frozen=True)
class Settings:
    """
    Effective settings after reading the config file.

    Attributes
    ----------
    data_path : Optional[Path]
        Data file configured in the config file, if any.
    color : bool
        Emit ANSI colors.
    confirm : bool
        Ask before destructive commands.
    """

    data_path: Optional[Path] = None
    color: bool = True
    confirm: bool = True


def _expand(value: str) -> Path:
    return Path(os.path.expandvars(os.path.expanduser(value)))


def get_config_dir() -> Path:
    return Path.home() / ".config" / "tdh"


def get_config_path() -> Path:
    """
    Return the config file path.

    Returns
    -------
    Path
        Config TOML path.

    Examples
    --------
    >>> isinstance(get_config_path(), Path)
    True
    """
    override = os.environ.get(CONFIG_PATH_ENV, "").strip()
    if override:
        return _expand(override)
    return get_config_dir() / "config.toml"


def _parse_bool(raw: Dict[str, Any], key: str, default: bool) -> bool:
    value = raw.get(key, default)
    if isinstance(value, bool):
        return value
    print(f"tdh: ignoring non-boolean config value for {key!r}", file=sys.stderr)
    return default


def load_settings(path: Optional[Path] = None) -> Settings:
    """
    Read settings from disk, falling back to defaults.

    Parameters
    ----------
    path : Optional[Path], optional
        Config file path (defaults to ``get_config_path()``).

    Returns
    -------
    Settings
        Parsed settings; defaults when the file is missing or malformed.
    """
    config_path = path or get_config_path()
    if not config_path.exists():
        return Settings(color=not os.environ.get(NO_COLOR_ENV))
    try:
        parsed = tomllib.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError) as exc:
        print(f"tdh: ignoring unreadable config {config_path}: {exc}", file=sys.stderr)
        return Settings(color=not os.environ.get(NO_COLOR_ENV))

    data_path = None
    raw_path = parsed.get("data_path")
    if isinstance(raw_path, str) and raw_path.strip():
        data_path = _expand(raw_path.strip())
    color = _parse_bool(parsed, "color", True) and not os.environ.get(NO_COLOR_ENV)
    return Settings(
        data_path=data_path,
        color=color,
        confirm=_parse_bool(parsed, "confirm", True),
    )


def get_data_path(settings: Optional[Settings] = None) -> Path:
    """
    Resolve the task data file.

    The ``TDH_DATA_PATH`` environment variable wins over the config file,
    which wins over the default location.
    """
    override = os.environ.get(DATA_PATH_ENV, "").strip()
    if override:
        return _expand(override)
    settings = settings or load_settings()
    if settings.data_path is not None:
        return settings.data_path
    return get_config_dir() / DATA_FILE_NAME

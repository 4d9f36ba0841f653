"""User and project settings for schemer.

There are two settings groups, both defined in :mod:`schemer.models`:
``output`` (the default output format) and ``discovery`` (whether ``$ref``
targets are scanned recursively, and the timeout for remote documents).
:func:`resolve_config` reads them from four layers, highest first:

1. the ``--recursive/--no-recursive`` flag
2. ``SCHEMER_FORMAT`` and ``SCHEMER_RECURSIVE``
3. ``./schemer.json`` in the working directory
4. ``config.json`` in the user config directory (``$XDG_CONFIG_HOME/schemer``)

Every layer is a partial dict. The layers are merged first and the result
is validated once.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from schemer.exceptions import ConfigError
from schemer.models import GlobalConfig

SETTINGS_FILE = "config.json"
PROJECT_FILE = "schemer.json"

ENV_FORMAT = "SCHEMER_FORMAT"
ENV_RECURSIVE = "SCHEMER_RECURSIVE"

_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


def _user_dir(env_var: str, *fallback: str) -> Path:
    root = os.environ.get(env_var)
    path = (Path(root) if root else Path.home().joinpath(*fallback)) / "schemer"
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_config_dir() -> Path:
    """Directory of the user settings file, created if missing."""
    return _user_dir("XDG_CONFIG_HOME", ".config")


def get_data_dir() -> Path:
    """Directory that crash logs are written under, created if missing."""
    return _user_dir("XDG_DATA_HOME", ".local", "share")


def load_global_config() -> GlobalConfig:
    """Read the user settings file, or return defaults when there is none.

    Raises:
        ConfigError: If the file is not valid JSON or holds invalid values.
    """
    path = get_config_dir() / SETTINGS_FILE
    if not path.is_file():
        return GlobalConfig()
    try:
        return GlobalConfig.model_validate_json(path.read_text(encoding="utf-8"))
    except ValidationError as exc:
        raise ConfigError(f"Invalid global config at {path}: {exc}") from exc


def save_global_config(config: GlobalConfig) -> Path:
    """Write *config* to the user settings file and return the file's path.

    The JSON goes to a hidden sibling first and is then moved over the
    settings file, so a concurrent reader sees either the old or the new
    settings.
    """
    path = get_config_dir() / SETTINGS_FILE
    staging = path.with_name(f".{path.name}.tmp")
    try:
        staging.write_text(config.model_dump_json(indent=2) + "\n", encoding="utf-8")
        os.replace(staging, path)
    except OSError:
        staging.unlink(missing_ok=True)
        raise
    return path


def load_project_config() -> Optional[dict[str, Any]]:
    """Read ``./schemer.json``, if present, as a partial settings dict.

    Raises:
        ConfigError: If the file is not a JSON object.
    """
    path = Path.cwd() / PROJECT_FILE
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid project config at {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid project config at {path}: expected a JSON object")
    return data


def env_settings() -> dict[str, Any]:
    """The settings given through ``SCHEMER_*`` environment variables.

    ``SCHEMER_RECURSIVE`` is off for ``0``, ``false``, ``no`` and ``off``
    (any case) and on for every other non-empty value.
    """
    settings: dict[str, Any] = {}
    fmt = os.environ.get(ENV_FORMAT)
    if fmt:
        settings["output"] = {"format": fmt}
    recursive = os.environ.get(ENV_RECURSIVE)
    if recursive:
        settings["discovery"] = {"recursive": recursive.lower() not in _FALSE_VALUES}
    return settings


def _merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def resolve_config(cli_recursive: Optional[bool] = None) -> GlobalConfig:
    """Merge every settings layer into the effective configuration.

    Args:
        cli_recursive: The ``--recursive/--no-recursive`` flag, or ``None``
            when it was not given.

    Raises:
        ConfigError: If a settings file is unreadable, or the project file
            sets a value of the wrong type.
    """
    merged = load_global_config().model_dump(mode="json")
    for layer in (load_project_config() or {}, env_settings()):
        merged = _merge(merged, layer)
    if cli_recursive is not None:
        merged = _merge(merged, {"discovery": {"recursive": cli_recursive}})

    try:
        return GlobalConfig.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError(
            f"Invalid project config at {Path.cwd() / PROJECT_FILE}: {exc}"
        ) from exc

"""Configuration management with XDG paths and atomic writes.

This module handles all persistent state for gas that is not a secret:

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.gas/`` on macOS and Windows. See :func:`get_config_dir` and
  :func:`get_data_dir`.
* **App config** -- A single :class:`~gas.models.AppConfig` JSON file
  holding the account table, path rules, default account, and language.
  Loaded once per invocation with :func:`load_config`, mutated in memory by
  the broker, and written back with :func:`save_config`.
* **Environment** -- :data:`ENV_OVERRIDE`, :data:`ENV_CONFIG`, and
  :data:`ENV_CLIENT_ID` are read here so that the rest of the package never
  touches ``os.environ`` directly.

All file writes use an atomic temp-file-then-rename strategy
(:func:`_atomic_write`) so a crash mid-write never leaves a truncated config.
"""

from __future__ import annotations

import json
import logging
import os
import platform
import tempfile
from pathlib import Path
from typing import Optional

from gas.exceptions import ConfigurationError
from gas.models import AppConfig

logger = logging.getLogger(__name__)

_APP_NAME = "gas"
_CONFIG_FILENAME = "config.json"

ENV_OVERRIDE = "GAS_ACCOUNT_OVERRIDE"
"""Names the account to use, bypassing path rules and the default."""

ENV_CONFIG = "GAS_CONFIG"
"""Alternative path for the config file."""

ENV_CLIENT_ID = "GAS_CLIENT_ID"
"""Replaces the built-in OAuth client identifier."""


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG Base Directory spec (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def _fallback_base_dir() -> Path:
    """Fallback base directory for non-XDG platforms (macOS, Windows)."""
    return Path.home() / f".{_APP_NAME}"


def _xdg_base(env_var: str, default_segments: tuple[str, ...]) -> Path:
    """Resolve an XDG base directory from an env var with fallback segments under $HOME."""
    env_value = os.environ.get(env_var, "")
    if env_value:
        return Path(env_value)
    base = Path.home()
    for seg in default_segments:
        base = base / seg
    return base


def get_config_dir() -> Path:
    """Return the configuration directory, creating it if necessary.

    On Linux/BSD: ``$XDG_CONFIG_HOME/gas/`` (default ``~/.config/gas/``).
    On macOS/Windows: ``~/.gas/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_CONFIG_HOME", (".config",)) / _APP_NAME
    else:
        path = _fallback_base_dir()
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_data_dir() -> Path:
    """Return the data directory (crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/gas/`` (default ``~/.local/share/gas/``).
    On macOS/Windows: ``~/.gas/logs/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_DATA_HOME", (".local", "share")) / _APP_NAME
    else:
        path = _fallback_base_dir() / "logs"
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_config_path() -> Path:
    """Return the config file path, honouring :data:`ENV_CONFIG`."""
    env_path = os.environ.get(ENV_CONFIG, "")
    if env_path:
        return Path(env_path).expanduser()
    return get_config_dir() / _CONFIG_FILENAME


# --- Atomic file writes ---


def _atomic_write(path: Path, data: str) -> None:
    """Write data to file atomically using temp file + rename.

    The temporary file is created in the same directory as *path* so that
    ``os.replace`` is an atomic rename on POSIX systems. On any failure the
    temp file is cleaned up and the original file is left untouched.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd = None
    tmp_path: Optional[str] = None
    try:
        fd = tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        )
        tmp_path = fd.name
        fd.write(data)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None  # prevent double-close below
        os.replace(tmp_path, path)
    except BaseException:
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        raise


# --- App config ---


def load_config(path: Optional[Path] = None) -> AppConfig:
    """Load the account table and path rules.

    Args:
        path: Config file to read. Defaults to :func:`get_config_path`.

    Returns:
        The deserialised :class:`~gas.models.AppConfig`, or an empty one
        if the file does not exist yet.

    Raises:
        ConfigurationError: If the file exists but contains invalid JSON or
            fails validation.
    """
    path = path or get_config_path()
    if not path.is_file():
        logger.debug("No config at %s, starting empty", path)
        return AppConfig()
    try:
        text = path.read_text(encoding="utf-8")
        data = json.loads(text)
        return AppConfig.model_validate(data)
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigurationError(f"Invalid config at {path}: {exc}") from exc
    except OSError as exc:
        raise ConfigurationError(f"Cannot read config at {path}: {exc}") from exc


def save_config(config: AppConfig, path: Optional[Path] = None) -> None:
    """Persist *config* atomically.

    Args:
        config: The configuration to save.
        path: Destination file. Defaults to :func:`get_config_path`.
    """
    path = path or get_config_path()
    data = config.model_dump(mode="json", exclude_none=True)
    _atomic_write(path, json.dumps(data, indent=2, ensure_ascii=False) + "\n")
    logger.debug("Saved config to %s", path)


# --- Environment ---


def get_override_account() -> Optional[str]:
    """Return the override nickname from :data:`ENV_OVERRIDE`, if set and non-empty."""
    value = os.environ.get(ENV_OVERRIDE, "")
    return value or None


def get_client_id(default: str) -> str:
    """Return the OAuth client id, preferring :data:`ENV_CLIENT_ID` over *default*."""
    return os.environ.get(ENV_CLIENT_ID, "") or default

"""Config loading and storage paths.

Provides the tsman configuration: optional JSON settings under
~/.config/tsman plus the TSMAN_CONFIG_STORAGE_DIR override for where saved
sessions live.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path

import dacite

from .exceptions import ConfigLoadError, ConfigValidationError, record_error

logger = logging.getLogger(__name__)

# Configuration file locations
CONFIG_DIR = Path.home() / ".config" / "tsman"
CONFIG_PATH = CONFIG_DIR / "config.json"

# Saved sessions
STORAGE_DIR_ENV = "TSMAN_CONFIG_STORAGE_DIR"
DEFAULT_STORAGE_DIR = Path.home() / ".config" / ".tsessions"

DEFAULT_TEMP_SESSION_PREFIX = "tsman-temp"


@dataclass
class TsmanConfig:
    """User settings.

    Attributes:
        storage_dir: Directory holding saved ``<name>.yaml`` files.
        show_preview: Show the preview pane when the menu starts.
        ask_for_confirmation: Ask before deleting from the menu.
        editor: Editor command line, overriding $VISUAL/$EDITOR.
        temp_session_prefix: Prefix of the scratch session used by restore.
        tmux_socket: Optional tmux socket path (``tmux -S``).
    """

    storage_dir: str | None = None
    show_preview: bool = False
    ask_for_confirmation: bool = False
    editor: str | None = None
    temp_session_prefix: str = DEFAULT_TEMP_SESSION_PREFIX
    tmux_socket: str | None = None


def get_storage_dir(config: TsmanConfig | None = None) -> Path:
    """Resolve the saved-session directory.

    Precedence: $TSMAN_CONFIG_STORAGE_DIR, then ``storage_dir`` from the
    config file, then ~/.config/.tsessions.
    """
    env_value = os.environ.get(STORAGE_DIR_ENV)
    if env_value:
        return Path(env_value).expanduser()
    if config is not None and config.storage_dir:
        return Path(config.storage_dir).expanduser()
    return DEFAULT_STORAGE_DIR


def load_config(path: Path | None = None) -> TsmanConfig:
    """
    Load the tsman configuration.

    Reads ~/.config/tsman/config.json if it exists, otherwise returns the
    defaults.

    Args:
        path: Alternative config file, mainly for tests.

    Returns:
        TsmanConfig instance.

    Raises:
        ConfigLoadError: If the config file exists but cannot be parsed.
        ConfigValidationError: If the JSON does not match TsmanConfig.
    """
    config_path = path or CONFIG_PATH

    if not config_path.exists():
        logger.debug("No config found at %s, using defaults", config_path)
        return TsmanConfig()

    try:
        with open(config_path, encoding="utf-8") as f:
            data = json.load(f)
        logger.debug("Loaded config from %s", config_path)
    except json.JSONDecodeError as e:
        logger.error("Invalid JSON in config file: %s", e)
        record_error(e)
        raise ConfigLoadError(
            f"Invalid JSON in config file at line {e.lineno}",
            file_path=str(config_path),
            context={"line": e.lineno, "column": e.colno},
            cause=e,
        ) from e
    except OSError as e:
        logger.error("Failed to read config file: %s", e)
        record_error(e)
        raise ConfigLoadError(
            "Failed to read config file",
            file_path=str(config_path),
            cause=e,
        ) from e

    if not isinstance(data, dict):
        raise ConfigValidationError(
            "Config file must contain a JSON object",
            context={"file_path": str(config_path)},
        )

    try:
        return dacite.from_dict(
            data_class=TsmanConfig,
            data=data,
            config=dacite.Config(strict=True),
        )
    except dacite.DaciteError as e:
        logger.error("Config schema validation failed: %s", e)
        record_error(e)
        raise ConfigValidationError(
            f"Config schema validation failed: {e}",
            context={"file_path": str(config_path)},
            cause=e,
        ) from e

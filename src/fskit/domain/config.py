from __future__ import annotations

"""
Configuration Domain Management.

Handles the persistent fskit settings (copy window, logging preferences,
case-detection probe path) stored as JSON in the user data directory, and
turns them into the runtime FsContext and LoggingConfig objects.
"""

import json
import logging
import os
from typing import Any, Dict, Optional

from fskit.domain.constants import CURRENT_CONFIG_VERSION, DEFAULT_COPY_BUFFER_SIZE
from fskit.domain.context import FsContext
from fskit.infra.fs import get_user_data_dir
from fskit.infra.logging import LoggingConfig, get_default_log_path

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "config.json"

# -----------------------------------------------------------------------------
# Configuration Models (Dict-based)
# -----------------------------------------------------------------------------

def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        "version": CURRENT_CONFIG_VERSION,

        # Copy behavior
        "copy_buffer_size": DEFAULT_COPY_BUFFER_SIZE,

        # Case sensitivity probe ("" means the interpreter executable)
        "case_probe_path": "",

        # Diagnostics
        "log_level": "WARNING",
        "log_to_console": True,
        "log_to_file": False,
    }


def get_config_path() -> str:
    return os.path.join(get_user_data_dir(), CONFIG_FILE_NAME)

# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------

def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load the configuration from disk, merged over the defaults.

    Missing or corrupted files yield the defaults; unknown keys are kept.

    Args:
        config_path: Explicit file location. Defaults to the user data dir.

    Returns:
        Dict[str, Any]: The effective configuration.
    """
    config = get_default_config()
    path = config_path or get_config_path()

    if not os.path.exists(path):
        logger.debug("Config file not found. Returning defaults.")
        return config

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load config from '{path}': {e}. Using defaults.")
        return config

    if not isinstance(data, dict):
        logger.warning("Corrupted config file. Resetting to defaults.")
        return config

    config.update(data)
    config["version"] = CURRENT_CONFIG_VERSION
    return config


def save_config(config: Dict[str, Any], config_path: Optional[str] = None) -> bool:
    """
    Persist the configuration to disk.

    Returns:
        bool: True if the file was written.
    """
    path = config_path or get_config_path()
    try:
        os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)
        payload = dict(config)
        payload["version"] = CURRENT_CONFIG_VERSION
        with open(path, "w", encoding="utf-8") as f:
            json.dump(payload, f, ensure_ascii=False, indent=4)
        logger.debug(f"Configuration saved to {path}")
        return True
    except OSError as e:
        logger.error(f"Failed to save configuration: {e}")
        return False

# -----------------------------------------------------------------------------
# Runtime Object Factories
# -----------------------------------------------------------------------------

def context_from_config(config: Dict[str, Any]) -> FsContext:
    """Build an FsContext from a (validated) configuration dict."""
    ctx = FsContext(copy_buffer_size=int(config.get("copy_buffer_size") or DEFAULT_COPY_BUFFER_SIZE))
    probe_path = config.get("case_probe_path")
    if probe_path:
        ctx.probe_path = probe_path
    return ctx


def logging_config_from_config(config: Dict[str, Any]) -> LoggingConfig:
    """Build a LoggingConfig from a (validated) configuration dict."""
    return LoggingConfig(
        level=str(config.get("log_level") or "WARNING"),
        console=bool(config.get("log_to_console", True)),
        log_file=get_default_log_path() if config.get("log_to_file") else None,
    )

from __future__ import annotations

"""
Configuration Schema Validation.

Sanitizes a raw configuration dict (as loaded from JSON or assembled by a
caller) so downstream factories can trust its keys and types.
"""

import logging
from typing import Any, Dict, List, Tuple

from fskit.domain.config import get_default_config
from fskit.infra.logging.config import _LEVEL_MAP

logger = logging.getLogger(__name__)

_MIN_BUFFER_SIZE = 1

# -----------------------------------------------------------------------------
# Public API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize a configuration dict.

    Never touches the filesystem.

    strict=False:
      - coerces what it can and records a warning per correction.
      - a non-dict input falls back to the defaults.

    strict=True:
      - raises TypeError/ValueError on the first invalid field.

    Args:
        config: Raw configuration.
        strict: Raise instead of correcting.

    Returns:
        Tuple[Dict[str, Any], List[str]]: (normalized config, warnings).
    """
    warnings: List[str] = []
    defaults = get_default_config()

    if not isinstance(config, dict):
        msg = f"Invalid config: expected dict, got {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(msg + " Using defaults.")
        logger.warning(msg)
        return defaults, warnings

    merged: Dict[str, Any] = dict(defaults)
    merged.update(config)

    merged["copy_buffer_size"] = _as_positive_int(
        merged.get("copy_buffer_size"), defaults["copy_buffer_size"], "copy_buffer_size", warnings, strict
    )
    merged["case_probe_path"] = _as_str(
        merged.get("case_probe_path"), defaults["case_probe_path"], "case_probe_path", warnings, strict
    )
    merged["log_level"] = _as_level(merged.get("log_level"), defaults["log_level"], warnings, strict)
    merged["log_to_console"] = _as_bool(
        merged.get("log_to_console"), defaults["log_to_console"], "log_to_console", warnings, strict
    )
    merged["log_to_file"] = _as_bool(
        merged.get("log_to_file"), defaults["log_to_file"], "log_to_file", warnings, strict
    )

    return merged, warnings

# -----------------------------------------------------------------------------
# Internal Helpers
# -----------------------------------------------------------------------------

def _reject(msg: str, warnings: List[str], strict: bool, exc_type: type = TypeError) -> None:
    if strict:
        raise exc_type(msg)
    warnings.append(msg + " Using fallback.")
    logger.warning(msg)


def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    if value is None:
        return fallback
    if isinstance(value, str):
        return value.strip()
    _reject(f"Field '{field}' invalid: expected str, got {type(value).__name__}.", warnings, strict)
    return fallback


def _as_bool(value: Any, fallback: bool, field: str, warnings: List[str], strict: bool) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return fallback

    if not strict:
        if isinstance(value, (int, float)) and value in (0, 1):
            warnings.append(f"Field '{field}' converted from number {value} to bool.")
            return bool(value)
        if isinstance(value, str):
            s = value.strip().lower()
            if s in ("true", "1", "yes", "y", "on"):
                warnings.append(f"Field '{field}' converted from str '{value}' to bool True.")
                return True
            if s in ("false", "0", "no", "n", "off"):
                warnings.append(f"Field '{field}' converted from str '{value}' to bool False.")
                return False

    _reject(f"Field '{field}' invalid: expected bool, got {type(value).__name__}.", warnings, strict)
    return fallback


def _as_positive_int(value: Any, fallback: int, field: str, warnings: List[str], strict: bool) -> int:
    if value is None:
        return fallback
    if isinstance(value, bool):
        _reject(f"Field '{field}' invalid: expected int, got bool.", warnings, strict)
        return fallback

    if isinstance(value, int):
        number = value
    elif isinstance(value, str) and not strict and value.strip().isdigit():
        number = int(value.strip())
        warnings.append(f"Field '{field}' converted from str '{value}' to int.")
    else:
        _reject(f"Field '{field}' invalid: expected int, got {type(value).__name__}.", warnings, strict)
        return fallback

    if number < _MIN_BUFFER_SIZE:
        _reject(f"Field '{field}' must be >= {_MIN_BUFFER_SIZE}, got {number}.", warnings, strict, ValueError)
        return fallback
    return number


def _as_level(value: Any, fallback: str, warnings: List[str], strict: bool) -> str:
    if value is None:
        return fallback
    if isinstance(value, str):
        v = value.strip().upper()
        if v in _LEVEL_MAP:
            return v
        _reject(f"log_level invalid: '{value}'. Allowed: {sorted(_LEVEL_MAP)}.", warnings, strict, ValueError)
        return fallback
    _reject(f"log_level invalid: expected str, got {type(value).__name__}.", warnings, strict)
    return fallback

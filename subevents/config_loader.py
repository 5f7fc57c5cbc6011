"""Centralised loader for bus configuration data."""
from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from threading import RLock
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "SUBEVENTS_CONFIG_PATH"

DEFAULT_SEPARATOR = "$"
DEFAULT_INNER_EVENT_TYPE_KEY = "_##_inner_##_event_##_type_##_"
DEFAULT_HIERARCHY_MARKER = "&#@!$%%$!@#&1234567890987654321"


class ConfigLoader:
    """Lazy JSON loader that exposes bus settings to the rest of the package."""

    _cache: Dict[str, Any] = {}
    _loaded: bool = False
    _lock: RLock = RLock()
    _path: Optional[Path] = None

    @classmethod
    def _default_path(cls) -> Optional[Path]:
        env_path = os.getenv(CONFIG_ENV_VAR)
        if env_path:
            return Path(env_path).expanduser().resolve()
        return None

    @classmethod
    def configure(cls, *, path: Optional[str] = None) -> None:
        """Override the config path (useful for tests)."""
        cls._path = Path(path).expanduser().resolve() if path else None
        cls._loaded = False
        cls._cache = {}

    @classmethod
    def _ensure_loaded(cls) -> None:
        if cls._loaded:
            return
        with cls._lock:
            if cls._loaded:
                return
            path = cls._path or cls._default_path()
            if path is None:
                cls._cache = {}
            else:
                try:
                    with open(path, "r", encoding="utf-8") as handle:
                        cls._cache = json.load(handle)
                except FileNotFoundError:
                    logger.debug("No bus config at %s; using defaults", path)
                    cls._cache = {}
            cls._loaded = True

    @classmethod
    def get_section(cls, section: str, default: Optional[Any] = None) -> Any:
        cls._ensure_loaded()
        if section not in cls._cache:
            return default
        value = cls._cache[section]
        if isinstance(value, dict):
            return value.copy()
        if isinstance(value, list):
            return list(value)
        return value

    @classmethod
    def get(cls, section: str, key: Optional[str] = None, default: Optional[Any] = None) -> Any:
        data = cls.get_section(section, default=None)
        if data is None:
            return default
        if key is None:
            return data
        if isinstance(data, dict):
            return data.get(key, default)
        raise TypeError(f"Section '{section}' is not a mapping; cannot access key '{key}'.")


def validate_separator(separator: Any) -> str:
    if not isinstance(separator, str) or len(separator) != 1:
        raise ValueError(f"separator must be a single character, got {separator!r}")
    return separator


@dataclass
class BusSettings:
    """Knobs that shape how event types are turned into emitter names."""

    separator: str = DEFAULT_SEPARATOR
    inner_event_type_key: str = DEFAULT_INNER_EVENT_TYPE_KEY
    hierarchy_marker: str = DEFAULT_HIERARCHY_MARKER

    def __post_init__(self) -> None:
        validate_separator(self.separator)
        if not self.hierarchy_marker:
            raise ValueError("hierarchy_marker must be a non-empty string")

    @classmethod
    def from_config(cls, **overrides: Any) -> "BusSettings":
        """Build settings from the ``bus`` config section; keyword overrides win."""
        section = ConfigLoader.get_section("bus", default={}) or {}
        if not isinstance(section, dict):
            raise TypeError("Section 'bus' is not a mapping.")
        values = {
            "separator": section.get("separator", DEFAULT_SEPARATOR),
            "inner_event_type_key": section.get(
                "inner_event_type_key", DEFAULT_INNER_EVENT_TYPE_KEY
            ),
            "hierarchy_marker": section.get("hierarchy_marker", DEFAULT_HIERARCHY_MARKER),
        }
        values.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**values)


__all__ = ["BusSettings", "ConfigLoader", "CONFIG_ENV_VAR", "validate_separator"]

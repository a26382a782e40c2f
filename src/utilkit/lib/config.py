"""
Configuration management for utilkit.

This module defines the `Config` singleton class, which loads settings from
a CFG file, applies type conversions, and exposes `get` and `set` methods for
retrieving and overriding values at runtime. It also defines `BoundsPolicy`,
the configurable answer to what happens when an index is out of range.
"""

import configparser
import os
from enum import Enum
from pathlib import Path
from typing import Any, ClassVar

from utilkit.lib.logger import Logger
from utilkit.lib.traits import ScalarKind


class BoundsPolicy(Enum):
    """How out-of-range indexes and bit positions are handled."""

    STRICT = "strict"
    LEGACY = "legacy"


class Config:
    """
    Singleton class to load and store configuration settings.

    Values can be overridden at runtime with `set`.
    """

    _data: ClassVar[dict[str, dict[str, Any]] | None] = None
    _defaults: ClassVar[dict[str, dict[str, Any]]] = {
        "bounds": {
            "policy": "strict",
            "stack_depth": 8,
        },
        "bitops": {"width": 64},
        "dev": {
            "stack_trace_errors": False,
            "log_level": "info",
        },
    }

    # Special post-load normalizers for keys that need custom casting
    _NORMALIZERS = {
        ("bounds", "policy"): "_str_to_policy",
        ("bitops", "width"): "_check_width",
        ("dev", "log_level"): "_str_to_level",
    }

    @classmethod
    def _resolve_config_path(cls) -> str | None:
        """Return a usable utilkit.cfg path (env > repo > user config) or None."""

        # ENV override
        env = os.getenv("UTILKIT_CONFIG")
        if env and Path(env).exists():
            return env

        # Repo location fallback
        dev = Path(__file__).resolve().parents[3] / "config" / "utilkit.cfg"
        if dev.exists():
            return str(dev)

        # Per-user location fallback
        p = Path.home() / ".config" / "utilkit" / "utilkit.cfg"
        if p.exists():
            return str(p)

        return None

    @classmethod
    def _normalize(cls, section: str, key: str, value: Any) -> Any:
        """Run a single value through its normalizer, if it has one."""

        func = cls._NORMALIZERS.get((section, key))
        if func is None:
            return value
        if isinstance(func, str):
            func = getattr(cls, func)

        return func(value)

    @classmethod
    def _apply_normalizers(cls, data: dict[str, dict[str, Any]]) -> dict[str, dict[str, Any]]:
        """Apply custom normalizers."""

        out = {s: dict(v) for s, v in data.items()}

        for section, key in cls._NORMALIZERS:
            if section in out and key in out[section]:
                out[section][key] = cls._normalize(section, key, out[section][key])

        return out

    @classmethod
    def _str_to_level(cls, level: str | int) -> int:
        """Convert a log levels str to Enum."""

        if isinstance(level, int):
            return level

        levels = {
            "success": Logger.SUCCESS,
            "info": Logger.INFO,
            "warning": Logger.WARNING,
            "error": Logger.ERROR,
            "debug": Logger.DEBUG,
        }

        if level not in levels:
            raise ValueError(f"The level {level} not a valid log level.")

        return levels[level]

    @classmethod
    def _str_to_policy(cls, policy: str | BoundsPolicy) -> BoundsPolicy:
        """Convert a bounds policy name to its enum member."""

        if isinstance(policy, BoundsPolicy):
            return policy

        try:
            return BoundsPolicy(policy.lower())
        except ValueError:
            raise ValueError(f"The policy {policy} is not a valid bounds policy.") from None

    @classmethod
    def _check_width(cls, width: int) -> int:
        """Make sure a word width is one of the supported unsigned widths."""

        ScalarKind.unsigned(width)
        return width

    @staticmethod
    def _coerce(default_value: Any, raw: str) -> Any:
        """Coerce a string 'raw' into the type of 'default_value'."""

        if raw == "" and default_value is not None:
            return default_value
        if isinstance(default_value, bool):
            return raw.lower() in ("1", "true", "yes", "on")
        if isinstance(default_value, int):
            return int(raw)
        if default_value is None:
            return None if raw == "" else raw

        return raw

    @classmethod
    def _load_defaults(cls) -> None:
        cls._data = cls._apply_normalizers({s: dict(v) for s, v in cls._defaults.items()})

    @classmethod
    def load(cls, filepath: str | None = None) -> None:
        """
        Load the configuration from a file, falling back to defaults.

        Args:
            filepath (str, optional): Path to the configuration file.
        """

        filepath = filepath or cls._resolve_config_path()

        if not filepath or not os.path.exists(filepath):
            Logger.warning("No config file found. Loading defaults...")
            cls._load_defaults()
            return

        if not filepath.endswith(".cfg"):
            Logger.warning("Config path does not end with .cfg. Loading defaults...")
            cls._load_defaults()
            return

        cp = configparser.ConfigParser(
            interpolation=None,
            inline_comment_prefixes=("#", ";"),
            strict=True,
        )

        try:
            cp.read(filepath)
        except configparser.MissingSectionHeaderError:
            Logger.warning("Invalid config file. Loading defaults...")
            cls._load_defaults()
            return

        data = {s: dict(v) for s, v in cls._defaults.items()}
        for section, defaults in cls._defaults.items():
            if cp.has_section(section):
                resolved = {}
                for key, dval in defaults.items():
                    if cp.has_option(section, key):
                        raw = cp.get(section, key, raw=True).strip()
                        resolved[key] = cls._coerce(dval, raw)
                    else:
                        resolved[key] = dval
                data[section] = resolved

        cls._data = cls._apply_normalizers(data)

    @classmethod
    def get(cls, section: str, key: str, default: Any = None) -> Any:
        """
        Retrieve a configuration value.

        The configuration is loaded on first use if `load` has not been called.

        Args:
            section (str): The section in the CFG file to retrieve.
            key (str): The key to retrieve.
            default: The default value if the key is not found.

        Returns:
            Any: The configuration value or the default value.
        """

        if cls._data is None:
            cls.load()

        if section not in cls._data:
            return default

        return cls._data[section].get(key, default)

    @classmethod
    def set(cls, section: str, key: str, value: Any) -> None:
        """
        Override a configuration value at runtime.

        Args:
            section (str): The section to write to.
            key (str): The key to write.
            value: The new value. It is normalized the same way a loaded value is.
        """

        if cls._data is None:
            cls.load()

        cls._data.setdefault(section, {})[key] = cls._normalize(section, key, value)

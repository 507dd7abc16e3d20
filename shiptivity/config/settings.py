"""Configuration settings for the Shiptivity API.

Settings wraps the ConfigManager and provides property-based access to
configuration values, falling back to environment variables and then to
defaults when no config file is in use.
"""

from __future__ import annotations

import os
from typing import Any

from shiptivity.config.defaults import get_default_config
from shiptivity.config.manager import ConfigManager

_DEFAULTS = get_default_config()


class Settings:
    """Application settings."""

    def __init__(self, config_manager: ConfigManager | None = None):
        self._config_manager = config_manager
        self._overrides: dict[str, Any] = {}

    def apply_overrides(self, **values: Any) -> None:
        """Pin values given on the command line; None entries are ignored."""
        self._overrides.update({k: v for k, v in values.items() if v is not None})

    def validate_or_raise(self) -> None:
        from shiptivity.config.validation import validate_or_raise as _v

        _v(self.db_path, self.server_port)

    def validation_status(self) -> tuple[bool, list[str]]:
        """Return (is_valid, errors) without raising."""
        try:
            self.validate_or_raise()
            return True, []
        except ValueError as exc:
            return False, [err.strip() for err in str(exc).split(";") if err.strip()]

    def _get(
        self,
        key: str,
        default: Any,
        env_key: str | None = None,
    ) -> Any:
        """Get override, then config value from manager, fallback to env, then default."""
        if key in self._overrides:
            return self._overrides[key]
        if self._config_manager and self._config_manager.loaded:
            value = self._config_manager.get(key)
            if value is not None:
                return value
        if env_key and (env_val := os.getenv(env_key)):
            # Type conversion based on default type
            if isinstance(default, bool):
                return env_val.lower() in ("true", "1", "yes", "on")
            elif isinstance(default, int):
                try:
                    return int(env_val)
                except ValueError:
                    return env_val
            return env_val
        return default

    # Storage
    @property
    def db_path(self) -> str:
        return self._get("db_path", _DEFAULTS["db_path"], "SHIPTIVITY_DB_PATH")

    # Server Configuration
    @property
    def server_host(self) -> str:
        return self._get("server_host", _DEFAULTS["server_host"], "SERVER_HOST")

    @property
    def server_port(self) -> int:
        return self._get("server_port", _DEFAULTS["server_port"], "SERVER_PORT")

    # Logging Configuration
    @property
    def log_level(self) -> str:
        return self._get("log_level", _DEFAULTS["log_level"], "LOG_LEVEL")

    @property
    def log_format(self) -> str:
        return self._get("log_format", _DEFAULTS["log_format"], "LOG_FORMAT")

    @property
    def log_colors(self) -> bool:
        return self._get("log_colors", _DEFAULTS["log_colors"], "LOG_COLORS")

    def logging_env(self) -> dict[str, str]:
        """Resolved logging settings as the LOG_* variables the logger reads."""
        return {
            "LOG_LEVEL": str(self.log_level).upper(),
            "LOG_FORMAT": str(self.log_format).lower(),
            "LOG_COLORS": "true" if self.log_colors else "false",
        }


# Global settings instance (config manager attached at startup)
settings = Settings()

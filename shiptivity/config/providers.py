"""Configuration providers - abstract and concrete implementations."""

import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from shiptivity.config.schema import (
    ConfigValidationError,
    deep_merge,
    validate_config,
)
from shiptivity.utils.logger import get_logger

logger = get_logger("config.providers")


class ConfigProvider(ABC):
    """Abstract base class for configuration providers."""

    @abstractmethod
    async def load(self) -> dict[str, Any]:
        """Load configuration from the provider."""
        pass


class LocalFileConfigProvider(ConfigProvider):
    """Configuration provider reading a local JSON file."""

    def __init__(self, config_path: Path, defaults: dict[str, Any] | None = None):
        self.config_path = config_path
        self.defaults = defaults or {}

    async def load(self) -> dict[str, Any]:
        """Load configuration from file merged over defaults.

        A missing file or one with broken JSON syntax yields the defaults.
        A well-formed file with invalid values raises.
        """
        if not self.config_path.exists():
            logger.info(
                "Config file not found, using defaults",
                path=str(self.config_path),
            )
            return self.defaults.copy()

        try:
            content = self.config_path.read_text(encoding="utf-8")
            config = json.loads(content)
            if not isinstance(config, dict):
                raise ValueError("Config file must contain a JSON object")

            merged = validate_config(deep_merge(self.defaults, config))

            logger.debug("Config loaded from file", path=str(self.config_path))
            return merged
        except json.JSONDecodeError as e:
            logger.error(
                "Invalid JSON syntax in config file, using defaults",
                error=str(e),
                line=e.lineno,
                column=e.colno,
                path=str(self.config_path),
            )
            return self.defaults.copy()
        except (ValueError, ConfigValidationError) as exc:
            logger.error(
                "Invalid configuration structure",
                error=str(exc),
                path=str(self.config_path),
            )
            raise

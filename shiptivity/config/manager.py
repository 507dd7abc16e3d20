"""Configuration manager over a config provider."""

from __future__ import annotations

from pathlib import Path
from typing import Any, TypeVar

from shiptivity.config.providers import ConfigProvider, LocalFileConfigProvider
from shiptivity.utils.logger import get_logger

logger = get_logger("config.manager")

T = TypeVar("T")


class ConfigManager:
    """Holds the configuration loaded once from its provider."""

    def __init__(self, provider: ConfigProvider):
        self.provider = provider
        self._config: dict[str, Any] = {}
        self._loaded = False

    @property
    def loaded(self) -> bool:
        return self._loaded

    async def initialize(self) -> None:
        """Load the configuration from the provider."""
        self._config = await self.provider.load()
        self._loaded = True
        logger.info("Configuration initialized", config_keys=list(self._config.keys()))

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value by key."""
        return self._config.get(key, default)

    def get_typed(self, key: str, expected_type: type[T], default: T) -> T:
        """Get a typed configuration value with validation."""
        value = self._config.get(key, default)
        if not isinstance(value, expected_type):
            logger.warning(
                "Config type mismatch, using default",
                key=key,
                expected=expected_type.__name__,
                actual=type(value).__name__,
            )
            return default
        return value

    def get_str(self, key: str, default: str = "") -> str:
        return self.get_typed(key, str, default)

    def get_int(self, key: str, default: int = 0) -> int:
        return self.get_typed(key, int, default)

    def get_bool(self, key: str, default: bool = False) -> bool:
        return self.get_typed(key, bool, default)


def create_config_manager(
    config_path: Path, *, defaults: dict[str, Any] | None = None
) -> ConfigManager:
    """Create a config manager backed by a JSON file.

    Args:
        config_path: Path of the config.json file
        defaults: Values used for keys the file does not set
    """
    manager = ConfigManager(LocalFileConfigProvider(config_path, defaults=defaults))
    logger.info("Config manager created", config_path=str(config_path))
    return manager

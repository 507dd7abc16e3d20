"""Configuration module for the Shiptivity API."""

from .defaults import get_default_config
from .logging_config import get_logging_config
from .manager import ConfigManager, create_config_manager
from .providers import ConfigProvider, LocalFileConfigProvider
from .schema import ConfigValidationError
from .settings import Settings, settings

__all__ = [
    "settings",
    "Settings",
    "get_logging_config",
    "ConfigManager",
    "ConfigValidationError",
    "create_config_manager",
    "ConfigProvider",
    "LocalFileConfigProvider",
    "get_default_config",
]

"""Default configuration values for the Shiptivity API."""

from typing import Any

from shiptivity.config.constants import DEFAULT_DB_PATH, DEFAULT_SERVER_PORT


def get_default_config() -> dict[str, Any]:
    """Return the default configuration dictionary."""
    return {
        # Storage
        "db_path": DEFAULT_DB_PATH,
        # Server Configuration
        "server_host": "localhost",
        "server_port": DEFAULT_SERVER_PORT,
        # Logging Configuration
        "log_level": "INFO",
        "log_format": "pretty",
        "log_colors": True,
    }

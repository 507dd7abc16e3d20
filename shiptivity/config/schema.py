from __future__ import annotations

from copy import deepcopy
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, ValidationError


def deep_merge(base: dict[str, Any], updates: dict[str, Any]) -> dict[str, Any]:
    """Deep-merge updates into base without mutating inputs.

    - Keys present in updates with non-None values are merged/overwritten
    - Keys present in updates with None values are skipped (preserve base value)
    - Keys not present in updates are preserved from base
    """
    result = deepcopy(base)
    for key, value in updates.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        elif key in result and value is None:
            # Treat None as "not provided" so lower layers keep their values
            continue
        else:
            result[key] = value
    return result


class AppConfig(BaseModel):
    # None means "not set in the file"; Settings falls back to env, then defaults
    db_path: str | None = None
    server_host: str | None = None
    server_port: int | None = None
    log_level: str | None = None
    log_format: Literal["pretty", "json"] | None = None
    log_colors: bool | None = None

    # Unknown keys are tolerated in the file but never read
    model_config = ConfigDict(extra="allow")


class ConfigValidationError(Exception):
    """Structured configuration validation error."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__("; ".join(errors))


def validate_config(config: dict[str, Any]) -> dict[str, Any]:
    """Validate configuration using Pydantic schema.

    Raises:
        ConfigValidationError: With structured list of human-readable error messages.
    """
    try:
        app_config = AppConfig.model_validate(config)
        return app_config.model_dump(mode="json")
    except ValidationError as e:
        raise ConfigValidationError(_extract_validation_errors(e)) from e


def _extract_validation_errors(exc: ValidationError) -> list[str]:
    """Convert Pydantic ValidationError to list of human-readable messages."""
    errors = []
    for err in exc.errors():
        loc = ".".join(str(x) for x in err["loc"]) if err["loc"] else "config"
        if err["type"] == "string_type":
            errors.append(f"Expected string at '{loc}'")
        elif err["type"] in ("int_type", "int_parsing"):
            errors.append(f"Expected integer at '{loc}'")
        elif err["type"] in ("bool_type", "bool_parsing"):
            errors.append(f"Expected boolean at '{loc}'")
        else:
            errors.append(f"{loc}: {err['msg']}")
    return errors if errors else ["Invalid configuration"]

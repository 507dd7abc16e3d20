"""Startup validation for storage and server settings."""

from __future__ import annotations

from shiptivity.config.constants import MAX_SERVER_PORT, MIN_SERVER_PORT


def validate_or_raise(db_path: str | None, server_port: int | None) -> None:
    """Validate that the database path and server port are usable."""
    errors = []
    if not db_path or not str(db_path).strip():
        errors.append("db_path must not be empty")
    if (
        not isinstance(server_port, int)
        or isinstance(server_port, bool)
        or not MIN_SERVER_PORT <= server_port <= MAX_SERVER_PORT
    ):
        errors.append(
            f"server_port must be an integer between {MIN_SERVER_PORT} "
            f"and {MAX_SERVER_PORT}, got {server_port!r}"
        )
    if errors:
        raise ValueError("; ".join(errors))

"""Error taxonomy surfaced to API callers as ``{message, long_message}``."""

from __future__ import annotations

from shiptivity.core.lanes import LANE_CHOICES


class ShiptivityError(Exception):
    """Base error carrying a short and a long human readable message."""

    status_code: int = 400
    message: str = "Request failed."

    def __init__(self, long_message: str, *, message: str | None = None):
        super().__init__(long_message)
        if message is not None:
            self.message = message
        self.long_message = long_message

    def to_payload(self) -> dict[str, str]:
        return {"message": self.message, "long_message": self.long_message}


class InvalidIdentifier(ShiptivityError):
    message = "Invalid id provided."

    @classmethod
    def malformed(cls) -> InvalidIdentifier:
        return cls("Id can only be integer.")

    @classmethod
    def unknown(cls) -> InvalidIdentifier:
        return cls("Cannot find client with that id.")


class InvalidLaneName(ShiptivityError):
    message = "Invalid status provided."

    def __init__(self, long_message: str | None = None):
        super().__init__(
            long_message
            or f"Status can only be one of the following: [{LANE_CHOICES}]."
        )


class InvalidPriorityValue(ShiptivityError):
    message = "Invalid priority provided."

    def __init__(self, long_message: str | None = None):
        super().__init__(long_message or "Priority can only be positive integer.")


class PersistenceFailure(ShiptivityError):
    """A store operation failed; the enclosing transaction was rolled back."""

    status_code = 500
    message = "Failed to update client."


class SeedDataError(ShiptivityError):
    """Seed file is unreadable or contains malformed client rows."""

    message = "Invalid seed data."

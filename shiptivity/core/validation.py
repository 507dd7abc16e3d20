"""Request input checks run before the rank reconciler is invoked."""

from __future__ import annotations

from sqlalchemy.orm import Session

from shiptivity.core.errors import (
    InvalidIdentifier,
    InvalidLaneName,
    InvalidPriorityValue,
)
from shiptivity.core.lanes import Lane
from shiptivity.db.clients import get_client
from shiptivity.db.models import ClientORM


def _as_int(raw: object) -> int | None:
    """Return ``raw`` as an int if it is an int or a string of decimal digits."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, str):
        text = raw.strip()
        if text.isascii() and text.isdigit():
            return int(text)
    return None


def parse_client_id(raw: object) -> int:
    client_id = _as_int(raw)
    if client_id is None:
        raise InvalidIdentifier.malformed()
    return client_id


def ensure_client_exists(session: Session, client_id: int) -> ClientORM:
    client = get_client(session, client_id)
    if client is None:
        raise InvalidIdentifier.unknown()
    return client


def parse_lane(raw: object) -> Lane | None:
    """Map a status value to a Lane; ``None`` or "" means no status was supplied."""
    if raw is None or raw == "":
        return None
    if not Lane.is_valid(raw):
        raise InvalidLaneName()
    return Lane(raw)


def parse_priority(raw: object) -> int | None:
    """Map a priority value to a positive int; ``None`` or "" means not supplied."""
    if raw is None or raw == "":
        return None
    priority = _as_int(raw)
    if priority is None or priority < 1:
        raise InvalidPriorityValue()
    return priority

"""Database package: engine/session management, ORM model and client queries."""

from .base import get_engine, get_session, transaction
from .clients import (
    count_clients,
    get_client,
    init_db,
    lane_members,
    list_clients,
    set_rank,
)
from .models import BaseORM, ClientORM

__all__ = [
    "get_engine",
    "get_session",
    "transaction",
    "init_db",
    "list_clients",
    "get_client",
    "count_clients",
    "lane_members",
    "set_rank",
    "BaseORM",
    "ClientORM",
]

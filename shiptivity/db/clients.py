"""Queries over the clients table.

All helpers take an open Session; callers decide the transaction scope.
"""

from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from shiptivity.db.models import BaseORM, ClientORM
from shiptivity.utils.logger import db_logger


def init_db(engine: Engine) -> None:
    """Create the clients table if it does not exist yet."""
    BaseORM.metadata.create_all(engine)
    db_logger.debug("Database schema ensured", url=str(engine.url))


def list_clients(session: Session, lane: str | None = None) -> list[ClientORM]:
    """All clients ordered by id, or the members of one lane by rank."""
    if lane is None:
        stmt = select(ClientORM).order_by(ClientORM.id)
    else:
        stmt = (
            select(ClientORM)
            .where(ClientORM.status == lane)
            .order_by(ClientORM.priority, ClientORM.id)
        )
    return list(session.execute(stmt).scalars())


def get_client(session: Session, client_id: int) -> ClientORM | None:
    return session.get(ClientORM, client_id)


def count_clients(session: Session) -> int:
    return session.execute(select(func.count()).select_from(ClientORM)).scalar_one()


def lane_members(
    session: Session, lane: str, exclude_id: int | None = None
) -> list[ClientORM]:
    """Members of ``lane`` ordered by ascending priority (ties by id)."""
    stmt = select(ClientORM).where(ClientORM.status == lane)
    if exclude_id is not None:
        stmt = stmt.where(ClientORM.id != exclude_id)
    stmt = stmt.order_by(ClientORM.priority, ClientORM.id)
    return list(session.execute(stmt).scalars())


def set_rank(session: Session, client: ClientORM, lane: str, priority: int) -> None:
    """Write a client's lane and rank and flush it to the open transaction."""
    client.status = lane
    client.priority = priority
    session.flush()

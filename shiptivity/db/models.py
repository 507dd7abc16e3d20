from __future__ import annotations

from typing import Any

from sqlalchemy import Index, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class BaseORM(DeclarativeBase):
    pass


class ClientORM(BaseORM):
    """A client card on the board.

    ``priority`` is the card's 1-based rank inside its ``status`` lane.
    Uniqueness of (status, priority) is maintained by the rank reconciler
    rather than a constraint, since a reconcile passes through colliding
    intermediate states before it commits.
    """

    __tablename__ = "clients"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String)  # backlog | in-progress | complete
    priority: Mapped[int] = mapped_column(Integer)

    __table_args__ = (Index("ix_clients_status_priority", "status", "priority"),)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "status": self.status,
            "priority": self.priority,
        }

    def __repr__(self) -> str:
        return f"ClientORM(id={self.id!r}, status={self.status!r}, priority={self.priority!r})"

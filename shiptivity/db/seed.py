"""Load an initial board from a JSON seed file."""

from __future__ import annotations

import json
from collections import defaultdict
from pathlib import Path
from typing import Any

from sqlalchemy.engine import Engine

from shiptivity.core.errors import SeedDataError
from shiptivity.core.lanes import Lane
from shiptivity.db.base import transaction
from shiptivity.db.clients import count_clients, init_db
from shiptivity.db.models import ClientORM
from shiptivity.utils.logger import db_logger


def load_seed_file(path: Path) -> list[dict[str, Any]]:
    """Read a JSON array of client objects.

    Args:
        path: Path to the seed file

    Returns:
        The parsed rows, unvalidated
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise SeedDataError(f"Cannot read seed file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise SeedDataError(
            f"Invalid JSON in seed file {path} at line {e.lineno}: {e.msg}"
        ) from e
    if not isinstance(data, list):
        raise SeedDataError("Seed file must contain a JSON array of clients.")
    return data


def _check_row(row: Any) -> dict[str, Any]:
    if not isinstance(row, dict):
        raise SeedDataError(f"Seed row must be an object, got {type(row).__name__}.")
    client_id = row.get("id")
    if not isinstance(client_id, int) or isinstance(client_id, bool):
        raise SeedDataError(f"Seed row has invalid id: {client_id!r}.")
    if not Lane.is_valid(row.get("status")):
        raise SeedDataError(
            f"Client {client_id} has invalid status: {row.get('status')!r}."
        )
    priority = row.get("priority")
    if not isinstance(priority, int) or isinstance(priority, bool) or priority < 1:
        raise SeedDataError(f"Client {client_id} has invalid priority: {priority!r}.")
    if not isinstance(row.get("name"), str):
        raise SeedDataError(f"Client {client_id} has no name.")
    return row


def seed_clients(engine: Engine, rows: list[dict[str, Any]]) -> int:
    """Insert ``rows`` into an empty clients table.

    Each lane is renumbered densely from 1, ordered by the given priority and
    then by id. Does nothing if the table already holds clients.

    Returns:
        Number of inserted clients
    """
    checked = [_check_row(row) for row in rows]
    ids = [row["id"] for row in checked]
    if len(set(ids)) != len(ids):
        raise SeedDataError("Seed file contains duplicate client ids.")

    init_db(engine)
    with transaction(engine, immediate=True) as session:
        if count_clients(session) > 0:
            db_logger.info("Clients table not empty, skipping seed")
            return 0

        lanes: dict[str, list[dict[str, Any]]] = defaultdict(list)
        for row in checked:
            lanes[row["status"]].append(row)

        for lane, members in lanes.items():
            members.sort(key=lambda r: (r["priority"], r["id"]))
            for rank, row in enumerate(members, start=1):
                session.add(
                    ClientORM(
                        id=row["id"],
                        name=row["name"],
                        description=row.get("description"),
                        status=lane,
                        priority=rank,
                    )
                )

    db_logger.info("Seeded clients", count=len(checked), lanes=sorted(lanes))
    return len(checked)

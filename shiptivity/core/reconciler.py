"""Rank reconciliation for client status/priority changes.

A reconcile moves one client to a (possibly new) lane and rank and rewrites
the ranks of the lanes it left and entered, so that every lane keeps
priorities ``1..N`` with no gaps and no duplicates.
"""

from __future__ import annotations

import threading
from typing import Any

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from shiptivity.core.errors import InvalidIdentifier, PersistenceFailure
from shiptivity.core.lanes import Lane
from shiptivity.core.ranking import plan_arrival, plan_departure
from shiptivity.db.base import transaction
from shiptivity.db.clients import get_client, lane_members, set_rank
from shiptivity.db.models import ClientORM
from shiptivity.utils.logger import core_logger


def _members(clients: list[ClientORM]) -> list[tuple[int, int]]:
    return [(client.id, client.priority) for client in clients]


class RankReconciler:
    """Applies status/priority changes and re-ranks the affected lanes.

    One instance is shared per engine. Calls are serialized by an in-process
    lock and each call runs in a single store transaction, so a failure
    leaves every lane as it was.
    """

    def __init__(self, engine: Engine):
        self.engine = engine
        self._lock = threading.Lock()

    def reconcile(
        self,
        client_id: int,
        requested_status: Lane | str | None = None,
        requested_priority: int | None = None,
    ) -> list[dict[str, Any]]:
        """Move a client and return its resulting lane ordered by priority.

        Args:
            client_id: Existing client id
            requested_status: Lane to move the client to; None keeps the current one
            requested_priority: Desired 1-based rank in the resulting lane;
                None keeps the current rank. Ranks past the tail append.

        Raises:
            PersistenceFailure: The store failed; nothing was written
        """
        new_lane = Lane(requested_status).value if requested_status else None
        with self._lock:
            try:
                with transaction(self.engine, immediate=True) as session:
                    return self._reconcile(
                        session, client_id, new_lane, requested_priority
                    )
            except SQLAlchemyError as e:
                core_logger.error(
                    "Reconcile failed, transaction rolled back",
                    client_id=client_id,
                    requested_status=new_lane,
                    requested_priority=requested_priority,
                    error=str(e),
                    exc_info=True,
                )
                raise PersistenceFailure(str(e)) from e

    def _reconcile(
        self,
        session: Session,
        client_id: int,
        requested_status: str | None,
        requested_priority: int | None,
    ) -> list[dict[str, Any]]:
        target = get_client(session, client_id)
        if target is None:
            raise InvalidIdentifier.unknown()

        old_lane, old_priority = target.status, target.priority
        departure = lane_members(session, old_lane, exclude_id=target.id)

        new_lane = requested_status or old_lane

        # Includes the target when it stays in its lane; plan_arrival skips it.
        arrival = lane_members(session, new_lane)

        if requested_priority is not None:
            desired = requested_priority
        elif new_lane == old_lane:
            # Current position, which equals old_priority in a dense lane
            desired = [client.id for client in arrival].index(target.id) + 1
        else:
            desired = old_priority

        position, shifted = plan_arrival(_members(arrival), target.id, desired)

        by_id = {client.id: client for client in arrival}
        for member_id, priority in shifted.items():
            set_rank(session, by_id[member_id], new_lane, priority)

        if (target.status, target.priority) != (new_lane, position):
            set_rank(session, target, new_lane, position)

        compacted: dict[int, int] = {}
        if new_lane != old_lane:
            compacted = plan_departure(_members(departure))
            by_id = {client.id: client for client in departure}
            for member_id, priority in compacted.items():
                set_rank(session, by_id[member_id], old_lane, priority)

        core_logger.info(
            "Client reconciled",
            client_id=client_id,
            from_lane=old_lane,
            to_lane=new_lane,
            from_priority=old_priority,
            to_priority=position,
            shifted=len(shifted),
            compacted=len(compacted),
        )

        return [client.to_dict() for client in lane_members(session, new_lane)]

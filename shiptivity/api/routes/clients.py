from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy.engine import Engine

from shiptivity.api.deps import get_db_engine, get_reconciler
from shiptivity.api.schemas import ClientResponse, ClientUpdateRequest, ErrorResponse
from shiptivity.config.constants import API_PREFIX
from shiptivity.core.reconciler import RankReconciler
from shiptivity.core.validation import (
    ensure_client_exists,
    parse_client_id,
    parse_lane,
    parse_priority,
)
from shiptivity.db.base import get_session
from shiptivity.db.clients import list_clients
from shiptivity.utils.logger import api_logger

router = APIRouter(prefix=API_PREFIX, responses={400: {"model": ErrorResponse}})


@router.get("/clients", response_model=list[ClientResponse])
async def get_clients(
    status: str | None = None,
    engine: Engine = Depends(get_db_engine),  # noqa: B008
):
    """List all clients, or the clients of one lane ordered by priority."""
    lane = parse_lane(status)
    with get_session(engine) as session:
        clients = list_clients(session, lane.value if lane else None)
        return [ClientResponse.model_validate(client) for client in clients]


@router.get("/clients/{client_id}", response_model=ClientResponse)
async def get_client_by_id(
    client_id: str,
    engine: Engine = Depends(get_db_engine),  # noqa: B008
):
    cid = parse_client_id(client_id)
    with get_session(engine) as session:
        client = ensure_client_exists(session, cid)
        return ClientResponse.model_validate(client)


@router.put(
    "/clients/{client_id}",
    response_model=list[ClientResponse],
    responses={500: {"model": ErrorResponse}},
)
async def update_client(
    client_id: str,
    payload: ClientUpdateRequest | None = None,
    engine: Engine = Depends(get_db_engine),  # noqa: B008
    reconciler: RankReconciler = Depends(get_reconciler),  # noqa: B008
) -> Any:
    """Change a client's status and/or priority.

    Ranks of the lane the client leaves and the lane it lands in are
    rewritten so each stays 1..N. Returns the resulting lane ordered by
    priority, 1 being the top of the swimlane.
    """
    cid = parse_client_id(client_id)
    with get_session(engine) as session:
        ensure_client_exists(session, cid)

    payload = payload or ClientUpdateRequest()
    lane = parse_lane(payload.status)
    priority = parse_priority(payload.priority)

    api_logger.debug(
        "Updating client",
        client_id=cid,
        status=lane.value if lane else None,
        priority=priority,
    )
    return reconciler.reconcile(cid, lane, priority)

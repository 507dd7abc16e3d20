from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from shiptivity import __version__
from shiptivity.api.deps import get_db_engine
from shiptivity.api.schemas import HealthResponse, InfoResponse
from shiptivity.config.constants import SERVICE_NAME
from shiptivity.db.base import get_session
from shiptivity.db.clients import count_clients
from shiptivity.utils.logger import api_logger

router = APIRouter()


@router.get("/", response_model=InfoResponse)
async def root():
    return InfoResponse(message="SHIPTIVITY API. Read documentation to see API docs")


@router.get("/health", response_model=HealthResponse, response_model_exclude_none=True)
async def health(engine: Engine = Depends(get_db_engine)):  # noqa: B008
    """Health check endpoint.

    Always answers 200; ``database`` reports whether the clients table could
    be read.
    """
    try:
        with get_session(engine) as session:
            total = count_clients(session)
    except SQLAlchemyError as e:
        api_logger.error("Health check could not read the store", error=str(e))
        return HealthResponse(
            service=SERVICE_NAME,
            version=__version__,
            database="error",
            database_error=str(e),
        )
    return HealthResponse(
        service=SERVICE_NAME,
        version=__version__,
        clients=total,
    )

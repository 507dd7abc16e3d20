from __future__ import annotations

import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.engine import Engine

from shiptivity import __version__
from shiptivity.api.deps import dispose_db_engine, open_db_engine
from shiptivity.api.routes.clients import router as clients_router
from shiptivity.api.routes.health import router as health_router
from shiptivity.core.errors import ShiptivityError
from shiptivity.core.reconciler import RankReconciler
from shiptivity.db.clients import init_db
from shiptivity.utils.logger import api_logger, request_log


@asynccontextmanager
async def lifespan(app: FastAPI):
    api_logger.info("Application startup", database=str(app.state.engine.url))

    yield

    # Shutdown: release the shared store connection
    try:
        if app.state.owns_engine:
            dispose_db_engine(app.state.engine)
            api_logger.info("Database engine disposed")
        api_logger.info("Shutdown completed")
    except Exception as e:
        api_logger.error("Shutdown cleanup failed", exc_info=True, error=str(e))


def create_app(engine: Engine | None = None) -> FastAPI:
    """Build the API around ``engine``.

    When no engine is given one is opened on the configured database and
    disposed on shutdown; a caller-supplied engine stays owned by the caller.
    """
    app = FastAPI(
        title="Shiptivity API",
        description="Client swimlane board with priority ranking per status lane",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.owns_engine = engine is None
    if engine is None:
        engine = open_db_engine()
    init_db(engine)
    app.state.engine = engine
    app.state.reconciler = RankReconciler(engine)

    app.include_router(health_router)
    app.include_router(clients_router)

    @app.exception_handler(ShiptivityError)
    async def handle_shiptivity_error(request: Request, exc: ShiptivityError):
        api_logger.warning(
            exc.message,
            long_message=exc.long_message,
            error_type=type(exc).__name__,
            method=request.method,
            path=request.url.path,
        )
        return JSONResponse(status_code=exc.status_code, content=exc.to_payload())

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        request_log(
            api_logger,
            request.method,
            request.url.path,
            response.status_code,
            round((time.perf_counter() - started) * 1000, 2),
        )
        return response

    return app

from __future__ import annotations

from pathlib import Path

from fastapi import Request
from sqlalchemy.engine import Engine

from shiptivity.config import settings
from shiptivity.core.reconciler import RankReconciler
from shiptivity.db.base import get_engine as _mk_engine


def open_db_engine(db_path: str | None = None) -> Engine:
    """Create the process-wide engine for the configured clients database."""
    return _mk_engine(Path(db_path or settings.db_path).expanduser().resolve())


def get_db_engine(request: Request) -> Engine:
    """Engine the app was built with."""
    return request.app.state.engine


def get_reconciler(request: Request) -> RankReconciler:
    """Reconciler shared by every request of the app."""
    return request.app.state.reconciler


def dispose_db_engine(engine: Engine | None) -> None:
    """Dispose the shared Engine if it exists (called on app shutdown)."""
    if engine is not None:
        engine.dispose()

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

# Execution option marking a transaction that must take the write lock up front
IMMEDIATE = "shiptivity_immediate"


def get_engine(db_path: Path) -> Engine:
    """Create a SQLite engine for the given DB path.

    Uses check_same_thread=False to allow access from the server threadpool.
    Ensures parent directory exists.

    pysqlite's own transaction handling is switched off so SQLAlchemy emits
    BEGIN itself: a plain ``BEGIN`` for readers, and ``BEGIN IMMEDIATE`` for
    transactions opened with ``transaction(engine, immediate=True)``, which
    then hold the write lock from their first read until commit or rollback.
    """
    db_path.parent.mkdir(parents=True, exist_ok=True)
    db_url = f"sqlite+pysqlite:///{db_path}"
    engine = create_engine(db_url, connect_args={"check_same_thread": False})

    @event.listens_for(engine, "connect")
    def _disable_pysqlite_begin(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _begin(conn):
        if conn.get_execution_options().get(IMMEDIATE):
            conn.exec_driver_sql("BEGIN IMMEDIATE")
        else:
            conn.exec_driver_sql("BEGIN")

    return engine


@contextmanager
def get_session(engine: Engine) -> Iterator[Session]:
    """Context manager yielding a SQLAlchemy Session bound to engine."""
    session = Session(engine)
    try:
        yield session
    finally:
        session.close()


@contextmanager
def transaction(engine: Engine, *, immediate: bool = False) -> Iterator[Session]:
    """Yield a Session inside one transaction.

    Commits when the block exits normally, rolls back and re-raises on any
    exception. ``immediate`` takes the SQLite write lock when the
    transaction begins.
    """
    if immediate:
        engine = engine.execution_options(**{IMMEDIATE: True})
    with get_session(engine) as session:
        with session.begin():
            yield session

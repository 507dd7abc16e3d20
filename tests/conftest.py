"""Shared pytest fixtures for all tests."""

from collections.abc import Callable

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine

from shiptivity.api.app import create_app
from shiptivity.core.reconciler import RankReconciler
from shiptivity.db.base import get_engine, get_session, transaction
from shiptivity.db.clients import init_db, list_clients
from shiptivity.db.models import ClientORM

# (id, name, status, priority)
DEFAULT_BOARD = [
    (1, "Acme", "backlog", 1),
    (2, "Bolt", "backlog", 2),
    (3, "Crane", "backlog", 3),
    (4, "Delta", "in-progress", 1),
    (5, "Echo", "in-progress", 2),
    (6, "Fjord", "complete", 1),
]


def insert_clients(engine: Engine, rows) -> None:
    with transaction(engine) as session:
        for client_id, name, status, priority in rows:
            session.add(
                ClientORM(
                    id=client_id,
                    name=name,
                    description=f"{name} account",
                    status=status,
                    priority=priority,
                )
            )


@pytest.fixture
def engine(tmp_path):
    """Fresh, empty clients database per test."""
    engine = get_engine(tmp_path / "clients.db")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def make_board(engine) -> Callable:
    """Insert the given rows (defaults to DEFAULT_BOARD) and return the engine."""

    def _make(rows=None) -> Engine:
        insert_clients(engine, DEFAULT_BOARD if rows is None else rows)
        return engine

    return _make


@pytest.fixture
def board(make_board) -> Engine:
    return make_board()


@pytest.fixture
def reconciler(engine) -> RankReconciler:
    return RankReconciler(engine)


@pytest.fixture
def snapshot(engine) -> Callable[[], dict[int, tuple[str, int]]]:
    """Return a function reading ``{id: (status, priority)}`` from the store."""

    def _snapshot() -> dict[int, tuple[str, int]]:
        with get_session(engine) as session:
            return {c.id: (c.status, c.priority) for c in list_clients(session)}

    return _snapshot


@pytest.fixture
def lanes(engine) -> Callable[[], dict[str, list[tuple[int, int]]]]:
    """Return a function reading each lane as ordered ``[(id, priority)]``."""

    def _lanes() -> dict[str, list[tuple[int, int]]]:
        result: dict[str, list[tuple[int, int]]] = {}
        with get_session(engine) as session:
            for lane in ("backlog", "in-progress", "complete"):
                result[lane] = [(c.id, c.priority) for c in list_clients(session, lane)]
        return result

    return _lanes


@pytest.fixture
def client(board) -> TestClient:
    """Test client over an app built on the seeded test database."""
    app = create_app(board)
    return TestClient(app)

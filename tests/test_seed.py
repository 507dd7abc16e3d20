"""Tests for loading the initial board from a seed file."""

import json
from pathlib import Path

import pytest

from shiptivity.core.errors import SeedDataError
from shiptivity.db.base import get_session
from shiptivity.db.clients import get_client
from shiptivity.db.seed import load_seed_file, seed_clients

SEED_FILE = Path(__file__).resolve().parent.parent / "data" / "clients.json"


def write_seed(tmp_path, rows) -> Path:
    path = tmp_path / "seed.json"
    path.write_text(json.dumps(rows), encoding="utf-8")
    return path


def test_seed_bundled_board(engine, lanes):
    rows = load_seed_file(SEED_FILE)

    assert seed_clients(engine, rows) == 10

    board = lanes()
    assert board["backlog"] == [(3, 1), (6, 2), (7, 3), (8, 4), (10, 5)]
    assert board["in-progress"] == [(1, 1), (4, 2), (5, 3)]
    assert board["complete"] == [(2, 1), (9, 2)]


def test_seed_renumbers_lanes_densely(engine, lanes):
    rows = [
        {"id": 1, "name": "A", "status": "backlog", "priority": 7},
        {"id": 2, "name": "B", "status": "backlog", "priority": 3},
        {"id": 3, "name": "C", "status": "backlog", "priority": 3},
        {"id": 4, "name": "D", "status": "complete", "priority": 4},
    ]

    seed_clients(engine, rows)

    board = lanes()
    # Ties on priority are broken by id
    assert board["backlog"] == [(2, 1), (3, 2), (1, 3)]
    assert board["complete"] == [(4, 1)]
    assert board["in-progress"] == []


def test_seed_skips_non_empty_table(board, snapshot):
    before = snapshot()

    rows = [{"id": 42, "name": "Late", "status": "backlog", "priority": 1}]
    assert seed_clients(board, rows) == 0

    assert snapshot() == before


def test_seed_keeps_description(engine):
    seed_clients(
        engine,
        [{"id": 1, "name": "A", "description": "First", "status": "backlog", "priority": 1}],
    )

    with get_session(engine) as session:
        assert get_client(session, 1).description == "First"


@pytest.mark.parametrize(
    "rows,fragment",
    [
        (
            [
                {"id": 1, "name": "A", "status": "backlog", "priority": 1},
                {"id": 1, "name": "B", "status": "backlog", "priority": 2},
            ],
            "duplicate",
        ),
        ([{"id": 1, "name": "A", "status": "done", "priority": 1}], "invalid status"),
        ([{"id": 1, "name": "A", "status": "backlog", "priority": 0}], "invalid priority"),
        ([{"id": "x", "name": "A", "status": "backlog", "priority": 1}], "invalid id"),
        ([{"id": 1, "status": "backlog", "priority": 1}], "no name"),
        (["not an object"], "must be an object"),
    ],
)
def test_seed_rejects_bad_rows(engine, snapshot, rows, fragment):
    with pytest.raises(SeedDataError) as exc_info:
        seed_clients(engine, rows)

    assert fragment in exc_info.value.long_message
    assert exc_info.value.message == "Invalid seed data."
    assert snapshot() == {}


def test_load_seed_file_invalid_json(tmp_path):
    path = tmp_path / "seed.json"
    path.write_text("[{ broken", encoding="utf-8")

    with pytest.raises(SeedDataError, match="Invalid JSON"):
        load_seed_file(path)


def test_load_seed_file_requires_array(tmp_path):
    path = write_seed(tmp_path, {"id": 1})

    with pytest.raises(SeedDataError, match="JSON array"):
        load_seed_file(path)


def test_load_seed_file_missing(tmp_path):
    with pytest.raises(SeedDataError, match="Cannot read seed file"):
        load_seed_file(tmp_path / "missing.json")

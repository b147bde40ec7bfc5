"""Shared fixtures for the graph builder tests."""

import pytest

from engine.scheduler import ManualScheduler
from graph.store import GraphStore
from main import create_app


@pytest.fixture
def store():
    return GraphStore()


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def app(tmp_path, scheduler):
    app = create_app(
        {"TESTING": True, "SNAPSHOT_PATH": str(tmp_path / "state.json"), "STEP_DELAY": 0.5},
        scheduler=scheduler,
    )
    return app


@pytest.fixture
def client(app):
    return app.test_client()

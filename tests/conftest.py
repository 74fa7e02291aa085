"""
Shared pytest fixtures for the to-do client test suite.

Every fixture that touches the task API uses ``FakeTaskAPI`` in place of a
real ``requests.Session``, so no test needs a live service.  The Flask app
is function-scoped: it owns the cached task view, and a fresh view per test
keeps tests isolated.

Key SDET Concepts Demonstrated:
- Fixture dependencies (fake API -> API client -> sync client -> app)
- Environment variable overrides for deterministic configuration
- Test data generation with Faker
"""

from __future__ import annotations

import os

import pytest
from faker import Faker

os.environ["FLASK_ENV"] = "testing"

from todo_client import create_app
from todo_client.api_client import TaskAPIClient
from todo_client.sync import TaskSyncClient

from .helpers import FakeTaskAPI

TEST_API_URL = "http://task-api"

fake = Faker()


@pytest.fixture
def fake_api() -> FakeTaskAPI:
    """Provide an empty in-memory task API."""
    return FakeTaskAPI()


@pytest.fixture
def api_client(fake_api: FakeTaskAPI) -> TaskAPIClient:
    """Provide a task API client wired to the fake API."""
    return TaskAPIClient(TEST_API_URL, timeout=1, session=fake_api)


@pytest.fixture
def sync_client(api_client: TaskAPIClient) -> TaskSyncClient:
    """Provide a sync client with an empty view."""
    return TaskSyncClient(api_client)


@pytest.fixture
def app(api_client: TaskAPIClient):
    """Provide a testing app whose sync client talks to the fake API."""
    application = create_app("testing", task_api=api_client)
    yield application


@pytest.fixture
def client(app):
    """Provide a Flask test client for a single test."""
    with app.test_client() as test_client:
        yield test_client


@pytest.fixture
def task_text() -> str:
    """Provide a random, non-blank task description."""
    return fake.sentence(nb_words=4)

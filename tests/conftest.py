"""Shared fixtures for datastone tests."""

import pytest

from datastone.backend.sqlite import SQLiteBackend
from datastone.store import BackendFactory, Connection
from datastone.utils.config import config_manager


@pytest.fixture
def backend(tmp_path):
    """SQLite backend on a temporary database file."""
    instance = SQLiteBackend(str(tmp_path / "test.db"))
    yield instance
    instance.close()


@pytest.fixture
def connection(backend):
    return Connection(backend)


@pytest.fixture
def users(connection):
    """Storage bound to the "users" collection."""
    return connection.storage("users")


@pytest.fixture(autouse=True)
def reset_config():
    """Keep configuration and cached backends from leaking between tests."""
    yield
    BackendFactory.reset()
    config_manager.reset()

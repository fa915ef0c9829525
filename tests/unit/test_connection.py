"""Tests for Connection and the backend factory."""

from datastone.backend.sqlite import SQLiteBackend
from datastone.store import BackendFactory, Connection, Storage, connect


class TestConnection:

    def test_wraps_context(self, backend):
        assert Connection(backend).context() is backend

    def test_set_context(self, backend, tmp_path):
        other = SQLiteBackend(str(tmp_path / "other.db"))
        try:
            connection = Connection(backend)
            connection.set_context(other)
            assert connection.context() is other
        finally:
            other.close()

    def test_storage_is_bound(self, connection):
        storage = connection.storage("users")
        assert isinstance(storage, Storage)
        assert storage.name == "users"
        assert storage.conn() is connection

    def test_storage_does_not_touch_backend(self):
        connection = Connection(None)
        assert connection.storage("anything").name == "anything"

    def test_storage_follows_replaced_context(self, backend, tmp_path):
        other = SQLiteBackend(str(tmp_path / "other.db"))
        try:
            connection = Connection(backend)
            storage = connection.storage("users")
            connection.set_context(other)
            key = storage.put({"name": "a"})
            assert other.get(key) == {"name": "a"}
        finally:
            other.close()


class TestFactory:

    def test_connect_uses_configured_path(self, tmp_path):
        db_path = tmp_path / "configured.db"
        connection = connect({"database": {"path": str(db_path)}})
        key = connection.storage("users").put({"name": "a"})

        assert db_path.exists()
        assert connection.storage("users").get(key) == {"name": "a"}

    def test_backends_are_cached_per_configuration(self, tmp_path):
        first = BackendFactory.create_backend(str(tmp_path / "a.db"))
        again = BackendFactory.create_backend(str(tmp_path / "a.db"))
        other = BackendFactory.create_backend(str(tmp_path / "b.db"))
        assert first is again
        assert first is not other

    def test_memory_backends_are_not_shared(self):
        first = BackendFactory.create_backend(":memory:")
        second = BackendFactory.create_backend(":memory:")
        try:
            assert first is not second
        finally:
            first.close()
            second.close()

    def test_env_database_path(self, tmp_path, monkeypatch):
        db_path = tmp_path / "from_env.db"
        monkeypatch.setenv("DATASTONE_DATABASE_PATH", str(db_path))
        connection = connect({})
        connection.storage("users").put({"name": "a"})
        assert db_path.exists()

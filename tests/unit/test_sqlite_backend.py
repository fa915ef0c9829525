"""Tests for the SQLite backend store."""

import pytest

from datastone.backend.base import BackendStoreError, Done, NoSuchEntity
from datastone.backend.key import Key
from datastone.backend.query import BackendQuery
from datastone.backend.sqlite import SQLiteBackend


def _seed(backend, kind="users", records=None):
    records = records or [{"name": "a", "age": 30}, {"name": "b", "age": 20}, {"name": "c", "age": 40}]
    return [backend.put(backend.new_key(kind), record) for record in records]


class TestSetup:

    def test_creates_parent_directory(self, tmp_path):
        db_path = tmp_path / "nested" / "dir" / "store.db"
        backend = SQLiteBackend(str(db_path))
        try:
            assert db_path.exists()
        finally:
            backend.close()

    def test_rejects_directory_path(self, tmp_path):
        with pytest.raises(ValueError):
            SQLiteBackend(str(tmp_path))

    def test_rejects_unknown_journal_mode(self, tmp_path):
        with pytest.raises(ValueError):
            SQLiteBackend(str(tmp_path / "store.db"), journal_mode="FAST")

    def test_memory_database(self):
        backend = SQLiteBackend(":memory:")
        try:
            key = backend.put(backend.new_key("users"), {"name": "a"})
            assert backend.get(key) == {"name": "a"}
        finally:
            backend.close()

    def test_data_survives_reopen(self, tmp_path):
        db_path = str(tmp_path / "store.db")
        first = SQLiteBackend(db_path)
        key = first.put(first.new_key("users"), {"name": "a"})
        first.close()

        second = SQLiteBackend(db_path)
        try:
            assert second.get(key) == {"name": "a"}
        finally:
            second.close()


class TestCrud:

    def test_put_allocates_distinct_ids(self, backend):
        first = backend.put(backend.new_key("users"), {"name": "a"})
        second = backend.put(backend.new_key("users"), {"name": "a"})
        assert not first.incomplete
        assert first != second

    def test_get_missing_entity(self, backend):
        with pytest.raises(NoSuchEntity):
            backend.get(Key("users", 12345))

    def test_get_is_scoped_to_kind(self, backend):
        key = backend.put(backend.new_key("users"), {"name": "a"})
        with pytest.raises(NoSuchEntity):
            backend.get(Key("posts", key.id))

    def test_put_complete_key_overwrites(self, backend):
        key = backend.put(backend.new_key("users"), {"name": "a"})
        assert backend.put(key, {"name": "z"}) == key
        assert backend.get(key) == {"name": "z"}

    def test_put_complete_key_creates(self, backend):
        key = Key("users", 777)
        backend.put(key, {"name": "new"})
        assert backend.get(key) == {"name": "new"}

    def test_put_complete_key_of_other_kind_is_rejected(self, backend):
        key = backend.put(backend.new_key("users"), {"name": "a"})
        with pytest.raises(BackendStoreError):
            backend.put(Key("posts", key.id), {"title": "x"})
        assert backend.get(key) == {"name": "a"}

    @pytest.mark.parametrize("payload", [
        ["not", "an", "object"],
        {"value": object()},
        {"value": float("nan")},
    ])
    def test_put_rejects_invalid_payload(self, backend, payload):
        with pytest.raises(BackendStoreError):
            backend.put(backend.new_key("users"), payload)

    def test_new_key_requires_kind(self, backend):
        with pytest.raises(BackendStoreError):
            backend.new_key("")

    def test_incomplete_key_cannot_address_entity(self, backend):
        with pytest.raises(BackendStoreError):
            backend.get(Key("users"))
        with pytest.raises(BackendStoreError):
            backend.delete(Key("users"))

    def test_delete_is_idempotent(self, backend):
        key = backend.put(backend.new_key("users"), {"name": "a"})
        backend.delete(key)
        backend.delete(key)
        with pytest.raises(NoSuchEntity):
            backend.get(key)

    def test_delete_multi(self, backend):
        keys = _seed(backend)
        backend.delete_multi(keys[:2])
        for key in keys[:2]:
            with pytest.raises(NoSuchEntity):
                backend.get(key)
        assert backend.get(keys[2]) == {"name": "c", "age": 40}

    def test_delete_multi_spans_batches(self, backend):
        keys = _seed(backend, records=[{"n": i} for i in range(1203)])
        backend.delete_multi(keys)
        assert backend.count(BackendQuery("users")) == 0

    def test_operations_after_close_fail(self, tmp_path):
        backend = SQLiteBackend(str(tmp_path / "store.db"))
        backend.close()
        with pytest.raises(BackendStoreError):
            backend.put(Key("users"), {"name": "a"})


class TestQueries:

    def test_query_is_scoped_to_kind(self, backend):
        _seed(backend)
        _seed(backend, kind="posts", records=[{"title": "x"}])
        assert backend.count(BackendQuery("users")) == 3
        assert backend.count(BackendQuery("posts")) == 1
        assert backend.count(BackendQuery("missing")) == 0

    @pytest.mark.parametrize("filter_str, value, expected", [
        ("age =", 30, ["a"]),
        ("age >=", 30, ["a", "c"]),
        ("age >", 30, ["c"]),
        ("age <=", 30, ["a", "b"]),
        ("age <", 30, ["b"]),
        ("name =", "b", ["b"]),
    ])
    def test_filters(self, backend, filter_str, value, expected):
        _seed(backend)
        results = backend.get_all(BackendQuery("users").filter(filter_str, value))
        assert [payload["name"] for _, payload in results] == expected

    def test_filters_are_conjunctive(self, backend):
        _seed(backend)
        query = BackendQuery("users").filter("age >", 20).filter("age <", 40)
        assert [payload["name"] for _, payload in backend.get_all(query)] == ["a"]

    def test_equality_matches_null(self, backend):
        _seed(backend, records=[{"name": None}, {"name": "x"}])
        results = backend.get_all(BackendQuery("users").filter("name =", None))
        assert [payload for _, payload in results] == [{"name": None}]

    def test_equality_with_null_skips_missing_field(self, backend):
        _seed(backend, records=[{"name": None}, {"other": 1}])
        query = BackendQuery("users").filter("name =", None)
        assert backend.count(query) == 1
        assert [payload for _, payload in backend.get_all(query)] == [{"name": None}]

    def test_ordering(self, backend):
        _seed(backend)
        ascending = backend.get_all(BackendQuery("users").order("age"))
        descending = backend.get_all(BackendQuery("users").order("-age"))
        assert [p["age"] for _, p in ascending] == [20, 30, 40]
        assert [p["age"] for _, p in descending] == [40, 30, 20]

    def test_default_order_is_insertion(self, backend):
        keys = _seed(backend)
        assert [key for key, _ in backend.get_all(BackendQuery("users"))] == keys

    def test_limit_and_offset(self, backend):
        _seed(backend)
        query = BackendQuery("users").order("age").with_offset(1).with_limit(1)
        assert [p["name"] for _, p in backend.get_all(query)] == ["a"]
        assert backend.count(query) == 1

    def test_offset_without_limit(self, backend):
        _seed(backend)
        query = BackendQuery("users").with_offset(2)
        assert [p["name"] for _, p in backend.get_all(query)] == ["c"]

    def test_negative_limit_means_unlimited(self, backend):
        _seed(backend)
        assert backend.count(BackendQuery("users").with_limit(-1)) == 3

    def test_keys_only(self, backend):
        keys = _seed(backend)
        results = backend.get_all(BackendQuery("users").with_keys_only())
        assert results == [(key, None) for key in keys]

    def test_field_with_quote_is_rejected(self, backend):
        with pytest.raises(BackendStoreError):
            backend.get_all(BackendQuery("users").filter('na"me =', "a"))


class TestCursor:

    def test_run_yields_results_then_done(self, backend):
        keys = _seed(backend)
        cursor = backend.run(BackendQuery("users"))
        assert [cursor.next()[0] for _ in keys] == keys
        with pytest.raises(Done):
            cursor.next()
        with pytest.raises(Done):
            cursor.next()

    def test_closed_cursor_is_done(self, backend):
        _seed(backend)
        cursor = backend.run(BackendQuery("users"))
        cursor.close()
        with pytest.raises(Done):
            cursor.next()

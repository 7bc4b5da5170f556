"""
Unit tests for the key-value store adapter.
"""

import logging

import pytest

from bookfriends.models import Group
from bookfriends.records import RecordRepository
from bookfriends.storage import (
    GROUPS_KEY,
    RECORDS_KEY,
    FileBackend,
    JsonStore,
    MemoryBackend,
    read_model,
    read_models,
    write_models,
)


class TestJsonStore:
    """Tests for JsonStore over both backends."""

    @pytest.fixture(params=["memory", "file"])
    def any_store(self, request, tmp_path):
        if request.param == "memory":
            return JsonStore(MemoryBackend())
        return JsonStore(FileBackend(tmp_path))

    def test_missing_key_returns_default(self, any_store):
        assert any_store.read("nothing") is None
        assert any_store.read("nothing", []) == []

    def test_write_overwrites_whole_value(self, any_store):
        any_store.write("k", [1, 2, 3])
        any_store.write("k", {"a": 1})

        assert any_store.read("k") == {"a": 1}

    def test_non_ascii_text_survives(self, any_store):
        any_store.write("k", {"genre": "인문/철학/심리학"})

        assert any_store.read("k") == {"genre": "인문/철학/심리학"}

    def test_remove_is_noop_when_absent(self, any_store):
        any_store.remove("never-written")
        any_store.write("k", 1)
        any_store.remove("k")

        assert any_store.read("k", "gone") == "gone"

    def test_corrupt_json_reads_as_default(self, caplog):
        backend = MemoryBackend({"k": "{not json"})
        store = JsonStore(backend)

        with caplog.at_level(logging.WARNING):
            assert store.read("k", []) == []

        assert "not valid JSON" in caplog.text


class TestFileBackend:
    def test_one_file_per_key(self, tmp_path):
        backend = FileBackend(tmp_path / "nested" / "dir")
        backend.set_item("book_groups", "[]")
        backend.set_item("book_session", "{}")

        assert (tmp_path / "nested" / "dir" / "book_groups.json").read_text(encoding="utf-8") == "[]"
        assert backend.keys() == ["book_groups", "book_session"]

    def test_undecodable_file_reads_as_empty(self, tmp_path, caplog):
        (tmp_path / f"{RECORDS_KEY}.json").write_bytes(b"[\xff\xfe]")
        store = JsonStore(FileBackend(tmp_path))

        with caplog.at_level(logging.WARNING):
            assert RecordRepository(store).list_all() == []

        assert RECORDS_KEY in caplog.text

    def test_values_persist_across_instances(self, tmp_path):
        JsonStore(FileBackend(tmp_path)).write("k", ["x"])

        assert JsonStore(FileBackend(tmp_path)).read("k") == ["x"]


class TestModelHelpers:
    def test_invalid_entries_are_skipped(self, store):
        store.write(GROUPS_KEY, [
            {"code": "11111", "name": "Good", "leader_name": "Jun"},
            {"name": "No code"},
        ])

        groups = read_models(store, GROUPS_KEY, Group)

        assert [g.code for g in groups] == ["11111"]

    def test_non_list_collection_reads_empty(self, store):
        store.write(GROUPS_KEY, {"code": "11111"})

        assert read_models(store, GROUPS_KEY, Group) == []

    def test_unreadable_single_value_reads_as_absent(self, store):
        store.write("one", {"name": "missing the rest"})

        assert read_model(store, "one", Group) is None

    def test_unknown_keys_are_ignored(self, store):
        store.write(GROUPS_KEY, [{"code": "1", "name": "n", "leader_name": "l", "color": "red"}])

        assert read_models(store, GROUPS_KEY, Group)[0].code == "1"

    def test_write_models_round_trip(self, store, make_group):
        groups = [make_group(code="11111"), make_group(code="22222", password="pw")]

        write_models(store, GROUPS_KEY, groups)

        assert read_models(store, GROUPS_KEY, Group) == groups

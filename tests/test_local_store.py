"""Tests for the local JSON store."""

import json

from storage.local_store import LocalStore, INVENTORY


class TestLocalStoreRead:
    """Reads never raise."""

    def test_missing_collection_is_empty(self, local_store):
        assert local_store.read(INVENTORY) == []

    def test_corrupt_file_is_empty(self, local_store):
        local_store.path_for(INVENTORY).write_text("{not json", encoding="utf-8")
        assert local_store.read(INVENTORY) == []

    def test_non_list_document_is_empty(self, local_store):
        local_store.path_for(INVENTORY).write_text('{"id": "x"}', encoding="utf-8")
        assert local_store.read(INVENTORY) == []

    def test_prefix_in_file_name(self, local_store):
        assert local_store.path_for(INVENTORY).name == "test_inventory.json"


class TestLocalStoreWrite:
    """Writes replace the whole collection."""

    def test_write_then_read(self, local_store):
        records = [{"id": "a", "name": "Screen"}, {"id": "b", "name": "Battery"}]
        local_store.write(INVENTORY, records)
        assert local_store.read(INVENTORY) == records

    def test_file_is_json_array(self, local_store):
        local_store.write(INVENTORY, [{"id": "a"}])
        with open(local_store.path_for(INVENTORY), encoding="utf-8") as f:
            assert json.load(f) == [{"id": "a"}]

    def test_failed_write_keeps_previous_content(self, local_store):
        local_store.write(INVENTORY, [{"id": "a"}])
        local_store.write(INVENTORY, [{"id": "b", "bad": object()}])

        assert local_store.read(INVENTORY) == [{"id": "a"}]
        leftovers = [p for p in local_store.directory.iterdir() if p.name.endswith(".tmp")]
        assert leftovers == []


class TestUnavailableStore:
    """A store without a usable directory behaves as empty."""

    def test_no_directory(self):
        store = LocalStore(None)
        assert store.available is False
        store.write(INVENTORY, [{"id": "a"}])
        assert store.read(INVENTORY) == []

    def test_unusable_directory(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory", encoding="utf-8")

        store = LocalStore(blocker / "data")
        assert store.available is False
        assert store.read(INVENTORY) == []

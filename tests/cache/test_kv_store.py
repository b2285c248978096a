#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Unit Tests for the key-value stores

Tests cover:
- In-memory store isolation
- JSON file persistence across instances
- Corrupt and unwritable files
"""

import json
import pytest

from textbatch.cache.kv_store import JsonFileStore, MemoryKeyValueStore
from textbatch.errors import PersistenceError


class TestMemoryKeyValueStore:
    """Test the process-local store"""

    def test_get_missing(self):
        assert MemoryKeyValueStore().get("nope") is None

    def test_values_are_copied(self):
        """Mutating a returned value does not change the store"""
        store = MemoryKeyValueStore()
        value = {"stats": {"count": 1}}
        store.set("k", value)
        value["stats"]["count"] = 2

        loaded = store.get("k")
        assert loaded == {"stats": {"count": 1}}
        loaded["stats"]["count"] = 3
        assert store.get("k") == {"stats": {"count": 1}}

    def test_initial_data(self):
        store = MemoryKeyValueStore({"k": [1, 2]})
        assert store.get("k") == [1, 2]


class TestJsonFileStore:
    """Test the JSON document store"""

    def test_missing_file(self, tmp_path):
        """A store without a file has no keys"""
        store = JsonFileStore(tmp_path / "missing.json")
        assert store.get("k") is None

    def test_persists_across_instances(self, tmp_path):
        """Values written by one instance are read by another"""
        path = tmp_path / "nested" / "store.json"
        JsonFileStore(path).set("speed", {"average_speed": 42})

        assert JsonFileStore(path).get("speed") == {"average_speed": 42}
        assert json.loads(path.read_text(encoding="utf-8")) == {"speed": {"average_speed": 42}}

    def test_keys_are_independent(self, tmp_path):
        """Setting one key keeps the others"""
        store = JsonFileStore(tmp_path / "store.json")
        store.set("a", 1)
        store.set("b", 2)
        assert store.get("a") == 1
        assert store.get("b") == 2

    def test_no_temp_file_left(self, tmp_path):
        """The atomic write cleans up after itself"""
        path = tmp_path / "store.json"
        JsonFileStore(path).set("a", 1)
        assert [p.name for p in tmp_path.iterdir()] == ["store.json"]

    def test_corrupt_file(self, tmp_path):
        """Invalid JSON raises PersistenceError"""
        path = tmp_path / "store.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(PersistenceError):
            JsonFileStore(path).get("a")

    def test_non_object_file(self, tmp_path):
        """A JSON document that is not an object raises PersistenceError"""
        path = tmp_path / "store.json"
        path.write_text("[1, 2, 3]", encoding="utf-8")
        with pytest.raises(PersistenceError):
            JsonFileStore(path).get("a")

    def test_unwritable_location(self, tmp_path):
        """A parent path that is a file raises PersistenceError"""
        blocker = tmp_path / "blocker"
        blocker.write_text("x", encoding="utf-8")
        with pytest.raises(PersistenceError):
            JsonFileStore(blocker / "store.json").set("a", 1)

    def test_unserialisable_value(self, tmp_path):
        """Values JSON cannot encode raise PersistenceError"""
        with pytest.raises(PersistenceError):
            JsonFileStore(tmp_path / "store.json").set("a", object())

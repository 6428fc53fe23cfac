#!/usr/bin/env python3
"""Tests for the JSON file and in-memory stores."""

import pytest

from finance_tracker.storage import InMemoryStore, JsonFileStore


@pytest.mark.unit
class TestJsonFileStore:
    """Test JsonFileStore load/save and metadata."""

    def test_missing_key_returns_default(self, temp_dir):
        store = JsonFileStore(temp_dir / "store")
        assert store.load("transactions", []) == []
        assert not store.exists("transactions")
        assert store.summary_text().startswith("No stored data")

    def test_save_then_load(self, temp_dir):
        store = JsonFileStore(temp_dir / "store")
        store.save("transactions", [{"id": "t1", "amount": "1.00"}])
        assert store.exists("transactions")
        assert store.load("transactions") == [{"id": "t1", "amount": "1.00"}]
        assert (temp_dir / "store" / "transactions.json").exists()

    def test_metadata(self, temp_dir):
        store = JsonFileStore(temp_dir)
        store.save("transactions", [{"id": "t1"}, {"id": "t2"}])
        store.save("profile", {"name": "A"})
        assert store.item_count() == 2
        assert store.age_days() == 0
        assert store.size_bytes() > 0
        assert "2 transactions" in store.summary_text()

    def test_invalid_json_raises_value_error(self, temp_dir):
        (temp_dir / "budgets.json").write_text("{not json")
        store = JsonFileStore(temp_dir)
        with pytest.raises(ValueError):
            store.load("budgets")

    @pytest.mark.parametrize("key", ["", "../escape", ".hidden", "a/b"])
    def test_rejects_path_like_keys(self, temp_dir, key):
        with pytest.raises(ValueError):
            JsonFileStore(temp_dir).save(key, [])


@pytest.mark.unit
class TestInMemoryStore:
    """Test InMemoryStore copy semantics."""

    def test_values_are_copied(self):
        store = InMemoryStore()
        value = [{"id": "t1"}]
        store.save("transactions", value)
        value.append({"id": "t2"})
        loaded = store.load("transactions")
        loaded.append({"id": "t3"})
        assert store.load("transactions") == [{"id": "t1"}]
        assert store.save_count == 1

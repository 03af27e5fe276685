"""Tests for the key-value stores."""

import pytest

from bullion.errors import PersistenceError
from bullion.storage import BOOKINGS_KEY, RATES_KEY, InMemoryStore, JsonFileStore


class TestInMemoryStore:
    """Unit tests for InMemoryStore."""

    def test_set_and_get(self):
        store = InMemoryStore()
        store.set("bookings", [{"id": "PM1"}])
        assert store.get("bookings") == [{"id": "PM1"}]

    def test_get_default(self):
        assert InMemoryStore().get("missing", []) == []
        assert InMemoryStore().get("missing") is None

    def test_values_are_copies(self):
        """Mutating a value read from the store does not change what is stored."""
        store = InMemoryStore()
        store.set("bookings", [])
        store.get("bookings").append("x")
        assert store.get("bookings") == []

    def test_unserializable_value_raises(self):
        with pytest.raises(PersistenceError):
            InMemoryStore().set("bad", {"obj": object()})

    def test_remove(self):
        store = InMemoryStore()
        store.set("k", 1)
        store.remove("k")
        store.remove("k")
        assert "k" not in store


class TestJsonFileStore:
    """Unit tests for JsonFileStore."""

    def test_round_trip(self, tmp_path):
        store = JsonFileStore(tmp_path / "state")
        value = {"gold": {"price": 99320.0, "high": 99320.0}}
        store.set(RATES_KEY, value)
        assert (tmp_path / "state" / "currentRates.json").exists()
        assert JsonFileStore(tmp_path / "state").get(RATES_KEY) == value

    def test_missing_key_returns_default(self, tmp_path):
        assert JsonFileStore(tmp_path).get(BOOKINGS_KEY, []) == []

    def test_corrupt_file_moved_aside(self, tmp_path, caplog):
        (tmp_path / "bookings.json").write_text("{not json", encoding="utf-8")
        store = JsonFileStore(tmp_path)
        assert store.get(BOOKINGS_KEY, []) == []
        assert (tmp_path / "bookings.json.corrupt").exists()
        assert not (tmp_path / "bookings.json").exists()
        assert "corrupt" in caplog.text

    def test_no_temp_files_left(self, tmp_path):
        store = JsonFileStore(tmp_path)
        store.set("k", [1, 2, 3])
        store.set("k", [4])
        assert sorted(p.name for p in tmp_path.iterdir()) == ["k.json"]

    def test_unserializable_value_raises(self, tmp_path):
        with pytest.raises(PersistenceError):
            JsonFileStore(tmp_path).set("k", {1, 2})

    def test_unwritable_directory_raises(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("x")
        with pytest.raises(PersistenceError):
            JsonFileStore(blocker / "sub").set("k", 1)

    @pytest.mark.parametrize("key", ["", "../escape", "a/b", ".hidden"])
    def test_invalid_keys(self, tmp_path, key):
        with pytest.raises(PersistenceError):
            JsonFileStore(tmp_path).get(key)

    def test_remove(self, tmp_path):
        store = JsonFileStore(tmp_path)
        store.set("k", 1)
        store.remove("k")
        store.remove("k")
        assert store.get("k") is None

import json
import threading
from pathlib import Path

import pytest

from quickspace.errors import InvalidArgument, NotFoundError
from quickspace.favorites import FavoritesStore
from quickspace.storage import FileStore, MemoryStore


def counter(start: int = 1000):
    """Clock stub that never moves, so id uniqueness comes from the store itself."""
    return lambda: start


def test_create_then_reload_after_restart(tmp_path: Path):
    FavoritesStore(FileStore(tmp_path)).create({"b", "a"})

    reloaded = FavoritesStore(FileStore(tmp_path)).load()

    assert len(reloaded) == 1
    assert reloaded[0].directories == ["a", "b"]
    assert reloaded[0].name == "a, b"


def test_create_returns_the_persisted_favorite():
    store = FavoritesStore(MemoryStore(), clock=counter(42))
    favorite = store.create(["web"])
    assert favorite.id == "42"
    assert store.load() == [favorite]
    assert store.get("42") == favorite


def test_create_with_empty_selection_changes_nothing():
    storage = MemoryStore()
    store = FavoritesStore(storage)
    store.create({"api"})
    before = storage.get("favorites")

    with pytest.raises(InvalidArgument):
        store.create(set())

    assert storage.get("favorites") == before


def test_ids_are_unique_even_with_a_frozen_clock():
    store = FavoritesStore(MemoryStore(), clock=counter(1000))
    ids = [store.create({name}).id for name in ("a", "b", "c")]
    assert ids == ["1000", "1001", "1002"]


def test_ids_move_past_stored_ids():
    payload = json.dumps([{"id": "5000", "name": "old", "directories": ["x"]}])
    store = FavoritesStore(MemoryStore({"favorites": payload}), clock=counter(10))
    assert store.create({"y"}).id == "5001"


def test_rename_keeps_position_and_directories():
    store = FavoritesStore(MemoryStore(), clock=counter())
    first = store.create({"a"})
    second = store.create({"b", "c"})
    third = store.create({"d"})

    store.rename(second.id, "  X  ")

    favorites = store.load()
    assert [f.id for f in favorites] == [first.id, second.id, third.id]
    assert favorites[1].name == "X"
    assert favorites[1].directories == ["b", "c"]


@pytest.mark.parametrize("name", ["", "   ", "\t\n"])
def test_rename_to_blank_is_rejected(name):
    storage = MemoryStore()
    store = FavoritesStore(storage)
    favorite = store.create({"a"})
    before = storage.get("favorites")

    with pytest.raises(InvalidArgument):
        store.rename(favorite.id, name)

    assert storage.get("favorites") == before


def test_rename_unknown_id_raises():
    store = FavoritesStore(MemoryStore())
    with pytest.raises(NotFoundError):
        store.rename("missing", "X")


def test_unicode_names_round_trip(tmp_path: Path):
    store = FavoritesStore(FileStore(tmp_path))
    favorite = store.create({"café", "データ"})
    store.rename(favorite.id, "Café ☕ work")

    reloaded = FavoritesStore(FileStore(tmp_path)).load()[0]

    assert reloaded.name == "Café ☕ work"
    assert reloaded.directories == ["café", "データ"]
    assert "Café ☕ work" in (tmp_path / "favorites.json").read_text(encoding="utf-8")


def test_remove_drops_the_favorite():
    store = FavoritesStore(MemoryStore(), clock=counter())
    keep = store.create({"a"})
    gone = store.create({"b"})

    removed = store.remove(gone.id)

    assert removed == gone
    assert store.load() == [keep]


def test_remove_unknown_id_raises_and_keeps_payload():
    storage = MemoryStore()
    store = FavoritesStore(storage)
    store.create({"a"})
    before = storage.get("favorites")

    with pytest.raises(NotFoundError):
        store.remove("missing")

    assert storage.get("favorites") == before


def test_get_unknown_id_raises():
    with pytest.raises(NotFoundError):
        FavoritesStore(MemoryStore()).get("nope")


@pytest.mark.parametrize("payload", [
    "not json at all",
    "{\"id\": \"1\"}",
    "[{\"id\": \"1\"}]",
    "[{\"id\": \"1\", \"name\": \"x\", \"directories\": []}]",
])
def test_corrupt_payload_loads_as_empty(payload):
    store = FavoritesStore(MemoryStore({"favorites": payload}))
    assert store.load() == []


def test_nothing_stored_loads_as_empty(tmp_path: Path):
    assert FavoritesStore(FileStore(tmp_path)).load() == []


def test_concurrent_creates_do_not_drop_updates():
    store = FavoritesStore(MemoryStore())
    threads = [threading.Thread(target=store.create, args=({f"dir{i}"},)) for i in range(20)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    favorites = store.load()
    assert len(favorites) == 20
    assert len({f.id for f in favorites}) == 20


def test_undecodable_favorites_file_loads_as_empty(tmp_path: Path):
    (tmp_path / "favorites.json").write_bytes(b'[{"id":"1","name":"\xff\xfe","directories":["a"]}]')
    store = FavoritesStore(FileStore(tmp_path))

    assert store.load() == []
    # the next write replaces the unreadable file with a valid one
    created = store.create({"a"})
    assert FavoritesStore(FileStore(tmp_path)).load() == [created]


def test_whitespace_directory_name_can_be_favorited():
    store = FavoritesStore(MemoryStore())

    favorite = store.create({" "})

    assert favorite.name == " "
    assert store.load() == [favorite]


def test_stored_blank_name_does_not_hide_other_favorites():
    payload = json.dumps([
        {"id": "1", "name": " ", "directories": ["a"]},
        {"id": "2", "name": "work", "directories": ["b"]},
    ])
    store = FavoritesStore(MemoryStore({"favorites": payload}))

    assert [f.id for f in store.load()] == ["1", "2"]

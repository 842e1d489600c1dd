import json
import threading

import pytest

from app.db.json_store import DataStores, JsonStore


def test_creates_empty_file(tmp_path):
    store = JsonStore(tmp_path / "nested" / "items.json")
    assert store.path.exists()
    assert json.loads(store.path.read_text()) == []
    assert store.read_all() == []


def test_append_and_read(tmp_path):
    store = JsonStore(tmp_path / "items.json")
    store.append({"id": 1})
    store.append({"id": 2})
    assert [r["id"] for r in store.read_all()] == [1, 2]
    # reprise depuis le disque
    assert JsonStore(tmp_path / "items.json").read_all() == [{"id": 1}, {"id": 2}]


def test_update_failure_leaves_file_untouched(tmp_path):
    store = JsonStore(tmp_path / "items.json")
    store.append({"id": 1})

    def boom(items):
        raise RuntimeError("nope")

    with pytest.raises(RuntimeError):
        store.update(boom)
    assert store.read_all() == [{"id": 1}]
    assert [p.name for p in tmp_path.iterdir()] == ["items.json"]


def test_concurrent_appends_are_not_lost(tmp_path):
    store = JsonStore(tmp_path / "items.json")

    def worker(n):
        for i in range(20):
            store.append({"worker": n, "i": i})

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(store.read_all()) == 160


def test_rejects_non_array_file(tmp_path):
    path = tmp_path / "items.json"
    path.write_text('{"not": "a list"}')
    with pytest.raises(ValueError):
        JsonStore(path).read_all()


def test_data_stores_layout(tmp_path):
    stores = DataStores(tmp_path)
    names = sorted(p.name for p in tmp_path.iterdir())
    assert names == ["activities.json", "problems.json", "uploads.json", "users.json"]
    assert stores.users.read_all() == []

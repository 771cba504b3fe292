import json
from pathlib import Path

import pytest

from habitat_layout.errors import InvalidHabitatError, StorageError
from habitat_layout.storage import InMemoryHabitatStore, JsonFileHabitatStore, save_habitat

PAYLOAD = {
    "config": {"destination": "moon", "crewSize": 4},
    "zones": [{"id": 1, "type": "sleep", "x": 0, "y": 0, "width": 300, "height": 300}],
}


def test_json_store_creates_file(tmp_path: Path):
    path = tmp_path / "data" / "habitats.json"
    store = JsonFileHabitatStore(path)
    assert json.loads(path.read_text()) == []
    assert store.list_all() == []


def test_json_store_appends_in_order(tmp_path: Path):
    store = JsonFileHabitatStore(tmp_path / "habitats.json")
    first = store.append(PAYLOAD)
    second = store.append({**PAYLOAD, "zones": []})
    records = store.list_all()
    assert [record["id"] for record in records] == [first, second]
    assert second > first
    assert records[0]["zones"] == PAYLOAD["zones"]

    reopened = JsonFileHabitatStore(tmp_path / "habitats.json")
    assert len(reopened.list_all()) == 2


def test_json_store_corrupt_file(tmp_path: Path):
    path = tmp_path / "habitats.json"
    path.write_text("{not json")
    store = JsonFileHabitatStore(path)
    with pytest.raises(StorageError):
        store.list_all()
    with pytest.raises(StorageError):
        store.append(PAYLOAD)


def test_save_habitat_returns_record():
    store = InMemoryHabitatStore()
    record = save_habitat(store, PAYLOAD)
    assert record["config"] == PAYLOAD["config"]
    assert store.list_all() == [record]


def test_save_habitat_accepts_empty_zone_list():
    store = InMemoryHabitatStore()
    save_habitat(store, {"config": {"destination": "mars"}, "zones": []})
    assert len(store.list_all()) == 1


@pytest.mark.parametrize(
    "payload",
    [
        None,
        {},
        {"config": PAYLOAD["config"]},
        {"zones": PAYLOAD["zones"]},
        {"config": None, "zones": []},
    ],
)
def test_save_habitat_rejects_malformed(payload):
    store = InMemoryHabitatStore()
    with pytest.raises(InvalidHabitatError):
        save_habitat(store, payload)
    assert store.list_all() == []


def test_store_assigns_its_own_id(tmp_path: Path):
    store = JsonFileHabitatStore(tmp_path / "habitats.json")
    record = save_habitat(store, {"id": 42, **PAYLOAD})
    assert record["id"] != 42
    stored = store.list_all()
    assert [entry["id"] for entry in stored] == [record["id"]]
    assert stored[0]["zones"] == PAYLOAD["zones"]

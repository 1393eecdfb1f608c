import json

import pytest

from whattoeat.domain.FoodItem import FoodItem
from whattoeat.infra.Food_Repository import FoodRepository, decode_foods, encode_foods
from whattoeat.infra.Local_Storage import LocalStorage
from whattoeat.logic.store.food_store import FoodStore
from whattoeat.utilities.exceptions import StorageCorruptedError, StorageError, UnsupportedSchemaError


@pytest.fixture
def storage(tmp_path):
    return LocalStorage(tmp_path / "storage.json")


def test_missing_file_reads_as_empty(storage):
    assert storage.get_item("foods") is None
    assert FoodRepository(storage).read_foods() is None


def test_set_get_keeps_other_keys(storage):
    storage.set_item("foods", "[]")
    storage.set_item("other", "x")
    storage.set_item("foods", "[1]")
    assert storage.get_item("foods") == "[1]"
    assert storage.get_item("other") == "x"


def test_write_leaves_no_temp_files(storage, tmp_path):
    storage.set_item("foods", "[]")
    assert [p.name for p in tmp_path.iterdir()] == ["storage.json"]


def test_legacy_bare_array_loads_and_is_rewritten_versioned(storage):
    storage.set_item("foods", json.dumps([{"id": 1, "name": "豆浆油条", "tags": ["breakfast"]}]))
    store = FoodStore(FoodRepository(storage))
    assert store.foods == [FoodItem(1, "豆浆油条", ["breakfast"])]
    store.add("油饼", ["breakfast"])
    record = json.loads(storage.get_item("foods"))
    assert record["version"] == 1
    assert [f["id"] for f in record["foods"]] == [1, 2]


def test_unknown_version_raises():
    with pytest.raises(UnsupportedSchemaError):
        decode_foods(json.dumps({"version": 99, "foods": []}))


@pytest.mark.parametrize("text", [
    "{not json",
    json.dumps({"version": 1}),
    json.dumps("foods"),
    json.dumps([{"id": 1, "name": "a"}, {"id": 1, "name": "b"}]),
])
def test_malformed_records_raise(text):
    with pytest.raises(StorageCorruptedError):
        decode_foods(text)


def test_corrupt_storage_fails_loudly_instead_of_seeding(storage):
    storage.set_item("foods", "{broken")
    with pytest.raises(StorageCorruptedError):
        FoodStore(FoodRepository(storage))


def test_corrupt_storage_file_raises(tmp_path):
    path = tmp_path / "storage.json"
    path.write_text("not json at all", encoding="utf-8")
    with pytest.raises(StorageCorruptedError):
        LocalStorage(path).get_item("foods")


def test_unwritable_location_raises_storage_error(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    storage = LocalStorage(blocker / "storage.json")
    with pytest.raises(StorageError):
        storage.set_item("foods", "[]")


def test_encode_is_versioned_and_keeps_order():
    foods = [FoodItem(3, "炒饭", ["lunch", "dinner"]), FoodItem(1, "粥", ["breakfast"])]
    record = json.loads(encode_foods(foods))
    assert record == {"version": 1, "foods": [f.to_dict() for f in foods]}
    assert decode_foods(encode_foods(foods)) == foods

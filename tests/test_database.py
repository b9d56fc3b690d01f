# tests/test_database.py
import pytest

from storefront.core import format_ars
from storefront.database import FileStore, MemoryStore, load_json, save_json
from storefront.errors import CorruptPersistedState


def test_file_store_round_trip(tmp_path):
    store = FileStore(tmp_path / "storage")
    assert store.get("ecom_carrito") is None
    assert not (tmp_path / "storage").exists()

    save_json(store, "ecom_carrito", [{"codigo": "T1", "qty": 2}])
    assert (tmp_path / "storage" / "ecom_carrito.json").exists()
    assert load_json(FileStore(tmp_path / "storage"), "ecom_carrito") == [{"codigo": "T1", "qty": 2}]

    store.clear()
    assert store.get("ecom_carrito") is None


def test_save_json_keeps_accents_readable():
    store = MemoryStore()
    save_json(store, "k", {"nombre": "Cámara"})
    assert "Cámara" in store.get("k")


@pytest.mark.parametrize("raw", [None, "", "   "])
def test_load_json_absent_gives_fallback(raw):
    store = MemoryStore() if raw is None else MemoryStore({"k": raw})
    assert load_json(store, "k", fallback=[]) == []


def test_load_json_corrupt_value():
    store = MemoryStore({"k": "{broken"})
    assert load_json(store, "k", fallback="seed") == "seed"
    with pytest.raises(CorruptPersistedState):
        load_json(store, "k", strict=True)


@pytest.mark.parametrize("amount,expected", [
    (0, "$0"),
    (55000, "$55.000"),
    (110000.0, "$110.000"),
    (999.5, "$1.000"),
    (1234567, "$1.234.567"),
])
def test_format_ars(amount, expected):
    assert format_ars(amount) == expected


def test_load_json_undecodable_bytes(tmp_path):
    (tmp_path / "ecom_carrito.json").write_bytes(b"\xff\xfe\x00garbage")
    store = FileStore(tmp_path)
    assert load_json(store, "ecom_carrito", fallback=[]) == []
    with pytest.raises(CorruptPersistedState):
        load_json(store, "ecom_carrito", strict=True)

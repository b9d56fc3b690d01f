# storefront/database.py
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Protocol

from .errors import CorruptPersistedState

# Key-value persistence used by the Catalog and the Cart.

logger = logging.getLogger(__name__)

PRODUCTS_KEY = "ecom_productos"
CART_KEY = "ecom_carrito"


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...


class MemoryStore:
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def clear(self) -> None:
        self._data.clear()


class FileStore:
    """One JSON file per key under ``storage_dir``.

    The directory is created on the first write, so pointing a store at a
    fresh location has no side effects until something is saved.
    """

    def __init__(self, storage_dir):
        self.storage_dir = Path(storage_dir)

    def _file_path(self, key: str) -> Path:
        return self.storage_dir / f"{key}.json"

    def get(self, key: str) -> Optional[str]:
        path = self._file_path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        self.storage_dir.mkdir(parents=True, exist_ok=True)
        self._file_path(key).write_text(value, encoding="utf-8")

    def clear(self) -> None:
        if not self.storage_dir.exists():
            return
        for path in self.storage_dir.glob("*.json"):
            path.unlink()


def save_json(store: KeyValueStore, key: str, data: Any) -> None:
    store.set(key, json.dumps(data, ensure_ascii=False))


def load_json(store: KeyValueStore, key: str, fallback: Any = None, strict: bool = False) -> Any:
    # Missing or blank values give the fallback; undecodable ones too unless strict.
    try:
        raw = store.get(key)
        if raw is None or raw.strip() == "":
            return fallback
        return json.loads(raw)
    except ValueError as e:
        if strict:
            raise CorruptPersistedState(f"{key}: {e}") from e
        logger.warning("Ignoring corrupt value for %s: %s", key, e)
        return fallback

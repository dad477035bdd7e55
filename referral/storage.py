"""KeyValueStore adapters: JSON file and in-memory."""

import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class JsonFileStore:
    """JSON file-backed key-value store. Atomic writes via temp file + replace."""

    def __init__(self, path: Path, namespace: str = "") -> None:
        self._path = path
        self._temp_path = path.with_name(path.name + ".tmp")
        self._namespace = (namespace or "").strip()

    def _ns(self, key: str) -> str:
        return f"{self._namespace}:{key}" if self._namespace else key

    def _load(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
            return data if isinstance(data, dict) else {}
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Unreadable state file %s: %s", self._path, e)
            return {}

    def _save(self, store: dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._temp_path.write_text(
            json.dumps(store, ensure_ascii=False, indent=2), encoding="utf-8"
        )
        self._temp_path.replace(self._path)

    def initialize(self) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)

    async def get(self, key: str) -> str | None:
        value = self._load().get(self._ns(key.strip()))
        return value if isinstance(value, str) else None

    async def set(self, key: str, value: str) -> None:
        store = self._load()
        store[self._ns(key.strip())] = value
        self._save(store)

    async def remove(self, key: str) -> None:
        store = self._load()
        if store.pop(self._ns(key.strip()), None) is not None:
            self._save(store)

    async def close(self) -> None:
        pass


class MemoryStore:
    """Process-local store. Deterministic fake for tests and dry runs."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.data: dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> str | None:
        return self.data.get(key)

    async def set(self, key: str, value: str) -> None:
        self.data[key] = value

    async def remove(self, key: str) -> None:
        self.data.pop(key, None)

    async def close(self) -> None:
        pass

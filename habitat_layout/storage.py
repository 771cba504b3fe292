"""Append-only storage for saved habitat designs."""

from __future__ import annotations

import json
import logging
import threading
import time
from pathlib import Path
from typing import Any, Dict, List, Mapping, Protocol

from .errors import InvalidHabitatError, StorageError

logger = logging.getLogger(__name__)

Record = Dict[str, Any]


class HabitatStore(Protocol):
    """Durable list of saved designs: append and list, nothing else."""

    def append(self, record: Mapping[str, Any]) -> int:
        ...

    def list_all(self) -> List[Record]:
        ...


def _with_id(record_id: int, record: Mapping[str, Any]) -> Record:
    stored: Record = {"id": record_id}
    stored.update((key, value) for key, value in record.items() if key != "id")
    return stored


class _IdSource:
    def __init__(self) -> None:
        self._last = 0

    def next(self) -> int:
        value = max(int(time.time() * 1000), self._last + 1)
        self._last = value
        return value


class InMemoryHabitatStore:
    def __init__(self) -> None:
        self._records: List[Record] = []
        self._ids = _IdSource()
        self._lock = threading.Lock()

    def append(self, record: Mapping[str, Any]) -> int:
        with self._lock:
            record_id = self._ids.next()
            self._records.append(_with_id(record_id, record))
        return record_id

    def list_all(self) -> List[Record]:
        with self._lock:
            return [dict(record) for record in self._records]


class JsonFileHabitatStore:
    """Designs kept as a single JSON array file, rewritten on every append."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self._ids = _IdSource()
        self._lock = threading.Lock()
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            if not self.path.exists():
                self.path.write_text("[]", encoding="utf-8")
        except OSError as exc:
            raise StorageError(f"Cannot initialise habitat store at {self.path}: {exc}") from exc

    def _read(self) -> List[Record]:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise StorageError(str(exc)) from exc
        if not isinstance(data, list):
            raise StorageError(f"{self.path} does not contain a JSON array")
        return data

    def append(self, record: Mapping[str, Any]) -> int:
        with self._lock:
            records = self._read()
            record_id = self._ids.next()
            records.append(_with_id(record_id, record))
            try:
                self.path.write_text(json.dumps(records, indent=2, ensure_ascii=False), encoding="utf-8")
            except (OSError, TypeError, ValueError) as exc:
                raise StorageError(str(exc)) from exc
        logger.info("Saved habitat %s to %s", record_id, self.path)
        return record_id

    def list_all(self) -> List[Record]:
        with self._lock:
            return self._read()


def _blank(value: Any) -> bool:
    # An empty zone list is still a valid design.
    return value is None or value in ("", 0, False)


def save_habitat(store: HabitatStore, payload: Any) -> Record:
    """Check a ``{config, zones}`` payload and append it to the store."""

    if not isinstance(payload, Mapping) or _blank(payload.get("config")) or _blank(payload.get("zones")):
        raise InvalidHabitatError("Invalid habitat data")
    record_id = store.append(payload)
    return _with_id(record_id, payload)

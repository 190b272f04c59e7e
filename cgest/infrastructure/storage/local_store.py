"""
Local JSON record store

Substitui o localStorage do navegador: uma coleção por arquivo
(cgest_<coleção>.json). Toda escrita relê o arquivo, altera e grava de volta
sob um lock por arquivo, com troca atômica (os.replace), para que duas
escritas concorrentes no mesmo processo não se sobrescrevam.
"""
import json
import logging
import os
import threading
from pathlib import Path
from typing import Callable, Generic, Iterable, List, Optional, Type, TypeVar

from pydantic import TypeAdapter

logger = logging.getLogger(__name__)

T = TypeVar("T")

_locks: dict[str, threading.Lock] = {}
_locks_guard = threading.Lock()


def _lock_for(path: Path) -> threading.Lock:
    key = str(path.resolve())
    with _locks_guard:
        return _locks.setdefault(key, threading.Lock())


class LocalRecordStore(Generic[T]):
    def __init__(self, directory: str | Path, collection: str, record_cls: Type[T]):
        self.collection = collection
        self.path = Path(directory) / f"cgest_{collection}.json"
        self._adapter = TypeAdapter(List[record_cls])
        self._lock = _lock_for(self.path)

    def _read(self) -> List[T]:
        if not self.path.exists():
            return []
        raw = self.path.read_text(encoding="utf-8").strip()
        if not raw:
            return []
        return self._adapter.validate_python(json.loads(raw))

    def _write(self, records: List[T]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        tmp_path.write_bytes(self._adapter.dump_json(records, indent=2))
        os.replace(tmp_path, self.path)

    def get(self, record_id: str) -> Optional[T]:
        for record in self._read():
            if record.id == record_id:
                return record
        return None

    def list(self) -> List[T]:
        return self._read()

    def query(self, predicate: Callable[[T], bool]) -> List[T]:
        return [record for record in self._read() if predicate(record)]

    def upsert(self, record: T) -> T:
        with self._lock:
            records = self._read()
            for index, existing in enumerate(records):
                if existing.id == record.id:
                    records[index] = record
                    break
            else:
                records.append(record)
            self._write(records)
        return record

    def delete(self, record_id: str) -> bool:
        with self._lock:
            records = self._read()
            remaining = [r for r in records if r.id != record_id]
            if len(remaining) == len(records):
                return False
            self._write(remaining)
        return True

    def replace_all(self, records: Iterable) -> int:
        """
        Overwrite the whole collection (backup restore).

        Aceita dataclasses ou dicts no formato exportado pelo backup.
        """
        validated = self._adapter.validate_python(list(records))
        with self._lock:
            self._write(validated)
        logger.info("Local store %s replaced with %d record(s)", self.collection, len(validated))
        return len(validated)

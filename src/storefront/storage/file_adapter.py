"""JSON file key-value store.

All keys live in a single JSON object on disk. Writes go to a sibling
temporary file which then replaces the original, so a crash mid-write never
leaves a truncated store behind.
"""

import json
import os
from pathlib import Path

import structlog

from storefront.storage.port import KeyValueStore, StorageError

logger = structlog.get_logger(__name__)


class JsonFileStore(KeyValueStore):
    """Key-value store backed by a JSON file."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def _read_all(self) -> dict[str, str]:
        if not self.path.exists():
            return {}

        try:
            raw = self.path.read_text(encoding="utf-8")
        except OSError as exc:
            raise StorageError(f"Cannot read {self.path}: {exc}") from exc

        if not raw.strip():
            return {}

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise StorageError(f"Invalid JSON in {self.path}: {exc}") from exc

        if not isinstance(data, dict):
            raise StorageError(f"Expected a JSON object in {self.path}")
        return data

    def load(self, key: str) -> str | None:
        value = self._read_all().get(key)
        if value is not None and not isinstance(value, str):
            raise StorageError(f"Value for {key!r} in {self.path} is not a string")
        return value

    def save(self, key: str, value: str) -> None:
        try:
            data = self._read_all()
        except StorageError:
            logger.warning("Overwriting unreadable storage file", path=str(self.path))
            data = {}
        data[key] = value

        tmp_path = self.path.with_name(f".{self.path.name}.tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(json.dumps(data), encoding="utf-8")
            os.replace(tmp_path, self.path)
        except OSError as exc:
            raise StorageError(f"Cannot write {self.path}: {exc}") from exc

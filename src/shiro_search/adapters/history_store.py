"""Key-value persistence for search history."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Protocol

import orjson


logger = logging.getLogger(__name__)


class HistoryStore(Protocol):
    """Storage the engine hands its history to; keys are application-defined namespaces."""

    def load(self, key: str) -> list[str]: ...

    def save(self, key: str, entries: list[str]) -> None: ...


class InMemoryHistoryStore:
    """Dictionary-backed store for tests and embedding hosts without a disk."""

    def __init__(self, initial: dict[str, list[str]] | None = None) -> None:
        self._data: dict[str, list[str]] = {key: list(value) for key, value in (initial or {}).items()}

    def load(self, key: str) -> list[str]:
        return list(self._data.get(key, []))

    def save(self, key: str, entries: list[str]) -> None:
        self._data[key] = list(entries)


class JsonFileHistoryStore:
    """All keys live in one JSON object on disk, rewritten atomically on save."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def load(self, key: str) -> list[str]:
        data = self._read()
        value = data.get(key, [])
        if not isinstance(value, list):
            logger.warning("Ignoring malformed history under %r in %s", key, self.path)
            return []
        return [entry for entry in value if isinstance(entry, str)]

    def save(self, key: str, entries: list[str]) -> None:
        data = self._read()
        data[key] = list(entries)
        self._write(data)

    def _read(self) -> dict:
        try:
            content = self.path.read_bytes()
        except FileNotFoundError:
            return {}
        except OSError as err:
            logger.warning("Failed to read history file %s: %s", self.path, err)
            return {}
        try:
            data = orjson.loads(content) if content.strip() else {}
        except orjson.JSONDecodeError as err:
            logger.warning("Corrupt history file %s, starting empty: %s", self.path, err)
            return {}
        if not isinstance(data, dict):
            logger.warning("History file %s does not hold an object, starting empty", self.path)
            return {}
        return data

    def _write(self, data: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_bytes(orjson.dumps(data, option=orjson.OPT_INDENT_2 | orjson.OPT_SORT_KEYS))
        os.replace(tmp_path, self.path)

# rosterwatch/storage/document_store.py
import asyncio
import copy
import json
import os
from abc import ABC, abstractmethod
from typing import Any

from loguru import logger


class StorageError(Exception):
    """Raised when the durable store cannot be read or written."""

    pass


class DocumentStore(ABC):
    """Key -> JSON document store. Every save overwrites the whole document."""

    async def prepare(self) -> None:
        """Called once per tick before any region is processed."""
        return None

    @abstractmethod
    async def load(self, key: str, default: Any) -> Any:
        """Returns the stored document, or a copy of ``default`` when the key is missing."""
        pass

    @abstractmethod
    async def save(self, key: str, document: Any) -> None:
        pass


class JsonFileStore(DocumentStore):
    """One pretty-printed JSON file per key under ``data_dir``.

    File I/O runs via asyncio.to_thread so notification tasks keep running
    while documents are read and written.
    """

    def __init__(self, data_dir: str):
        self.data_dir = data_dir

    def path_for(self, key: str) -> str:
        return os.path.join(self.data_dir, f"{key}.json")

    async def prepare(self) -> None:
        try:
            await asyncio.to_thread(os.makedirs, self.data_dir, exist_ok=True)
        except OSError as e:
            raise StorageError(f"Cannot create data directory {self.data_dir}: {e}") from e

    async def load(self, key: str, default: Any) -> Any:
        path = self.path_for(key)

        def _do():
            if not os.path.exists(path):
                return None
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)

        try:
            document = await asyncio.to_thread(_do)
        except (OSError, ValueError) as e:
            raise StorageError(f"Failed to read {path}: {e}") from e

        if document is None:
            logger.debug(f"No stored document at {path}, using default.")
            return copy.deepcopy(default)
        return document

    async def save(self, key: str, document: Any) -> None:
        path = self.path_for(key)
        tmp_path = f"{path}.tmp"

        def _do():
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(document, f, indent=2, ensure_ascii=False)
            os.replace(tmp_path, path)

        try:
            await asyncio.to_thread(_do)
        except (OSError, TypeError) as e:
            raise StorageError(f"Failed to write {path}: {e}") from e
        logger.debug(f"Wrote {path}")

from __future__ import annotations

import asyncio
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

Snapshot = Dict[str, Any]


class Persister:
    """Where the in-memory store mirrors its state after each mutation."""

    async def load(self) -> Optional[Snapshot]:
        return None

    async def save(self, snapshot: Snapshot) -> None:
        return None


class NullPersister(Persister):
    """Keeps nothing. The store lives only as long as the process."""


class JsonFilePersister(Persister):
    """Write-through mirror of the store in a single JSON file.

    Failed writes are logged and dropped; the in-memory state stays
    authoritative for the running process.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self._lock = asyncio.Lock()

    async def load(self) -> Optional[Snapshot]:
        if not self.path.exists():
            logger.info("No data file at %s, starting empty", self.path)
            return None
        try:
            text = await asyncio.to_thread(self.path.read_text, encoding="utf-8")
            data = json.loads(text)
        except (OSError, ValueError):
            logger.exception("Could not read data file %s, starting empty", self.path)
            return None
        if not isinstance(data, dict):
            logger.error("Data file %s does not hold a JSON object, starting empty", self.path)
            return None
        return data

    async def save(self, snapshot: Snapshot) -> None:
        text = json.dumps(snapshot, indent=2, ensure_ascii=False)
        # Writes go out one at a time, in the order the mutations happened
        async with self._lock:
            try:
                await asyncio.to_thread(self._write, text)
            except OSError:
                logger.exception("Failed to write data file %s", self.path)

    def _write(self, text: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        tmp_path.write_text(text, encoding="utf-8")
        os.replace(tmp_path, self.path)

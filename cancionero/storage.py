"""
Cancionero - Collection storage

The whole songbook is the unit of persistence: it is read in full at the
start of a request and written back in full after a mutation.  Nothing is
cached between requests and there is no locking, so two concurrent writers
can lose an update.

``JsonFileStorage`` is the production backend.  ``MemoryStorage`` keeps the
same contract in process memory and is meant for tests.
"""

import copy
import json
from pathlib import Path
from typing import Any, List, Optional, Protocol, Sequence

import aiofiles
from loguru import logger

from cancionero.errors import StorageError
from cancionero.models import Song


class SongStorage(Protocol):
    """Load/save access to the full song collection."""

    def exists(self) -> bool: ...

    async def load_all(self) -> List[Song]: ...

    async def save_all(self, songs: Sequence[Song]) -> None: ...


def _songs_from_json(data: Any, source: str) -> List[Song]:
    """
    Wrap a decoded JSON document as a list of songs.

    Records are not checked against a schema.  The document must still be
    an array of objects.
    """
    if not isinstance(data, list):
        raise StorageError(f"{source} does not contain a JSON array")
    for position, item in enumerate(data):
        if not isinstance(item, dict):
            raise StorageError(f"{source} entry {position} is not a JSON object")
    return [Song.model_validate(item) for item in data]


def _songs_to_json(songs: Sequence[Song]) -> List[dict]:
    return [song.to_dict() for song in songs]


# ---------------------------------------------------------------------------
# JSON file backend
# ---------------------------------------------------------------------------
class JsonFileStorage:
    """Song collection persisted as a pretty-printed JSON array on disk."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.exists()

    async def load_all(self) -> List[Song]:
        """
        Read the full collection.

        A missing file is an empty songbook.  Any other read failure or a
        document that is not an array of songs is raised to the caller.
        """
        try:
            async with aiofiles.open(self.path, "r", encoding="utf-8") as f:
                raw = await f.read()
        except FileNotFoundError:
            logger.debug("📂 {} not found, starting with an empty songbook", self.path)
            return []

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise StorageError(f"{self.path} is not valid JSON: {e}") from e

        songs = _songs_from_json(data, str(self.path))
        logger.debug("📂 Loaded {} songs from {}", len(songs), self.path)
        return songs

    async def save_all(self, songs: Sequence[Song]) -> None:
        """Overwrite the file with the full collection (2-space indent)."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        content = json.dumps(_songs_to_json(songs), ensure_ascii=False, indent=2)
        async with aiofiles.open(self.path, "w", encoding="utf-8") as f:
            await f.write(content)
        logger.debug("💾 Saved {} songs to {}", len(songs), self.path)


# ---------------------------------------------------------------------------
# In-memory backend
# ---------------------------------------------------------------------------
class MemoryStorage:
    """Song collection held in memory.  Stores copies, never references."""

    def __init__(self, songs: Optional[Sequence[Song]] = None) -> None:
        self._songs: List[Song] = copy.deepcopy(list(songs or []))
        self.saves = 0

    def exists(self) -> bool:
        return True

    async def load_all(self) -> List[Song]:
        return copy.deepcopy(self._songs)

    async def save_all(self, songs: Sequence[Song]) -> None:
        self._songs = copy.deepcopy(list(songs))
        self.saves += 1

"""
Cancionero - Songbook operations

Each operation loads the full collection from storage, mutates it in
memory and writes it back in full.  Songs are matched by the string form of
their id, so ``5`` and ``"5"`` refer to the same record.

Outcomes the client must see (not found, duplicate id) are raised as
``RepertorioError`` subclasses; storage failures propagate unchanged.
"""

import math
from typing import Any, List, Optional, Sequence, Union

from loguru import logger

from cancionero.errors import DuplicateSongIdError, SongNotFoundError
from cancionero.models import Song, SongId, SongPayload
from cancionero.storage import SongStorage


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def _numeric_id(value: Any) -> float:
    """Numeric value of an id, 0 for ids that are not numbers."""
    if isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def next_id(songs: Sequence[Song]) -> Union[int, float]:
    """Return ``max(id) + 1`` over the collection, or 1 when it is empty."""
    if not songs:
        return 1
    highest = max(_numeric_id(song.id) for song in songs)
    if highest.is_integer():
        return int(highest) + 1
    return highest + 1


def find_index(songs: Sequence[Song], song_id: SongId) -> Optional[int]:
    """Position of the song whose id matches *song_id*, or None."""
    wanted = str(song_id)
    for index, song in enumerate(songs):
        if str(song.id) == wanted:
            return index
    return None


# ---------------------------------------------------------------------------
# Operations
# ---------------------------------------------------------------------------
async def list_songs(storage: SongStorage) -> List[Song]:
    return await storage.load_all()


async def create_song(storage: SongStorage, payload: SongPayload) -> Song:
    """
    Append a new song and persist the collection.

    The client may choose the id; otherwise the next free numeric id is
    assigned.  A client id that is already in use is rejected.
    """
    songs = await storage.load_all()

    if payload.id is not None:
        if find_index(songs, payload.id) is not None:
            raise DuplicateSongIdError()
        song_id: Any = payload.id
    else:
        song_id = next_id(songs)

    song = Song(
        id=song_id,
        titulo=payload.titulo,
        artista=payload.artista,
        tono=payload.tono,
    )
    songs.append(song)
    await storage.save_all(songs)

    logger.info("🎵 Song added (id={}): {} - {}", song.id, song.titulo, song.artista)
    return song


async def update_song(storage: SongStorage, song_id: str, payload: SongPayload) -> Song:
    """Replace the title, artist and key of a song in place.  The id is kept."""
    songs = await storage.load_all()
    index = find_index(songs, song_id)
    if index is None:
        raise SongNotFoundError()

    record = songs[index].to_dict()
    record.update(titulo=payload.titulo, artista=payload.artista, tono=payload.tono)
    updated = Song.model_validate(record)
    songs[index] = updated
    await storage.save_all(songs)

    logger.info("✏️ Song id={} updated", updated.id)
    return updated


async def delete_song(storage: SongStorage, song_id: str) -> Song:
    """Remove a song and return the removed record."""
    songs = await storage.load_all()
    index = find_index(songs, song_id)
    if index is None:
        raise SongNotFoundError()

    removed = songs.pop(index)
    await storage.save_all(songs)

    logger.info("🗑️ Song id={} deleted: {} - {}", removed.id, removed.titulo, removed.artista)
    return removed

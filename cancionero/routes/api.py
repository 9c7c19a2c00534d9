"""
Cancionero - JSON API Routes

Provides the REST endpoints for the songbook:
- List all songs
- Create a song (client-supplied or server-assigned id)
- Update a song's title, artist and key
- Delete a song
- Health check
"""

import time
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Request

from cancionero.config import APP_VERSION, MSG_DELETED
from cancionero.models import DeleteResult, ErrorMessage, SongPayload
from cancionero.services import repertorio
from cancionero.storage import SongStorage

router = APIRouter(tags=["API"])

_BAD_REQUEST = {400: {"model": ErrorMessage}}
_NOT_FOUND = {404: {"model": ErrorMessage}}

# Track startup time for health check
_START_TIME = time.time()


def get_storage(request: Request) -> SongStorage:
    """Resolve the storage backend configured on the application."""
    return request.app.state.storage


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------
@router.get("/health")
async def health_check(storage: SongStorage = Depends(get_storage)):
    """Health check endpoint for the service."""
    return {
        "status": "ok",
        "version": APP_VERSION,
        "uptime_seconds": round(time.time() - _START_TIME, 2),
        "data_file": "ok" if storage.exists() else "missing",
    }


# ---------------------------------------------------------------------------
# Songs CRUD
# ---------------------------------------------------------------------------
@router.get("/canciones")
async def api_list_songs(
    storage: SongStorage = Depends(get_storage),
) -> List[Dict[str, Any]]:
    """Return the full songbook."""
    songs = await repertorio.list_songs(storage)
    return [song.to_dict() for song in songs]


@router.post(
    "/canciones",
    status_code=201,
    responses={**_BAD_REQUEST, 409: {"model": ErrorMessage}},
)
async def api_create_song(
    body: SongPayload,
    storage: SongStorage = Depends(get_storage),
) -> Dict[str, Any]:
    song = await repertorio.create_song(storage, body)
    return song.to_dict()


@router.put("/canciones/{song_id}", responses={**_BAD_REQUEST, **_NOT_FOUND})
async def api_update_song(
    song_id: str,
    body: SongPayload,
    storage: SongStorage = Depends(get_storage),
) -> Dict[str, Any]:
    """
    Update a song's title, artist and key.

    The id always comes from the path; an ``id`` in the body is ignored.
    """
    song = await repertorio.update_song(storage, song_id, body)
    return song.to_dict()


@router.delete("/canciones/{song_id}", responses=_NOT_FOUND)
async def api_delete_song(
    song_id: str,
    storage: SongStorage = Depends(get_storage),
) -> Dict[str, Any]:
    removed = await repertorio.delete_song(storage, song_id)
    return DeleteResult(message=MSG_DELETED, removed=removed.to_dict()).model_dump()

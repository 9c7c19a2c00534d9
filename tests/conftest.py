"""
Cancionero - Pytest Configuration & Shared Fixtures

Provides reusable fixtures for:
- A temporary songbook file and the JSON storage backed by it
- In-memory storage pre-loaded with sample songs
- TestClient instances wired to either backend
"""

import json
from pathlib import Path
from typing import Any, Dict, List

import pytest
from fastapi.testclient import TestClient

from cancionero.main import create_app
from cancionero.models import Song
from cancionero.storage import JsonFileStorage, MemoryStorage

# ---------------------------------------------------------------------------
# Sample data
# ---------------------------------------------------------------------------
SAMPLE_SONGS: List[Dict[str, Any]] = [
    {"id": 2, "titulo": "Bésame Mucho", "artista": "Consuelo Velázquez", "tono": "Dm"},
    {"id": 5, "titulo": "La Bamba", "artista": "Ritchie Valens", "tono": "C"},
    {"id": 3, "titulo": "Cielito Lindo", "artista": "Tradicional", "tono": "G"},
]

NEW_SONG: Dict[str, Any] = {
    "titulo": "Guantanamera",
    "artista": "Joseíto Fernández",
    "tono": "A",
}


def read_songbook(path: Path) -> List[Dict[str, Any]]:
    """Read the backing file as plain JSON."""
    return json.loads(path.read_text(encoding="utf-8"))


def write_songbook(path: Path, songs: List[Dict[str, Any]]) -> None:
    path.write_text(json.dumps(songs, ensure_ascii=False, indent=2), encoding="utf-8")


# ---------------------------------------------------------------------------
# Storage fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def data_path(tmp_path: Path) -> Path:
    """Location of the songbook file; the file itself does not exist yet."""
    return tmp_path / "repertorio.json"


@pytest.fixture
def seeded_data_path(data_path: Path) -> Path:
    """Songbook file pre-populated with SAMPLE_SONGS."""
    write_songbook(data_path, SAMPLE_SONGS)
    return data_path


@pytest.fixture
def sample_songs() -> List[Song]:
    return [Song.model_validate(s) for s in SAMPLE_SONGS]


@pytest.fixture
def memory_storage(sample_songs: List[Song]) -> MemoryStorage:
    return MemoryStorage(sample_songs)


# ---------------------------------------------------------------------------
# Client fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def client(data_path: Path) -> TestClient:
    """Client over an empty (absent) songbook file."""
    app = create_app(storage=JsonFileStorage(data_path), public_dir=None)
    return TestClient(app)


@pytest.fixture
def seeded_client(seeded_data_path: Path) -> TestClient:
    """Client over a songbook file holding SAMPLE_SONGS."""
    app = create_app(storage=JsonFileStorage(seeded_data_path), public_dir=None)
    return TestClient(app)

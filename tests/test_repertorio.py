"""
Cancionero - Songbook Operation Tests

Tests for cancionero/services/repertorio.py, run against MemoryStorage:
- next_id / find_index helpers
- create / update / delete semantics and the errors they raise
"""

import asyncio

import pytest

from cancionero.errors import DuplicateSongIdError, SongNotFoundError
from cancionero.models import Song, SongPayload
from cancionero.services import repertorio
from cancionero.storage import MemoryStorage


def _song(song_id, titulo="T") -> Song:
    return Song(id=song_id, titulo=titulo, artista="A", tono="C")


def _payload(**overrides) -> SongPayload:
    data = {"titulo": "Guantanamera", "artista": "Joseíto Fernández", "tono": "A"}
    data.update(overrides)
    return SongPayload(**data)


# ===========================================================================
# Helpers
# ===========================================================================


class TestNextId:
    def test_empty_collection(self):
        assert repertorio.next_id([]) == 1

    def test_max_plus_one_regardless_of_order(self):
        assert repertorio.next_id([_song(2), _song(5), _song(3)]) == 6

    def test_numeric_string_ids_count(self):
        assert repertorio.next_id([_song("7"), _song(3)]) == 8

    def test_non_numeric_ids_count_as_zero(self):
        assert repertorio.next_id([_song("abc")]) == 1
        assert repertorio.next_id([_song("abc"), _song(4)]) == 5

    def test_negative_ids(self):
        assert repertorio.next_id([_song(-5)]) == -4

    def test_fractional_ids(self):
        assert repertorio.next_id([_song("2.5"), _song(1)]) == 3.5

    def test_missing_ids_count_as_zero(self):
        assert repertorio.next_id([_song(None)]) == 1


class TestFindIndex:
    def test_number_matches_string(self):
        assert repertorio.find_index([_song(1), _song(7)], "7") == 1

    def test_string_matches_number(self):
        assert repertorio.find_index([_song("7")], 7) == 0

    def test_missing(self):
        assert repertorio.find_index([_song(1)], "2") is None

    def test_first_match_wins(self):
        assert repertorio.find_index([_song(4, "a"), _song("4", "b")], "4") == 0


# ===========================================================================
# Operations
# ===========================================================================


class TestCreateSong:
    def test_assigns_next_id(self, memory_storage):
        song = asyncio.run(repertorio.create_song(memory_storage, _payload()))
        assert song.id == 6
        stored = asyncio.run(memory_storage.load_all())
        assert stored[-1] == song

    def test_keeps_client_id(self):
        storage = MemoryStorage()
        song = asyncio.run(repertorio.create_song(storage, _payload(id=42)))
        assert song.id == 42

    def test_duplicate_client_id_rejected(self, memory_storage):
        with pytest.raises(DuplicateSongIdError):
            asyncio.run(repertorio.create_song(memory_storage, _payload(id="5")))
        assert len(asyncio.run(memory_storage.load_all())) == 3
        assert memory_storage.saves == 0


class TestUpdateSong:
    def test_replaces_fields_keeps_id(self, memory_storage):
        song = asyncio.run(
            repertorio.update_song(memory_storage, "5", _payload(id=99))
        )
        assert song.id == 5
        assert song.titulo == "Guantanamera"
        stored = asyncio.run(memory_storage.load_all())
        assert [s.id for s in stored] == [2, 5, 3]
        assert stored[1].tono == "A"

    def test_not_found(self, memory_storage):
        with pytest.raises(SongNotFoundError):
            asyncio.run(repertorio.update_song(memory_storage, "404", _payload()))
        assert memory_storage.saves == 0


class TestDeleteSong:
    def test_removes_one_record(self, memory_storage):
        removed = asyncio.run(repertorio.delete_song(memory_storage, "2"))
        assert removed.titulo == "Bésame Mucho"
        stored = asyncio.run(memory_storage.load_all())
        assert [s.id for s in stored] == [5, 3]

    def test_not_found(self, memory_storage):
        with pytest.raises(SongNotFoundError):
            asyncio.run(repertorio.delete_song(memory_storage, "99"))
        assert memory_storage.saves == 0

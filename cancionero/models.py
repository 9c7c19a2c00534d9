"""
Cancionero - Data models

Pydantic models for the songbook records and for the request/response
bodies of the API.
"""

from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

SongId = Union[int, str]


class Song(BaseModel):
    """
    A single songbook entry as stored in the backing file.

    Stored records are taken as they are: fields may be missing or hold any
    JSON value, and unknown keys are kept.  Only the request body
    (``SongPayload``) is validated.
    """

    model_config = ConfigDict(extra="allow")

    id: Any = None
    titulo: Any = None
    artista: Any = None
    tono: Any = None

    def to_dict(self) -> Dict[str, Any]:
        """The record as written to disk: only the keys it actually has."""
        data = {
            name: getattr(self, name)
            for name in type(self).model_fields
            if name in self.model_fields_set
        }
        data.update(self.model_extra or {})
        return data


class SongPayload(BaseModel):
    """Body of ``POST /canciones`` and ``PUT /canciones/{id}``."""

    id: Optional[SongId] = None
    titulo: str = Field(min_length=1)
    artista: str = Field(min_length=1)
    tono: str = Field(min_length=1)


class DeleteResult(BaseModel):
    message: str
    removed: Dict[str, Any]


class ErrorMessage(BaseModel):
    message: str

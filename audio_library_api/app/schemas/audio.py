"""
Pydantic schemas for audio entries.

An audio entry has a title, a genre, the audio file itself and a cover
image.  Both binary fields travel as base64 encoded strings under the
``audioFile`` and ``imageFile`` keys.  Entries are created and updated
through multipart forms, so only response models are defined here.
"""

import base64
from typing import Any, Mapping

from pydantic import BaseModel, Field


def encode_blob(data: bytes) -> str:
    """Encode binary column data for JSON transport."""
    return base64.b64encode(data).decode("ascii")


class AudioRead(BaseModel):
    """Schema for reading an audio entry."""

    id: int
    title: str
    genre: str
    image_file: str = Field(..., alias="imageFile", description="Base64 encoded cover image")
    audio_file: str = Field(..., alias="audioFile", description="Base64 encoded audio file")

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "AudioRead":
        """Build the schema from a row of the ``audio`` table."""
        return cls(
            id=row["id"],
            title=row["title"],
            genre=row["genre"],
            imageFile=encode_blob(row["image_file"]),
            audioFile=encode_blob(row["audio_file"]),
        )


class AudioDeleted(BaseModel):
    """Acknowledgment returned by the delete endpoint."""

    message: str = "Audio entry deleted successfully"

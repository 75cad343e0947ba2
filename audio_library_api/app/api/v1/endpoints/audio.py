"""
Audio endpoints for API v1.

These routes expose a CRUD API for audio entries.  Entries are created
and updated with multipart forms: uploads are read completely into
memory here and handed to ``AudioService`` as plain bytes, together
with the ``title`` and ``genre`` form fields.  Identifiers are taken
from the path as raw strings because validating them is the
service's job; invalid ones are answered with HTTP 400.

Errors raised by the service are rendered as ``{"error": message}`` by
the exception handler registered in ``main.create_app``.
"""

from typing import List, Optional, Union

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile

from audio_library_api.app.schemas.audio import AudioDeleted, AudioRead
from audio_library_api.app.services.audio_service import AudioService

router = APIRouter()


def get_audio_service(request: Request) -> AudioService:
    """Return the service instance created by the application lifespan."""
    return request.app.state.audio_service


async def read_upload(upload: Union[UploadFile, str, None]) -> Optional[bytes]:
    """Return the content of an uploaded file, or ``None`` if it was not sent.

    A plain text part under a file field name is not a file upload and
    counts as not sent.
    """
    if upload is None or isinstance(upload, str):
        return None
    try:
        return await upload.read()
    finally:
        await upload.close()


@router.get("/audio", response_model=List[AudioRead])
async def list_audio(service: AudioService = Depends(get_audio_service)) -> List[AudioRead]:
    """Return every audio entry, including both binary fields."""
    return await service.list_entries()


@router.get("/audio/{audio_id}", response_model=AudioRead)
async def get_audio(audio_id: str, service: AudioService = Depends(get_audio_service)) -> AudioRead:
    """Retrieve a single audio entry by ID."""
    return await service.get_entry(audio_id)


@router.post("/audio", response_model=AudioRead)
async def create_audio(
    audio_file: Union[UploadFile, str, None] = File(None, alias="audioFile"),
    image_file: Union[UploadFile, str, None] = File(None, alias="imageFile"),
    title: Optional[str] = Form(None),
    genre: Optional[str] = Form(None),
    service: AudioService = Depends(get_audio_service),
) -> AudioRead:
    """Create a new audio entry.

    ``audioFile``, ``title`` and ``genre`` are required; when
    ``imageFile`` is omitted the default cover image is stored.
    """
    return await service.create_entry(
        audio_file=await read_upload(audio_file),
        image_file=await read_upload(image_file),
        title=title,
        genre=genre,
    )


@router.put("/audio/{audio_id}", response_model=AudioRead)
async def update_audio(
    audio_id: str,
    image_file: Union[UploadFile, str, None] = File(None, alias="imageFile"),
    title: Optional[str] = Form(None),
    genre: Optional[str] = Form(None),
    service: AudioService = Depends(get_audio_service),
) -> AudioRead:
    """Update the cover image, title or genre of an entry.

    The audio file itself cannot be replaced.
    """
    return await service.update_entry(
        audio_id,
        image_file=await read_upload(image_file),
        title=title,
        genre=genre,
    )


@router.delete("/audio/{audio_id}", response_model=AudioDeleted)
async def delete_audio(audio_id: str, service: AudioService = Depends(get_audio_service)) -> AudioDeleted:
    """Delete an audio entry.  Deleting a missing entry also succeeds."""
    return await service.delete_entry(audio_id)

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from audio_library_api.app.core.config import Settings
from audio_library_api.app.main import create_app

DEFAULT_IMAGE = b"\xff\xd8\xff\xe0default-cover\xff\xd9"


@pytest.fixture
def default_image_path(tmp_path: Path) -> Path:
    path = tmp_path / "default-image.jpg"
    path.write_bytes(DEFAULT_IMAGE)
    return path


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "audio.db"


@pytest.fixture
def test_settings(db_path: Path, default_image_path: Path) -> Settings:
    return Settings(
        database_url=str(db_path),
        default_image_path=str(default_image_path),
        api_prefix="",
    )


@pytest.fixture
def client(test_settings: Settings):
    # Entering the client runs the lifespan, which opens the store.
    with TestClient(create_app(test_settings)) as test_client:
        yield test_client


@pytest.fixture
def create_entry(client: TestClient):
    """Post a multipart create request and return the response."""

    def _create(title="Riff", genre="Jazz", audio=b"ID3-audio-bytes", image=None):
        files = {}
        if audio is not None:
            files["audioFile"] = ("riff.mp3", audio, "audio/mpeg")
        if image is not None:
            files["imageFile"] = ("cover.png", image, "image/png")
        data = {}
        if title is not None:
            data["title"] = title
        if genre is not None:
            data["genre"] = genre
        return client.post("/audio", data=data, files=files or None)

    return _create

"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields, so the
service starts with no configuration at all: the database is written
to ``app.db`` and the fallback cover image is read from
``assets/default-image.jpg``, both relative to the package directory.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

# Directory of the ``audio_library_api`` package.  Relative paths in the
# settings are resolved against it.
BASE_DIR = Path(__file__).resolve().parent.parent.parent


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Audio Library API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: Optional[str] = os.getenv("LOG_FILE") or None

    # Prefix under which the ``/audio`` routes are mounted.  Empty by
    # default so that the routes live at ``/audio``.
    api_prefix: str = os.getenv("API_PREFIX", "")

    # Path to the SQLite database file.  Can be overridden via the
    # ``DATABASE_URL`` environment variable.
    database_url: str = os.getenv("DATABASE_URL", "app.db")

    # Image substituted when an entry is created without ``imageFile``.
    default_image_path: str = os.getenv("DEFAULT_IMAGE_PATH", "assets/default-image.jpg")

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8000"))


def resolve_path(path: str) -> str:
    """Return ``path`` unchanged if absolute, else resolve it against ``BASE_DIR``."""
    if os.path.isabs(path):
        return path
    return str((BASE_DIR / path).resolve())


def get_database_path(config: Optional[Settings] = None) -> str:
    """Compute the path to the SQLite database file.

    The special value ``:memory:`` is passed through untouched.
    """
    db_url = (config or settings).database_url
    if db_url == ":memory:":
        return db_url
    return resolve_path(db_url)


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# should be set before importing this module.
settings = Settings()

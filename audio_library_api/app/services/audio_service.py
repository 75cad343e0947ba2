"""
Service layer for audio entries.

``AudioService`` implements listing, retrieval, creation, update and
deletion of entries on top of an ``AudioStore``.  All request
validation happens here and completes before the store is touched:

* identifiers coming from the URL path must be positive integers;
* creation requires an audio upload, then a title, then a genre, and
  reports the first missing one;
* a missing cover image at creation is replaced by the fallback image.

A text field counts as supplied only when it is present and non-empty,
so an empty ``title`` or ``genre`` is treated exactly like an absent
one.  Every operation is a sequence of awaited store calls; nothing is
retried and store errors propagate as ``StorageFailure``.
"""

from __future__ import annotations

import logging
import re
from decimal import Decimal
from typing import Any, Dict, List, Optional

from audio_library_api.app.core.assets import DefaultImageProvider
from audio_library_api.app.core.db import AudioStore
from audio_library_api.app.core.errors import (
    InvalidIdentifier,
    MissingAudio,
    MissingGenre,
    MissingTitle,
    NotFound,
)
from audio_library_api.app.schemas.audio import AudioDeleted, AudioRead, encode_blob

logger = logging.getLogger(__name__)

# SQLite rowids are signed 64-bit integers.
MAX_IDENTIFIER = 2**63 - 1

INTEGER_TOKEN = re.compile(r"[+-]?\d+", re.ASCII)
NUMERIC_TOKEN = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


def parse_identifier(raw: Optional[str]) -> int:
    """Convert a path token into a positive integer identifier.

    The token must be a decimal number (``"12"``, ``"12.0"`` and
    ``"1e2"`` all qualify) with an integral value between 1 and the
    largest SQLite rowid.  Plain integer tokens are converted exactly,
    without a round trip through ``float``.  Anything else raises
    ``InvalidIdentifier``.
    """
    token = raw.strip() if raw is not None else ""
    if INTEGER_TOKEN.fullmatch(token):
        value = int(token)
    elif NUMERIC_TOKEN.fullmatch(token):
        number = Decimal(token)
        if number <= 0 or number > MAX_IDENTIFIER or number != number.to_integral_value():
            raise InvalidIdentifier()
        value = int(number)
    else:
        raise InvalidIdentifier()
    if not 0 < value <= MAX_IDENTIFIER:
        raise InvalidIdentifier()
    return value


def is_supplied(value: Optional[str]) -> bool:
    """A form field is supplied when it is present and not empty."""
    return bool(value)


class AudioService:
    """Validation and persistence for audio entries."""

    def __init__(self, store: AudioStore, default_image: DefaultImageProvider) -> None:
        self.store = store
        self.default_image = default_image

    async def list_entries(self) -> List[AudioRead]:
        """Return every entry in the order the store yields them."""
        rows = await self.store.fetch_all()
        return [AudioRead.from_row(row) for row in rows]

    async def get_entry(self, raw_id: Optional[str]) -> AudioRead:
        """Return a single entry; raises ``NotFound`` if it does not exist."""
        audio_id = parse_identifier(raw_id)
        row = await self.store.fetch_one(audio_id)
        if row is None:
            raise NotFound()
        return AudioRead.from_row(row)

    async def create_entry(
        self,
        audio_file: Optional[bytes],
        image_file: Optional[bytes],
        title: Optional[str],
        genre: Optional[str],
    ) -> AudioRead:
        """Validate the upload and insert a new entry.

        The returned record is built from the inputs and the identifier
        assigned by the store; it is not re-read.
        """
        if audio_file is None:
            raise MissingAudio()
        if not is_supplied(title):
            raise MissingTitle()
        if not is_supplied(genre):
            raise MissingGenre()
        if image_file is None:
            image_file = self.default_image.load()

        audio_id = await self.store.insert(title, genre, audio_file, image_file)
        logger.info("Created audio entry %s (%r, %r)", audio_id, title, genre)
        return AudioRead(
            id=audio_id,
            title=title,
            genre=genre,
            imageFile=encode_blob(image_file),
            audioFile=encode_blob(audio_file),
        )

    async def update_entry(
        self,
        raw_id: Optional[str],
        image_file: Optional[bytes],
        title: Optional[str],
        genre: Optional[str],
    ) -> AudioRead:
        """Replace the supplied fields of an entry and return its current state.

        Fields that are not supplied are left untouched.  When nothing
        is supplied no write happens.  Existence is checked on the
        read that follows the write, so updating a missing entry
        raises ``NotFound`` without the write itself failing.
        """
        audio_id = parse_identifier(raw_id)
        fields: Dict[str, Any] = {}
        if image_file is not None:
            fields["image_file"] = image_file
        if is_supplied(title):
            fields["title"] = title
        if is_supplied(genre):
            fields["genre"] = genre

        if fields:
            affected = await self.store.update(audio_id, fields)
            logger.info("Updated audio entry %s: %s (%d row(s))", audio_id, sorted(fields), affected)

        row = await self.store.fetch_one(audio_id)
        if row is None:
            raise NotFound()
        return AudioRead.from_row(row)

    async def delete_entry(self, raw_id: Optional[str]) -> AudioDeleted:
        """Delete an entry.

        Succeeds whether or not the entry existed; the two cases are
        only told apart in the log.
        """
        audio_id = parse_identifier(raw_id)
        affected = await self.store.delete(audio_id)
        if affected:
            logger.info("Deleted audio entry %s", audio_id)
        else:
            logger.info("Delete requested for missing audio entry %s", audio_id)
        return AudioDeleted()

"""Fallback image used for entries created without an ``imageFile``."""

import logging
from pathlib import Path
from typing import Optional

from .errors import AudioServiceError

logger = logging.getLogger(__name__)


class DefaultImageProvider:
    """Read the fallback image from disk once and hand out its bytes."""

    def __init__(self, path: str) -> None:
        self.path = Path(path)
        self._data: Optional[bytes] = None

    def load(self) -> bytes:
        if self._data is None:
            try:
                self._data = self.path.read_bytes()
            except OSError as exc:
                raise AudioServiceError(f"Default image unavailable: {exc}") from exc
            logger.debug("Loaded default image %s (%d bytes)", self.path, len(self._data))
        return self._data

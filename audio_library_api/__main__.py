"""Run the Audio Library API with uvicorn.

Host and port are read from the ``HOST`` and ``PORT`` environment
variables (defaults ``0.0.0.0`` and ``8000``).

Usage:
    python -m audio_library_api
"""

from uvicorn import Config, Server

from audio_library_api.app.core.config import settings
from audio_library_api.app.main import app


def main() -> None:
    config = Config(app=app, host=settings.host, port=settings.port, reload=False, log_level=settings.log_level.lower())
    Server(config).run()


if __name__ == "__main__":
    main()

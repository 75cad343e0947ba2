"""
Top‑level package for the Audio Library API.

This file makes ``audio_library_api`` a Python package so that
modules within ``app`` can be imported using fully qualified names
like ``audio_library_api.app.main``.  The package also ships the
``assets`` directory holding the fallback cover image.

The package provides no public exports; all functionality lives in
submodules under ``app``.
"""

__all__ = []

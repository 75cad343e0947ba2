"""
Application package initializer.

This package contains the main entrypoint for the API and its
submodules.  Configuration, logging, storage and the error taxonomy
live in ``core``; request/response models in ``schemas``; the
validation and persistence logic in ``services``; and the HTTP routes
in ``api/v1/endpoints``.
"""

from .main import app  # noqa: F401

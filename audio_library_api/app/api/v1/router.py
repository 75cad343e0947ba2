"""
Top‑level router for version 1 of the API.

When new resources are introduced, include their routers here.
"""

from fastapi import APIRouter

from .endpoints import audio

router = APIRouter()

# The audio router defines its own "/audio" paths internally.
router.include_router(audio.router, tags=["audio"])

"""
Pydantic schema definitions for API payloads.

Schemas are separated from the storage layer so that the wire
representation (camelCase keys, base64 encoded blobs) is decoupled
from the column layout of the ``audio`` table.
"""

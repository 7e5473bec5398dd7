"""Media types for raw script responses."""
from __future__ import annotations

DEFAULT_CONTENT_TYPE = "text/plain"

CONTENT_TYPES = {
    ".html": "text/html",
    ".css": "text/css",
    ".js": "application/javascript",
    ".json": "application/json",
    ".xml": "application/xml",
}


def resolve(filename: str | None) -> str:
    if not filename:
        return DEFAULT_CONTENT_TYPE
    lowered = filename.lower()
    for suffix, content_type in CONTENT_TYPES.items():
        if lowered.endswith(suffix):
            return content_type
    return DEFAULT_CONTENT_TYPE

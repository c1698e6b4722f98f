"""Image helpers used by the infrastructure layer."""
from __future__ import annotations

import base64

import fitz  # type: ignore

from docusort.constants import IMAGE_MIME


def image_size(data: bytes) -> tuple[int, int]:
    """Return ``(width, height)`` in pixels of an encoded image."""

    pixmap = fitz.Pixmap(data)
    return pixmap.width, pixmap.height


def image_to_data_url(data: bytes, mime_type: str = IMAGE_MIME) -> str:
    """Convert raw image bytes to a data URL suitable for OpenAI Vision."""

    encoded = base64.b64encode(data).decode("utf-8")
    return f"data:{mime_type};base64,{encoded}"

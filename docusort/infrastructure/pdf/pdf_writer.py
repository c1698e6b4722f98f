"""Builds paginated PDFs from page images."""
from __future__ import annotations

import logging
from typing import Iterable

import fitz  # type: ignore

from docusort.constants import EXPORT_PAGE_HEIGHT, EXPORT_PAGE_WIDTH

from .image_processor import image_size

logger = logging.getLogger(__name__)


class PdfWriter:
    """One PDF page per image; the image spans the page width and keeps its aspect ratio."""

    def __init__(self, *, page_width: float = EXPORT_PAGE_WIDTH, page_height: float = EXPORT_PAGE_HEIGHT) -> None:
        self._page_width = page_width
        self._page_height = page_height

    def write(self, images: Iterable[bytes]) -> bytes:
        document = fitz.open()
        try:
            for image in images:
                width, height = image_size(image)
                if width <= 0 or height <= 0:
                    raise ValueError("image has no pixels")
                page = document.new_page(width=self._page_width, height=self._page_height)
                target_height = height * self._page_width / width
                page.insert_image(fitz.Rect(0, 0, self._page_width, target_height), stream=image)
            if document.page_count == 0:
                raise ValueError("cannot write a PDF without pages")
            payload = document.tobytes()
            logger.debug("Wrote PDF with %s pages (%s bytes)", document.page_count, len(payload))
            return payload
        finally:
            document.close()

"""PDF rendering utilities for the infrastructure layer."""
from __future__ import annotations

import logging
from typing import Any, Optional

import fitz  # type: ignore

from docusort.constants import DEFAULT_JPEG_QUALITY, DEFAULT_RENDER_SCALE

logger = logging.getLogger(__name__)


class RenderedDocument:
    """An opened PDF that renders its pages to JPEG bytes one at a time."""

    def __init__(self, name: str, document: Any, *, jpeg_quality: int = DEFAULT_JPEG_QUALITY) -> None:
        self.name = name
        self._document = document
        self._jpeg_quality = jpeg_quality

    @property
    def page_count(self) -> int:
        return self._document.page_count

    def render_page(self, index: int, scale: float = DEFAULT_RENDER_SCALE) -> bytes:
        """Render the page at 0-based ``index``."""

        if index < 0 or index >= self.page_count:
            raise IndexError(f"page index {index} out of range for {self.name}")
        page = self._document.load_page(index)
        matrix = fitz.Matrix(scale, scale)
        pixmap = page.get_pixmap(matrix=matrix, alpha=False)
        return pixmap.tobytes("jpg", jpg_quality=self._jpeg_quality)

    def close(self) -> None:
        if self._document is not None:
            self._document.close()
            self._document = None

    def __enter__(self) -> "RenderedDocument":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


class PdfRenderer:
    """Opens uploaded PDFs held in memory."""

    def __init__(self, *, jpeg_quality: int = DEFAULT_JPEG_QUALITY) -> None:
        self._jpeg_quality = jpeg_quality

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def open(self, data: bytes, name: Optional[str] = None) -> RenderedDocument:
        """Open ``data`` as a PDF; PyMuPDF errors propagate unchanged."""

        if not data:
            raise ValueError(f"{name or 'document'} is empty")
        document = fitz.open(stream=data, filetype="pdf")
        logger.debug("Opened %s with %s pages", name, document.page_count)
        return RenderedDocument(name or "document", document, jpeg_quality=self._jpeg_quality)

"""PDF infrastructure utilities."""

from .pdf_renderer import PdfRenderer, RenderedDocument
from .pdf_writer import PdfWriter
from .image_processor import image_size, image_to_data_url

__all__ = ["PdfRenderer", "PdfWriter", "RenderedDocument", "image_size", "image_to_data_url"]

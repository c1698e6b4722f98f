"""Archive infrastructure."""

from .zip_writer import ZipArchiveWriter

__all__ = ["ZipArchiveWriter"]

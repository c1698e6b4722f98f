"""Export modes offered for a page selection."""
from __future__ import annotations

from enum import Enum


class ExportMode(str, Enum):
    MERGED = "Merged"
    SEPARATED = "Separated"
    IMAGES_ONLY = "ImagesOnly"

from __future__ import annotations

# Single source of truth for static constants.

# Storage key of the serialized history list; bump the suffix on breaking shape changes.
HISTORY_STORAGE_KEY = "docusort_history_v1"
HISTORY_LIMIT = 50

CLASSIFICATION_WINDOW_SIZE = 3

# Sub-category markers written when the classification oracle gives no usable answer.
UNKNOWN_SUB_CATEGORY = "Unknown"
ERROR_SUB_CATEGORY = "Error"

DEFAULT_RENDER_SCALE = 1.5
DEFAULT_JPEG_QUALITY = 85
IMAGE_MIME = "image/jpeg"

# A4 portrait in PDF points.
EXPORT_PAGE_WIDTH = 595.28
EXPORT_PAGE_HEIGHT = 841.89

DEFAULT_EXPORT_BASE_NAME = "extracted"
PDF_MEDIA_TYPE = "application/pdf"
ZIP_MEDIA_TYPE = "application/zip"

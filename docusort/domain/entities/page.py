"""
Domain Entity: Page

One rendered page of an uploaded document, the unit that is classified,
edited and exported.
"""
from __future__ import annotations

import time
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Optional

from docusort.constants import IMAGE_MIME
from docusort.domain.value_objects.document_category import DocumentCategory


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Page:
    """
    Represents a single rasterized page.

    Business rules:
    - Page numbers are 1-indexed within their source document
    - The image is rendered once and never replaced
    - New pages start as ``Other`` and ``is_classifying``
    - Only category and sub-category change after creation
    """

    id: str
    page_number: int
    original_file_id: str
    image: bytes = field(repr=False)
    image_mime: str = IMAGE_MIME
    category: DocumentCategory = DocumentCategory.OTHER
    sub_category: Optional[str] = None
    is_classifying: bool = True
    created_at: datetime = field(default_factory=_utcnow)

    def __post_init__(self):
        if self.page_number < 1:
            raise ValueError("Page number must be >= 1")
        if not self.original_file_id:
            raise ValueError("original_file_id is required")
        if not isinstance(self.category, DocumentCategory):
            object.__setattr__(self, "category", DocumentCategory.parse(self.category) or DocumentCategory.OTHER)

    # ==================== Factory Methods ====================

    @classmethod
    def create(cls, original_file_id: str, page_number: int, image: bytes, *, image_mime: str = IMAGE_MIME) -> "Page":
        """Create a freshly rendered page awaiting classification."""
        return cls(
            id=make_page_id(original_file_id, page_number),
            page_number=page_number,
            original_file_id=original_file_id,
            image=image,
            image_mime=image_mime,
        )

    # ==================== Copy-on-write updates ====================

    def with_classification(self, category: DocumentCategory, sub_category: Optional[str]) -> "Page":
        """Return a copy carrying the classifier's answer."""
        return replace(self, category=category, sub_category=sub_category or None, is_classifying=False)

    def with_labels(
        self,
        *,
        category: Optional[DocumentCategory] = None,
        sub_category: Optional[str] = None,
    ) -> "Page":
        """Return a copy with user supplied labels; ``None`` keeps the current value."""
        changes: dict = {}
        if category is not None:
            changes["category"] = category
        if sub_category is not None:
            changes["sub_category"] = sub_category.strip() or None
        if not changes:
            return self
        return replace(self, **changes)

    # ==================== Queries ====================

    @property
    def group_key(self) -> str:
        """Sub-category when present, else the category value."""
        return self.sub_category or self.category.value

    @property
    def sort_key(self) -> tuple[str, int]:
        return (self.original_file_id, self.page_number)


def make_page_id(original_file_id: str, page_number: int) -> str:
    # Name, page and creation instant; the random tail separates same-named re-uploads.
    return f"{original_file_id}-{page_number}-{time.time_ns()}-{uuid.uuid4().hex[:8]}"

"""Classification outcomes exchanged between the oracle, the scheduler and the page store."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from docusort.constants import ERROR_SUB_CATEGORY, UNKNOWN_SUB_CATEGORY
from .document_category import DocumentCategory


@dataclass(frozen=True)
class ClassificationResult:
    """What the classifier said about one image."""

    category: DocumentCategory
    sub_category: Optional[str] = None

    @classmethod
    def unknown(cls) -> "ClassificationResult":
        return cls(category=DocumentCategory.OTHER, sub_category=UNKNOWN_SUB_CATEGORY)

    @classmethod
    def error(cls) -> "ClassificationResult":
        return cls(category=DocumentCategory.OTHER, sub_category=ERROR_SUB_CATEGORY)


@dataclass(frozen=True)
class PageClassification:
    """A classification result addressed to a page id."""

    page_id: str
    category: DocumentCategory
    sub_category: Optional[str] = None
    failed: bool = False

    @classmethod
    def from_result(cls, page_id: str, result: ClassificationResult, *, failed: bool = False) -> "PageClassification":
        return cls(page_id=page_id, category=result.category, sub_category=result.sub_category, failed=failed)

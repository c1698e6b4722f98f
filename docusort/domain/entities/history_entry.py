"""
Domain Entity: HistoryEntry

Durable per-document summary recorded once an upload finishes classifying.
"""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Mapping

from docusort.domain.entities.page import Page


@dataclass(frozen=True)
class HistoryEntry:
    id: str
    name: str
    size: int
    upload_timestamp: int  # milliseconds since the epoch
    page_count: int
    category_summary: Dict[str, int] = field(default_factory=dict)

    @classmethod
    def for_document(cls, name: str, size: int, pages: Iterable[Page], timestamp_ms: int) -> "HistoryEntry":
        """Summarize the final labels of one source document's pages."""
        page_list = list(pages)
        return cls(
            id=f"{name}-{timestamp_ms}",
            name=name,
            size=size,
            upload_timestamp=timestamp_ms,
            page_count=len(page_list),
            category_summary=summarize_categories(page_list),
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "HistoryEntry":
        """Hydrate from the stored JSON shape; missing fields fall back to empty values."""
        summary_payload = data.get("categorySummary") or {}
        summary: Dict[str, int] = {}
        if isinstance(summary_payload, Mapping):
            for key, value in summary_payload.items():
                try:
                    count = int(value)
                except (TypeError, ValueError):
                    continue
                if count > 0:
                    summary[str(key)] = count

        name = str(data.get("name") or "")
        timestamp = _safe_int(data.get("uploadDate"))
        return cls(
            id=str(data.get("id") or f"{name}-{timestamp}"),
            name=name,
            size=_safe_int(data.get("size")),
            upload_timestamp=timestamp,
            page_count=_safe_int(data.get("pageCount")),
            category_summary=summary,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "size": self.size,
            "uploadDate": self.upload_timestamp,
            "pageCount": self.page_count,
            "categorySummary": dict(self.category_summary),
        }


def summarize_categories(pages: Iterable[Page]) -> Dict[str, int]:
    """Count pages per final category; categories with no pages are omitted."""
    counts = Counter(page.category.value for page in pages)
    return {category: count for category, count in counts.items() if count > 0}


def _safe_int(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0

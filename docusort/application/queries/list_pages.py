"""ListPages Query - current session pages, optionally filtered by category."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from docusort.domain.entities.page import Page
from docusort.domain.exceptions import DomainValidationError
from docusort.domain.services.page_store import PageStateStore
from docusort.domain.value_objects.document_category import DocumentCategory


@dataclass(frozen=True)
class ListPagesQuery:
    category: Optional[str] = None


@dataclass(frozen=True)
class PageListing:
    pages: List[Page]
    total: int
    counts_by_category: dict


class ListPagesHandler:
    def __init__(self, page_store: PageStateStore) -> None:
        self._store = page_store

    def handle(self, query: ListPagesQuery) -> PageListing:
        category = None
        if query.category:
            category = DocumentCategory.parse(query.category)
            if category is None:
                raise DomainValidationError(f"Unknown category: {query.category}")

        return PageListing(
            pages=self._store.filter_by_category(category),
            total=len(self._store),
            counts_by_category=self._store.counts_by_category(),
        )

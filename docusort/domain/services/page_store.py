"""In-memory, ordered collection of the current session's pages."""
from __future__ import annotations

import logging
from threading import Lock
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from docusort.domain.entities.page import Page
from docusort.domain.exceptions import EntityNotFoundError
from docusort.domain.value_objects.classification import PageClassification
from docusort.domain.value_objects.document_category import DocumentCategory

logger = logging.getLogger(__name__)


class PageStateStore:
    """Holds pages in rasterization order.

    Every write builds a new tuple and swaps it in under the lock, so readers
    holding a snapshot never see a page halfway through an update.
    """

    def __init__(self, pages: Iterable[Page] = ()) -> None:
        self._pages: Tuple[Page, ...] = tuple(pages)
        self._lock = Lock()

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------
    def append(self, page: Page) -> None:
        self.extend([page])

    def extend(self, pages: Iterable[Page]) -> None:
        new_pages = tuple(pages)
        with self._lock:
            self._pages = self._pages + new_pages

    def merge_classifications(self, results: Iterable[PageClassification]) -> int:
        """Apply classifier results by page id and return how many matched.

        Results for ids no longer in the store are dropped.
        """
        by_id: Dict[str, PageClassification] = {result.page_id: result for result in results}
        if not by_id:
            return 0

        with self._lock:
            applied = 0
            merged: List[Page] = []
            for page in self._pages:
                result = by_id.get(page.id)
                if result is None:
                    merged.append(page)
                    continue
                merged.append(page.with_classification(result.category, result.sub_category))
                applied += 1
            self._pages = tuple(merged)

        dropped = len(by_id) - applied
        if dropped:
            logger.debug("Dropped %s classification results for pages no longer in the session", dropped)
        return applied

    def update_page(
        self,
        page_id: str,
        *,
        category: Optional[DocumentCategory] = None,
        sub_category: Optional[str] = None,
    ) -> Page:
        """Apply a user edit to one page and return the updated page."""
        return self._replace(page_id, lambda page: page.with_labels(category=category, sub_category=sub_category))

    def remove(self, page_ids: Iterable[str]) -> int:
        doomed = set(page_ids)
        with self._lock:
            kept = tuple(page for page in self._pages if page.id not in doomed)
            removed = len(self._pages) - len(kept)
            self._pages = kept
        return removed

    def clear(self) -> None:
        with self._lock:
            self._pages = ()

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    def pages(self) -> Tuple[Page, ...]:
        return self._pages

    def get(self, page_id: str) -> Optional[Page]:
        for page in self._pages:
            if page.id == page_id:
                return page
        return None

    def contains(self, page_id: str) -> bool:
        return self.get(page_id) is not None

    def filter_by_category(self, category: Optional[DocumentCategory]) -> List[Page]:
        snapshot = self._pages
        if category is None:
            return list(snapshot)
        return [page for page in snapshot if page.category == category]

    def select(self, page_ids: Iterable[str]) -> List[Page]:
        """Pages whose id is in ``page_ids``, in store order."""
        wanted = set(page_ids)
        return [page for page in self._pages if page.id in wanted]

    def counts_by_category(self) -> Dict[str, int]:
        counts = {category.value: 0 for category in DocumentCategory}
        for page in self._pages:
            counts[page.category.value] += 1
        return counts

    def __len__(self) -> int:
        return len(self._pages)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _replace(self, page_id: str, update: Callable[[Page], Page]) -> Page:
        with self._lock:
            pages = list(self._pages)
            for index, page in enumerate(pages):
                if page.id == page_id:
                    updated = update(page)
                    pages[index] = updated
                    self._pages = tuple(pages)
                    return updated
        raise EntityNotFoundError("Page", page_id)

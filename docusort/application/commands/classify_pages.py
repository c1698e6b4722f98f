"""ClassifyPages Command - labels rendered pages with the classification oracle.

Pages are sent in fixed windows: every call of a window must settle before
the next window is dispatched. A failing call only affects its own page,
which falls back to ``Other``.
"""
from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Protocol, Sequence

from docusort.constants import CLASSIFICATION_WINDOW_SIZE, IMAGE_MIME
from docusort.domain.entities.history_entry import HistoryEntry
from docusort.domain.entities.page import Page
from docusort.domain.entities.upload_session import SessionDocument
from docusort.domain.services.history_ledger import HistoryLedger
from docusort.domain.services.page_store import PageStateStore
from docusort.domain.value_objects.classification import ClassificationResult, PageClassification
from docusort.domain.value_objects.session_status import Progress

logger = logging.getLogger(__name__)


class PageClassifier(Protocol):
    def classify(self, image: bytes, mime_type: str = IMAGE_MIME) -> Optional[ClassificationResult]: ...


def _epoch_millis() -> int:
    return int(time.time() * 1000)


@dataclass(frozen=True)
class ClassifyPagesCommand:
    pages: tuple[Page, ...]
    documents: tuple[SessionDocument, ...] = ()

    def __post_init__(self):
        if not isinstance(self.pages, tuple):
            object.__setattr__(self, "pages", tuple(self.pages))
        if not isinstance(self.documents, tuple):
            object.__setattr__(self, "documents", tuple(self.documents))


@dataclass
class ClassificationReport:
    results: List[PageClassification] = field(default_factory=list)
    history: List[HistoryEntry] = field(default_factory=list)

    @property
    def failures(self) -> int:
        return sum(1 for result in self.results if result.failed)


class ClassifyPagesHandler:
    """Handles ClassifyPages commands."""

    def __init__(
        self,
        classifier: PageClassifier,
        page_store: PageStateStore,
        ledger: Optional[HistoryLedger] = None,
        *,
        window_size: int = CLASSIFICATION_WINDOW_SIZE,
        clock: Callable[[], int] = _epoch_millis,
    ) -> None:
        if window_size < 1:
            raise ValueError("window_size must be >= 1")
        self._classifier = classifier
        self._store = page_store
        self._ledger = ledger
        self._window_size = window_size
        self._clock = clock

    def handle(
        self,
        command: ClassifyPagesCommand,
        on_progress: Optional[Callable[[Progress], None]] = None,
    ) -> ClassificationReport:
        pages = list(command.pages)
        total = len(pages)
        report = ClassificationReport()

        if pages:
            with ThreadPoolExecutor(max_workers=self._window_size, thread_name_prefix="classify") as executor:
                for start in range(0, total, self._window_size):
                    window = pages[start : start + self._window_size]
                    futures = [executor.submit(self._classify_page, page) for page in window]
                    wait(futures)
                    window_results = [future.result() for future in futures]

                    applied = self._store.merge_classifications(window_results)
                    report.results.extend(window_results)
                    logger.debug(
                        "Classified window %s-%s (%s merged)", start + 1, start + len(window), applied
                    )
                    if on_progress is not None:
                        on_progress(Progress(current=len(report.results), total=total))

        report.history = self._record_history(command, report.results)
        logger.info("Classified %s pages (%s failed)", total, report.failures)
        return report

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _classify_page(self, page: Page) -> PageClassification:
        try:
            result = self._classifier.classify(page.image, page.image_mime)
        except Exception as exc:  # pylint: disable=broad-except
            logger.exception("Classification failed for page %s: %s", page.id, exc, extra={"page_id": page.id})
            return PageClassification.from_result(page.id, ClassificationResult.error(), failed=True)

        if result is None:
            logger.warning("Classifier returned no result for page %s", page.id, extra={"page_id": page.id})
            return PageClassification.from_result(page.id, ClassificationResult.unknown(), failed=True)
        return PageClassification.from_result(page.id, result)

    def _record_history(
        self,
        command: ClassifyPagesCommand,
        results: Sequence[PageClassification],
    ) -> List[HistoryEntry]:
        by_id: Dict[str, Page] = {}
        results_by_id = {result.page_id: result for result in results}
        for page in command.pages:
            # Prefer the store's copy so edits made while classifying are counted.
            current = self._store.get(page.id)
            if current is None:
                result = results_by_id.get(page.id)
                current = page.with_classification(result.category, result.sub_category) if result else page
            by_id[page.id] = current

        timestamp = self._clock()
        entries = [
            HistoryEntry.for_document(
                document.name,
                document.size,
                [by_id[page_id] for page_id in document.page_ids if page_id in by_id],
                timestamp,
            )
            for document in self._documents(command)
        ]

        if self._ledger is not None:
            for entry in entries:
                self._ledger.append(entry)
        return entries

    @staticmethod
    def _documents(command: ClassifyPagesCommand) -> Sequence[SessionDocument]:
        if command.documents:
            return command.documents
        grouped: Dict[str, List[str]] = {}
        for page in command.pages:
            grouped.setdefault(page.original_file_id, []).append(page.id)
        return [SessionDocument(name=name, size=0, page_ids=tuple(ids)) for name, ids in grouped.items()]

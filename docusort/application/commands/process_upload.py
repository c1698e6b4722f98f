"""ProcessUpload Command - one upload session from PDFs to labelled pages.

``start`` ingests synchronously so a broken document is reported to the
caller straight away; ``classify`` can then run in the background while the
pages are already visible.
"""
from __future__ import annotations

import logging
from threading import Lock
from typing import Optional

from docusort.application.commands.classify_pages import (
    ClassificationReport,
    ClassifyPagesCommand,
    ClassifyPagesHandler,
)
from docusort.application.commands.ingest_documents import (
    IngestDocumentsCommand,
    IngestDocumentsHandler,
    IngestionEvent,
    IngestionStarted,
    PageRendered,
)
from docusort.domain.entities.upload_session import UploadSession
from docusort.domain.exceptions import IngestionError
from docusort.domain.services.page_store import PageStateStore
from docusort.domain.services.session_tracker import SessionTracker
from docusort.domain.value_objects.session_status import Progress, SessionState

logger = logging.getLogger(__name__)


class ProcessUploadHandler:
    """Handles ProcessUpload commands (an :class:`IngestDocumentsCommand` for a new session)."""

    def __init__(
        self,
        ingest_handler: IngestDocumentsHandler,
        classify_handler: ClassifyPagesHandler,
        page_store: PageStateStore,
        tracker: SessionTracker,
    ) -> None:
        self._ingest = ingest_handler
        self._classify = classify_handler
        self._store = page_store
        self._tracker = tracker
        self._start_lock = Lock()

    def handle(self, command: IngestDocumentsCommand) -> ClassificationReport:
        session = self.start(command)
        return self.classify(session.session_id)

    def start(self, command: IngestDocumentsCommand) -> UploadSession:
        """Open a new session and render its pages; the previous session's pages are discarded.

        Concurrent calls run one after another.
        """
        with self._start_lock:
            return self._start(command)

    def _start(self, command: IngestDocumentsCommand) -> UploadSession:
        self._store.clear()
        session = UploadSession.start(IngestDocumentsHandler.documents_for(command))
        self._tracker.begin(session)
        session_id = session.session_id

        def record(event: IngestionEvent) -> None:
            if isinstance(event, IngestionStarted):
                progress = Progress(current=0, total=event.total_pages)
            elif isinstance(event, PageRendered):
                progress = event.progress
            else:
                return
            self._tracker.update(session_id, lambda current: current.with_ingestion(progress))

        try:
            result = self._ingest.handle(command, on_event=record)
        except IngestionError as exc:
            self._tracker.update(session_id, lambda current: current.transition_to(SessionState.ERROR, str(exc)))
            raise

        updated = self._tracker.update(
            session_id,
            lambda current: current.with_documents(result.documents)
            .with_ingestion(result.progress)
            .with_classification(Progress(current=0, total=len(result.pages)))
            .transition_to(SessionState.CLASSIFYING),
        )
        logger.info(
            "Session %s ingested %s pages", session_id, len(result.pages), extra={"session_id": session_id}
        )
        return updated or session.with_documents(result.documents)

    def classify(self, session_id: str) -> ClassificationReport:
        """Classify the pages of ``session_id`` and record its history."""
        session: Optional[UploadSession] = self._tracker.current()
        if session is None or session.session_id != session_id:
            logger.info("Session %s is no longer active; skipping classification", session_id)
            return ClassificationReport()

        pages = self._store.select(session.page_ids)

        def record(progress: Progress) -> None:
            self._tracker.update(session_id, lambda current: current.with_classification(progress))

        try:
            report = self._classify.handle(
                ClassifyPagesCommand(pages=tuple(pages), documents=session.documents),
                on_progress=record,
            )
        except Exception as exc:
            self._tracker.update(session_id, lambda current: current.transition_to(SessionState.ERROR, str(exc)))
            raise

        self._tracker.update(session_id, lambda current: current.transition_to(SessionState.COMPLETED))
        return report

    def discard(self) -> None:
        """Drop the current session; late classification results are ignored."""
        self._store.clear()
        self._tracker.discard()

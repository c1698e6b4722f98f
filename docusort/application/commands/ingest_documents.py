"""IngestDocuments Command - renders uploaded PDFs into pages.

Documents are opened first so the total page count is known, then rendered
one page at a time in upload order. Pages are produced as a lazy event
stream; the handler materializes them into the page store as they arrive.
"""
from __future__ import annotations

import logging
from contextlib import ExitStack
from dataclasses import dataclass, field
from typing import Callable, Iterator, List, Optional, Protocol, Sequence, Union

from docusort.constants import DEFAULT_RENDER_SCALE
from docusort.domain.entities.page import Page
from docusort.domain.entities.upload_session import SessionDocument
from docusort.domain.exceptions import DomainValidationError, IngestionError
from docusort.domain.services.page_store import PageStateStore
from docusort.domain.value_objects.session_status import Progress

logger = logging.getLogger(__name__)


class OpenedDocument(Protocol):
    @property
    def page_count(self) -> int: ...

    def render_page(self, index: int, scale: float = ...) -> bytes: ...

    def close(self) -> None: ...


class DocumentRenderer(Protocol):
    def open(self, data: bytes, name: Optional[str] = None) -> OpenedDocument: ...


@dataclass(frozen=True)
class SourceDocument:
    name: str
    data: bytes = field(repr=False)
    size: Optional[int] = None

    @property
    def byte_size(self) -> int:
        return self.size if self.size is not None else len(self.data)


@dataclass(frozen=True)
class IngestDocumentsCommand:
    documents: tuple[SourceDocument, ...]

    def __post_init__(self):
        if not isinstance(self.documents, tuple):
            object.__setattr__(self, "documents", tuple(self.documents))


@dataclass(frozen=True)
class IngestionStarted:
    """Every document is open; ``total_pages`` is final."""

    total_pages: int
    page_counts: tuple[int, ...]


@dataclass(frozen=True)
class PageRendered:
    page: Page
    document_index: int
    progress: Progress


IngestionEvent = Union[IngestionStarted, PageRendered]


@dataclass
class IngestionResult:
    pages: List[Page]
    documents: List[SessionDocument]
    progress: Progress


class IngestDocumentsHandler:
    """Handles IngestDocuments commands."""

    def __init__(
        self,
        renderer: DocumentRenderer,
        page_store: PageStateStore,
        *,
        render_scale: float = DEFAULT_RENDER_SCALE,
    ) -> None:
        self._renderer = renderer
        self._store = page_store
        self._scale = render_scale

    def stream(self, command: IngestDocumentsCommand) -> Iterator[IngestionEvent]:
        """Yield ingestion events; raises :class:`IngestionError` on the first failure."""
        if not command.documents:
            raise DomainValidationError("At least one document is required")

        with ExitStack() as stack:
            opened: List[OpenedDocument] = []
            for source in command.documents:
                try:
                    document = self._renderer.open(source.data, source.name)
                except Exception as exc:  # noqa: BLE001 - renderer errors are opaque
                    raise IngestionError(
                        f"Failed to open {source.name}: {exc}", document_name=source.name, cause=exc
                    ) from exc
                stack.callback(document.close)
                opened.append(document)

            page_counts = tuple(document.page_count for document in opened)
            total = sum(page_counts)
            yield IngestionStarted(total_pages=total, page_counts=page_counts)

            rendered = 0
            for document_index, (source, document) in enumerate(zip(command.documents, opened)):
                for index in range(document.page_count):
                    try:
                        image = document.render_page(index, self._scale)
                    except Exception as exc:  # noqa: BLE001
                        raise IngestionError(
                            f"Failed to render page {index + 1} of {source.name}: {exc}",
                            document_name=source.name,
                            cause=exc,
                        ) from exc
                    rendered += 1
                    yield PageRendered(
                        page=Page.create(source.name, index + 1, image),
                        document_index=document_index,
                        progress=Progress(current=rendered, total=total),
                    )

    def handle(
        self,
        command: IngestDocumentsCommand,
        on_event: Optional[Callable[[IngestionEvent], None]] = None,
    ) -> IngestionResult:
        """Render every document into the page store, all or nothing."""
        page_ids: List[List[str]] = [[] for _ in command.documents]
        pages: List[Page] = []
        progress = Progress()

        try:
            for event in self.stream(command):
                if isinstance(event, PageRendered):
                    self._store.append(event.page)
                    pages.append(event.page)
                    page_ids[event.document_index].append(event.page.id)
                    progress = event.progress
                else:
                    progress = Progress(current=0, total=event.total_pages)
                if on_event is not None:
                    on_event(event)
        except Exception:
            removed = self._store.remove(page.id for page in pages)
            logger.exception("Ingestion failed; discarded %s rendered pages", removed)
            raise

        documents = [
            SessionDocument(name=source.name, size=source.byte_size, page_ids=tuple(ids))
            for source, ids in zip(command.documents, page_ids)
        ]
        logger.info("Ingested %s pages from %s documents", len(pages), len(documents))
        return IngestionResult(pages=pages, documents=documents, progress=progress)

    @staticmethod
    def documents_for(command: IngestDocumentsCommand) -> Sequence[SessionDocument]:
        """Session documents before any page is rendered."""
        return [SessionDocument(name=source.name, size=source.byte_size) for source in command.documents]

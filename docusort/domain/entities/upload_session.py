"""
Domain Entity: UploadSession

The set of documents uploaded together. It shares one progress counter and
yields one history entry per document.
"""
from __future__ import annotations

import re
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import List, Optional, Sequence

from docusort.constants import DEFAULT_EXPORT_BASE_NAME
from docusort.domain.value_objects.session_status import Progress, SessionState, SessionStatus


@dataclass(frozen=True)
class SessionDocument:
    """A source document of the session and the ids of the pages it produced."""

    name: str
    size: int
    page_ids: tuple[str, ...] = ()


@dataclass(frozen=True)
class UploadSession:
    session_id: str
    title: str
    documents: tuple[SessionDocument, ...]
    status: SessionStatus = field(default_factory=SessionStatus.ingesting)
    ingestion: Progress = field(default_factory=Progress)
    classification: Progress = field(default_factory=Progress)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def start(cls, documents: Sequence[SessionDocument]) -> "UploadSession":
        if not documents:
            raise ValueError("an upload session needs at least one document")
        if len(documents) == 1:
            title = documents[0].name
        else:
            title = f"Batch Upload ({len(documents)} files)"
        return cls(session_id=uuid.uuid4().hex, title=title, documents=tuple(documents))

    # ------------------------------------------------------------------
    # Copy-on-write transitions
    # ------------------------------------------------------------------
    def with_ingestion(self, progress: Progress) -> "UploadSession":
        return replace(self, ingestion=progress)

    def with_documents(self, documents: Sequence[SessionDocument]) -> "UploadSession":
        return replace(self, documents=tuple(documents))

    def with_classification(self, progress: Progress) -> "UploadSession":
        return replace(self, classification=progress)

    def transition_to(self, state: SessionState, error_message: Optional[str] = None) -> "UploadSession":
        return replace(self, status=self.status.transition_to(state, error_message))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    @property
    def page_ids(self) -> List[str]:
        return [page_id for document in self.documents for page_id in document.page_ids]

    @property
    def export_base_name(self) -> str:
        return export_base_name(self.title)


def export_base_name(title: str) -> str:
    """Turn a session title into a download file stem.

    Examples:
        >>> export_base_name("Batch Upload (2 files)")
        'Batch_Upload_2_files_'
        >>> export_base_name("loan file.pdf")
        'loan_file'
    """
    base = re.sub(r"[\s()]+", "_", title or "").replace(".pdf", "", 1)
    return base or DEFAULT_EXPORT_BASE_NAME

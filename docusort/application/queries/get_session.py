"""GetSession Query."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from docusort.domain.entities.upload_session import UploadSession
from docusort.domain.services.session_tracker import SessionTracker


@dataclass(frozen=True)
class GetSessionQuery:
    pass


class GetSessionHandler:
    def __init__(self, tracker: SessionTracker) -> None:
        self._tracker = tracker

    def handle(self, query: GetSessionQuery) -> Optional[UploadSession]:
        return self._tracker.current()

"""Holds the one active upload session."""
from __future__ import annotations

from threading import Lock
from typing import Callable, Optional

from docusort.domain.entities.upload_session import UploadSession


class SessionTracker:
    """Thread-safe holder of the current :class:`UploadSession`.

    Updates addressed to a session that has since been discarded or replaced
    are ignored.
    """

    def __init__(self) -> None:
        self._session: Optional[UploadSession] = None
        self._lock = Lock()

    def begin(self, session: UploadSession) -> None:
        with self._lock:
            self._session = session

    def current(self) -> Optional[UploadSession]:
        return self._session

    def update(self, session_id: str, change: Callable[[UploadSession], UploadSession]) -> Optional[UploadSession]:
        with self._lock:
            if self._session is None or self._session.session_id != session_id:
                return None
            self._session = change(self._session)
            return self._session

    def discard(self) -> None:
        with self._lock:
            self._session = None

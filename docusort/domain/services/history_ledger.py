"""Capped, most-recent-first log of finished uploads."""
from __future__ import annotations

import logging
from threading import Lock
from typing import Any, List

from docusort.constants import HISTORY_LIMIT, HISTORY_STORAGE_KEY
from docusort.domain.entities.history_entry import HistoryEntry
from docusort.domain.exceptions import RepositoryError
from docusort.domain.repositories.key_value_store import KeyValueStore

logger = logging.getLogger(__name__)


class HistoryLedger:
    """Keeps at most ``limit`` history entries under a single store key.

    The ledger is never on the critical path: when the store fails, appends
    become no-ops and reads return an empty list.
    """

    def __init__(self, store: KeyValueStore, *, key: str = HISTORY_STORAGE_KEY, limit: int = HISTORY_LIMIT) -> None:
        if limit < 1:
            raise ValueError("limit must be >= 1")
        self._store = store
        self._key = key
        self._limit = limit
        self._lock = Lock()
        self._available = False

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def open(self) -> "HistoryLedger":
        try:
            self._store.open()
            self._available = True
        except RepositoryError as exc:
            logger.warning("History store unavailable, history disabled: %s", exc)
            self._available = False
        return self

    def close(self) -> None:
        if not self._available:
            return
        try:
            self._store.close()
        except RepositoryError as exc:
            logger.warning("Failed to close history store: %s", exc)
        finally:
            self._available = False

    def __enter__(self) -> "HistoryLedger":
        return self.open()

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    @property
    def is_available(self) -> bool:
        return self._available

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def append(self, entry: HistoryEntry) -> None:
        if not self._available:
            logger.debug("History store unavailable; dropping entry %s", entry.id)
            return
        with self._lock:
            try:
                current = self._load()
                updated = [entry.to_dict(), *(item.to_dict() for item in current)][: self._limit]
                self._store.set(self._key, updated)
            except RepositoryError as exc:
                logger.exception("Failed to save history entry %s: %s", entry.id, exc)

    def read_all(self) -> List[HistoryEntry]:
        if not self._available:
            return []
        try:
            return self._load()
        except RepositoryError as exc:
            logger.exception("Failed to read history: %s", exc)
            return []

    def clear(self) -> None:
        if not self._available:
            return
        with self._lock:
            try:
                self._store.delete(self._key)
            except RepositoryError as exc:
                logger.exception("Failed to clear history: %s", exc)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _load(self) -> List[HistoryEntry]:
        payload = self._store.get(self._key)
        if payload is None:
            return []
        if not isinstance(payload, list):
            logger.warning("History payload under %s is not a list; ignoring it", self._key)
            return []
        entries: List[HistoryEntry] = []
        for item in payload:
            if not isinstance(item, dict):
                continue
            entries.append(HistoryEntry.from_dict(item))
        return entries[: self._limit]

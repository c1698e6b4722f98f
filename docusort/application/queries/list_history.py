"""ListHistory Query - most recent uploads first."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from docusort.domain.entities.history_entry import HistoryEntry
from docusort.domain.services.history_ledger import HistoryLedger


@dataclass(frozen=True)
class ListHistoryQuery:
    limit: Optional[int] = None


class ListHistoryHandler:
    def __init__(self, ledger: HistoryLedger) -> None:
        self._ledger = ledger

    def handle(self, query: ListHistoryQuery) -> List[HistoryEntry]:
        entries = self._ledger.read_all()
        if query.limit is not None:
            return entries[: max(query.limit, 0)]
        return entries

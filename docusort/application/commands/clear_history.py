"""ClearHistory Command."""
from __future__ import annotations

from dataclasses import dataclass

from docusort.domain.services.history_ledger import HistoryLedger


@dataclass(frozen=True)
class ClearHistoryCommand:
    pass


class ClearHistoryHandler:
    def __init__(self, ledger: HistoryLedger) -> None:
        self._ledger = ledger

    def handle(self, command: ClearHistoryCommand) -> None:
        self._ledger.clear()

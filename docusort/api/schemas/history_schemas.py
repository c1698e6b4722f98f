"""
Schemas for upload history endpoints
"""
from __future__ import annotations

from typing import Dict, List

from pydantic import BaseModel, Field

from docusort.domain.entities.history_entry import HistoryEntry


class HistoryEntrySchema(BaseModel):
    id: str
    name: str
    size: int
    uploadDate: int
    pageCount: int
    categorySummary: Dict[str, int] = Field(default_factory=dict)


class HistoryListResponseSchema(BaseModel):
    entries: List[HistoryEntrySchema] = Field(default_factory=list)


def history_entry_to_schema(entry: HistoryEntry) -> HistoryEntrySchema:
    return HistoryEntrySchema(**entry.to_dict())

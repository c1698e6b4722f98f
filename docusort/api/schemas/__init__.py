"""
API Schemas - organized by domain
"""
from .export_schemas import ExportRequestSchema
from .history_schemas import HistoryEntrySchema, HistoryListResponseSchema, history_entry_to_schema
from .page_schemas import (
    PageListResponseSchema,
    PageSchema,
    ProgressSchema,
    SessionDocumentSchema,
    SessionSchema,
    UpdatePageRequestSchema,
    page_to_schema,
    session_to_schema,
)

__all__ = [
    "ExportRequestSchema",
    "HistoryEntrySchema",
    "HistoryListResponseSchema",
    "PageListResponseSchema",
    "PageSchema",
    "ProgressSchema",
    "SessionDocumentSchema",
    "SessionSchema",
    "UpdatePageRequestSchema",
    "history_entry_to_schema",
    "page_to_schema",
    "session_to_schema",
]

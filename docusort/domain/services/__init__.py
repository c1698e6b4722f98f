"""Domain services."""

from .export_grouper import ExportEntry, ExportGrouper, ExportPlan, image_slug, sanitize_group_key, sort_pages
from .history_ledger import HistoryLedger
from .page_store import PageStateStore
from .session_tracker import SessionTracker

__all__ = [
    "ExportEntry",
    "ExportGrouper",
    "ExportPlan",
    "HistoryLedger",
    "PageStateStore",
    "SessionTracker",
    "image_slug",
    "sanitize_group_key",
    "sort_pages",
]

"""Domain entities package"""

from .history_entry import HistoryEntry, summarize_categories
from .page import Page
from .upload_session import SessionDocument, UploadSession

__all__ = ["HistoryEntry", "Page", "SessionDocument", "UploadSession", "summarize_categories"]

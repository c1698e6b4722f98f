"""Shared FastAPI dependencies for v1 API routers.

These factories centralize construction of the session state, the history
ledger and the command/query handlers so routers can depend on simple
callables, and tests can swap any of them through
``app.dependency_overrides``.
"""
from __future__ import annotations

from functools import lru_cache

from docusort.application.commands.classify_pages import ClassifyPagesHandler
from docusort.application.commands.clear_history import ClearHistoryHandler
from docusort.application.commands.export_pages import ExportPagesHandler
from docusort.application.commands.ingest_documents import IngestDocumentsHandler
from docusort.application.commands.process_upload import ProcessUploadHandler
from docusort.application.commands.update_page import UpdatePageHandler
from docusort.application.queries.get_session import GetSessionHandler
from docusort.application.queries.list_history import ListHistoryHandler
from docusort.application.queries.list_pages import ListPagesHandler
from docusort.config import get_settings
from docusort.domain.services.history_ledger import HistoryLedger
from docusort.domain.services.page_store import PageStateStore
from docusort.domain.services.session_tracker import SessionTracker
from docusort.infrastructure.archive.zip_writer import ZipArchiveWriter
from docusort.infrastructure.pdf.pdf_renderer import PdfRenderer
from docusort.infrastructure.pdf.pdf_writer import PdfWriter
from docusort.infrastructure.persistence.file_key_value_store import FileKeyValueStore
from docusort.infrastructure.vision.azure_vision_client import AzureClassificationClient


@lru_cache()
def _page_store() -> PageStateStore:
    return PageStateStore()


def get_page_store() -> PageStateStore:
    """Provide the singleton page store of the running session."""
    return _page_store()


@lru_cache()
def _session_tracker() -> SessionTracker:
    return SessionTracker()


@lru_cache()
def _history_ledger() -> HistoryLedger:
    settings = get_settings()
    return HistoryLedger(FileKeyValueStore(settings.data_path), limit=settings.history_limit).open()


def get_history_ledger() -> HistoryLedger:
    """Provide the opened history ledger."""
    return _history_ledger()


def close_history_ledger() -> None:
    """Close the ledger and drop every cached object that holds it."""
    if _history_ledger.cache_info().currsize:
        _history_ledger().close()
    _history_ledger.cache_clear()
    _process_upload_handler.cache_clear()


@lru_cache()
def _classifier() -> AzureClassificationClient:
    return AzureClassificationClient(settings=get_settings())


@lru_cache()
def _process_upload_handler() -> ProcessUploadHandler:
    settings = get_settings()
    store = _page_store()
    ingest = IngestDocumentsHandler(
        PdfRenderer(jpeg_quality=settings.jpeg_quality),
        store,
        render_scale=settings.render_scale,
    )
    classify = ClassifyPagesHandler(
        _classifier(),
        store,
        _history_ledger(),
        window_size=settings.classification_window_size,
    )
    return ProcessUploadHandler(ingest, classify, store, _session_tracker())


def get_process_upload_handler() -> ProcessUploadHandler:
    """Provide a cached ProcessUpload handler."""
    return _process_upload_handler()


def get_update_page_handler() -> UpdatePageHandler:
    return UpdatePageHandler(_page_store())


def get_export_pages_handler() -> ExportPagesHandler:
    return ExportPagesHandler(_page_store(), PdfWriter(), ZipArchiveWriter())


def get_list_pages_handler() -> ListPagesHandler:
    return ListPagesHandler(_page_store())


def get_session_handler() -> GetSessionHandler:
    return GetSessionHandler(_session_tracker())


def get_list_history_handler() -> ListHistoryHandler:
    return ListHistoryHandler(_history_ledger())


def get_clear_history_handler() -> ClearHistoryHandler:
    return ClearHistoryHandler(_history_ledger())

"""Unit tests for ProcessUploadHandler, covering a full upload session."""
import threading
import time

import fitz  # type: ignore
import pytest

from docusort.application.commands.classify_pages import ClassifyPagesHandler
from docusort.application.commands.export_pages import ExportPagesCommand, ExportPagesHandler
from docusort.application.commands.ingest_documents import (
    IngestDocumentsCommand,
    IngestDocumentsHandler,
    SourceDocument,
)
from docusort.application.commands.process_upload import ProcessUploadHandler
from docusort.constants import EXPORT_PAGE_WIDTH
from docusort.domain.exceptions import IngestionError
from docusort.domain.services.session_tracker import SessionTracker
from docusort.domain.value_objects.classification import ClassificationResult
from docusort.domain.value_objects.document_category import DocumentCategory
from docusort.domain.value_objects.export_mode import ExportMode
from docusort.domain.value_objects.session_status import Progress, SessionState
from docusort.infrastructure.archive.zip_writer import ZipArchiveWriter
from docusort.infrastructure.pdf.pdf_writer import PdfWriter
from docusort.tests.fakes import FakeRenderer, GatedRenderer, ScriptedClassifier, make_jpeg


class JpegRenderer(FakeRenderer):
    """Renders a distinct solid-colour JPEG per page so exports can be checked."""

    def open(self, data, name=None):
        document = super().open(data, name)
        original = document.render_page

        def render_page(index, scale=1.5):
            original(index, scale)
            return _jpeg_for(document.name, index + 1)

        document.render_page = render_page
        return document


_SIZES = {("A.pdf", 1): (10, 10), ("A.pdf", 2): (20, 10), ("B.pdf", 1): (40, 10)}
_JPEGS = {}


def _jpeg_for(name, number):
    key = (name, number)
    if key not in _JPEGS:
        width, height = _SIZES.get(key, (10, 20))
        _JPEGS[key] = make_jpeg(width, height)
    return _JPEGS[key]


@pytest.fixture
def tracker():
    return SessionTracker()


@pytest.fixture
def classifier():
    return ScriptedClassifier(
        {
            _jpeg_for("A.pdf", 1): ClassificationResult(DocumentCategory.KYC, "Aadhar"),
            _jpeg_for("A.pdf", 2): ClassificationResult(DocumentCategory.PHOTO, None),
            _jpeg_for("B.pdf", 1): RuntimeError("oracle unavailable"),
        }
    )


@pytest.fixture
def handler(page_store, ledger, tracker, classifier):
    return ProcessUploadHandler(
        IngestDocumentsHandler(JpegRenderer(), page_store),
        ClassifyPagesHandler(classifier, page_store, ledger, clock=lambda: 1_700_000_000_000),
        page_store,
        tracker,
    )


def _upload(*documents):
    return IngestDocumentsCommand(
        documents=tuple(SourceDocument(name=name, data=data, size=size) for name, data, size in documents)
    )


def test_two_documents_one_failing_page(handler, page_store, ledger, tracker):
    handler.handle(_upload(("A.pdf", b"2", 2000), ("B.pdf", b"1", 1000)))

    labels = [(page.original_file_id, page.page_number, page.category, page.sub_category) for page in page_store.pages()]
    assert labels == [
        ("A.pdf", 1, DocumentCategory.KYC, "Aadhar"),
        ("A.pdf", 2, DocumentCategory.PHOTO, None),
        ("B.pdf", 1, DocumentCategory.OTHER, "Error"),
    ]
    assert not any(page.is_classifying for page in page_store.pages())

    history = ledger.read_all()
    assert [(entry.name, entry.size, entry.page_count, entry.category_summary) for entry in history] == [
        ("B.pdf", 1000, 1, {"Other": 1}),
        ("A.pdf", 2000, 2, {"KYC": 1, "Photo": 1}),
    ]

    session = tracker.current()
    assert session.title == "Batch Upload (2 files)"
    assert session.status.state is SessionState.COMPLETED
    assert session.ingestion == Progress(current=3, total=3)
    assert session.classification == Progress(current=3, total=3)


def test_merged_export_of_the_whole_session(handler, page_store, tracker):
    handler.handle(_upload(("A.pdf", b"2", 2000), ("B.pdf", b"1", 1000)))
    exporter = ExportPagesHandler(page_store, PdfWriter(), ZipArchiveWriter())
    session = tracker.current()

    artifact = exporter.handle(
        ExportPagesCommand(list(reversed(session.page_ids)), ExportMode.MERGED, session.export_base_name)
    )

    assert artifact.filename == "Batch_Upload_2_files__merged.pdf"
    with fitz.open(stream=artifact.content, filetype="pdf") as document:
        assert document.page_count == 3
        # Width/height ratios 1, 2 and 4 identify A-1, A-2 and B-1.
        bottoms = [document[index].get_image_info()[0]["bbox"][3] for index in range(3)]
    assert bottoms == pytest.approx([EXPORT_PAGE_WIDTH, EXPORT_PAGE_WIDTH / 2, EXPORT_PAGE_WIDTH / 4], abs=0.5)


def test_start_leaves_pages_visible_while_classifying(handler, page_store, tracker, classifier):
    session = handler.start(_upload(("A.pdf", b"2", 2000)))

    assert session.title == "A.pdf"
    assert session.status.state is SessionState.CLASSIFYING
    assert session.classification == Progress(current=0, total=2)
    assert len(page_store) == 2
    assert all(page.is_classifying for page in page_store.pages())
    assert classifier.calls == []


def test_new_upload_replaces_previous_pages(handler, page_store, ledger):
    handler.handle(_upload(("A.pdf", b"2", 2000)))
    handler.handle(_upload(("B.pdf", b"1", 1000)))

    assert [page.original_file_id for page in page_store.pages()] == ["B.pdf"]
    assert [entry.name for entry in ledger.read_all()] == ["B.pdf", "A.pdf"]


def test_broken_document_fails_the_session(handler, page_store, ledger, tracker):
    with pytest.raises(IngestionError):
        handler.start(_upload(("A.pdf", b"2", 2000), ("bad.pdf", b"broken", 10)))

    session = tracker.current()
    assert session.status.state is SessionState.ERROR
    assert "bad.pdf" in session.status.error_message
    assert len(page_store) == 0
    assert ledger.read_all() == []


def test_discarded_session_is_not_classified(handler, page_store, ledger, classifier):
    session = handler.start(_upload(("A.pdf", b"1", 100)))
    handler.discard()

    report = handler.classify(session.session_id)

    assert report.results == []
    assert classifier.calls == []
    assert len(page_store) == 0
    assert ledger.read_all() == []


def test_stale_session_id_is_ignored(handler, classifier):
    first = handler.start(_upload(("A.pdf", b"1", 100)))
    handler.start(_upload(("B.pdf", b"1", 100)))

    report = handler.classify(first.session_id)

    assert report.results == []
    assert classifier.calls == []


def test_concurrent_uploads_do_not_mix_pages(page_store, ledger, tracker):
    renderer = GatedRenderer("A.pdf")
    handler = ProcessUploadHandler(
        IngestDocumentsHandler(renderer, page_store),
        ClassifyPagesHandler(ScriptedClassifier(), page_store, ledger),
        page_store,
        tracker,
    )
    first = threading.Thread(target=handler.start, args=(_upload(("A.pdf", b"2", 20)),))
    second = threading.Thread(target=handler.start, args=(_upload(("B.pdf", b"1", 10)),))

    first.start()
    assert renderer.first_page_done.wait(timeout=5)
    second.start()
    time.sleep(0.05)
    try:
        # The second upload waits for the first one to finish ingesting.
        assert [page.original_file_id for page in page_store.pages()] == ["A.pdf"]
    finally:
        renderer.release.set()
        first.join(timeout=5)
        second.join(timeout=5)

    assert [page.original_file_id for page in page_store.pages()] == ["B.pdf"]
    assert tracker.current().title == "B.pdf"

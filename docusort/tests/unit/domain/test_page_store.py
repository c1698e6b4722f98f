"""Unit tests for PageStateStore."""
import threading

import pytest

from docusort.domain.exceptions import EntityNotFoundError
from docusort.domain.services.page_store import PageStateStore
from docusort.domain.value_objects.classification import PageClassification
from docusort.domain.value_objects.document_category import DocumentCategory
from docusort.tests.fakes import make_page, page_ids


def _unclassified(name, number):
    return make_page(name, number, classified=False)


class TestAppendAndRead:
    def test_keeps_insertion_order(self, page_store):
        pages = [_unclassified("B.pdf", 1), _unclassified("A.pdf", 1), _unclassified("A.pdf", 2)]
        for page in pages:
            page_store.append(page)

        assert page_ids(page_store.pages()) == page_ids(pages)
        assert len(page_store) == 3

    def test_snapshot_is_not_affected_by_later_writes(self, page_store):
        page_store.append(_unclassified("A.pdf", 1))
        snapshot = page_store.pages()

        page_store.append(_unclassified("A.pdf", 2))

        assert len(snapshot) == 1
        assert len(page_store.pages()) == 2

    def test_filter_and_select(self, page_store):
        kyc = make_page("A.pdf", 1, category=DocumentCategory.KYC)
        photo = make_page("A.pdf", 2, category=DocumentCategory.PHOTO)
        page_store.extend([kyc, photo])

        assert page_store.filter_by_category(DocumentCategory.KYC) == [kyc]
        assert page_store.filter_by_category(None) == [kyc, photo]
        assert page_store.select([photo.id, "missing"]) == [photo]
        assert page_store.contains(kyc.id)
        assert not page_store.contains("missing")

    def test_counts_by_category_lists_every_category(self, page_store):
        page_store.extend([make_page("A.pdf", 1, category=DocumentCategory.KYC), make_page("A.pdf", 2)])
        counts = page_store.counts_by_category()
        assert counts["KYC"] == 1
        assert counts["Other"] == 1
        assert counts["Photo"] == 0


class TestMergeClassifications:
    def test_merges_by_id(self, page_store):
        first, second = _unclassified("A.pdf", 1), _unclassified("A.pdf", 2)
        page_store.extend([first, second])

        applied = page_store.merge_classifications(
            [PageClassification(page_id=second.id, category=DocumentCategory.PHOTO, sub_category="Passport Photo")]
        )

        assert applied == 1
        merged = page_store.get(second.id)
        assert merged.category is DocumentCategory.PHOTO
        assert merged.sub_category == "Passport Photo"
        assert merged.is_classifying is False
        assert page_store.get(first.id).is_classifying is True

    def test_unknown_ids_leave_store_unchanged(self, page_store):
        page_store.extend([_unclassified("A.pdf", 1), _unclassified("A.pdf", 2)])
        before = page_store.pages()

        applied = page_store.merge_classifications(
            [PageClassification(page_id="gone", category=DocumentCategory.KYC, sub_category="PAN")]
        )

        assert applied == 0
        assert page_store.pages() == before

    def test_results_after_clear_are_dropped(self, page_store):
        page = _unclassified("A.pdf", 1)
        page_store.append(page)
        page_store.clear()

        assert page_store.merge_classifications([PageClassification(page.id, DocumentCategory.KYC)]) == 0
        assert len(page_store) == 0


class TestUpdateAndRemove:
    def test_update_page(self, page_store):
        page = make_page("A.pdf", 1, category=DocumentCategory.OTHER, sub_category="Error")
        page_store.append(page)

        updated = page_store.update_page(page.id, category=DocumentCategory.KYC, sub_category="PAN")

        assert updated.category is DocumentCategory.KYC
        assert page_store.get(page.id).sub_category == "PAN"

    def test_update_unknown_page_raises(self, page_store):
        with pytest.raises(EntityNotFoundError):
            page_store.update_page("missing", category=DocumentCategory.KYC)

    def test_remove(self, page_store):
        pages = [_unclassified("A.pdf", n) for n in (1, 2, 3)]
        page_store.extend(pages)

        assert page_store.remove([pages[0].id, pages[2].id, "missing"]) == 2
        assert page_ids(page_store.pages()) == [pages[1].id]


def test_concurrent_merges_and_edits_lose_nothing():
    pages = [make_page("A.pdf", n, classified=False) for n in range(1, 61)]
    store = PageStateStore(pages)

    def merge(chunk):
        store.merge_classifications(PageClassification(page.id, DocumentCategory.KYC, "PAN") for page in chunk)

    threads = [threading.Thread(target=merge, args=(pages[start : start + 10],)) for start in range(0, 60, 10)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert all(not page.is_classifying for page in store.pages())
    assert page_ids(store.pages()) == page_ids(pages)

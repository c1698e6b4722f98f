"""Unit tests for FileKeyValueStore."""
import pytest

from docusort.domain.exceptions import RepositoryError
from docusort.domain.services.history_ledger import HistoryLedger
from docusort.domain.entities.history_entry import HistoryEntry
from docusort.infrastructure.persistence.file_key_value_store import FileKeyValueStore


@pytest.fixture
def store(tmp_path):
    store = FileKeyValueStore(base_dir=tmp_path / "data")
    store.open()
    return store


def test_set_and_get_roundtrip(store):
    store.set("history", [{"a": 1}])
    assert store.get("history") == [{"a": 1}]
    assert (store.base_dir / "history.json").exists()
    assert not (store.base_dir / "history.tmp").exists()


def test_missing_key_is_none(store):
    assert store.get("nothing") is None


def test_delete(store):
    store.set("history", [])
    assert store.delete("history") is True
    assert store.delete("history") is False


def test_corrupt_file_raises_repository_error(store):
    (store.base_dir / "history.json").write_text("{not json", encoding="utf-8")
    with pytest.raises(RepositoryError):
        store.get("history")


def test_rejects_path_like_keys(store):
    with pytest.raises(RepositoryError):
        store.get("../escape")


def test_open_fails_when_directory_cannot_be_created(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("x", encoding="utf-8")
    with pytest.raises(RepositoryError):
        FileKeyValueStore(base_dir=blocker / "data").open()


def test_ledger_survives_restart(tmp_path):
    entry = HistoryEntry("id-1", "A.pdf", 10, 1, 2, {"KYC": 2})
    with HistoryLedger(FileKeyValueStore(tmp_path)) as ledger:
        ledger.append(entry)

    with HistoryLedger(FileKeyValueStore(tmp_path)) as reopened:
        assert reopened.read_all() == [entry]


def test_ledger_degrades_on_corrupt_file(tmp_path):
    (tmp_path / "docusort_history_v1.json").write_text("[broken", encoding="utf-8")
    with HistoryLedger(FileKeyValueStore(tmp_path)) as ledger:
        assert ledger.read_all() == []
        ledger.append(HistoryEntry("id", "A.pdf", 1, 1, 1, {}))

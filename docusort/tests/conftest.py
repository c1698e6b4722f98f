"""Pytest configuration for docusort tests.

Ensures the project root is on sys.path so ``docusort.*`` imports resolve
during test collection, and provides the shared fixtures.
"""
from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Add repository root to sys.path for module resolution.
PROJECT_ROOT = Path(__file__).resolve().parents[2]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from docusort.domain.services.history_ledger import HistoryLedger  # noqa: E402
from docusort.domain.services.page_store import PageStateStore  # noqa: E402
from docusort.tests.fakes import InMemoryKeyValueStore  # noqa: E402


@pytest.fixture
def page_store() -> PageStateStore:
    return PageStateStore()


@pytest.fixture
def kv_store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def ledger(kv_store) -> HistoryLedger:
    with HistoryLedger(kv_store) as opened:
        yield opened

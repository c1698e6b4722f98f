"""UpdatePage Command - user edits to a page's labels."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from docusort.domain.entities.page import Page
from docusort.domain.exceptions import DomainValidationError
from docusort.domain.services.page_store import PageStateStore
from docusort.domain.value_objects.document_category import DocumentCategory


@dataclass(frozen=True)
class UpdatePageCommand:
    page_id: str
    category: Optional[str] = None
    sub_category: Optional[str] = None


class UpdatePageHandler:
    """Handles UpdatePage commands."""

    def __init__(self, page_store: PageStateStore) -> None:
        self._store = page_store

    def handle(self, command: UpdatePageCommand) -> Page:
        category = None
        if command.category is not None:
            category = DocumentCategory.parse(command.category)
            if category is None:
                raise DomainValidationError(f"Unknown category: {command.category}")

        # Raises EntityNotFoundError for pages that are not in the session.
        return self._store.update_page(command.page_id, category=category, sub_category=command.sub_category)

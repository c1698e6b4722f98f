"""ExportPages Command - writes a page selection as a PDF or a zip archive."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Protocol, Tuple

from docusort.domain.exceptions import DomainValidationError, ExportError
from docusort.domain.services.export_grouper import ExportGrouper, ExportPlan
from docusort.domain.services.page_store import PageStateStore
from docusort.domain.value_objects.export_mode import ExportMode

logger = logging.getLogger(__name__)


class DocumentWriter(Protocol):
    def write(self, images: Iterable[bytes]) -> bytes: ...


class ArchiveWriter(Protocol):
    def write(self, files: Iterable[Tuple[str, bytes]]) -> bytes: ...


@dataclass(frozen=True)
class ExportPagesCommand:
    page_ids: tuple[str, ...]
    mode: ExportMode
    base_name: Optional[str] = None

    def __post_init__(self):
        if not isinstance(self.page_ids, tuple):
            object.__setattr__(self, "page_ids", tuple(self.page_ids))
        if not isinstance(self.mode, ExportMode):
            try:
                object.__setattr__(self, "mode", ExportMode(self.mode))
            except ValueError as exc:
                raise DomainValidationError(f"Unsupported export mode: {self.mode}") from exc


@dataclass(frozen=True)
class ExportArtifact:
    filename: str
    media_type: str
    content: bytes = field(repr=False)
    entry_names: tuple[str, ...] = ()


class ExportPagesHandler:
    """Handles ExportPages commands. Never mutates the page store."""

    def __init__(
        self,
        page_store: PageStateStore,
        pdf_writer: DocumentWriter,
        archive_writer: ArchiveWriter,
        grouper: Optional[ExportGrouper] = None,
    ) -> None:
        self._store = page_store
        self._pdf = pdf_writer
        self._archive = archive_writer
        self._grouper = grouper or ExportGrouper()

    def handle(self, command: ExportPagesCommand) -> ExportArtifact:
        pages = self._store.select(command.page_ids)
        if not pages:
            raise DomainValidationError("Select at least one page to export")

        plan = self._grouper.plan(pages, command.mode, command.base_name)
        try:
            content = self._write(plan)
        except Exception as exc:  # noqa: BLE001 - writer faults are opaque
            logger.exception("Export of %s pages as %s failed: %s", len(pages), plan.mode.value, exc)
            raise ExportError(f"Failed to export {plan.filename}", exc) from exc

        logger.info("Exported %s pages as %s (%s bytes)", len(pages), plan.filename, len(content))
        return ExportArtifact(
            filename=plan.filename,
            media_type=plan.media_type,
            content=content,
            entry_names=tuple(entry.filename for entry in plan.entries),
        )

    def _write(self, plan: ExportPlan) -> bytes:
        if plan.mode is ExportMode.MERGED:
            (entry,) = plan.entries
            return self._pdf.write(page.image for page in entry.pages)

        files: List[Tuple[str, bytes]] = []
        for entry in plan.entries:
            if plan.mode is ExportMode.SEPARATED:
                files.append((entry.filename, self._pdf.write(page.image for page in entry.pages)))
            else:
                files.append((entry.filename, entry.pages[0].image))
        return self._archive.write(files)

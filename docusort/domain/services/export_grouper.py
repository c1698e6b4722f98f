"""Ordering and grouping of selected pages into export artifacts."""
from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import PurePath
from typing import Dict, Iterable, List, Sequence

from docusort.constants import DEFAULT_EXPORT_BASE_NAME, PDF_MEDIA_TYPE, ZIP_MEDIA_TYPE
from docusort.domain.entities.page import Page
from docusort.domain.exceptions import DomainValidationError
from docusort.domain.value_objects.export_mode import ExportMode

_UNSAFE_CHARS = re.compile(r"[^a-zA-Z0-9_-]")
_WHITESPACE = re.compile(r"\s+")
_PATH_SEPARATORS = re.compile(r"[\\/]")


@dataclass(frozen=True)
class ExportEntry:
    """One file of an export: a paginated document or a single image."""

    filename: str
    pages: tuple[Page, ...]


@dataclass(frozen=True)
class ExportPlan:
    mode: ExportMode
    filename: str
    media_type: str
    entries: tuple[ExportEntry, ...]

    @property
    def is_archive(self) -> bool:
        return self.mode is not ExportMode.MERGED


def sort_pages(pages: Iterable[Page]) -> List[Page]:
    """Order by source document name, then page number."""
    return sorted(pages, key=lambda page: page.sort_key)


def sanitize_group_key(raw: str) -> str:
    """Replace every character outside ``[A-Za-z0-9_-]`` with ``_``."""
    return _UNSAFE_CHARS.sub("_", raw)


def image_slug(raw: str) -> str:
    """Lower-cased group key that is safe inside an archive entry name."""
    return sanitize_group_key(_WHITESPACE.sub("_", raw).lower())


class ExportGrouper:
    """Turns a page selection into an :class:`ExportPlan` for the requested mode."""

    def plan(self, pages: Sequence[Page], mode: ExportMode, base_name: str | None = None) -> ExportPlan:
        if not pages:
            raise DomainValidationError("Select at least one page to export")

        base = _PATH_SEPARATORS.sub("_", base_name or DEFAULT_EXPORT_BASE_NAME)
        ordered = sort_pages(pages)

        if mode is ExportMode.MERGED:
            return ExportPlan(
                mode=mode,
                filename=f"{base}_merged.pdf",
                media_type=PDF_MEDIA_TYPE,
                entries=(ExportEntry(filename=f"{base}_merged.pdf", pages=tuple(ordered)),),
            )
        if mode is ExportMode.SEPARATED:
            return ExportPlan(
                mode=mode,
                filename=f"{base}_separated_pdfs.zip",
                media_type=ZIP_MEDIA_TYPE,
                entries=tuple(self._group_entries(ordered)),
            )
        if mode is ExportMode.IMAGES_ONLY:
            return ExportPlan(
                mode=mode,
                filename=f"{base}_images.zip",
                media_type=ZIP_MEDIA_TYPE,
                entries=tuple(self._image_entries(ordered, base)),
            )
        raise DomainValidationError(f"Unsupported export mode: {mode}")

    @staticmethod
    def _group_entries(ordered: Sequence[Page]) -> List[ExportEntry]:
        groups: Dict[str, List[Page]] = {}
        for page in ordered:
            groups.setdefault(sanitize_group_key(page.group_key), []).append(page)
        return [ExportEntry(filename=f"{key}.pdf", pages=tuple(members)) for key, members in groups.items()]

    @staticmethod
    def _image_entries(ordered: Sequence[Page], base: str) -> List[ExportEntry]:
        entries: List[ExportEntry] = []
        taken: set[str] = set()
        for page in ordered:
            slug = image_slug(page.group_key)
            filename = f"{base}_{slug}_p{page.page_number}.jpg"
            if filename in taken:
                # Same label and page number from another document.
                stem = sanitize_group_key(PurePath(page.original_file_id).stem)
                filename = f"{base}_{slug}_{stem}_p{page.page_number}.jpg"
                suffix = 2
                while filename in taken:
                    filename = f"{base}_{slug}_{stem}_p{page.page_number}_{suffix}.jpg"
                    suffix += 1
            taken.add(filename)
            entries.append(ExportEntry(filename=filename, pages=(page,)))
        return entries

"""
Schemas for export requests
"""
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from docusort.domain.value_objects.export_mode import ExportMode


class ExportRequestSchema(BaseModel):
    pageIds: List[str] = Field(default_factory=list)
    mode: ExportMode = ExportMode.MERGED
    baseName: Optional[str] = None

"""
Schemas for session pages and uploads
"""
from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from docusort.domain.entities.page import Page
from docusort.domain.entities.upload_session import UploadSession


class PageSchema(BaseModel):
    id: str
    pageNumber: int
    originalFileId: str
    category: str
    subCategory: Optional[str] = None
    isClassifying: bool
    imageUrl: str


class PageListResponseSchema(BaseModel):
    pages: List[PageSchema] = Field(default_factory=list)
    total: int = 0
    categoryCounts: Dict[str, int] = Field(default_factory=dict)


class UpdatePageRequestSchema(BaseModel):
    category: Optional[str] = None
    subCategory: Optional[str] = None


class ProgressSchema(BaseModel):
    current: int
    total: int
    percentage: float


class SessionDocumentSchema(BaseModel):
    name: str
    size: int
    pageCount: int


class SessionSchema(BaseModel):
    sessionId: str
    title: str
    status: str
    errorMessage: Optional[str] = None
    documents: List[SessionDocumentSchema] = Field(default_factory=list)
    ingestion: ProgressSchema
    classification: ProgressSchema
    exportBaseName: str
    createdAt: datetime


def page_to_schema(page: Page) -> PageSchema:
    return PageSchema(
        id=page.id,
        pageNumber=page.page_number,
        originalFileId=page.original_file_id,
        category=page.category.value,
        subCategory=page.sub_category,
        isClassifying=page.is_classifying,
        imageUrl=f"/api/pages/{page.id}/image",
    )


def session_to_schema(session: UploadSession) -> SessionSchema:
    return SessionSchema(
        sessionId=session.session_id,
        title=session.title,
        status=session.status.state.value,
        errorMessage=session.status.error_message,
        documents=[
            SessionDocumentSchema(name=document.name, size=document.size, pageCount=len(document.page_ids))
            for document in session.documents
        ],
        ingestion=ProgressSchema(
            current=session.ingestion.current,
            total=session.ingestion.total,
            percentage=session.ingestion.percentage(),
        ),
        classification=ProgressSchema(
            current=session.classification.current,
            total=session.classification.total,
            percentage=session.classification.percentage(),
        ),
        exportBaseName=session.export_base_name,
        createdAt=session.created_at,
    )

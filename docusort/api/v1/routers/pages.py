"""Session and page endpoints for v1 API."""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Response

from docusort.api.schemas import (
    PageListResponseSchema,
    PageSchema,
    SessionSchema,
    UpdatePageRequestSchema,
    page_to_schema,
    session_to_schema,
)
from docusort.api.v1.dependencies import (
    get_list_pages_handler,
    get_page_store,
    get_process_upload_handler,
    get_session_handler,
    get_update_page_handler,
)
from docusort.application.commands.process_upload import ProcessUploadHandler
from docusort.application.commands.update_page import UpdatePageCommand, UpdatePageHandler
from docusort.application.queries.get_session import GetSessionHandler, GetSessionQuery
from docusort.application.queries.list_pages import ListPagesHandler, ListPagesQuery
from docusort.domain.exceptions import DomainValidationError, EntityNotFoundError
from docusort.domain.services.page_store import PageStateStore

router = APIRouter(tags=["pages"])


@router.get("/session", response_model=SessionSchema)
def get_session(handler: GetSessionHandler = Depends(get_session_handler)) -> SessionSchema:
    session = handler.handle(GetSessionQuery())
    if session is None:
        raise HTTPException(status_code=404, detail="No active session")
    return session_to_schema(session)


@router.delete("/session", status_code=204)
def discard_session(handler: ProcessUploadHandler = Depends(get_process_upload_handler)) -> Response:
    handler.discard()
    return Response(status_code=204)


@router.get("/pages", response_model=PageListResponseSchema)
def list_pages(
    category: Optional[str] = None,
    handler: ListPagesHandler = Depends(get_list_pages_handler),
) -> PageListResponseSchema:
    try:
        listing = handler.handle(ListPagesQuery(category=category))
    except DomainValidationError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return PageListResponseSchema(
        pages=[page_to_schema(page) for page in listing.pages],
        total=listing.total,
        categoryCounts=listing.counts_by_category,
    )


@router.get("/pages/{page_id}/image")
def get_page_image(page_id: str, store: PageStateStore = Depends(get_page_store)) -> Response:
    page = store.get(page_id)
    if page is None:
        raise HTTPException(status_code=404, detail="Page not found")
    return Response(content=page.image, media_type=page.image_mime)


@router.patch("/pages/{page_id}", response_model=PageSchema)
def update_page(
    page_id: str,
    payload: UpdatePageRequestSchema,
    handler: UpdatePageHandler = Depends(get_update_page_handler),
) -> PageSchema:
    try:
        page = handler.handle(
            UpdatePageCommand(page_id=page_id, category=payload.category, sub_category=payload.subCategory)
        )
    except EntityNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except DomainValidationError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return page_to_schema(page)

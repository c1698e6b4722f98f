"""History API routes for v1 endpoints."""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Response

from docusort.api.schemas import HistoryListResponseSchema, history_entry_to_schema
from docusort.api.v1.dependencies import get_clear_history_handler, get_list_history_handler
from docusort.application.commands.clear_history import ClearHistoryCommand, ClearHistoryHandler
from docusort.application.queries.list_history import ListHistoryHandler, ListHistoryQuery

router = APIRouter(prefix="/history", tags=["history"])


@router.get("", response_model=HistoryListResponseSchema)
def list_history(
    limit: Optional[int] = None,
    handler: ListHistoryHandler = Depends(get_list_history_handler),
) -> HistoryListResponseSchema:
    entries = handler.handle(ListHistoryQuery(limit=limit))
    return HistoryListResponseSchema(entries=[history_entry_to_schema(entry) for entry in entries])


@router.delete("", status_code=204)
def clear_history(handler: ClearHistoryHandler = Depends(get_clear_history_handler)) -> Response:
    handler.handle(ClearHistoryCommand())
    return Response(status_code=204)

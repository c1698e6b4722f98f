"""Export endpoints for v1 API."""
from __future__ import annotations

import re
from urllib.parse import quote

from fastapi import APIRouter, Depends, HTTPException, Response

from docusort.api.schemas import ExportRequestSchema
from docusort.api.v1.dependencies import get_export_pages_handler, get_session_handler
from docusort.application.commands.export_pages import ExportPagesCommand, ExportPagesHandler
from docusort.application.queries.get_session import GetSessionHandler, GetSessionQuery
from docusort.domain.exceptions import DomainValidationError, ExportError

router = APIRouter(tags=["exports"])

_NON_HEADER_SAFE = re.compile(r'[^\x20-\x7e]|["\\]')


def content_disposition(filename: str) -> str:
    """Attachment header with an ASCII ``filename`` and, when needed, an RFC 5987 ``filename*``."""
    fallback = _NON_HEADER_SAFE.sub("_", filename)
    if fallback == filename:
        return f'attachment; filename="{filename}"'
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename, safe='')}"


@router.post("/exports")
def export_pages(
    payload: ExportRequestSchema,
    handler: ExportPagesHandler = Depends(get_export_pages_handler),
    session_handler: GetSessionHandler = Depends(get_session_handler),
) -> Response:
    base_name = payload.baseName
    if not base_name:
        session = session_handler.handle(GetSessionQuery())
        base_name = session.export_base_name if session else None

    try:
        artifact = handler.handle(
            ExportPagesCommand(page_ids=tuple(payload.pageIds), mode=payload.mode, base_name=base_name)
        )
    except DomainValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except ExportError as exc:
        raise HTTPException(status_code=500, detail="Export failed. Please try again.") from exc

    return Response(
        content=artifact.content,
        media_type=artifact.media_type,
        headers={"Content-Disposition": content_disposition(artifact.filename)},
    )

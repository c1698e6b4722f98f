"""Upload endpoints for v1 API."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import List

from fastapi import APIRouter, BackgroundTasks, Depends, File, HTTPException, UploadFile

from docusort.api.schemas import SessionSchema, session_to_schema
from docusort.api.v1.dependencies import get_process_upload_handler
from docusort.application.commands.ingest_documents import IngestDocumentsCommand, SourceDocument
from docusort.application.commands.process_upload import ProcessUploadHandler
from docusort.domain.exceptions import IngestionError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["uploads"])


@router.post("/uploads", response_model=SessionSchema, status_code=202)
def upload_documents(
    background_tasks: BackgroundTasks,
    files: List[UploadFile] = File(...),
    handler: ProcessUploadHandler = Depends(get_process_upload_handler),
) -> SessionSchema:
    documents: List[SourceDocument] = []
    for upload in files:
        if not upload.filename:
            raise HTTPException(status_code=400, detail="Filename is required")
        if Path(upload.filename).suffix.lower() != ".pdf":
            raise HTTPException(status_code=400, detail="Only PDF files are supported")
        data = upload.file.read()
        documents.append(SourceDocument(name=upload.filename, data=data, size=len(data)))

    try:
        session = handler.start(IngestDocumentsCommand(documents=tuple(documents)))
    except IngestionError as exc:
        raise HTTPException(
            status_code=422,
            detail="Failed to process PDF files. Please check if the files are valid.",
        ) from exc

    background_tasks.add_task(handler.classify, session.session_id)
    return session_to_schema(session)

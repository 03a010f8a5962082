"""
Notes API — Notes Route Handlers
=================================

What:  GET /list, POST /create, PUT /update/{id}, DELETE /delete/{id}.
How:   Thin handlers: parse the body, delegate to NoteService, set status.
       Mounted by create_app() under settings.api_prefix (default /api).

Error responses come from the global exception handlers in main.py:
    400 ValidationError, 404 NotFoundError, 500 DatabaseError.
"""

import logging
from typing import List

from fastapi import APIRouter, BackgroundTasks, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from notes_api.database import get_db_session
from notes_api.schemas.note import (
    DeleteResponse,
    ErrorResponse,
    NoteCreate,
    NoteResponse,
    NoteUpdate,
)
from notes_api.services.note_service import note_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Notes"])


@router.get(
    "/list",
    response_model=List[NoteResponse],
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="List all notes",
)
async def list_notes(
    db: AsyncSession = Depends(get_db_session),
) -> List[NoteResponse]:
    """Every note, most recently created first. No pagination."""
    return await note_service.list_notes(db)


@router.post(
    "/create",
    status_code=201,
    response_model=NoteResponse,
    responses={
        400: {"description": "text is missing or empty", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Create a new note",
)
async def create_note(
    payload: NoteCreate,
    background_tasks: BackgroundTasks,
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    """
    Create a note from `{text, color?}`.

    The note is committed before the response is built. The audit log line
    runs as a background task, after the response has been sent.
    """
    note = await note_service.create_note(db, payload)
    background_tasks.add_task(logger.info, "Note created: %s", note.uuid)
    return note


@router.put(
    "/update/{note_id}",
    response_model=NoteResponse,
    responses={
        400: {"description": "text is missing or empty", "model": ErrorResponse},
        404: {"description": "Note not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Update a note",
)
async def update_note(
    note_id: str,
    payload: NoteUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    """Replace text/color of the note with uuid `note_id` and bump its edit count."""
    return await note_service.update_note(db, note_id, payload)


@router.delete(
    "/delete/{note_id}",
    response_model=DeleteResponse,
    responses={
        404: {"description": "Note not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Delete a note",
)
async def delete_note(
    note_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> DeleteResponse:
    await note_service.delete_note(db, note_id)
    return DeleteResponse(ok=True)

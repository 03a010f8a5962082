"""
Notes API — Note Service (Business Logic)
==========================================

What:  The four note operations: list, create, update, delete.
Why:   Keeps validation and persistence rules independent of HTTP concerns.
How:   Each method receives the request's AsyncSession, runs one statement
       (plus commit), and returns Pydantic response models.
Who:   Called by the route handlers in routes/notes.py.

Error Handling Strategy:
    - ValidationError / NotFoundError are raised directly and propagate as-is.
    - Any other failure (driver error, constraint violation, bug) is logged
      with context and re-raised as DatabaseError (generic 500). Storage
      outages and programming errors are not distinguished.

Concurrency:
    No locking. update_note increments nr_of_edits inside the UPDATE
    statement itself, so concurrent updates never lose an increment; the
    text/color of whichever write lands last wins.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import delete, desc, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from notes_api.exceptions import DatabaseError, NotesError, NotFoundError, ValidationError
from notes_api.models.note import Note
from notes_api.schemas.note import NoteCreate, NoteResponse, NoteUpdate

logger = logging.getLogger(__name__)


def require_text(text: Optional[str]) -> str:
    """Shared create/update rule: `text` must be present and non-empty."""
    if not text:
        raise ValidationError(message="text is required", field="text")
    return text


class NoteService:
    """
    Stateless business logic layer for notes.

    Responsibilities:
        - list_notes(): every note, newest first
        - create_note(): validate, generate uuid, persist
        - update_note(): validate, atomic update-by-uuid, bump edit counter
        - delete_note(): hard delete by uuid
    """

    async def list_notes(self, db: AsyncSession) -> List[NoteResponse]:
        """
        Return all notes ordered by created_at descending.

        Ties (same timestamp) fall back to insertion order, newest first.
        """
        try:
            result = await db.execute(
                select(Note).order_by(desc(Note.created_at), desc(Note.id))
            )
            notes = result.scalars().all()
        except Exception as e:
            logger.error("Database error listing notes: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="failed to list notes",
                context={"error_type": type(e).__name__},
            )

        logger.info("Returning %d notes", len(notes))
        return [NoteResponse.model_validate(note) for note in notes]

    async def create_note(self, db: AsyncSession, payload: NoteCreate) -> NoteResponse:
        """
        Persist a new note and return its representation.

        Raises:
            ValidationError: text missing or empty (nothing is written)
            DatabaseError: insert or commit failed
        """
        text = require_text(payload.text)
        now = datetime.now(timezone.utc)

        note = Note(
            uuid=str(uuid.uuid4()),
            text=text,
            color=payload.color or "",
            nr_of_edits=0,
            created_at=now,
            updated_at=now,
        )

        try:
            db.add(note)
            await db.commit()
        except Exception as e:
            logger.error("Database error creating note: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="failed to create note",
                context={"error_type": type(e).__name__},
            )

        return NoteResponse.model_validate(note)

    async def update_note(
        self,
        db: AsyncSession,
        note_uuid: str,
        payload: NoteUpdate,
    ) -> NoteResponse:
        """
        Replace text (and color, when given) of the note with this uuid.

        Query plan:
            UPDATE notes SET text=.., color=.., updated_at=now,
                   nr_of_edits = nr_of_edits + 1
            WHERE uuid = :uuid RETURNING *

        Raises:
            ValidationError: text missing or empty
            NotFoundError: no note has this uuid (store unchanged)
            DatabaseError: statement or commit failed
        """
        values = {
            "text": require_text(payload.text),
            "updated_at": datetime.now(timezone.utc),
            "nr_of_edits": Note.nr_of_edits + 1,
        }
        if payload.color is not None:
            values["color"] = payload.color

        try:
            result = await db.execute(
                update(Note)
                .where(Note.uuid == note_uuid)
                .values(**values)
                .returning(Note)
            )
            note = result.scalar_one_or_none()
            if note is None:
                raise NotFoundError(resource="note", resource_id=note_uuid)
            await db.commit()
        except NotesError:
            raise
        except Exception as e:
            logger.error("Database error updating note %s: %s", note_uuid, str(e), exc_info=True)
            raise DatabaseError(
                message="failed to update note",
                context={"note_uuid": note_uuid, "error_type": type(e).__name__},
            )

        logger.info("Note updated: %s (edits=%d)", note.uuid, note.nr_of_edits)
        return NoteResponse.model_validate(note)

    async def delete_note(self, db: AsyncSession, note_uuid: str) -> None:
        """
        Permanently remove the note with this uuid.

        Raises:
            NotFoundError: no note has this uuid
            DatabaseError: statement or commit failed
        """
        try:
            result = await db.execute(delete(Note).where(Note.uuid == note_uuid))
            if result.rowcount == 0:
                raise NotFoundError(resource="note", resource_id=note_uuid)
            await db.commit()
        except NotesError:
            raise
        except Exception as e:
            logger.error("Database error deleting note %s: %s", note_uuid, str(e), exc_info=True)
            raise DatabaseError(
                message="failed to delete note",
                context={"note_uuid": note_uuid, "error_type": type(e).__name__},
            )

        logger.info("Note deleted: %s", note_uuid)


# Stateless; one shared instance
note_service = NoteService()

"""
Notes API — Note SQLAlchemy Model
==================================

What:  ORM model for the `notes` collection.
Who:   Used by NoteService for CRUD operations and by Database.connect()
       for `create_all`.

Table Design:
    - id: internal integer key, never part of the API contract
    - uuid: external identifier, generated by the service, unique index
    - text / color: user content; color defaults to ''
    - nr_of_edits: incremented in SQL by every successful update
    - created_at / updated_at: UTC, timezone-aware columns

    Index on created_at DESC serves the only list query (newest first).
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Index, Integer, String, Text
from sqlalchemy import text as sql_text
from sqlalchemy.orm import Mapped, mapped_column

from notes_api.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Note(Base):
    """
    A user-authored note with an optional color annotation.

    Lifecycle:
        1. Created by NoteService.create_note (nr_of_edits = 0)
        2. Mutated only by NoteService.update_note
        3. Hard-deleted by NoteService.delete_note
    """

    __tablename__ = "notes"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    uuid: Mapped[str] = mapped_column(
        String(36),
        nullable=False,
        unique=True,
        index=True,
        comment="External identifier used by every update/delete lookup",
    )

    text: Mapped[str] = mapped_column(Text, nullable=False)

    color: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="",
        server_default=sql_text("''"),
    )

    nr_of_edits: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        server_default=sql_text("0"),
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    __table_args__ = (
        Index("idx_notes_created_at", created_at.desc()),
    )

    def __repr__(self) -> str:
        return (
            f"<Note(uuid={self.uuid}, nr_of_edits={self.nr_of_edits}, "
            f"created_at='{self.created_at}')>"
        )

"""
Noteful Backend: Note Model
=============================

What:  Table `notes` plus the `note_tags` association table.
How:
    - folder_id is a plain UUID column with no foreign key: a note may name a
      folder that does not exist (or no longer exists). Only its shape is
      validated, in NoteService.
    - tags is a many-to-many collection through `note_tags`, loaded with
      selectin so it is populated by the same awaited query that loads the
      note (async sessions cannot lazy-load on attribute access).
    - Rows in `note_tags` go away with their note (ON DELETE CASCADE and the
      ORM's secondary bookkeeping) and are removed explicitly by TagService
      when a tag is deleted.

Query Patterns:
    - List:   WHERE title ILIKE %term% AND folder_id = :f ORDER BY id
    - Detail: WHERE id = :id (primary key)
"""

import uuid
from typing import List, Optional

from sqlalchemy import Column, ForeignKey, Table, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from noteful.database import Base
from noteful.models.base import TimestampedEntity
from noteful.models.tag import Tag


note_tags = Table(
    "note_tags",
    Base.metadata,
    Column("note_id", Uuid, ForeignKey("notes.id", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", Uuid, ForeignKey("tags.id"), primary_key=True, index=True),
)


class Note(TimestampedEntity):
    __tablename__ = "notes"

    title: Mapped[str] = mapped_column(Text, nullable=False)

    content: Mapped[Optional[str]] = mapped_column(Text, nullable=True, default=None)

    folder_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid,
        nullable=True,
        default=None,
        index=True,
    )

    tags: Mapped[List[Tag]] = relationship(
        Tag,
        secondary=note_tags,
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title='{self.title}', folder_id={self.folder_id})>"

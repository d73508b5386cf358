"""
Noteful Backend: Folder Model
===============================

Table `folders`. Names are unique; the unique index is what produces the
duplicate-key signal that FolderService turns into a ConflictError.
Notes point at folders by id only, so a folder row owns nothing.
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from noteful.models.base import TimestampedEntity


class Folder(TimestampedEntity):
    __tablename__ = "folders"

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<Folder(id={self.id}, name='{self.name}')>"

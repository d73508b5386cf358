"""
Noteful Backend: Tag Model
============================

Table `tags`, unique names. The Note side owns the many-to-many link
(`note_tags`); Tag has no back-reference, so deleting a tag never loads
notes into the session. TagService clears the link rows explicitly.
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from noteful.models.base import TimestampedEntity


class Tag(TimestampedEntity):
    __tablename__ = "tags"

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<Tag(id={self.id}, name='{self.name}')>"

"""
Noteful Backend: Shared Column Types and Mixins
=================================================

What:  The id / createdAt / updatedAt columns every entity carries.
How:   `TimestampedEntity` is an abstract declarative base. Ids are UUIDs
       generated in Python at flush time, so the new id is known before
       the insert is sent. Timestamps are timezone-aware UTC.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Uuid
from sqlalchemy.types import TypeDecorator
from sqlalchemy.orm import Mapped, mapped_column

from noteful.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UTCDateTime(TypeDecorator):
    """
    DateTime(timezone=True) that always hands back aware UTC values.

    SQLite has no timezone storage and returns naive datetimes; those are
    tagged as UTC on the way out so API timestamps compare equal across
    create and fetch on every backend.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is not None and value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value

    def process_result_value(self, value, dialect):
        if value is not None and value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value


class TimestampedEntity(Base):
    """Abstract base: UUID primary key plus created/updated timestamps."""

    __abstract__ = True

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime,
        nullable=False,
        default=utcnow,
    )

    # Services set this explicitly on every update; onupdate covers
    # writes made outside the services (seed script, shell sessions).
    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime,
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
    )

"""
Noteful Backend: Generic CRUD Service
=======================================

What:  The validate → persist → translate-errors pipeline shared by the
       folder, tag and note services.
How:   `CrudService` is parameterized by an ORM model and a request payload
       type. Subclasses supply the entity name, the list ordering and a
       `validate()` hook that turns a payload into column values (raising
       ValidationError before any write). Everything else is shared.
Who:   Constructed per request by the route dependencies with the request's
       AsyncSession; holds no state beyond that session.

Request Flow:
    ┌──────────┐   ┌────────────┐   ┌──────────────┐   ┌──────────────┐
    │ parse id │──▶│ validate() │──▶│ SQLAlchemy   │──▶│ ORM entity   │
    │ (400)    │   │ (400)      │   │ flush+commit │   │ → route      │
    └──────────┘   └────────────┘   └──────┬───────┘   └──────────────┘
                                           │ IntegrityError (unique) → ConflictError
                                           │ other SQLAlchemyError   → InternalError

Writes commit inside the service call, so a failed commit surfaces as a
ConflictError or InternalError before the route builds its response.
Deletes are idempotent: a well-formed id that matches nothing is a no-op.
"""

import logging
import uuid
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Generic, List, Sequence, Type, TypeVar

from sqlalchemy import Select, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from noteful.exceptions import ConflictError, InternalError, NotefulError, NotFoundError
from noteful.models.base import TimestampedEntity, utcnow
from noteful.validation import parse_id, require_text

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=TimestampedEntity)
PayloadT = TypeVar("PayloadT")

# SQLSTATE for unique_violation (PostgreSQL); SQLite has no SQLSTATE and is
# recognised by its message text instead.
UNIQUE_VIOLATION = "23505"


def is_duplicate_key(exc: IntegrityError) -> bool:
    """True when an IntegrityError was caused by a unique constraint."""
    orig = getattr(exc, "orig", None)
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if sqlstate == UNIQUE_VIOLATION:
        return True
    text = str(orig if orig is not None else exc).lower()
    return "unique constraint" in text or "duplicate key" in text


class CrudService(Generic[ModelT, PayloadT]):
    """
    Base class for the resource services.

    Subclass contract:
        model:      ORM class this service manages
        entity:     lowercase entity name used in messages ("folder")
        ordering(): ORDER BY columns for list_all()
        validate(): payload → dict of column values, raising ValidationError
    """

    model: Type[ModelT]
    entity: str = "resource"

    def __init__(self, db: AsyncSession):
        self.db = db

    # ── Hooks ─────────────────────────────────────────────────────────────

    def ordering(self) -> Sequence[Any]:
        return (self.model.id,)

    async def validate(self, payload: PayloadT) -> Dict[str, Any]:
        raise NotImplementedError

    # ── Operations ────────────────────────────────────────────────────────

    async def list_all(self) -> List[ModelT]:
        return await self._fetch_all(select(self.model))

    async def get(self, raw_id: Any) -> ModelT:
        entity_id = parse_id(raw_id)
        async with self._guarded("get"):
            entity = await self.db.get(self.model, entity_id)
        if entity is None:
            raise NotFoundError(resource=self.entity, resource_id=str(entity_id))
        return entity

    async def create(self, payload: PayloadT) -> ModelT:
        fields = await self.validate(payload)
        entity = self.model(**fields)
        async with self._guarded("create"):
            self.db.add(entity)
            await self.db.flush()
            await self.db.commit()
        logger.info("Created %s %s", self.entity, entity.id)
        return entity

    async def update(self, raw_id: Any, payload: PayloadT) -> ModelT:
        entity_id = parse_id(raw_id)
        fields = await self.validate(payload)
        async with self._guarded("update"):
            entity = await self.db.get(self.model, entity_id)
            if entity is None:
                raise NotFoundError(resource=self.entity, resource_id=str(entity_id))
            for name, value in fields.items():
                setattr(entity, name, value)
            entity.updated_at = utcnow()
            await self.db.flush()
            await self.db.commit()
        logger.info("Updated %s %s", self.entity, entity_id)
        return entity

    async def delete(self, raw_id: Any) -> None:
        entity_id = parse_id(raw_id)
        async with self._guarded("delete"):
            await self._delete(entity_id)
            await self.db.commit()

    # ── Internals ─────────────────────────────────────────────────────────

    async def _delete(self, entity_id: uuid.UUID) -> None:
        # ORM delete so relationship bookkeeping (note_tags rows) runs
        entity = await self.db.get(self.model, entity_id)
        if entity is None:
            logger.debug("Delete of missing %s %s ignored", self.entity, entity_id)
            return
        await self.db.delete(entity)
        await self.db.flush()
        logger.info("Deleted %s %s", self.entity, entity_id)

    async def _fetch_all(self, query: Select) -> List[ModelT]:
        async with self._guarded("list"):
            result = await self.db.execute(query.order_by(*self.ordering()))
            return list(result.scalars().all())

    @asynccontextmanager
    async def _guarded(self, action: str) -> AsyncIterator[None]:
        """
        Translate persistence failures into application errors.

        NotefulErrors raised inside the block pass through untouched.
        """
        try:
            yield
        except NotefulError:
            raise
        except IntegrityError as e:
            await self.db.rollback()
            if is_duplicate_key(e):
                logger.info("Duplicate %s name rejected during %s", self.entity, action)
                raise ConflictError(entity=self.entity) from e
            logger.error("Integrity error during %s %s: %s", action, self.entity, str(e.orig))
            raise InternalError(
                cause=type(e).__name__,
                context={"action": action, "entity": self.entity},
            ) from e
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(
                "Database error during %s %s: %s", action, self.entity, str(e), exc_info=True
            )
            raise InternalError(
                cause=type(e).__name__,
                context={"action": action, "entity": self.entity},
            ) from e


class NamedResourceService(CrudService[ModelT, PayloadT]):
    """Folders and tags: a single required, unique `name`, listed by name."""

    def ordering(self) -> Sequence[Any]:
        return (self.model.name,)

    async def validate(self, payload: PayloadT) -> Dict[str, Any]:
        return {"name": require_text(getattr(payload, "name", None), "name")}


"""
Noteful Backend: Tag Service
==============================

What:  Tag CRUD plus the cascading cleanup on delete.
How:   Deleting a tag is two sequential statements on the request's session:

    1. DELETE FROM note_tags WHERE tag_id = :id   (pull the tag off every note)
    2. DELETE FROM tags      WHERE id = :id

       The link rows go first because note_tags.tag_id is a foreign key.
       Both run before the route answers 204; a failure in either becomes an
       InternalError (500) and the request's transaction is rolled back.
"""

import logging
import uuid

from sqlalchemy import delete

from noteful.models.note import note_tags
from noteful.models.tag import Tag
from noteful.schemas.tag import TagIn
from noteful.services.crud_service import NamedResourceService

logger = logging.getLogger(__name__)


class TagService(NamedResourceService[Tag, TagIn]):
    model = Tag
    entity = "tag"

    async def _delete(self, entity_id: uuid.UUID) -> None:
        cleanup = await self.db.execute(
            delete(note_tags).where(note_tags.c.tag_id == entity_id)
        )
        removed = await self.db.execute(delete(Tag).where(Tag.id == entity_id))

        if removed.rowcount:
            logger.info(
                "Deleted tag %s and removed it from %d note(s)",
                entity_id,
                cleanup.rowcount,
            )
        else:
            logger.debug("Delete of missing tag %s ignored", entity_id)

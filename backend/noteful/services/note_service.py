"""
Noteful Backend: Note Service
===============================

What:  Note CRUD with the two references a note carries.
How:   Builds on CrudService; adds filtered listing and the folder/tag
       checks in `validate()`.

Validation Order (create / update):
    1. path id well-formed               → 400 "The `id` is not valid"
    2. title present and non-empty       → 400 "Missing `title` in request body"
    3. folderId well-formed (if given)   → 400 "The `folderId` is not valid"
    4. every tags[] entry well-formed
       and naming an existing tag        → 400 "The `tags` array contains an invalid `id`"

    folderId existence is NOT checked: a note may point at a folder that
    was never created or has since been deleted.

Listing:
    GET /notes?searchTerm=x&folderId=f
    → WHERE title ILIKE '%x%' (wildcards in x escaped) AND folder_id = f
      ORDER BY id
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import select

from noteful.exceptions import ValidationError
from noteful.models.note import Note
from noteful.models.tag import Tag
from noteful.schemas.note import NoteIn
from noteful.services.crud_service import CrudService
from noteful.validation import parse_id_list, parse_optional_id, require_text

logger = logging.getLogger(__name__)


class NoteService(CrudService[Note, NoteIn]):
    model = Note
    entity = "note"

    async def list_all(
        self,
        search_term: Optional[str] = None,
        folder_id: Optional[str] = None,
    ) -> List[Note]:
        """
        List notes, optionally filtered by title substring and folder.

        Args:
            search_term: Case-insensitive substring matched against title.
                         Empty string means no filter.
            folder_id:   Exact folder reference; malformed values are a 400.
        """
        query = select(Note)

        if search_term:
            query = query.where(Note.title.icontains(search_term, autoescape=True))

        folder = parse_optional_id(folder_id, "folderId")
        if folder is not None:
            query = query.where(Note.folder_id == folder)

        return await self._fetch_all(query)

    async def validate(self, payload: NoteIn) -> Dict[str, Any]:
        fields: Dict[str, Any] = {
            "title": require_text(payload.title, "title"),
            "content": payload.content,
            "folder_id": parse_optional_id(payload.folder_id, "folderId"),
        }
        fields["tags"] = await self._resolve_tags(payload.tags or [])
        return fields

    async def _resolve_tags(self, raw_ids: List[Any]) -> List[Tag]:
        """Map tag ids to Tag rows; unknown ids are rejected like malformed ones."""
        tag_ids = parse_id_list(raw_ids, "tags")
        if not tag_ids:
            return []

        async with self._guarded("resolve tags"):
            result = await self.db.execute(select(Tag).where(Tag.id.in_(tag_ids)))
            found = {tag.id: tag for tag in result.scalars().all()}

        missing = [str(tag_id) for tag_id in tag_ids if tag_id not in found]
        if missing:
            logger.info("Note references unknown tag(s): %s", ", ".join(missing))
            raise ValidationError(
                message="The `tags` array contains an invalid `id`",
                field="tags",
                context={"unknown_ids": missing},
            )
        return [found[tag_id] for tag_id in tag_ids]

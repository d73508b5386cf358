"""
Noteful Backend: Note Schemas
===============================

What:  Request and response models for /notes.
How:   Identifiers arrive as plain strings and are validated by NoteService,
       so a malformed `folderId` or `tags` entry yields the documented 400
       message rather than a schema error.
"""

import uuid
from typing import Any, List, Optional

from pydantic import Field, field_validator

from noteful.schemas.common import ApiModel, EntityResponse


class NoteIn(ApiModel):
    """
    Body for POST /notes and PUT /notes/{id}.

    PUT is a full replacement: optional fields left out are cleared.
    """

    title: Optional[str] = Field(default=None, description="Required, non-empty")
    content: Optional[str] = Field(default=None)
    folder_id: Optional[str] = Field(default=None, description="Folder id (UUID)")
    # Entries of any JSON type reach NoteService, which rejects non-ids
    tags: Optional[List[Any]] = Field(default=None, description="Tag ids (UUIDs)")


class NoteResponse(EntityResponse):
    title: str
    content: Optional[str] = None
    folder_id: Optional[uuid.UUID] = None
    tags: List[uuid.UUID] = Field(default_factory=list, description="Ids of attached tags")

    @field_validator("tags", mode="before")
    @classmethod
    def tags_to_ids(cls, v: Any) -> Any:
        """ORM notes carry Tag objects; the API exposes their ids."""
        if v is None:
            return []
        return [getattr(item, "id", item) for item in v]


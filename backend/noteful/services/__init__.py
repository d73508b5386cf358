"""
Noteful Backend: Services Layer
=================================

What:  Business logic between routes (HTTP) and the database (persistence).
How:   Each service wraps one AsyncSession handed in at construction and
       raises NotefulError subclasses; routes never see SQLAlchemy errors.

Service Inventory:
    - CrudService / NamedResourceService: shared validate → persist → translate pipeline
    - FolderService: folders
    - TagService:    tags, plus removal from notes on delete
    - NoteService:   notes, filtered listing, folder/tag reference checks
"""

from noteful.services.crud_service import CrudService, NamedResourceService
from noteful.services.folder_service import FolderService
from noteful.services.note_service import NoteService
from noteful.services.tag_service import TagService

__all__ = [
    "CrudService",
    "NamedResourceService",
    "FolderService",
    "NoteService",
    "TagService",
]

"""
Noteful Backend: Folder Service
=================================

Folder CRUD on top of NamedResourceService. Deleting a folder leaves notes
that reference it untouched; their folderId simply stops resolving.
"""

from noteful.models.folder import Folder
from noteful.schemas.folder import FolderIn
from noteful.services.crud_service import NamedResourceService


class FolderService(NamedResourceService[Folder, FolderIn]):
    model = Folder
    entity = "folder"

"""
Noteful Backend: Folder Routes
================================

    GET    /folders        list, ordered by name
    GET    /folders/{id}   detail
    POST   /folders        create → 201 + Location
    PUT    /folders/{id}   rename
    DELETE /folders/{id}   204, idempotent
"""

from noteful.dependencies import get_folder_service
from noteful.routes.resources import build_named_resource_router
from noteful.schemas.folder import FolderIn, FolderResponse

router = build_named_resource_router(
    path="/folders",
    label="folder",
    service_dependency=get_folder_service,
    request_model=FolderIn,
    response_model=FolderResponse,
)

"""
Noteful Backend: Tag Routes
=============================

Same surface as /folders. DELETE /tags/{id} also removes the tag from
every note before answering 204.
"""

from noteful.dependencies import get_tag_service
from noteful.routes.resources import build_named_resource_router
from noteful.schemas.tag import TagIn, TagResponse

router = build_named_resource_router(
    path="/tags",
    label="tag",
    service_dependency=get_tag_service,
    request_model=TagIn,
    response_model=TagResponse,
)

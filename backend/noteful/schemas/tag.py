"""Tag API contract."""

from pydantic import Field

from noteful.schemas.common import EntityResponse, NamedResourceIn


class TagIn(NamedResourceIn):
    pass


class TagResponse(EntityResponse):
    name: str = Field(description="Tag name (unique)")

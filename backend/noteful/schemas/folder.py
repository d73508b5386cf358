"""Folder API contract."""

from pydantic import Field

from noteful.schemas.common import EntityResponse, NamedResourceIn


class FolderIn(NamedResourceIn):
    pass


class FolderResponse(EntityResponse):
    name: str = Field(description="Folder name (unique)")

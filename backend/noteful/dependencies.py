"""
Noteful Backend: FastAPI Dependencies
=======================================

Each resource service is built per request around the request's session,
so services never reach for a global connection.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from noteful.database import get_db_session
from noteful.services import FolderService, NoteService, TagService


def get_folder_service(db: AsyncSession = Depends(get_db_session)) -> FolderService:
    return FolderService(db)


def get_tag_service(db: AsyncSession = Depends(get_db_session)) -> TagService:
    return TagService(db)


def get_note_service(db: AsyncSession = Depends(get_db_session)) -> NoteService:
    return NoteService(db)

"""
Noteful Backend: Notes Route Handlers
=======================================

What:  CRUD endpoints for notes.
How:   Extracts query/path/body, delegates to NoteService, returns JSON.

    GET    /notes?searchTerm=&folderId=   filtered list, ordered by id
    GET    /notes/{id}                    detail
    POST   /notes                         create → 201 + Location
    PUT    /notes/{id}                    full replacement
    DELETE /notes/{id}                    204, idempotent
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request, Response, status

from noteful.dependencies import get_note_service
from noteful.routes.resources import ERROR_RESPONSES, location_for
from noteful.schemas.common import ErrorResponse
from noteful.schemas.note import NoteIn, NoteResponse
from noteful.services.note_service import NoteService

router = APIRouter(prefix="/notes", tags=["Notes"])

NOT_FOUND = {404: {"description": "Note not found", "model": ErrorResponse}}
BAD_REQUEST = {
    400: {"description": "Invalid id, folderId or tags, or missing title", "model": ErrorResponse},
}


@router.get(
    "",
    response_model=List[NoteResponse],
    responses={
        400: {"description": "Malformed folderId", "model": ErrorResponse},
        500: ERROR_RESPONSES[500],
    },
    summary="List notes",
    description=(
        "Returns every note, optionally narrowed by a case-insensitive title "
        "substring (`searchTerm`) and/or an exact folder reference (`folderId`). "
        "Both filters combine with AND."
    ),
)
async def list_notes(
    search_term: Optional[str] = Query(
        default=None,
        alias="searchTerm",
        description="Substring to look for in note titles (case-insensitive)",
    ),
    folder_id: Optional[str] = Query(
        default=None,
        alias="folderId",
        description="Only notes filed in this folder",
    ),
    service: NoteService = Depends(get_note_service),
) -> List[NoteResponse]:
    notes = await service.list_all(search_term=search_term, folder_id=folder_id)
    return [NoteResponse.model_validate(note) for note in notes]


@router.get(
    "/{note_id}",
    response_model=NoteResponse,
    responses={**ERROR_RESPONSES, **BAD_REQUEST, **NOT_FOUND},
    summary="Get a single note by id",
)
async def get_note(
    note_id: str,
    service: NoteService = Depends(get_note_service),
) -> NoteResponse:
    note = await service.get(note_id)
    return NoteResponse.model_validate(note)


@router.post(
    "",
    response_model=NoteResponse,
    status_code=status.HTTP_201_CREATED,
    responses={**ERROR_RESPONSES, **BAD_REQUEST},
    summary="Create a note",
)
async def create_note(
    request: Request,
    response: Response,
    payload: Optional[NoteIn] = None,
    service: NoteService = Depends(get_note_service),
) -> NoteResponse:
    note = await service.create(payload or NoteIn())
    response.headers["Location"] = location_for(request, note.id)
    return NoteResponse.model_validate(note)


@router.put(
    "/{note_id}",
    response_model=NoteResponse,
    responses={**ERROR_RESPONSES, **BAD_REQUEST, **NOT_FOUND},
    summary="Replace a note",
    description="Full replacement: optional fields omitted from the body are cleared.",
)
async def update_note(
    note_id: str,
    payload: Optional[NoteIn] = None,
    service: NoteService = Depends(get_note_service),
) -> NoteResponse:
    note = await service.update(note_id, payload or NoteIn())
    return NoteResponse.model_validate(note)


@router.delete(
    "/{note_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=BAD_REQUEST,
    summary="Delete a note (no-op if it does not exist)",
)
async def delete_note(
    note_id: str,
    service: NoteService = Depends(get_note_service),
) -> Response:
    await service.delete(note_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

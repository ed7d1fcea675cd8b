"""
Notes API Endpoints.

REST API endpoints for note management. Hidden notes need the PIN,
sent as the auth cookie or the X-Auth-Pin header.
"""

from typing import Annotated

from fastapi import APIRouter, Path, Response

from notekeeper.core.dependencies import DbSession, PinCredential, RequestId
from notekeeper.models.note import MAX_NOTE_ID
from notekeeper.schemas.base import ApiResponse, ResponseMetadata
from notekeeper.schemas.note import (
    BatchDeleteResult,
    NoteBatchDelete,
    NoteCreate,
    NoteResponse,
    NoteUpdate,
)
from notekeeper.services.note import NoteService

router = APIRouter()

NoteId = Annotated[int, Path(gt=0, le=MAX_NOTE_ID, description="Note identifier")]


@router.get(
    "",
    response_model=ApiResponse[list[NoteResponse]],
    summary="List visible notes",
    description="Get every note that is not hidden.",
)
async def list_visible_notes(
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[list[NoteResponse]]:
    """List visible notes."""
    service = NoteService(db)
    notes = await service.list_visible()
    return ApiResponse(
        data=[NoteResponse.model_validate(note) for note in notes],
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.get(
    "/hidden",
    response_model=ApiResponse[list[NoteResponse]],
    summary="List hidden notes",
    description="Get hidden notes. Returns an empty list without a valid PIN.",
)
async def list_hidden_notes(
    db: DbSession,
    request_id: RequestId,
    credential: PinCredential,
) -> ApiResponse[list[NoteResponse]]:
    """List hidden notes."""
    service = NoteService(db)
    notes = await service.list_hidden(credential)
    return ApiResponse(
        data=[NoteResponse.model_validate(note) for note in notes],
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.post(
    "",
    response_model=ApiResponse[NoteResponse],
    status_code=201,
    summary="Create a note",
    description="Create a new note with a title, optional content and flags.",
)
async def create_note(
    data: NoteCreate,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[NoteResponse]:
    """Create a new note."""
    service = NoteService(db)
    note = await service.create_note(data)
    return ApiResponse(
        data=NoteResponse.model_validate(note),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.delete(
    "/batch",
    response_model=ApiResponse[BatchDeleteResult],
    summary="Delete several notes",
    description="Delete the given notes in one transaction. Nothing is deleted if any note is protected.",
)
async def delete_notes(
    data: NoteBatchDelete,
    db: DbSession,
    request_id: RequestId,
    credential: PinCredential,
) -> ApiResponse[BatchDeleteResult]:
    """Delete several notes."""
    service = NoteService(db)
    result = await service.delete_notes(data.ids, credential)
    return ApiResponse(
        data=result,
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.get(
    "/{note_id}",
    response_model=ApiResponse[NoteResponse],
    summary="Get a note",
    description="Get a single note by ID. Hidden notes need the PIN.",
)
async def get_note(
    note_id: NoteId,
    db: DbSession,
    request_id: RequestId,
    credential: PinCredential,
) -> ApiResponse[NoteResponse]:
    """Get a note by ID."""
    service = NoteService(db)
    note = await service.get_note(note_id, credential)
    return ApiResponse(
        data=NoteResponse.model_validate(note),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.put(
    "/{note_id}",
    response_model=ApiResponse[NoteResponse],
    summary="Update a note",
    description="Replace title and content. pinned and hidden change only when given.",
)
async def update_note(
    note_id: NoteId,
    data: NoteUpdate,
    db: DbSession,
    request_id: RequestId,
    credential: PinCredential,
) -> ApiResponse[NoteResponse]:
    """Update a note."""
    service = NoteService(db)
    note = await service.update_note(note_id, data, credential)
    return ApiResponse(
        data=NoteResponse.model_validate(note),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.post(
    "/{note_id}/unhide",
    response_model=ApiResponse[NoteResponse],
    summary="Unhide a note",
    description="Make a hidden note visible. Requires the PIN.",
)
async def unhide_note(
    note_id: NoteId,
    db: DbSession,
    request_id: RequestId,
    credential: PinCredential,
) -> ApiResponse[NoteResponse]:
    """Unhide a note."""
    service = NoteService(db)
    note = await service.unhide_note(note_id, credential)
    return ApiResponse(
        data=NoteResponse.model_validate(note),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.delete(
    "/{note_id}",
    status_code=204,
    response_class=Response,
    summary="Delete a note",
    description="Permanently delete a note. Hidden notes need the PIN.",
)
async def delete_note(
    note_id: NoteId,
    db: DbSession,
    credential: PinCredential,
) -> None:
    """Delete a note."""
    service = NoteService(db)
    await service.delete_note(note_id, credential)

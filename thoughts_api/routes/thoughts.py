"""
Happy Thoughts API — Thought Route Handlers
=============================================

What:  The six /thoughts endpoints.
How:   Extract path/body, delegate to ThoughtService, return the schema.
       Errors are raised by the service and rendered by the global
       exception handlers in main.py, so handlers here have no try/except.

Route Inventory:
    GET    /thoughts             newest 20 thoughts
    GET    /thoughts/{id}        single thought
    POST   /thoughts             create (201)
    POST   /thoughts/{id}/like   add one heart
    PUT    /thoughts/{id}        replace message
    DELETE /thoughts/{id}        delete, returns the deleted thought

`thought_id` is taken as a plain string: a malformed id must produce
400 "Invalid thought ID" from the service, not FastAPI's 422.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from thoughts_api.database import get_db_session
from thoughts_api.schemas.thought import (
    ErrorResponse,
    ThoughtDeleteResponse,
    ThoughtInput,
    ThoughtResponse,
    ValidationErrorResponse,
)
from thoughts_api.services.thought_service import thought_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/thoughts", tags=["Thoughts"])

_ID_ERRORS = {
    400: {"description": "Malformed thought ID", "model": ErrorResponse},
    404: {"description": "Thought not found", "model": ErrorResponse},
}


@router.get(
    "",
    response_model=List[ThoughtResponse],
    responses={500: {"description": "Database error", "model": ErrorResponse}},
    summary="List the newest thoughts",
)
async def list_thoughts(db: AsyncSession = Depends(get_db_session)) -> List[ThoughtResponse]:
    """Newest first, at most 20. No pagination cursor."""
    return await thought_service.list_thoughts(db)


@router.get(
    "/{thought_id}",
    response_model=ThoughtResponse,
    responses=_ID_ERRORS,
    summary="Get a single thought by ID",
)
async def get_thought(
    thought_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> ThoughtResponse:
    return await thought_service.get_thought(db, thought_id)


@router.post(
    "",
    status_code=201,
    response_model=ThoughtResponse,
    responses={
        400: {"description": "Validation failed", "model": ValidationErrorResponse},
        500: {"description": "Database error", "model": ErrorResponse},
    },
    summary="Create a thought",
)
async def create_thought(
    payload: Optional[ThoughtInput] = None,
    db: AsyncSession = Depends(get_db_session),
) -> ThoughtResponse:
    """
    Create a thought from `{"message": ...}`.

    hearts starts at 0 and createdAt is set by the server; any values for
    them in the body are ignored.
    """
    message = payload.message if payload else None
    return await thought_service.create_thought(db, message)


@router.post(
    "/{thought_id}/like",
    response_model=ThoughtResponse,
    responses=_ID_ERRORS,
    summary="Like a thought",
)
async def like_thought(
    thought_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> ThoughtResponse:
    """Adds exactly one heart; safe under concurrent likes."""
    return await thought_service.like_thought(db, thought_id)


@router.put(
    "/{thought_id}",
    response_model=ThoughtResponse,
    responses={
        400: {"description": "Validation failed or malformed ID", "model": ValidationErrorResponse},
        404: {"description": "Thought not found", "model": ErrorResponse},
    },
    summary="Update a thought's message",
)
async def update_thought(
    thought_id: str,
    payload: Optional[ThoughtInput] = None,
    db: AsyncSession = Depends(get_db_session),
) -> ThoughtResponse:
    message = payload.message if payload else None
    return await thought_service.update_thought(db, thought_id, message)


@router.delete(
    "/{thought_id}",
    response_model=ThoughtDeleteResponse,
    responses=_ID_ERRORS,
    summary="Delete a thought",
)
async def delete_thought(
    thought_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> ThoughtDeleteResponse:
    return await thought_service.delete_thought(db, thought_id)

"""
Pipeline Demo — Users Route Handlers
=====================================

What:  GET /api/users (list mock users) and POST /api/users (create a user).
How:   Reads the request, delegates to UserService with the app's UserStore.

Request body handling (POST):
    The body is decoded by hand rather than through a Pydantic request model.
    Every malformed payload (no body, invalid JSON, a JSON array, missing
    fields) gets the same 400 envelope instead of FastAPI's 422 detail list.
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request

from pipeline_demo.schemas.user import (
    ErrorResponse,
    UserCreatedResponse,
    UserListResponse,
)
from pipeline_demo.services.user_service import user_service
from pipeline_demo.store import UserStore, get_user_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Users"])


async def _read_json_object(request: Request) -> Dict[str, Any]:
    """Decode the request body as a JSON object; anything else becomes {}."""
    try:
        payload = await request.json()
    except ValueError:
        logger.debug("Request body is not valid JSON")
        return {}
    return payload if isinstance(payload, dict) else {}


@router.get(
    "/users",
    response_model=UserListResponse,
    response_model_exclude_none=True,
    summary="List users",
)
async def list_users(store: UserStore = Depends(get_user_store)) -> UserListResponse:
    users = user_service.list_users(store)
    return UserListResponse(data=users, count=len(users))


@router.post(
    "/users",
    status_code=201,
    response_model=UserCreatedResponse,
    response_model_exclude_none=True,
    responses={
        201: {"description": "User created", "model": UserCreatedResponse},
        400: {"description": "Name or email missing", "model": ErrorResponse},
    },
    summary="Create a user",
)
async def create_user(
    request: Request,
    store: UserStore = Depends(get_user_store),
) -> UserCreatedResponse:
    """
    Create a user from `{name, email}`.

    Whether the user shows up in later GET /api/users responses depends on the
    store's persist_created flag (PERSIST_CREATED_USERS, off by default).

    Raises:
        ValidationError: name or email missing or falsy (→ 400 via main.py handler)
    """
    payload = await _read_json_object(request)
    user = user_service.create_user(store, payload)
    return UserCreatedResponse(data=user)

"""User Routes — CRUD over the single users collection, one store call per handler.

Invariants:
    - Each handler issues exactly one UserStore call (deadline enforced by the store)
    - POST rejects an empty name before touching the store (no side effect on 400)
    - PUT/DELETE raise UserNotFoundError when no document matched (404, no side effect)
    - Store failures propagate as StoreOperationError → 500 via global handler

Design Decisions:
    - Singular /user for mutations, plural /users for listing (ADR: existing client contract)
    - Response echoes the submitted body, not the stored document: update_one/insert_one
      return counts and ids only, and a follow-up read would be a second store call
"""

import logging

from fastapi import APIRouter, Depends, status

from users_api.core.errors import UserNotFoundError, UserValidationError
from users_api.core.repository_protocols import UserStore
from users_api.infrastructure.database import get_user_store
from users_api.schemas.user import (
    ErrorResponse, UserBody, UserCreatedResponse, UserDeletedResponse,
    UserOut, UserResponse, UserUpdatedResponse,
)

logger = logging.getLogger(__name__)
router = APIRouter(
    tags=["users"],
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
    },
)


@router.get("/users", response_model=list[UserResponse])
async def list_users(store: UserStore = Depends(get_user_store)):
    """List every stored user. Empty collection → []."""
    users = await store.list_users()
    return [UserResponse.from_user(u) for u in users]


@router.post(
    "/user", response_model=UserCreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_user(
    body: UserBody, store: UserStore = Depends(get_user_store),
):
    """Create a user. Name must be non-empty."""
    if body.name == "":
        raise UserValidationError("Name is required", field="name")
    user_id = await store.insert_user(body.to_user())
    logger.info("User created", extra={"user_name": body.name})
    return UserCreatedResponse(
        id=user_id, user=UserOut(name=body.name, age=body.age),
    )


@router.put(
    "/user/{name}", response_model=UserUpdatedResponse,
    responses={status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}},
)
async def update_user(
    name: str, body: UserBody, store: UserStore = Depends(get_user_store),
):
    """Replace name and age on the first user named `name`."""
    if not await store.update_user_by_name(name, body.to_user()):
        raise UserNotFoundError(name)
    logger.info("User updated", extra={"user_name": name})
    return UserUpdatedResponse(user=UserOut(name=body.name, age=body.age))


@router.delete(
    "/user/{name}", response_model=UserDeletedResponse,
    responses={status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}},
)
async def delete_user(name: str, store: UserStore = Depends(get_user_store)):
    """Delete the first user named `name`."""
    if not await store.delete_user_by_name(name):
        raise UserNotFoundError(name)
    logger.info("User deleted", extra={"user_name": name})
    return UserDeletedResponse(name=name)

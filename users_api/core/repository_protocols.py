"""Boundary Protocols — contract between the route handlers and the user store.

Invariants:
    - Routes NEVER import the Mongo driver — they depend on UserStore only
    - Each method is exactly one store call bounded by the store's request deadline
    - Failures surface as StoreOperationError (core/errors.py), never driver exceptions

Design Decisions:
    - Protocol over ABC: structural subtyping lets tests inject an in-memory fake
    - update/delete return bool (matched or not): 404 mapping stays in the route
"""

from typing import Protocol

from users_api.core.domain_types import User, UserId


class UserStore(Protocol):
    """Contract for user persistence — implemented by infrastructure/database.py."""
    async def list_users(self) -> list[User]: ...
    async def insert_user(self, user: User) -> UserId: ...
    async def update_user_by_name(self, name: str, user: User) -> bool: ...
    async def delete_user_by_name(self, name: str) -> bool: ...
    async def ping(self) -> bool: ...
    async def close(self) -> None: ...

"""Domain Types — the User value and its identity type.

Invariants:
    - User is immutable; handlers never mutate a decoded document
    - UserId is the 24-char hex form of the store-assigned ObjectId
    - age defaults to 0, name defaults to "" (zero values of a stored document)

Design Decisions:
    - NewType over wrapper class for UserId: zero runtime cost (ADR: ids are opaque to clients)
    - Frozen dataclass over Pydantic model: core stays free of API-layer concerns
"""

from dataclasses import dataclass
from typing import NewType


UserId = NewType("UserId", str)


@dataclass(frozen=True)
class User:
    """A stored user. id is None until the store assigns one."""
    name: str
    age: int = 0
    id: UserId | None = None

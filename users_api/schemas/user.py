"""User Schemas — Pydantic models for request bodies and per-route response shapes.

Invariants:
    - UserBody is strict: name must be a JSON string, age a JSON integer
    - age bounded to the BSON int64 range; larger values are a 400, never reach the store
    - Unknown body fields (including _id) are ignored, never written
    - UserResponse serializes id under "_id" (the stored document key)
    - Every route has an explicit response model; no free-form dicts

Design Decisions:
    - Name presence checked in the route, not here: PUT accepts an empty name
      (ADR: update replaces both fields with whatever was submitted)
    - ErrorResponse mirrors UsersApiError.to_response() for OpenAPI docs only
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from users_api.core.domain_types import User

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


class UserBody(BaseModel):
    """Create/update payload — missing fields take their zero values."""
    model_config = ConfigDict(strict=True, extra="ignore")

    name: str = ""
    age: int = Field(default=0, ge=INT64_MIN, le=INT64_MAX)

    def to_user(self) -> User:
        return User(name=self.name, age=self.age)


class UserOut(BaseModel):
    """Echo of submitted user data."""
    name: str
    age: int


class UserResponse(BaseModel):
    """A stored user as returned by GET /users."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id")
    name: str
    age: int

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(id=user.id, name=user.name, age=user.age)


class MessageResponse(BaseModel):
    message: str


class UserCreatedResponse(BaseModel):
    message: str = "User created successfully"
    id: str
    user: UserOut


class UserUpdatedResponse(BaseModel):
    message: str = "User updated successfully"
    user: UserOut


class UserDeletedResponse(BaseModel):
    message: str = "User deleted successfully"
    name: str


# --- Error envelope -----------------------------------------------------------

class ErrorFieldDetail(BaseModel):
    field: str
    message: str
    type: str


class ErrorBody(BaseModel):
    code: str
    message: str
    category: str
    severity: str
    timestamp: datetime | None = None
    details: list[ErrorFieldDetail] | None = None


class ErrorResponse(BaseModel):
    error: ErrorBody

"""
API request and response models.

Pydantic models for the user endpoints. Request fields are tagged with
the sources they are bound from; response models are serialized as-is.
"""

from typing import Annotated

from pydantic import BaseModel

from src.api.binding import FromPath, FromQuery


class User(BaseModel):
    """User record as exchanged over the wire."""

    id: str = ""
    name: str = ""
    email: str = ""


class CreateUserRequest(BaseModel):
    """Request model for user creation: user from the body, opt from the query."""

    user: User | None = None
    opt: Annotated[str, FromQuery("opt")] = ""


class CreateUserResponse(BaseModel):
    """Response model echoing the created user."""

    user: User | None = None
    opt: str = ""


class ListUsersRequest(BaseModel):
    """Request model for user listing."""

    name: Annotated[str, FromQuery("name")] = ""


class ListUsersResponse(BaseModel):
    """Response model for user listing."""

    users: list[User] = []


class GetUserRequest(BaseModel):
    """Request model for fetching a single user."""

    id: Annotated[str, FromPath("id")] = ""


class GetUserResponse(BaseModel):
    """Response model for a single user."""

    user: User | None = None


class ErrorResponse(BaseModel):
    """Standard error response model."""

    error: str

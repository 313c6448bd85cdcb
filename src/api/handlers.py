"""
User handlers - Typed handlers behind the /users endpoints.

Each method has the (ctx, request) -> response shape expected by
json_endpoint. There is no storage: responses are built from the request.
"""

from dataclasses import dataclass

from src.api.models import (
    CreateUserRequest,
    CreateUserResponse,
    GetUserRequest,
    GetUserResponse,
    ListUsersRequest,
    ListUsersResponse,
    User,
)
from src.domain.exceptions import errorf
from src.domain.ports import HandlerContext

DEFAULT_NAME = "min"
DEFAULT_EMAIL = "min@mail.example.com"

# Sentinel id that simulates a missing user
MISSING_USER_ID = "404"


@dataclass
class UserService:
    """Demo user service exercising path, query and body binding."""

    default_name: str = DEFAULT_NAME
    default_email: str = DEFAULT_EMAIL

    async def create_user(
        self, ctx: HandlerContext, req: CreateUserRequest
    ) -> CreateUserResponse:
        """Echo the submitted user together with the opt query parameter."""
        return CreateUserResponse(user=req.user, opt=req.opt)

    async def list_users(self, ctx: HandlerContext, req: ListUsersRequest) -> ListUsersResponse:
        """List users matching the name filter."""
        return ListUsersResponse(
            users=[User(id="1", name=req.name, email=self.default_email)],
        )

    async def get_user(self, ctx: HandlerContext, req: GetUserRequest) -> GetUserResponse:
        """
        Fetch a user by id.

        Raises:
            APIError: 404 when the id is the missing-user sentinel
        """
        if req.id == MISSING_USER_ID:
            raise errorf(404, "user not found")

        return GetUserResponse(
            user=User(id=req.id, name=self.default_name, email=self.default_email),
        )

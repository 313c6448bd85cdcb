"""
API routes - User endpoints.

This module registers the typed user handlers as HTTP endpoints:
- POST /users - Create a user (body + ?opt=)
- GET /users - List users (?name=)
- GET /users/{id} - Fetch a user by id
"""

from collections.abc import Callable
from typing import Any

from fastapi import APIRouter, status

from src.api.adapter import json_endpoint, request_model_for, response_model_for
from src.api.binding import RequestBinder
from src.api.handlers import UserService
from src.api.models import ErrorResponse

_bad_request = {
    status.HTTP_400_BAD_REQUEST: {
        "model": ErrorResponse,
        "description": "Request could not be bound",
    },
}
_server_error = {
    status.HTTP_500_INTERNAL_SERVER_ERROR: {
        "model": ErrorResponse,
        "description": "Unhandled error",
    },
}


def add_json_route(
    router: APIRouter,
    path: str,
    handler: Callable[..., Any],
    method: str,
    summary: str,
    responses: dict[int | str, dict[str, Any]] | None = None,
) -> None:
    """
    Register a typed handler on the router through json_endpoint.

    Path and query parameters come from the handler's request model, so
    they are added to the OpenAPI operation explicitly.
    """
    binder = RequestBinder(request_model_for(handler))
    router.add_api_route(
        path,
        json_endpoint(handler, binder),
        methods=[method],
        response_model=response_model_for(handler),
        responses={**_bad_request, **_server_error, **(responses or {})},
        summary=summary,
        openapi_extra={"parameters": binder.openapi_parameters()},
    )


def build_router(service: UserService) -> APIRouter:
    """Create the users router bound to a service instance."""
    router = APIRouter(tags=["users"])

    add_json_route(router, "/users", service.create_user, "POST", "Create a user")
    add_json_route(router, "/users", service.list_users, "GET", "List users")
    add_json_route(
        router,
        "/users/{id}",
        service.get_user,
        "GET",
        "Get a user by id",
        responses={
            status.HTTP_404_NOT_FOUND: {"model": ErrorResponse, "description": "User not found"},
        },
    )
    return router

"""
Request adapter - Expose typed handlers as JSON HTTP endpoints.

This module turns a handler of shape ``(ctx, request) -> response`` into a
Starlette endpoint that FastAPI can route. The adapter binds the request,
calls the handler and maps the outcome to exactly one JSON response:

- binding failure: 400 ``{"error": message}``
- error carrying a status code: that status, ``{"error": message}``
- any other error: 500 ``{"error": message}``
- success: 200 with the serialized response
"""

import inspect
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, TypeVar, get_type_hints

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.concurrency import run_in_threadpool
from starlette.requests import Request
from starlette.responses import Response

from src.api.binding import RequestBinder
from src.domain.exceptions import BindingError, find_status_error
from src.domain.ports import HandlerContext

logger = logging.getLogger(__name__)

ReqT = TypeVar("ReqT", bound=BaseModel)
RespT = TypeVar("RespT")

Handler = Callable[[HandlerContext, ReqT], RespT | Awaitable[RespT]]
Endpoint = Callable[[Request], Awaitable[Response]]


@dataclass(frozen=True)
class RequestContext:
    """
    Request-scoped context handed to typed handlers.

    Implements the HandlerContext port. Cancellation is reported, never
    enforced: handlers poll is_cancelled() if they care.
    """

    request: Request

    @property
    def method(self) -> str:
        return self.request.method

    @property
    def path(self) -> str:
        return self.request.url.path

    async def is_cancelled(self) -> bool:
        return await self.request.is_disconnected()


def error_response(status_code: int, message: str) -> JSONResponse:
    """Build the standard ``{"error": message}`` response."""
    return JSONResponse(status_code=status_code, content={"error": message})


def request_model_for(handler: Callable[..., Any]) -> type[BaseModel]:
    """
    Resolve the request model from the handler's second parameter.

    Raises:
        TypeError: If the handler does not take (ctx, request) or the
            request annotation is not a Pydantic model
    """
    params = list(inspect.signature(handler).parameters.values())
    if len(params) != 2:
        raise TypeError(
            f"{handler!r} must accept exactly (ctx, request), got {len(params)} parameters"
        )

    annotation = get_type_hints(handler).get(params[1].name)
    if not (isinstance(annotation, type) and issubclass(annotation, BaseModel)):
        raise TypeError(f"{handler!r} request parameter must be annotated with a pydantic model")
    return annotation


def response_model_for(handler: Callable[..., Any]) -> type[BaseModel] | None:
    """Return the handler's declared response model, if it is a Pydantic model."""
    annotation = get_type_hints(handler).get("return")
    if isinstance(annotation, type) and issubclass(annotation, BaseModel):
        return annotation
    return None


def handler_error_response(exc: Exception, request: Request) -> JSONResponse:
    """
    Map a handler error to a response by capability, not by class.

    The first error in the cause chain that exposes a status code decides
    the status and the message; otherwise the error is a 500.
    """
    classified = find_status_error(exc)
    if classified is not None:
        status_code = classified.status_code
        logger.info(
            "%s %s failed with %d: %s", request.method, request.url.path, status_code, classified
        )
        return error_response(status_code, str(classified))

    logger.error(
        "Unhandled error in %s %s: %s", request.method, request.url.path, exc, exc_info=True
    )
    return error_response(500, str(exc))


def json_endpoint(
    handler: Handler[ReqT, RespT], binder: RequestBinder[ReqT] | None = None
) -> Endpoint:
    """
    Adapt a typed handler into a JSON endpoint.

    The request model and its binding plan are resolved once, here; the
    returned endpoint keeps no state between requests.

    Args:
        handler: Sync or async callable taking (ctx, request)
        binder: Prebuilt binder for the handler's request model; built
            from the handler signature when omitted

    Returns:
        Async endpoint accepting a Starlette Request
    """
    if binder is None:
        binder = RequestBinder(request_model_for(handler))
    is_async = inspect.iscoroutinefunction(handler)

    async def endpoint(request: Request) -> Response:
        try:
            req = binder.bind(
                request.path_params,
                {key: request.query_params.getlist(key) for key in request.query_params.keys()},
                await request.body(),
            )
        except BindingError as e:
            logger.warning("Binding failed for %s %s: %s", request.method, request.url.path, e)
            return error_response(e.status_code, e.message)

        ctx = RequestContext(request)
        try:
            if is_async:
                resp = await handler(ctx, req)
            else:
                resp = await run_in_threadpool(handler, ctx, req)
        except Exception as e:
            return handler_error_response(e, request)

        try:
            return JSONResponse(status_code=200, content=jsonable_encoder(resp))
        except (TypeError, ValueError) as e:
            logger.error(
                "Could not serialize response for %s %s: %s",
                request.method,
                request.url.path,
                e,
                exc_info=True,
            )
            return error_response(500, str(e))

    # Not functools.wraps: FastAPI would follow __wrapped__ and read the
    # handler's (ctx, request) signature as route parameters.
    endpoint.__name__ = getattr(handler, "__name__", endpoint.__name__)
    endpoint.__qualname__ = getattr(handler, "__qualname__", endpoint.__qualname__)
    endpoint.__doc__ = getattr(handler, "__doc__", None)
    return endpoint

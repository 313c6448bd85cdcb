"""
Domain exceptions - Errors that carry an HTTP status.

This module defines the classified error used by handlers to pick the
response status, without importing any web framework.
"""

from .ports import StatusCarrier


class APIError(Exception):
    """Error with an explicit HTTP status code."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message

    def get_status(self) -> int:
        """Return the HTTP status attached to this error."""
        return self.status_code


class BindingError(APIError):
    """Request could not be decoded into the handler's request type."""

    def __init__(self, message: str) -> None:
        super().__init__(400, message)


def errorf(status_code: int, fmt: str, *args: object) -> APIError:
    """
    Build an APIError with a %-formatted message.

    Args:
        status_code: HTTP status to respond with
        fmt: Message, or a %-style format string when args are given
        *args: Format arguments

    Returns:
        APIError carrying the formatted message and status
    """
    message = fmt % args if args else fmt
    return APIError(status_code, message)


def _is_http_status(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and 100 <= value <= 599


def find_status_error(exc: BaseException | None) -> BaseException | None:
    """
    Find the first error in the cause chain that carries a status code.

    Walks exc, exc.__cause__, ... so that an unclassified error raised
    ``from`` a classified one still maps to the classified status.
    Classification is structural: any exception whose ``status_code`` is an
    int in the HTTP range 100-599 qualifies, whatever its class. Booleans
    and out-of-range codes are not statuses.
    """
    seen: set[int] = set()
    while exc is not None and id(exc) not in seen:
        seen.add(id(exc))
        if isinstance(exc, StatusCarrier) and _is_http_status(exc.status_code):
            return exc
        exc = exc.__cause__
    return None

"""
Port interfaces - Protocol definitions for the handler boundary.

This module defines the interfaces handlers see from the web layer.
Adapters implement these protocols structurally.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class StatusCarrier(Protocol):
    """
    Capability of an error that selects its own HTTP status.

    Any exception exposing ``status_code`` satisfies this protocol, so new
    error kinds can be introduced without touching the adapter.
    """

    status_code: int


class HandlerContext(Protocol):
    """Port interface for the request-scoped context passed to handlers."""

    @property
    def method(self) -> str:
        """HTTP method of the current request."""
        ...

    @property
    def path(self) -> str:
        """URL path of the current request."""
        ...

    async def is_cancelled(self) -> bool:
        """
        Report whether the client has gone away.

        Handlers decide whether to honor the signal; the adapter never
        aborts a handler on its own.
        """
        ...

"""
Domain layer - Handler-facing contracts with zero framework imports.

This package contains the classified error type and the port interfaces
that typed handlers depend on. The web layer implements these ports.
"""

from .exceptions import APIError, BindingError, errorf, find_status_error
from .ports import HandlerContext, StatusCarrier

__all__ = [
    "APIError",
    "BindingError",
    "HandlerContext",
    "StatusCarrier",
    "errorf",
    "find_status_error",
]

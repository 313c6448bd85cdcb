"""
Dependency factories - Services wired into the routes.

Handlers are bound to a service instance when the router is built, so
these factories run at application construction rather than per request.
"""

from src.api.handlers import UserService

# Module-level singleton - UserService is stateless
_user_service = UserService()


def get_user_service() -> UserService:
    """Get the user service (singleton)."""
    return _user_service

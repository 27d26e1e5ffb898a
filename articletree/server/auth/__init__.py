"""Session cookie authentication."""

from .router import router, current_user, get_auth_service, require_user

__all__ = ["router", "current_user", "get_auth_service", "require_user"]

"""Users aggregate presentation layer."""

from rbac.presentation.users.routes import router

__all__ = ["router"]

"""Groups aggregate presentation layer."""

from rbac.presentation.groups.routes import router

__all__ = ["router"]

"""Resources aggregate presentation layer."""

from rbac.presentation.resources.routes import router

__all__ = ["router"]

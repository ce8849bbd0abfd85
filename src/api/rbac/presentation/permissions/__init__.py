"""Permissions aggregate presentation layer."""

from rbac.presentation.permissions.routes import router

__all__ = ["router"]

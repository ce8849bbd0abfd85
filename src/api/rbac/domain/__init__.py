"""Domain layer for the RBAC bounded context."""

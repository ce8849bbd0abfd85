"""Application layer for the RBAC bounded context."""

"""FastAPI dependency providers for the RBAC bounded context."""

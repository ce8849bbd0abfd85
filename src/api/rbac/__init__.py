"""RBAC bounded context: users, groups, resources and permission grants."""

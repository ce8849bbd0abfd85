"""Fixtures for RBAC route tests."""

from collections.abc import Callable
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.testclient import TestClient


def _provide(service: Any) -> Callable[[], Any]:
    return lambda: service


@pytest.fixture
def make_client() -> Callable[[dict[Callable, Any]], TestClient]:
    """Build a TestClient for the /api router with overridden dependencies.

    The app carries the same 400 handlers as the production application.
    """
    from main import invalid_input_error_handler, request_validation_error_handler
    from rbac.ports.exceptions import InvalidInputError
    from rbac.presentation import router

    def _make(overrides: dict[Callable, Any]) -> TestClient:
        app = FastAPI()
        app.add_exception_handler(
            RequestValidationError, request_validation_error_handler
        )
        app.add_exception_handler(InvalidInputError, invalid_input_error_handler)
        for dependency, service in overrides.items():
            app.dependency_overrides[dependency] = _provide(service)
        app.include_router(router)
        return TestClient(app)

    return _make

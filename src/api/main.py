"""Main FastAPI application entry point."""

from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from infrastructure.database.dependencies import Database, get_database
from infrastructure.logging import configure_logging
from infrastructure.settings import get_database_settings, get_settings
from infrastructure.version import __version__
from rbac.infrastructure import models as rbac_models  # noqa: F401  (registers tables)
from rbac.ports.exceptions import InvalidInputError
from rbac.presentation import router as rbac_router


@asynccontextmanager
async def rbac_lifespan(app: FastAPI):
    """Application lifespan context.

    Manages:
    - structlog configuration
    - Database handle lifecycle (opened at startup, disposed on shutdown)
    - Optional schema creation for development and tests
    """
    configure_logging(debug=get_settings().debug)

    db_settings = get_database_settings()
    database = Database.open(db_settings)
    if db_settings.create_schema:
        await database.create_schema()
    app.state.database = database

    try:
        yield
    finally:
        await database.close()


app = FastAPI(
    title="RBAC Admin API",
    description="Users, groups, resources and group-scoped permission grants",
    version=__version__,
    lifespan=rbac_lifespan,
)


def _validation_error_response(details: list) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Validation error", "details": details},
    )


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed bodies and query strings as 400."""
    return _validation_error_response(
        [
            {"loc": list(error["loc"]), "message": error["msg"], "type": error["type"]}
            for error in exc.errors()
        ]
    )


@app.exception_handler(InvalidInputError)
async def invalid_input_error_handler(
    request: Request, exc: InvalidInputError
) -> JSONResponse:
    """Report malformed path and query identifiers as 400."""
    return _validation_error_response([{"message": str(exc)}])


# Include RBAC bounded context routes
app.include_router(rbac_router)


@app.get("/health")
def health():
    """Basic health check endpoint."""
    return {"status": "ok"}


@app.get("/health/db")
async def health_db(
    database: Annotated[Database, Depends(get_database)],
) -> dict:
    """Check database connection health."""
    is_healthy = await database.ping()
    return {
        "status": "ok" if is_healthy else "unhealthy",
        "connected": is_healthy,
    }

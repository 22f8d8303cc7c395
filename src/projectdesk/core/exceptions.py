"""Domain exceptions and the handlers that put request_id in error responses."""

from dataclasses import dataclass

from asgi_correlation_id import correlation_id
from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.projectdesk.core.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class FieldError:
    """A validation failure attached to a single field."""

    field: str
    message: str


class FieldValidationError(ValueError):
    """One or more fields failed validation."""

    def __init__(self, errors: list[FieldError]):
        self.errors = errors
        super().__init__("; ".join(f"{e.field}: {e.message}" for e in errors))


class WizardValidationError(FieldValidationError):
    """Wizard state failed the step validator."""


class ProjectCommitError(Exception):
    """The wizard could not be committed into a persisted project."""


class ReferenceNotFoundError(ProjectCommitError):
    """A company or employee referenced by the wizard no longer exists."""


class DocumentStorageError(Exception):
    """Writing an uploaded document to storage failed."""


class EntityNotFoundError(LookupError):
    """A requested entity does not exist."""


class ReferenceConflictError(Exception):
    """An entity cannot be changed or removed because others reference it."""


def setup_exception_handlers(app: FastAPI) -> None:
    """Configure exception handlers that include request_id in responses."""

    @app.exception_handler(StarletteHTTPException)
    async def starlette_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "detail": exc.detail,
                "request_id": correlation_id.get(),
            },
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "detail": exc.detail,
                "request_id": correlation_id.get(),
            },
        )

    @app.exception_handler(EntityNotFoundError)
    async def not_found_handler(request: Request, exc: EntityNotFoundError) -> JSONResponse:
        return JSONResponse(
            status_code=404,
            content={"detail": str(exc), "request_id": correlation_id.get()},
        )

    @app.exception_handler(ReferenceConflictError)
    async def conflict_handler(request: Request, exc: ReferenceConflictError) -> JSONResponse:
        return JSONResponse(
            status_code=409,
            content={"detail": str(exc), "request_id": correlation_id.get()},
        )

    @app.exception_handler(FieldValidationError)
    async def field_validation_handler(
        request: Request, exc: FieldValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={
                "detail": [{"field": e.field, "message": e.message} for e in exc.errors],
                "request_id": correlation_id.get(),
            },
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        request_id = correlation_id.get()
        logger.exception(
            "Unhandled exception",
            exc_info=exc,
            request_id=request_id,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=500,
            content={
                "detail": "Internal server error",
                "request_id": request_id,
            },
        )

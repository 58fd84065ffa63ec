from collections.abc import Mapping, Sequence
from typing import Any, ClassVar, cast
from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_404_NOT_FOUND,
    HTTP_422_UNPROCESSABLE_CONTENT,
    HTTP_500_INTERNAL_SERVER_ERROR,
)
from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError

from booktrack.core.logging import get_logger


class BookError(HTTPException):
    """Base for book errors; `detail` is the user-facing message verbatim."""

    status_code_default: ClassVar[int] = HTTP_400_BAD_REQUEST
    error_type: ClassVar[str] = "http_error"

    def __init__(self, message: str) -> None:
        super().__init__(status_code=self.status_code_default, detail=message)
        self.message: str = message


class BookValidationError(BookError):
    error_type = "validation_error"


class TitleConflictError(BookError):
    error_type = "duplicate_resource"


class BookNotFoundError(BookError):
    status_code_default = HTTP_404_NOT_FOUND
    error_type = "not_found"


class BookInternalError(BookError):
    status_code_default = HTTP_500_INTERNAL_SERVER_ERROR
    error_type = "server_error"


class ErrorEnvelope(BaseModel):
    """Structured error body; `error` is always the human readable message."""
    error: str
    type: str
    details: dict[str, object] | None = None
    meta: dict[str, object]


def _build_meta(request: Request) -> dict[str, object]:
    """Collect metadata for error responses."""
    return {
        "request_id": getattr(request.state, "correlation_id", "-"),
        "path": request.url.path,
        "method": request.method,
    }

def _serialize_validation_errors(errors: Sequence[Mapping[Any, Any]]) -> list[dict[str, object]]:
    """Serialize validation errors, handling non-serializable objects in context."""

    serialized_errors: list[dict[str, object]] = []

    for error in errors:
        serialized_error: dict[str, object] = dict(error)

        if "ctx" in serialized_error and isinstance(serialized_error["ctx"], dict):
            ctx: dict[str, object] = cast(dict[str, object], serialized_error["ctx"]).copy()

            if "error" in ctx:
                error_value = ctx["error"]

                if hasattr(error_value, "__str__"):
                    ctx["error"] = str(error_value)
            serialized_error["ctx"] = ctx
        serialized_errors.append(serialized_error)
    return serialized_errors


def register_exception_handlers(app: FastAPI) -> None:
    """Register centralized exception."""

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        logger = get_logger(__name__, request)
        logger.warning("HTTP error", extra={"status_code": exc.status_code})
        if isinstance(exc.detail, dict):
            message = str(exc.detail) if len(str(exc.detail)) < 200 else "Request failed"
            details = exc.detail
        else:
            message = exc.detail or "HTTP error"
            details = None

        body = ErrorEnvelope(
            error=message,
            type=getattr(exc, "error_type", "http_error"),
            details=details,
            meta=_build_meta(request),
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=body.model_dump(exclude_none=True),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        logger = get_logger(__name__, request)
        logger.info("Validation error")
        body = ErrorEnvelope(
            error="Invalid request payload",
            type="validation_error",
            details={"errors": _serialize_validation_errors(exc.errors())},
            meta=_build_meta(request),
        )
        return JSONResponse(
            status_code=HTTP_422_UNPROCESSABLE_CONTENT, content=body.model_dump()
        )

    @app.exception_handler(IntegrityError)
    async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
        logger = get_logger(__name__, request)
        logger.warning("Database integrity error", extra={"error": str(exc)})

        error_message = str(exc.orig) if hasattr(exc, 'orig') and exc.orig else str(exc)

        # books.title is the only unique column
        if "unique constraint" in error_message.lower():
            message = "Title already exists."
            error_type = "duplicate_resource"
        elif "check constraint" in error_message.lower():
            message = "Invalid data value"
            error_type = "invalid_value"
        else:
            message = "Data integrity violation"
            error_type = "integrity_error"

        body = ErrorEnvelope(
            error=message,
            type=error_type,
            meta=_build_meta(request),
        )
        return JSONResponse(
            status_code=HTTP_400_BAD_REQUEST,
            content=body.model_dump(exclude_none=True),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger = get_logger(__name__, request)
        logger.exception("Unhandled server error", exc_info=exc)
        body = ErrorEnvelope(
            error="Internal Server Error",
            type="server_error",
            meta=_build_meta(request),
        )
        return JSONResponse(
            status_code=HTTP_500_INTERNAL_SERVER_ERROR,
            content=body.model_dump(exclude_none=True),
        )

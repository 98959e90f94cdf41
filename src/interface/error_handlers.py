"""Exception handlers shared by the project API and the AI service."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from src.core.config import constants
from src.core.errors import (
    ErrorCategory,
    ErrorCode,
    ErrorResponse,
    ErrorSeverity,
    TaskPilotError,
    classify_error_with_response,
)


logger = logging.getLogger(__name__)

_STATUS_BY_CATEGORY = {
    ErrorCategory.INVALID_INPUT: constants.HTTP_BAD_REQUEST,
    ErrorCategory.NOT_FOUND: constants.HTTP_NOT_FOUND,
    ErrorCategory.UPSTREAM_UNAVAILABLE: constants.HTTP_SERVICE_UNAVAILABLE,
    ErrorCategory.UNKNOWN: constants.HTTP_SERVER_ERROR,
}


def _error_json(status_code: int, response: ErrorResponse) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=response.model_dump(mode="json"))


async def handle_taskpilot_error(request: Request, exc: Exception) -> JSONResponse:
    """Map service errors to 400/404/503 responses."""
    response = classify_error_with_response(exc)
    category = exc.category if isinstance(exc, TaskPilotError) else ErrorCategory.UNKNOWN
    status_code = _STATUS_BY_CATEGORY[category]

    logger.warning(
        "request_failed",
        extra={"path": request.url.path, "status_code": status_code, "code": response.code, "error": str(exc)},
    )
    return _error_json(status_code, response)


async def handle_validation_error(request: Request, exc: Exception) -> JSONResponse:
    """Report malformed request bodies as invalid input (400)."""
    details = exc.errors() if isinstance(exc, RequestValidationError) else []
    first = details[0] if details else {}
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = f"{location}: {first.get('msg')}" if location else str(first.get("msg", "Invalid request"))

    logger.warning("request_validation_failed", extra={"path": request.url.path, "errors": len(details)})
    return _error_json(
        constants.HTTP_BAD_REQUEST,
        ErrorResponse(
            error=message,
            code=ErrorCode.ERR_INVALID_INPUT,
            suggestion="Check the request body against the API schema.",
            severity=ErrorSeverity.LOW,
        ),
    )


def register_error_handlers(app: FastAPI) -> None:
    """Install the shared exception handlers on an app."""
    app.add_exception_handler(TaskPilotError, handle_taskpilot_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)

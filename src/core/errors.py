"""Error types and classification for the project API and the AI service."""

from enum import Enum

from pydantic import BaseModel


class ErrorCategory(Enum):
    """Categories of errors that can surface at the HTTP boundary."""

    INVALID_INPUT = "invalid_input"
    NOT_FOUND = "not_found"
    UPSTREAM_UNAVAILABLE = "upstream_unavailable"
    UNKNOWN = "unknown"


class ErrorSeverity(Enum):
    """Severity levels for errors."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCode:
    """Error codes for specific error conditions."""

    # Input errors
    ERR_INVALID_INPUT = "ERR_INVALID_INPUT"
    ERR_INVALID_DATE = "ERR_INVALID_DATE"

    # Lookup errors
    ERR_PROJECT_NOT_FOUND = "ERR_PROJECT_NOT_FOUND"
    ERR_TASK_NOT_FOUND = "ERR_TASK_NOT_FOUND"

    # Upstream errors
    ERR_UPSTREAM_UNAVAILABLE = "ERR_UPSTREAM_UNAVAILABLE"

    # Generic errors
    ERR_UNKNOWN = "ERR_UNKNOWN"


class TaskPilotError(Exception):
    """Base class for errors raised by taskpilot services."""

    category: ErrorCategory = ErrorCategory.UNKNOWN
    code: str = ErrorCode.ERR_UNKNOWN


class InvalidInputError(TaskPilotError, ValueError):
    """Request data could not be interpreted (bad dates, wrong shapes)."""

    category = ErrorCategory.INVALID_INPUT
    code = ErrorCode.ERR_INVALID_INPUT

    def __init__(self, message: str, *, code: str | None = None) -> None:
        super().__init__(message)
        if code is not None:
            self.code = code


class NotFoundError(TaskPilotError, KeyError):
    """A project or task identifier is absent from the store."""

    category = ErrorCategory.NOT_FOUND

    def __init__(self, message: str, *, code: str = ErrorCode.ERR_PROJECT_NOT_FOUND) -> None:
        super().__init__(message)
        self.message = message
        self.code = code

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message
        return self.message


class UpstreamUnavailableError(TaskPilotError, ConnectionError):
    """The AI service could not be reached or kept failing."""

    category = ErrorCategory.UPSTREAM_UNAVAILABLE
    code = ErrorCode.ERR_UPSTREAM_UNAVAILABLE


class ErrorResponse(BaseModel):
    """Structured error response with user-friendly messaging."""

    error: str
    code: str
    suggestion: str
    severity: ErrorSeverity


def classify_error(exception: Exception) -> ErrorCategory:
    """Return the category for an exception raised while handling a request."""
    if isinstance(exception, TaskPilotError):
        return exception.category
    if isinstance(exception, (ConnectionError, TimeoutError)):
        return ErrorCategory.UPSTREAM_UNAVAILABLE
    return ErrorCategory.UNKNOWN


def classify_error_with_response(exception: Exception) -> ErrorResponse:
    """Classify an error and return a structured response with recovery suggestions.

    Args:
        exception: The exception raised during request handling

    Returns:
        ErrorResponse with message, code, suggestion, and severity
    """
    category = classify_error(exception)

    if category is ErrorCategory.INVALID_INPUT:
        return ErrorResponse(
            error=str(exception),
            code=getattr(exception, "code", ErrorCode.ERR_INVALID_INPUT),
            suggestion="Check the request body. Dates must be ISO 8601 and tasks must be a list.",
            severity=ErrorSeverity.LOW,
        )

    if category is ErrorCategory.NOT_FOUND:
        return ErrorResponse(
            error=str(exception),
            code=getattr(exception, "code", ErrorCode.ERR_PROJECT_NOT_FOUND),
            suggestion="List the available records and retry with an existing id.",
            severity=ErrorSeverity.LOW,
        )

    if category is ErrorCategory.UPSTREAM_UNAVAILABLE:
        return ErrorResponse(
            error="AI service unavailable",
            code=ErrorCode.ERR_UPSTREAM_UNAVAILABLE,
            suggestion="The AI service could not be reached. Please try again later.",
            severity=ErrorSeverity.HIGH,
        )

    return ErrorResponse(
        error="An unexpected error occurred.",
        code=ErrorCode.ERR_UNKNOWN,
        suggestion="Please try again later. If the problem persists, contact support.",
        severity=ErrorSeverity.MEDIUM,
    )

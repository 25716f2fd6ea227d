"""Shared API models: the error envelope used by every router."""

from fastapi import HTTPException, status
from pydantic import BaseModel


class ErrorDetail(BaseModel):
    """Error payload."""

    message: str
    type: str = "server_error"
    code: str | None = None


class ErrorResponse(BaseModel):
    """Error response wrapper."""

    error: ErrorDetail


def http_error(
    message: str,
    code: str,
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
    error_type: str = "server_error",
) -> HTTPException:
    """Build an HTTPException whose detail is an ``ErrorResponse``.

    Examples:
        >>> http_error("Note not found: 7", "note_not_found", 404, "not_found_error").status_code
        404
    """
    return HTTPException(
        status_code=status_code,
        detail=ErrorResponse(
            error=ErrorDetail(message=message, type=error_type, code=code)
        ).model_dump(),
    )

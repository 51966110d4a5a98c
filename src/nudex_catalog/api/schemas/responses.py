"""API error schemas (RFC 7807 problem details)."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from starlette.responses import JSONResponse


class ErrorCode(str, Enum):
    """Standardized error codes for API responses.

    4xx Client Errors:
        NOT_FOUND: Resource does not exist (404)
        BAD_REQUEST: Invalid request payload (400)
        VALIDATION_ERROR: Request validation failed (400/422)
        NOT_AUTHENTICATED: Missing or invalid API key (401)

    5xx Server Errors:
        INTERNAL_ERROR: Unexpected server error (500)
        DATABASE_ERROR: Database operation failed (500)
    """

    # 4xx Client Errors
    NOT_FOUND = "NOT_FOUND"
    BAD_REQUEST = "BAD_REQUEST"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_AUTHENTICATED = "NOT_AUTHENTICATED"

    # 5xx Server Errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"


# RFC 7807 Constants and Utilities
ERROR_TYPE_BASE: str = "https://api.nudex.dev/errors"
"""Base URI for constructing RFC 7807 type URIs."""


def get_error_type_uri(code: ErrorCode) -> str:
    """Generate RFC 7807 type URI from error code.

    Examples
    --------
    >>> get_error_type_uri(ErrorCode.NOT_FOUND)
    'https://api.nudex.dev/errors/NOT_FOUND'
    """
    return f"{ERROR_TYPE_BASE}/{code.value}"


# RFC 7807 Error Title Mapping
ERROR_TITLES: dict[ErrorCode, str] = {
    ErrorCode.NOT_FOUND: "Resource Not Found",
    ErrorCode.BAD_REQUEST: "Bad Request",
    ErrorCode.VALIDATION_ERROR: "Validation Error",
    ErrorCode.NOT_AUTHENTICATED: "Authentication Required",
    ErrorCode.INTERNAL_ERROR: "Internal Server Error",
    ErrorCode.DATABASE_ERROR: "Database Error",
}
"""Mapping from ErrorCode to human-readable RFC 7807 title."""


class ProblemDetail(BaseModel):
    """RFC 7807 Problem Details response for API errors.

    Attributes
    ----------
    type : str
        URI identifying the problem type.
    title : str
        Short human-readable summary of the problem type.
    status : int
        HTTP status code (4xx or 5xx).
    detail : str
        Human-readable explanation of the specific problem occurrence.
    instance : str
        URI reference of the specific occurrence.
    code : str
        Application-specific error code from ErrorCode enum.
    request_id : str
        Unique request identifier for correlation and debugging.
    """

    type: str = Field(
        ...,
        description="URI identifying the problem type",
        examples=["https://api.nudex.dev/errors/NOT_FOUND"],
    )
    title: str = Field(..., description="Short human-readable summary")
    status: int = Field(..., ge=400, le=599, description="HTTP status code")
    detail: str = Field(
        ...,
        description="Human-readable explanation of the problem",
        examples=["Video 'xyz123' not found"],
    )
    instance: str = Field(
        ...,
        description="URI reference of the specific occurrence",
        examples=["/videos/xyz123"],
    )
    code: str = Field(..., description="Application-specific error code")
    request_id: str = Field(..., description="Unique request identifier for correlation")


class FieldError(BaseModel):
    """Individual field validation error."""

    loc: list[str | int] = Field(
        ...,
        description="Location of the error (field path)",
        examples=[["body", "title"]],
    )
    msg: str = Field(..., description="Error message")
    type: str = Field(..., description="Error type identifier")


class ValidationProblemDetail(ProblemDetail):
    """RFC 7807 Problem Details with field-level validation errors."""

    errors: list[FieldError] = Field(
        ...,
        description="List of field-level validation errors",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "type": "https://api.nudex.dev/errors/VALIDATION_ERROR",
                "title": "Validation Error",
                "status": 400,
                "detail": "title is required",
                "instance": "/internal/videos/upsert",
                "code": "VALIDATION_ERROR",
                "request_id": "550e8400-e29b-41d4-a716-446655440000",
                "errors": [
                    {
                        "loc": ["body", "title"],
                        "msg": "title is required",
                        "type": "missing",
                    }
                ],
            }
        }
    )


class ProblemJSONResponse(JSONResponse):
    """JSONResponse subclass for RFC 7807 Problem Details."""

    media_type = "application/problem+json"

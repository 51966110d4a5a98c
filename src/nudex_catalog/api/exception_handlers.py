"""Centralized exception handlers for FastAPI with RFC 7807 compliance.

Converts catalog exceptions into RFC 7807 Problem Details responses
(``application/problem+json``) so every endpoint reports errors in the
same shape.

RFC 7807 Reference: https://tools.ietf.org/html/rfc7807
"""

from __future__ import annotations

import logging
from typing import Any, Sequence

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError

from nudex_catalog.api.middleware.request_id import get_request_id
from nudex_catalog.api.schemas.responses import (
    ERROR_TITLES,
    ErrorCode,
    FieldError,
    ProblemDetail,
    ProblemJSONResponse,
    ValidationProblemDetail,
    get_error_type_uri,
)
from nudex_catalog.exceptions import (
    APIError,
    AuthenticationError,
    RepositoryError,
    ValidationError,
)

logger = logging.getLogger(__name__)

MAX_DETAIL_LENGTH = 4096
"""Maximum allowed length for detail messages before truncation."""

TRUNCATION_SUFFIX = "... (truncated)"


# =============================================================================
# Helper Functions
# =============================================================================


def _truncate_detail(detail: str) -> str:
    if len(detail) <= MAX_DETAIL_LENGTH:
        return detail
    return detail[: MAX_DETAIL_LENGTH - len(TRUNCATION_SUFFIX)] + TRUNCATION_SUFFIX


def _get_request_id_with_fallback(request: Request | None = None) -> str:
    """Get request ID from the context variable, then ``request.state``, else "-"."""
    request_id = get_request_id()
    if request_id:
        return request_id

    if request is not None:
        state_request_id = getattr(request.state, "request_id", None)
        if state_request_id:
            return str(state_request_id)

    return "-"


def _minimal_problem(
    code: ErrorCode, status: int, detail: str, instance: str, request: Request | None
) -> dict[str, Any]:
    return {
        "type": get_error_type_uri(code),
        "title": ERROR_TITLES.get(code, "Error"),
        "status": status,
        "detail": detail,
        "instance": instance,
        "code": code.value,
        "request_id": _get_request_id_with_fallback(request),
    }


def _safe_problem_response(
    code: ErrorCode,
    status: int,
    detail: str,
    instance: str,
    headers: dict[str, str] | None = None,
    request: Request | None = None,
) -> ProblemJSONResponse:
    """Create a ProblemJSONResponse, falling back to a fixed 500 body.

    Parameters
    ----------
    code : ErrorCode
        The error code for the problem.
    status : int
        HTTP status code for the response.
    detail : str
        Human-readable explanation of the problem.
    instance : str
        URI reference of the specific occurrence.
    headers : dict[str, str] | None, optional
        Additional headers to include in the response.
    request : Request | None, optional
        The FastAPI request for fallback request_id retrieval.

    Returns
    -------
    ProblemJSONResponse
        RFC 7807 compliant JSON response.
    """
    try:
        problem = ProblemDetail(
            **_minimal_problem(code, status, _truncate_detail(detail), instance, request)
        )
        return ProblemJSONResponse(
            content=problem.model_dump(),
            status_code=status,
            headers=headers,
        )
    except Exception as e:
        logger.error("Error serializing error response: %s", e, exc_info=True)
        return ProblemJSONResponse(
            content=_minimal_problem(
                ErrorCode.INTERNAL_ERROR,
                500,
                "An unexpected error occurred",
                instance,
                request,
            ),
            status_code=500,
        )


def _validation_response(
    status: int,
    detail: str,
    errors: Sequence[dict[str, Any]],
    request: Request,
) -> ProblemJSONResponse:
    instance = str(request.url.path)
    try:
        problem = ValidationProblemDetail(
            **_minimal_problem(
                ErrorCode.VALIDATION_ERROR,
                status,
                _truncate_detail(detail),
                instance,
                request,
            ),
            errors=[
                FieldError(
                    loc=list(error.get("loc", [])),
                    msg=str(error.get("msg", "")),
                    type=str(error.get("type", "")),
                )
                for error in errors
            ],
        )
        return ProblemJSONResponse(content=problem.model_dump(), status_code=status)
    except Exception as e:
        logger.error("Error serializing validation error response: %s", e, exc_info=True)
        content = _minimal_problem(
            ErrorCode.VALIDATION_ERROR, status, detail, instance, request
        )
        content["errors"] = []
        return ProblemJSONResponse(content=content, status_code=status)


# =============================================================================
# Exception Handlers
# =============================================================================


async def api_error_handler(request: Request, exc: APIError) -> ProblemJSONResponse:
    """Handle APIError subclasses (e.g. NotFoundError) using their own status."""
    return _safe_problem_response(
        code=exc.error_code,
        status=exc.status_code,
        detail=exc.message,
        instance=str(request.url.path),
        request=request,
    )


async def catalog_validation_error_handler(
    request: Request, exc: ValidationError
) -> ProblemJSONResponse:
    """Handle an invalid upsert payload as a 400 with field-level errors."""
    return _validation_response(400, exc.message, exc.errors, request)


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> ProblemJSONResponse:
    """Handle FastAPI request validation failures as a 422."""
    return _validation_response(
        422, "Request validation failed", list(exc.errors()), request
    )


async def auth_error_handler(
    request: Request, exc: AuthenticationError
) -> ProblemJSONResponse:
    """Handle a missing or wrong API key as a 401."""
    return _safe_problem_response(
        code=ErrorCode.NOT_AUTHENTICATED,
        status=401,
        detail=exc.message,
        instance=str(request.url.path),
        request=request,
    )


async def repository_error_handler(
    request: Request, exc: RepositoryError
) -> ProblemJSONResponse:
    """Handle RepositoryError and convert to RFC 7807 Problem Detail.

    Uses a generic detail message to avoid exposing database implementation
    details. The internal error is logged for debugging.

    Parameters
    ----------
    request : Request
        The incoming FastAPI request.
    exc : RepositoryError
        The repository/database error.

    Returns
    -------
    ProblemJSONResponse
        RFC 7807 compliant JSON response with 500 status and generic detail.
    """
    logger.error(
        "Repository error: %s (operation=%s, entity=%s)",
        exc.message,
        exc.operation,
        exc.entity_type,
        exc_info=exc.original_error,
    )

    return _safe_problem_response(
        code=ErrorCode.DATABASE_ERROR,
        status=500,
        detail="A database error occurred",
        instance=str(request.url.path),
        request=request,
    )


async def generic_error_handler(
    request: Request, exc: Exception
) -> ProblemJSONResponse:
    """Catch-all for unhandled exceptions; details are logged, not returned."""
    logger.exception("Unhandled exception: %s", exc)

    return _safe_problem_response(
        code=ErrorCode.INTERNAL_ERROR,
        status=500,
        detail="An unexpected error occurred",
        instance=str(request.url.path),
        request=request,
    )


# =============================================================================
# Handler Registration
# =============================================================================


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app.

    Examples
    --------
    >>> from fastapi import FastAPI
    >>> from nudex_catalog.api.exception_handlers import register_exception_handlers
    >>> app = FastAPI()
    >>> register_exception_handlers(app)
    """
    app.add_exception_handler(APIError, api_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(ValidationError, catalog_validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(AuthenticationError, auth_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RepositoryError, repository_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, generic_error_handler)

"""Shared OpenAPI response definitions for RFC 7807 error bodies."""

from __future__ import annotations

from typing import Any

from nudex_catalog.api.schemas.responses import (
    ProblemDetail,
    ValidationProblemDetail,
)

PROBLEM_JSON_MEDIA_TYPE = "application/problem+json"

# Type alias for FastAPI responses parameter
ResponsesType = dict[int | str, dict[str, Any]]


def _problem(model: type[ProblemDetail], description: str) -> dict[str, Any]:
    return {
        "model": model,
        "description": description,
        "content": {PROBLEM_JSON_MEDIA_TYPE: {}},
    }


NOT_FOUND_RESPONSE: ResponsesType = {404: _problem(ProblemDetail, "Resource not found")}

BAD_REQUEST_RESPONSE: ResponsesType = {
    400: _problem(ValidationProblemDetail, "Invalid request payload")
}

UNAUTHORIZED_RESPONSE: ResponsesType = {
    401: _problem(ProblemDetail, "Missing or invalid API key")
}

INTERNAL_ERROR_RESPONSE: ResponsesType = {
    500: _problem(ProblemDetail, "Internal server error")
}

LIST_ERRORS: ResponsesType = {**INTERNAL_ERROR_RESPONSE}
"""Errors for listing endpoints (500)."""

GET_ITEM_ERRORS: ResponsesType = {**NOT_FOUND_RESPONSE, **INTERNAL_ERROR_RESPONSE}
"""Errors for single-item endpoints (404, 500)."""

UPSERT_ERRORS: ResponsesType = {
    **BAD_REQUEST_RESPONSE,
    **UNAUTHORIZED_RESPONSE,
    **INTERNAL_ERROR_RESPONSE,
}
"""Errors for the internal write endpoint (400, 401, 500)."""

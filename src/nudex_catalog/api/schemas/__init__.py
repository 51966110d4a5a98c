"""API schema exports."""

from nudex_catalog.api.schemas.catalog import (
    CategoryListResponse,
    ProducerListResponse,
    UpsertResponse,
)
from nudex_catalog.api.schemas.responses import (
    ErrorCode,
    FieldError,
    ProblemDetail,
    ProblemJSONResponse,
    ValidationProblemDetail,
)

__all__ = [
    "CategoryListResponse",
    "ErrorCode",
    "FieldError",
    "ProblemDetail",
    "ProblemJSONResponse",
    "ProducerListResponse",
    "UpsertResponse",
    "ValidationProblemDetail",
]

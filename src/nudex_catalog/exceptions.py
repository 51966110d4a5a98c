"""
Custom exceptions for the nudex-catalog application.

This module defines the domain error taxonomy: lookups with no match,
invalid upsert payloads, store failures, failed view increments and
rejected credentials.
"""

from __future__ import annotations

from typing import Any

from nudex_catalog.api.schemas.responses import (
    ERROR_TITLES,
    ErrorCode,
    get_error_type_uri,
)


class CatalogError(Exception):
    """Base exception for all catalog errors."""

    def __init__(self, message: str) -> None:
        """
        Initialize CatalogError.

        Parameters
        ----------
        message : str
            Human-readable error message.
        """
        self.message = message
        super().__init__(message)


class ValidationError(CatalogError):
    """
    Exception raised when an upsert payload fails validation.

    Attributes
    ----------
    message : str
        Human-readable error message.
    field_name : str | None
        The name of the first field that failed validation.
    invalid_value : object
        The value that failed validation.
    errors : list[dict[str, Any]]
        Every field violation as ``{"loc", "msg", "type"}`` dictionaries.

    Examples
    --------
    >>> try:
    ...     await upsert_service.upsert(session, {"url": "https://x/v.mp4"})
    ... except ValidationError as e:
    ...     print(f"Invalid {e.field_name}")
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field_name: str | None = None,
        invalid_value: object = None,
        errors: list[dict[str, Any]] | None = None,
    ) -> None:
        """
        Initialize ValidationError.

        Parameters
        ----------
        message : str, optional
            Human-readable error message (default: "Validation failed").
        field_name : str | None, optional
            The name of the field that failed validation (default: None).
        invalid_value : object, optional
            The value that failed validation (default: None).
        errors : list[dict[str, Any]] | None, optional
            Field-level violations (default: a single entry built from
            ``field_name`` when given).
        """
        self.field_name: str | None = field_name
        self.invalid_value: object = invalid_value
        if errors is None:
            errors = (
                [{"loc": ["body", field_name], "msg": message, "type": "value_error"}]
                if field_name
                else []
            )
        self.errors: list[dict[str, Any]] = errors
        super().__init__(message)


class RepositoryError(CatalogError):
    """
    Exception raised for repository/database operation failures.

    Wraps connection failures, constraint violations and query errors. The
    catalog never retries these automatically.

    Attributes
    ----------
    message : str
        Human-readable error message.
    operation : str | None
        The database operation that failed (e.g., "replace", "find").
    entity_type : str | None
        The type of entity involved (e.g., "Video", "Producer").
    original_error : Exception | None
        The original database exception that caused this error.
    """

    def __init__(
        self,
        message: str = "Repository operation failed",
        operation: str | None = None,
        entity_type: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        """
        Initialize RepositoryError.

        Parameters
        ----------
        message : str, optional
            Human-readable error message (default: "Repository operation failed").
        operation : str | None, optional
            The database operation that failed (default: None).
        entity_type : str | None, optional
            The type of entity involved (default: None).
        original_error : Exception | None, optional
            The original database exception (default: None).
        """
        self.operation: str | None = operation
        self.entity_type: str | None = entity_type
        self.original_error: Exception | None = original_error
        super().__init__(message)


# Store errors are surfaced under the name used by the API contract
StoreError = RepositoryError


class AccountingFailure(CatalogError):
    """
    A view-count increment could not be applied.

    Only ever logged: the read that triggered the increment has already
    been answered.

    Attributes
    ----------
    video_id : str
        The video whose counter was not incremented.
    original_error : Exception | None
        The underlying failure.
    """

    def __init__(
        self,
        video_id: str,
        original_error: Exception | None = None,
    ) -> None:
        self.video_id = video_id
        self.original_error = original_error
        message = f"Failed to increment views for video '{video_id}'"
        if original_error is not None:
            message += f": {original_error}"
        super().__init__(message)


class AuthenticationError(CatalogError):
    """
    Exception raised when the shared API key is missing or wrong.

    Attributes
    ----------
    message : str
        Human-readable error message.
    """

    def __init__(self, message: str = "Invalid API key") -> None:
        super().__init__(message)


# =============================================================================
# API Layer Exceptions
# =============================================================================


class APIError(CatalogError):
    """Base exception for API layer errors.

    Attributes
    ----------
    status_code : int
        HTTP status code for the error response (default: 500).
    error_code : ErrorCode
        Machine-readable error code for API consumers.
    message : str
        Human-readable error message.
    details : dict[str, Any] | None
        Additional error context (e.g., resource_type, identifier).
    """

    status_code: int = 500
    _error_code_value: str = "INTERNAL_ERROR"

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.details = details
        super().__init__(message)

    @property
    def error_code(self) -> ErrorCode:
        """Get the error code as an ErrorCode enum."""
        return ErrorCode(self._error_code_value)

    def to_problem_detail(self, instance: str, request_id: str) -> dict[str, Any]:
        """Convert to RFC 7807 Problem Detail dictionary.

        Parameters
        ----------
        instance : str
            URI reference of the specific occurrence (e.g., "/videos/xyz123").
        request_id : str
            Unique request identifier for correlation and debugging.

        Returns
        -------
        dict[str, Any]
            Dictionary with RFC 7807 fields suitable for ProblemDetail model.
        """
        return {
            "type": get_error_type_uri(self.error_code),
            "title": ERROR_TITLES.get(self.error_code, "Error"),
            "status": self.status_code,
            "detail": self.message,
            "instance": instance,
            "code": self.error_code.value,
            "request_id": request_id,
        }


class NotFoundError(APIError):
    """Resource not found (404).

    Raised when a lookup by id has no match.

    Attributes
    ----------
    resource_type : str
        The type of resource that was not found (e.g., "Video").
    identifier : str
        The identifier used to look up the resource.

    Examples
    --------
    >>> raise NotFoundError(resource_type="Video", identifier="v1")
    """

    status_code: int = 404
    _error_code_value: str = "NOT_FOUND"

    def __init__(
        self,
        resource_type: str,
        identifier: str,
    ) -> None:
        self.resource_type = resource_type
        self.identifier = identifier
        message = f"{resource_type} '{identifier}' not found"
        super().__init__(
            message=message,
            details={"resource_type": resource_type, "identifier": identifier},
        )


# Exit codes for CLI integration
EXIT_CODE_DATABASE_ERROR = 3

"""
Tests for the catalog exception hierarchy.
"""

from __future__ import annotations

from nudex_catalog.api.schemas.responses import ErrorCode
from nudex_catalog.exceptions import (
    AccountingFailure,
    APIError,
    AuthenticationError,
    CatalogError,
    NotFoundError,
    RepositoryError,
    StoreError,
    ValidationError,
)


class TestCatalogErrorHierarchy:
    """Every domain error is a CatalogError."""

    def test_all_errors_derive_from_catalog_error(self) -> None:
        for error in (
            ValidationError("bad"),
            RepositoryError(),
            AccountingFailure("v1"),
            AuthenticationError(),
            NotFoundError(resource_type="Video", identifier="v1"),
        ):
            assert isinstance(error, CatalogError)

    def test_store_error_is_repository_error(self) -> None:
        assert StoreError is RepositoryError


class TestValidationError:
    """Tests for ValidationError."""

    def test_default_errors_built_from_field_name(self) -> None:
        error = ValidationError("Field cannot be empty", field_name="title", invalid_value="")

        assert error.field_name == "title"
        assert error.invalid_value == ""
        assert error.errors == [
            {"loc": ["body", "title"], "msg": "Field cannot be empty", "type": "value_error"}
        ]

    def test_no_field_name_means_no_default_errors(self) -> None:
        assert ValidationError("Validation failed").errors == []

    def test_explicit_errors_kept(self) -> None:
        errors = [{"loc": ["body"], "msg": "x", "type": "dict_type"}]
        assert ValidationError("bad", errors=errors).errors == errors


class TestRepositoryError:
    """Tests for RepositoryError."""

    def test_carries_operation_context(self) -> None:
        cause = RuntimeError("boom")
        error = RepositoryError(
            message="Failed to replace Video",
            operation="replace",
            entity_type="Video",
            original_error=cause,
        )

        assert error.message == "Failed to replace Video"
        assert error.operation == "replace"
        assert error.entity_type == "Video"
        assert error.original_error is cause


class TestAccountingFailure:
    """Tests for AccountingFailure."""

    def test_message_includes_cause(self) -> None:
        error = AccountingFailure("v1", original_error=RuntimeError("locked"))

        assert error.video_id == "v1"
        assert "v1" in str(error)
        assert "locked" in str(error)

    def test_message_without_cause(self) -> None:
        assert str(AccountingFailure("v1")) == "Failed to increment views for video 'v1'"


class TestNotFoundError:
    """Tests for NotFoundError."""

    def test_status_and_code(self) -> None:
        error = NotFoundError(resource_type="Video", identifier="abc")

        assert isinstance(error, APIError)
        assert error.status_code == 404
        assert error.error_code == ErrorCode.NOT_FOUND
        assert error.message == "Video 'abc' not found"
        assert error.details == {"resource_type": "Video", "identifier": "abc"}

    def test_to_problem_detail(self) -> None:
        problem = NotFoundError(resource_type="Video", identifier="abc").to_problem_detail(
            instance="/videos/abc", request_id="req-1"
        )

        assert problem["status"] == 404
        assert problem["code"] == "NOT_FOUND"
        assert problem["type"].endswith("/NOT_FOUND")
        assert problem["title"] == "Resource Not Found"
        assert problem["instance"] == "/videos/abc"
        assert problem["request_id"] == "req-1"


def test_authentication_error_default_message() -> None:
    assert AuthenticationError().message == "Invalid API key"

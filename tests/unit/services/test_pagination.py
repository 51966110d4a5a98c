"""
Tests for pagination normalization.
"""

from __future__ import annotations

import pytest

from nudex_catalog.services.pagination import (
    MAX_SQL_INT,
    normalize_limit,
    normalize_offset,
    normalize_pagination,
)


class TestNormalizePagination:
    """Malformed pagination never raises."""

    def test_absent_values_use_defaults(self) -> None:
        assert normalize_pagination(None, None) == (10, 0)

    @pytest.mark.parametrize("raw", ["abc", "", "1.5", "ten", True])
    def test_non_numeric_limit_uses_default(self, raw: object) -> None:
        assert normalize_limit(raw) == 10

    def test_numeric_strings_parsed(self) -> None:
        assert normalize_pagination("25", " 5 ") == (25, 5)

    def test_negative_values_clamp_to_zero(self) -> None:
        assert normalize_pagination("-3", -7) == (0, 0)

    def test_limit_capped(self) -> None:
        assert normalize_limit("500") == 100
        assert normalize_limit(500, max_limit=50) == 50

    def test_cap_can_be_disabled(self) -> None:
        assert normalize_limit(500, max_limit=None) == 500

    def test_custom_default(self) -> None:
        assert normalize_pagination("x", "y", default_limit=20) == (20, 0)

    def test_non_numeric_offset_uses_default(self) -> None:
        assert normalize_offset("later") == 0

    def test_oversized_offset_clamped_to_sql_range(self) -> None:
        assert normalize_pagination("5", "9" * 30) == (5, MAX_SQL_INT)
        assert normalize_offset(10**40) == MAX_SQL_INT

    def test_oversized_limit_clamped_before_cap(self) -> None:
        assert normalize_limit("9" * 30) == 100
        assert normalize_limit("9" * 30, max_limit=None) == MAX_SQL_INT

    def test_huge_negative_values_clamp_to_zero(self) -> None:
        assert normalize_pagination("-" + "9" * 30, -(10**40)) == (0, 0)

"""
Pagination normalization for catalog listings.

Raw ``limit``/``offset`` query values are coerced here so that malformed
input degrades to sensible defaults instead of failing the request.
"""

from __future__ import annotations

from typing import Any, Optional, Tuple

DEFAULT_LIMIT = 10
DEFAULT_OFFSET = 0
MAX_LIMIT = 100

# Largest value a signed 64-bit SQL INTEGER holds; LIMIT/OFFSET never exceed it
MAX_SQL_INT = 2**63 - 1


def _coerce_int(value: Any, default: int) -> int:
    """Parse an integer, falling back to default and clamping into the SQL range."""
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, int):
        parsed = value
    else:
        try:
            parsed = int(str(value).strip())
        except ValueError:
            return default
    return max(min(parsed, MAX_SQL_INT), -MAX_SQL_INT)


def normalize_limit(
    value: Any,
    default: int = DEFAULT_LIMIT,
    max_limit: Optional[int] = MAX_LIMIT,
) -> int:
    """
    Coerce a raw limit into the range ``[0, max_limit]``.

    Parameters
    ----------
    value : Any
        Raw value, typically a query-string fragment or None
    default : int
        Used when the value is absent or not an integer
    max_limit : Optional[int]
        Upper bound; None leaves only the 64-bit SQL integer bound

    Returns
    -------
    int
        The normalized limit
    """
    limit = max(_coerce_int(value, default), 0)
    if max_limit is not None:
        limit = min(limit, max_limit)
    return limit


def normalize_offset(value: Any, default: int = DEFAULT_OFFSET) -> int:
    """Coerce a raw offset into the range ``[0, MAX_SQL_INT]``."""
    return max(_coerce_int(value, default), 0)


def normalize_pagination(
    limit: Any,
    offset: Any = None,
    *,
    default_limit: int = DEFAULT_LIMIT,
    max_limit: Optional[int] = MAX_LIMIT,
) -> Tuple[int, int]:
    """
    Normalize a raw ``(limit, offset)`` pair.

    Never raises: absent or non-numeric values fall back to the defaults
    and negative values clamp to zero.

    Examples
    --------
    >>> normalize_pagination("abc", "-5")
    (10, 0)
    >>> normalize_pagination("500", "20")
    (100, 20)
    >>> normalize_pagination("5", "9" * 30) == (5, MAX_SQL_INT)
    True
    """
    return (
        normalize_limit(limit, default=default_limit, max_limit=max_limit),
        normalize_offset(offset),
    )

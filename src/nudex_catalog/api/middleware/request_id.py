"""Request ID middleware for log correlation.

The incoming ``X-Request-ID`` header is reused when it is well formed;
otherwise a UUID4 is generated. The id is stored in a context variable so
log records and error responses can carry it without threading the
request object through every call.
"""

from __future__ import annotations

import contextvars
import logging
import uuid
from typing import TYPE_CHECKING

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

if TYPE_CHECKING:
    from starlette.middleware.base import RequestResponseEndpoint

logger = logging.getLogger(__name__)

MAX_REQUEST_ID_LENGTH = 128

REQUEST_ID_HEADER = "X-Request-ID"

# Empty string means no request is in flight
request_id_var: contextvars.ContextVar[str] = contextvars.ContextVar(
    "request_id", default=""
)


def get_request_id() -> str:
    """Get the request ID of the current async context, or ``""``."""
    return request_id_var.get()


def _is_printable_ascii(value: str) -> bool:
    return all(33 <= ord(c) <= 126 for c in value)


def sanitize_request_id(header_value: str | None) -> str:
    """Return a usable request ID for a raw header value.

    Parameters
    ----------
    header_value : str | None
        The raw ``X-Request-ID`` header, if any.

    Returns
    -------
    str
        The header value truncated to ``MAX_REQUEST_ID_LENGTH``, or a new
        UUID4 when the header is missing or contains characters outside
        printable ASCII.
    """
    if not header_value:
        return str(uuid.uuid4())

    if not _is_printable_ascii(header_value):
        logger.warning(
            "X-Request-ID contains non-ASCII-printable characters, generating new ID"
        )
        return str(uuid.uuid4())

    return header_value[:MAX_REQUEST_ID_LENGTH]


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Attach a request ID to the context, ``request.state`` and the response."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = sanitize_request_id(request.headers.get(REQUEST_ID_HEADER))
        token = request_id_var.set(request_id)

        try:
            request.state.request_id = request_id
            response = await call_next(request)
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            request_id_var.reset(token)


class RequestIdFilter(logging.Filter):
    """Logging filter exposing the current request ID as ``%(request_id)s``.

    Records logged outside a request get ``"-"``.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get() or "-"
        return True

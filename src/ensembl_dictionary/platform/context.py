"""Context variables for request-scoped data."""

from contextvars import ContextVar

# Request ID for tracing
request_id_ctx: ContextVar[str | None] = ContextVar("request_id", default=None)

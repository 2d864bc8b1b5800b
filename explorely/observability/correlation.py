"""
Per-request correlation ID.

The ID travels in the X-Correlation-ID header and lives in a contextvar
for the lifetime of one request, so every log line written while serving
it can be tied back together.

Dependencies: contextvars
System role: Request tracing across log records
"""

import uuid
from contextvars import ContextVar

CORRELATION_HEADER = "X-Correlation-ID"
MAX_INBOUND_LENGTH = 128

_current: ContextVar[str] = ContextVar("correlation_id", default="")


def set_correlation_id(inbound: str | None = None) -> str:
    """
    Bind the correlation ID for the current request.

    A client-supplied value is reused when it is short enough to log;
    otherwise a fresh UUID is issued.

    Args:
        inbound: Header value sent by the caller, if any

    Returns:
        str: The ID now bound to this context
    """
    inbound = (inbound or "").strip()
    value = inbound if 0 < len(inbound) <= MAX_INBOUND_LENGTH else uuid.uuid4().hex
    _current.set(value)
    return value


def get_correlation_id() -> str:
    """Correlation ID of the current request; empty outside a request."""
    return _current.get()


def clear_correlation_id() -> None:
    _current.set("")

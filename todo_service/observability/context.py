"""
Request context helpers

The request id itself travels in structlog's contextvars (see RequestIdMiddleware),
so every log line of a request carries it.
"""

import uuid


def new_request_id() -> str:
    """Fresh 128-bit random identifier"""
    return str(uuid.uuid4())

"""
Request context: a request id carried through contextvars.

Every API request and CLI invocation runs inside a RequestContext, so log
lines from the engine and the store can be tied back to one user action.
"""

import contextvars
import uuid

_request_id_var: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "request_id", default=None
)


def get_request_id() -> str | None:
    return _request_id_var.get()


def generate_request_id(prefix: str = "req") -> str:
    return f"{prefix}-{uuid.uuid4().hex[:16]}"


class RequestContext:
    """
    Context manager that sets the request id for the enclosed block.

    Usage:
        with RequestContext() as ctx:
            logger.info("Placing habit")   # log line carries ctx.request_id

        with RequestContext(request_id="cli-abc123"):
            ...
    """

    def __init__(self, request_id: str | None = None):
        self.request_id = request_id or generate_request_id()
        self._token: contextvars.Token | None = None

    def __enter__(self) -> "RequestContext":
        self._token = _request_id_var.set(self.request_id)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if self._token is not None:
            _request_id_var.reset(self._token)
            self._token = None

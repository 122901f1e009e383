"""
Observability: structured logging and request ids.

Usage:
    from timeline.observability import configure_logging, RequestContext

    configure_logging()
    with RequestContext() as ctx:
        logger.info("Saving profile", extra={"user_id": user_id})
"""

from .context import RequestContext, generate_request_id, get_request_id
from .logging import CorrelationIdMiddleware, HumanFormatter, JSONFormatter, configure_logging

__all__ = [
    "CorrelationIdMiddleware",
    "HumanFormatter",
    "JSONFormatter",
    "RequestContext",
    "configure_logging",
    "generate_request_id",
    "get_request_id",
]

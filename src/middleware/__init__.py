"""Middleware components.

Provides:
- Request correlation ID tracking
- Logging context enrichment
"""

from .correlation import (
    CorrelationIdFilter,
    CorrelationIdMiddleware,
    configure_logging,
    get_correlation_id,
    get_request_user,
    set_request_user,
)

__all__ = [
    "CorrelationIdFilter",
    "CorrelationIdMiddleware",
    "configure_logging",
    "get_correlation_id",
    "get_request_user",
    "set_request_user",
]

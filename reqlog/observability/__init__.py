"""Context-propagating structured logging.

Correlation fields (request id, user id) ride along a ``ContextVar`` frame so any
code running inside a request can fetch a pre-bound structlog logger via
``get_logger()`` instead of receiving one as a parameter.
"""

from __future__ import annotations

from reqlog.observability.context import (
    ContextFrame,
    bind,
    current_frame,
    get_context_fields,
    get_logger,
    log_context,
    run_with,
)
from reqlog.observability.loggers import derive_logger, get_base_logger

__all__ = [
    "ContextFrame",
    "bind",
    "current_frame",
    "derive_logger",
    "get_base_logger",
    "get_context_fields",
    "get_logger",
    "log_context",
    "run_with",
]

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import structlog


BASE_LOGGER_NAME = "reqlog"


def get_base_logger() -> Any:
    """Process-wide logger used whenever no context frame is ambient."""

    return structlog.get_logger(BASE_LOGGER_NAME)


def derive_logger(parent: Any, fields: Mapping[str, Any]) -> Any:
    """Return a child of ``parent`` that also emits ``fields`` on every record.

    structlog's ``bind`` copies the context, so ``parent`` is left untouched and
    ``fields`` win over anything the parent already carries. Keys are passed
    through a mapping because correlation keys such as ``request.id`` are not
    valid keyword names.
    """

    return parent.bind(**dict(fields))

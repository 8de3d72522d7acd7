from __future__ import annotations


class ReqlogError(Exception):
    """Base class for errors raised by the demo service."""


class UpstreamError(ReqlogError):
    """The demo-data API answered with a non-success status."""

    def __init__(self, status_code: int, reason: str) -> None:
        super().__init__(f"Failed to fetch user: {status_code} {reason}")
        self.status_code = status_code
        self.reason = reason

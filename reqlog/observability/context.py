"""Ambient log context carried across sync calls and asyncio continuations.

A :class:`ContextFrame` pairs the correlation fields of the current unit of work
with a logger already bound to them. The frame lives in a ``ContextVar``, so every
task spawned from a chain inherits it while sibling tasks keep their own.
"""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable, Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, TypeVar

from reqlog.observability.loggers import derive_logger, get_base_logger


T = TypeVar("T")


@dataclass(frozen=True)
class ContextFrame:
    logger: Any
    fields: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    def derive(self, fields: Mapping[str, Any]) -> ContextFrame:
        merged = {**self.fields, **fields}
        return ContextFrame(logger=derive_logger(self.logger, fields), fields=MappingProxyType(merged))


_current_frame: ContextVar[ContextFrame | None] = ContextVar("reqlog_context_frame", default=None)


def current_frame() -> ContextFrame | None:
    return _current_frame.get()


@contextmanager
def frame_scope(frame: ContextFrame) -> Iterator[ContextFrame]:
    token = _current_frame.set(frame)
    try:
        yield frame
    finally:
        _current_frame.reset(token)


async def _await_within(frame: ContextFrame, awaitable: Awaitable[T]) -> T:
    with frame_scope(frame):
        return await awaitable


def run_with(frame: ContextFrame, fn: Callable[..., Any], /, *args: Any, **kwargs: Any) -> Any:
    """Run ``fn`` with ``frame`` installed as the ambient frame.

    When ``fn`` produces an awaitable, the returned coroutine reinstalls
    ``frame`` for as long as it is being awaited, so every resumption of the
    chain sees it and tasks interleaved on the same loop do not.
    """

    with frame_scope(frame):
        result = fn(*args, **kwargs)
    if inspect.isawaitable(result):
        return _await_within(frame, result)
    return result


def _ambient_or_root() -> ContextFrame:
    frame = current_frame()
    if frame is None:
        return ContextFrame(logger=get_base_logger())
    return frame


def bind(fields: Mapping[str, Any], fn: Callable[..., Any], /, *args: Any, **kwargs: Any) -> Any:
    """Run ``fn`` inside a frame derived from the ambient one plus ``fields``.

    Errors raised by ``fn`` propagate unchanged and the previous frame is
    restored either way.
    """

    return run_with(_ambient_or_root().derive(fields), fn, *args, **kwargs)


@contextmanager
def log_context(fields: Mapping[str, Any] | None = None, **kwargs: Any) -> Iterator[ContextFrame]:
    """``with`` form of :func:`bind` for inline blocks, including inside coroutines."""

    merged = {**(fields or {}), **kwargs}
    with frame_scope(_ambient_or_root().derive(merged)) as frame:
        yield frame


def get_logger() -> Any:
    frame = current_frame()
    if frame is None:
        return get_base_logger()
    return frame.logger


def get_context_fields() -> dict[str, Any]:
    frame = current_frame()
    if frame is None:
        return {}
    return dict(frame.fields)

"""Span telemetry for service calls.

Off by default; ``--verbose`` switches it on for the process. A ``@traced``
service method opens a root span, ``trace_span`` nests timed sections
under whatever span is active, and the finished tree is attached to the
returned ``ServiceResult.meta["telemetry"]``.
"""

from __future__ import annotations

import functools
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any, ParamSpec, TypeVar

import structlog

from unictl.services.result import ServiceResult

_enabled: ContextVar[bool] = ContextVar("unictl_telemetry", default=False)
_active: ContextVar[Span | None] = ContextVar("unictl_active_span", default=None)

_log = structlog.get_logger("unictl.telemetry")


@dataclass
class Span:
    """One timed section of a service call."""

    name: str
    started: float = field(default_factory=time.perf_counter)
    finished: float | None = None
    children: list[Span] = field(default_factory=list)
    annotations: dict[str, Any] = field(default_factory=dict)

    @property
    def duration_ms(self) -> float:
        if self.finished is None:
            return 0.0
        return (self.finished - self.started) * 1000

    def annotate(self, key: str, value: Any) -> None:
        self.annotations[key] = value

    def close(self) -> None:
        self.finished = time.perf_counter()

    def to_dict(self) -> dict[str, Any]:
        tree: dict[str, Any] = {"name": self.name, "duration_ms": round(self.duration_ms, 2)}
        if self.annotations:
            tree["annotations"] = dict(self.annotations)
        if self.children:
            tree["children"] = [child.to_dict() for child in self.children]
        return tree


@contextmanager
def _activate(span: Span) -> Iterator[Span]:
    token = _active.set(span)
    try:
        yield span
    finally:
        span.close()
        _active.reset(token)


@contextmanager
def trace_span(name: str) -> Iterator[Span | None]:
    """Time a section under the active span.

    Yields None when telemetry is off or no ``@traced`` call is running,
    so callers must guard annotations.
    """
    parent = _active.get() if _enabled.get() else None
    if parent is None:
        yield None
        return
    span = Span(name)
    parent.children.append(span)
    with _activate(span):
        yield span


_P = ParamSpec("_P")
_R = TypeVar("_R")


def traced(func: Callable[_P, _R]) -> Callable[_P, _R]:
    """Record a root span for *func* and attach it to the ServiceResult it returns."""

    @functools.wraps(func)
    def wrapper(*args: _P.args, **kwargs: _P.kwargs) -> _R:
        if not _enabled.get():
            return func(*args, **kwargs)

        with _activate(Span(func.__qualname__)) as span:
            result = func(*args, **kwargs)

        if not isinstance(result, ServiceResult):
            return result
        _log.debug(
            "span.complete",
            span_name=span.name,
            duration_ms=round(span.duration_ms, 2),
            ok=result.ok,
        )
        meta = dict(result.meta or {})
        meta["telemetry"] = span.to_dict()
        return result.model_copy(update={"meta": meta})  # type: ignore[return-value]

    return wrapper


def enable_telemetry() -> None:
    _enabled.set(True)


def disable_telemetry() -> None:
    _enabled.set(False)

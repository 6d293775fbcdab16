"""Visitation observers for the path engine.

An observer is told about every node the engine touches while computing
shortest paths, plus one final call when the computation ends. Observers
never influence the result; they exist so progress bars, animations, or
trace output can follow along without the engine knowing about them.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable


@runtime_checkable
class VisitObserver(Protocol):
    """Receives ``(node_index, distance, final)`` for each engine step."""

    def on_visit(self, node_index: int, distance: int, final: bool) -> None: ...


class NullObserver:
    """Observer that ignores every call."""

    def on_visit(self, node_index: int, distance: int, final: bool) -> None:
        return None


class CallbackObserver:
    """Adapt a plain ``callback(node_index, distance, final)`` to the protocol."""

    def __init__(self, callback: Callable[[int, int, bool], object]) -> None:
        self._callback = callback

    def on_visit(self, node_index: int, distance: int, final: bool) -> None:
        self._callback(node_index, distance, final)


@dataclass
class RecordingObserver:
    """Collect every visitation in order (used by ``path --trace``)."""

    steps: list[tuple[int, int, bool]] = field(default_factory=list)

    def on_visit(self, node_index: int, distance: int, final: bool) -> None:
        self.steps.append((node_index, distance, final))


NULL_OBSERVER = NullObserver()

type ObserverLike = VisitObserver | Callable[[int, int, bool], object] | None


def as_observer(observer: ObserverLike) -> VisitObserver:
    """Normalize None, a callable, or an observer into a VisitObserver."""
    if observer is None:
        return NULL_OBSERVER
    if isinstance(observer, VisitObserver):
        return observer
    if callable(observer):
        return CallbackObserver(observer)
    msg = f"Expected a VisitObserver or callable, got {type(observer).__name__}"
    raise TypeError(msg)

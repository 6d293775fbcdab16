"""PathEngine — memoized single-source shortest paths with tie tracking.

One computation is cached at a time, keyed by its source index. The cache
state is explicit (:class:`Uninitialized` or :class:`ValidFor`) and drops
back to ``Uninitialized`` whenever the store reports a mutation.

Relaxation walks each adjacency in ascending neighbor index and the
frontier is scanned in insertion order, so the first recorded parent of
every node is reproducible. Path reconstruction always follows that first
parent; the remaining parents are the equal-cost alternatives.

Frontier selection is a linear scan (O(V) per step, O(V^2) overall),
which is adequate for hand-built and teaching-sized graphs.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from pathctl.domain.errors import EmptyGraphError, UnknownNodeError
from pathctl.domain.types import PathResult, ResultCode
from pathctl.infrastructure.graph.observer import as_observer

if TYPE_CHECKING:
    from pathctl.infrastructure.graph.observer import ObserverLike
    from pathctl.infrastructure.graph.store import GraphStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Uninitialized:
    """No computation is cached."""


@dataclass(frozen=True)
class ValidFor:
    """Distances and parents in the store are valid for ``source_index``."""

    source_index: int


type CacheState = Uninitialized | ValidFor

_UNINITIALIZED = Uninitialized()


class PathEngine:
    """Shortest-path computation over a :class:`GraphStore`."""

    def __init__(self, store: GraphStore) -> None:
        self._store = store
        self._state: CacheState = _UNINITIALIZED
        store.subscribe(self.invalidate)

    @property
    def store(self) -> GraphStore:
        return self._store

    @property
    def state(self) -> CacheState:
        return self._state

    def invalidate(self) -> None:
        """Forget the cached computation."""
        self._state = _UNINITIALIZED

    def is_valid_for(self, source_id: int) -> bool:
        index = self._store.index_of(source_id)
        return index is not None and self._state == ValidFor(index)

    # ------------------------------------------------------------------
    # calculate
    # ------------------------------------------------------------------

    def calculate(self, source_id: int, observer: ObserverLike = None) -> None:
        """Compute shortest distances from *source_id* to every node.

        Raises:
            EmptyGraphError: The store has no nodes.
            UnknownNodeError: *source_id* was never added.
        """
        store = self._store
        if store.node_count() == 0:
            raise EmptyGraphError()
        source = store.index_of(source_id)
        if source is None:
            raise UnknownNodeError(source_id)

        watch = as_observer(observer)
        self._state = _UNINITIALIZED

        for node in store.records():
            node.reset()

        origin = store.record(source)
        origin.distance = 0
        origin.visited = True
        watch.on_visit(source, 0, False)

        frontier: list[int] = []
        for neighbor, weight in origin.sorted_edges():
            if neighbor == source:
                continue
            node = store.record(neighbor)
            node.distance = weight
            node.parents.append(source)
            frontier.append(neighbor)
            watch.on_visit(neighbor, weight, False)

        visits = 0
        while frontier:
            # frontier members always carry a real distance; the sentinel is
            # never compared against, so sums past it are still settled
            pos = -1
            best = 0
            for i, index in enumerate(frontier):
                node = store.record(index)
                if not node.visited and (pos == -1 or node.distance < best):
                    best = node.distance
                    pos = i
            if pos == -1:
                break

            chosen_index = frontier.pop(pos)
            chosen = store.record(chosen_index)
            chosen.visited = True
            visits += 1
            watch.on_visit(chosen_index, chosen.distance, False)

            for neighbor, weight in chosen.sorted_edges():
                node = store.record(neighbor)
                if node.visited:
                    continue
                candidate = chosen.distance + weight
                if not node.parents or candidate < node.distance:
                    node.distance = candidate
                    node.parents.clear()
                    node.parents.append(chosen_index)
                    if neighbor not in frontier:
                        frontier.append(neighbor)
                    watch.on_visit(neighbor, candidate, False)
                elif candidate == node.distance and chosen_index not in node.parents:
                    node.parents.append(chosen_index)

        self._state = ValidFor(source)
        logger.debug("Shortest paths computed from %s (%d nodes settled)", source_id, visits + 1)
        watch.on_visit(source, 0, True)

    # ------------------------------------------------------------------
    # get_distance
    # ------------------------------------------------------------------

    def get_distance(
        self,
        source_id: int,
        target_id: int,
        observer: ObserverLike = None,
    ) -> PathResult:
        """Shortest distance and canonical path from *source_id* to *target_id*.

        Reuses the cached computation when it is valid for *source_id*.
        """
        store = self._store
        source = store.index_of(source_id)
        target = store.index_of(target_id)
        if source is None or target is None:
            return PathResult(ResultCode.NODE_NOT_FOUND)

        if source == target:
            as_observer(observer).on_visit(source, 0, True)
            return PathResult(ResultCode.FOUND_TRIVIAL, 0, (source_id,))

        if self._state != ValidFor(source):
            self.calculate(source_id, observer)

        backward: list[int] = []
        current = target
        limit = store.node_count()
        while current != source and len(backward) < limit:
            backward.append(current)
            parents = store.record(current).parents
            if not parents:
                return PathResult(ResultCode.UNREACHABLE)
            current = parents[0]

        if current != source:
            logger.error(
                "Backtracking from %s did not reach %s within %d steps",
                target_id,
                source_id,
                limit,
            )
            return PathResult(ResultCode.INTERNAL_ERROR)

        path = [source_id]
        path.extend(store.record(index).node_id for index in reversed(backward))
        return PathResult(ResultCode.FOUND, store.record(target).distance, tuple(path))

    # ------------------------------------------------------------------
    # Cached state accessors
    # ------------------------------------------------------------------

    def distance_to(self, node_id: int) -> int | None:
        """Cached distance of *node_id* from the current source, if any."""
        index = self._store.index_of(node_id)
        if index is None or isinstance(self._state, Uninitialized):
            return None
        return self._store.record(index).distance

    def reached(self, node_id: int) -> bool:
        """Whether the current computation found any path to *node_id*."""
        index = self._store.index_of(node_id)
        if index is None or isinstance(self._state, Uninitialized):
            return False
        return index == self._state.source_index or bool(self._store.record(index).parents)

    def parents_of(self, node_id: int) -> list[int]:
        """Every equal-cost predecessor of *node_id* in recorded order."""
        index = self._store.index_of(node_id)
        if index is None or isinstance(self._state, Uninitialized):
            return []
        store = self._store
        return [store.record(p).node_id for p in store.record(index).parents]

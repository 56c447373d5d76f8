# domainkit/registry/base.py


import logging
from collections.abc import Callable, Hashable, Iterable, Iterator, Mapping, MutableMapping
from threading import RLock
from typing import Any, Generic, TypeVar

from ..conf import Settings

logger = logging.getLogger(__name__)

E = TypeVar("E")
K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


def add_to_index(index: MutableMapping[K, list[V]], key: K, value: V, *, unique: bool = True) -> None:
    """Append ``value`` to ``index[key]``; with ``unique`` a value already present is skipped."""
    bucket = index.setdefault(key, [])
    if unique and value in bucket:
        return
    bucket.append(value)


def remove_from_index(index: MutableMapping[K, list[V]], key: K, value: V) -> None:
    bucket = index.get(key)
    if not bucket:
        return
    if value in bucket:
        bucket.remove(value)
    if not bucket:
        del index[key]


def reaches_cycle(graph: Mapping[K, Iterable[K]], start: K) -> bool:
    """
    True if a walk from ``start`` along ``graph`` edges can revisit a node on its own path.

    Iterative depth-first search over an explicit stack of ``(node, edges)``
    frames. ``path`` holds the nodes of the current walk, ``visited`` every node
    already expanded; subtrees proven acyclic are not walked twice. Nodes
    missing from ``graph`` have no edges.
    """
    visited: set[K] = {start}
    path: set[K] = {start}
    stack: list[tuple[K, Iterator[K]]] = [(start, iter(graph.get(start, ())))]
    while stack:
        node, edges = stack[-1]
        nxt = next(edges, None)
        if nxt is None:
            stack.pop()
            path.discard(node)
            continue
        if nxt in path:
            return True
        if nxt in visited:
            continue
        visited.add(nxt)
        path.add(nxt)
        stack.append((nxt, iter(graph.get(nxt, ()))))
    return False


class BaseRegistry(Generic[E]):
    """
    In-memory index over one component kind.

    Subclasses declare their index attributes in ``_indices`` so ``clear()``
    can wipe every one of them. Mutations run under an ``RLock``; reads return
    copies so callers never observe (or mutate) registry internals.
    """

    kind: str = "component"
    _indices: tuple[str, ...] = ()

    def __init__(self, *, settings: Settings | None = None) -> None:
        self.settings: Settings = settings if settings is not None else Settings()
        self._lock = RLock()

    # --- duplicates ---

    def _warn_duplicate(self, key: Any, detail: str = "") -> None:
        """Log a duplicate registration. Never raises: last write wins."""
        if not self.settings.warn_on_duplicates:
            return
        suffix = f" {detail}" if detail else ""
        logging.getLogger(type(self).__module__).warning(
            "[%s] %r already registered; replacing previous entry.%s", self.kind.upper(), key, suffix
        )

    # --- enumeration ---

    def get_all(self) -> list[E]:  # pragma: no cover - abstract
        raise NotImplementedError

    def count(self) -> int:
        return len(self.get_all())

    def filter(self, pred: Callable[[E], bool]) -> list[E]:
        """Return all entries matching predicate ``pred``."""
        return [entry for entry in self.get_all() if pred(entry)]

    def get_stats(self) -> dict[str, Any]:  # pragma: no cover - abstract
        raise NotImplementedError

    # --- mutation / control ---

    def clear(self) -> None:
        """Wipe every index. Used as an isolation boundary between passes."""
        with self._lock:
            for attr in self._indices:
                getattr(self, attr).clear()
        logger.debug("[%s] registry cleared", self.kind.upper())

    def __len__(self) -> int:
        return self.count()

"""ObjectTree: NetworkX view over one service's discovered paths.

Built per result from a ServiceRecord; no cross-call cache. Edges follow
path structure (``/a`` -> ``/a/b``), not the advertised child lists, so
the tree is always acyclic. Objects whose structural parent was never
discovered hang off the nearest discovered ancestor.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

import networkx as nx

from busscope.domain.paths import ROOT_PATH, parent_path

if TYPE_CHECKING:
    from busscope.domain.records import ObjectRecord, ServiceRecord

type _Graph = nx.DiGraph


class ObjectTree:
    """Parent/child lookups over discovered objects."""

    def __init__(self, service: ServiceRecord) -> None:
        self._service = service
        self._graph = self._build(service)

    @property
    def graph(self) -> _Graph:
        return self._graph

    @staticmethod
    def _build(service: ServiceRecord) -> _Graph:
        g: _Graph = nx.DiGraph()
        for obj in service.objects:
            g.add_node(obj.path, record=obj)
        for obj in service.objects:
            ancestor = parent_path(obj.path)
            while ancestor is not None and ancestor not in g:
                ancestor = parent_path(ancestor)
            if ancestor is not None:
                g.add_edge(ancestor, obj.path)
        return g

    def record(self, path: str) -> ObjectRecord | None:
        if path not in self._graph:
            return None
        return self._graph.nodes[path]["record"]

    def children(self, path: str) -> list[ObjectRecord]:
        """Direct discovered children of *path*, errored ones excluded, sorted by path."""
        if path not in self._graph:
            return []
        records = [self._graph.nodes[p]["record"] for p in self._graph.successors(path)]
        return sorted(
            (r for r in records if r.error is None and parent_path(r.path) == path),
            key=lambda r: r.path,
        )

    def roots(self) -> list[str]:
        return sorted(p for p, degree in self._graph.in_degree() if degree == 0)

    def walk(self) -> Iterator[tuple[int, ObjectRecord]]:
        """Yield ``(depth, record)`` in sorted depth-first order."""
        start = [ROOT_PATH] if ROOT_PATH in self._graph else self.roots()
        for root in start:
            stack: list[tuple[int, str]] = [(0, root)]
            while stack:
                depth, path = stack.pop()
                yield depth, self._graph.nodes[path]["record"]
                for child in sorted(self._graph.successors(path), reverse=True):
                    stack.append((depth + 1, child))

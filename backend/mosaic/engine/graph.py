"""Derivation graph — every derived value is a function registered via decorator.

Usage:
    @derived(id="styles", inputs={"palette", "blank_fraction", "kind"}, dependencies=["geometry"])
    def styles(state: LayoutState) -> None:
        state.styled = compute_styled_shapes(state.generation, ...)

A node is stale when one of its inputs changed or a node it depends on was
recomputed. Stale nodes run in dependency order (Kahn's algorithm).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Iterable

if TYPE_CHECKING:
    from mosaic.engine.context import LayoutState

logger = logging.getLogger(__name__)


@dataclass
class DerivedSpec:
    id: str
    fn: Callable[["LayoutState"], None]
    inputs: set[str] = field(default_factory=set)
    dependencies: list[str] = field(default_factory=list)
    description: str = ""


class DerivationGraph:
    """Registry of derived nodes and the inputs they read."""

    def __init__(self) -> None:
        self._nodes: dict[str, DerivedSpec] = {}

    def register(self, spec: DerivedSpec) -> None:
        if spec.id in self._nodes:
            raise ValueError(f"Duplicate derived node ID: {spec.id}")
        self._nodes[spec.id] = spec
        logger.debug("Registered derived node %s (inputs: %s)", spec.id, sorted(spec.inputs))

    def get(self, node_id: str) -> DerivedSpec:
        return self._nodes[node_id]

    def all(self) -> list[DerivedSpec]:
        return self.resolve_order(set(self._nodes))

    @property
    def inputs(self) -> set[str]:
        names: set[str] = set()
        for spec in self._nodes.values():
            names |= spec.inputs
        return names

    def dependents(self, node_id: str) -> list[str]:
        return sorted(nid for nid, spec in self._nodes.items() if node_id in spec.dependencies)

    def stale_after(self, changed_inputs: Iterable[str]) -> list[DerivedSpec]:
        """Nodes to recompute after the given inputs changed, in run order."""
        changed = set(changed_inputs)
        stale: set[str] = set()
        stack = [nid for nid, spec in self._nodes.items() if spec.inputs & changed]
        while stack:
            nid = stack.pop()
            if nid in stale:
                continue
            stale.add(nid)
            stack.extend(self.dependents(nid))
        return self.resolve_order(stale)

    def resolve_order(self, node_ids: set[str]) -> list[DerivedSpec]:
        """Topological sort of the given nodes. Dependencies outside the set are ignored."""
        pool = {k: v for k, v in self._nodes.items() if k in node_ids}

        # Kahn's algorithm
        in_degree: dict[str, int] = {nid: 0 for nid in pool}
        for nid, spec in pool.items():
            for dep in spec.dependencies:
                if dep in pool:
                    in_degree[nid] += 1

        queue = sorted(nid for nid, d in in_degree.items() if d == 0)
        ordered: list[DerivedSpec] = []

        while queue:
            nid = queue.pop(0)
            ordered.append(pool[nid])
            for other_id, other_spec in pool.items():
                if nid in other_spec.dependencies:
                    in_degree[other_id] -= 1
                    if in_degree[other_id] == 0:
                        queue.append(other_id)
                        queue.sort()

        if len(ordered) != len(pool):
            missing = set(pool) - {s.id for s in ordered}
            raise ValueError(f"Circular dependency detected among: {missing}")

        return ordered

    @property
    def count(self) -> int:
        return len(self._nodes)


# Module-level singleton
_graph = DerivationGraph()


def get_graph() -> DerivationGraph:
    return _graph


def derived(
    *,
    id: str,
    inputs: set[str] | None = None,
    dependencies: list[str] | None = None,
    description: str = "",
    graph: DerivationGraph | None = None,
):
    """Decorator to register a derived-value function."""

    def decorator(fn: Callable[["LayoutState"], None]):
        spec = DerivedSpec(
            id=id,
            fn=fn,
            inputs=inputs or set(),
            dependencies=dependencies or [],
            description=description,
        )
        (graph or _graph).register(spec)
        return fn

    return decorator

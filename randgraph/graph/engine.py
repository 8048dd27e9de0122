"""Graph engine — adjacency storage plus cached structural analysis.

Owns an adjacency list for a fixed number of nodes, accepts edges one at
a time, and derives connected components, per-component cycle structure
and random-graph statistics on demand.

Usage::

    engine = GraphEngine(100)
    engine.add_undirected_edge(0, 1)
    engine.add_undirected_edge(1, 2)

    engine.components()            # [[0, 1, 2], [3], [4], ...]
    engine.component_analysis()    # sorted by size, largest first
    engine.find_cycles()
    engine.summary()

Derived views are cached against a mutation counter. Every ``add_edge``
bumps ``version``; the next read recomputes. Returned lists are fresh
snapshots, so a result held across a mutation keeps describing the graph
as it was when it was read.
"""

from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass
from typing import Any

from randgraph.graph import algorithms
from randgraph.graph.cache import VersionedCache
from randgraph.graph.errors import InvalidArgumentError, NodeIndexError

logger = logging.getLogger(__name__)

DEFAULT_FIXED_POINT_ITERATIONS = 10


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ComponentAnalysis:
    """Structural summary of one connected component.

    ``component_id`` is the component's rank by size in the analysis it
    came from (0 = largest). It is reassigned on every recomputation and
    is not an identity: track components by ``members`` if they must be
    followed across edge insertions.
    """

    component_id: int
    members: tuple[int, ...]
    vertex_count: int
    edge_count: int
    cycle_count: int

    @property
    def is_isolated(self) -> bool:
        return self.vertex_count == 1

    @property
    def is_tree(self) -> bool:
        return self.cycle_count == 0 and self.vertex_count > 1

    # A lone node takes the isolated class even if it carries a self-loop.
    @property
    def is_unicyclic(self) -> bool:
        return self.cycle_count == 1 and not self.is_isolated

    @property
    def is_multicyclic(self) -> bool:
        return self.cycle_count > 1 and not self.is_isolated

    def to_dict(self) -> dict[str, Any]:
        return {
            "component_id": self.component_id,
            "members": list(self.members),
            "vertex_count": self.vertex_count,
            "edge_count": self.edge_count,
            "cycle_count": self.cycle_count,
            "is_isolated": self.is_isolated,
            "is_tree": self.is_tree,
            "is_unicyclic": self.is_unicyclic,
            "is_multicyclic": self.is_multicyclic,
        }


@dataclass(frozen=True)
class ComponentTypeCounts:
    """How many components fall into each structural class."""

    isolated: int = 0
    tree: int = 0
    unicyclic: int = 0
    multicyclic: int = 0

    def as_dict(self) -> dict[str, int]:
        return {
            "isolated": self.isolated,
            "tree": self.tree,
            "unicyclic": self.unicyclic,
            "multicyclic": self.multicyclic,
        }


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------


class GraphEngine:
    """Incrementally built undirected graph over nodes ``0..node_count-1``.

    Edges are stored as directed adjacency entries. ``add_edge`` appends
    one direction only; ``add_undirected_edge`` appends both and is what
    callers should normally use. Counting always works on canonical
    (unordered, deduplicated) edges, so repeated or mirrored insertions
    never inflate edge or cycle counts.

    Not thread-safe: one caller is expected to interleave mutations and
    reads serially.

    Parameters
    ----------
    node_count:
        Number of nodes. Fixed for the lifetime of the engine.
    fixed_point_iterations:
        Iterations used to approximate the expected giant component size.
    max_cycles:
        Optional cap on the number of cycles ``find_cycles`` returns.
    """

    def __init__(
        self,
        node_count: int,
        *,
        fixed_point_iterations: int = DEFAULT_FIXED_POINT_ITERATIONS,
        max_cycles: int | None = None,
    ) -> None:
        if isinstance(node_count, bool) or not isinstance(node_count, int):
            raise InvalidArgumentError(
                f"node_count must be an integer, got {type(node_count).__name__}"
            )
        if node_count < 0:
            raise InvalidArgumentError(f"node_count must be >= 0, got {node_count}")
        if fixed_point_iterations < 1:
            raise InvalidArgumentError(
                f"fixed_point_iterations must be >= 1, got {fixed_point_iterations}"
            )
        if max_cycles is not None and max_cycles < 1:
            raise InvalidArgumentError(f"max_cycles must be >= 1, got {max_cycles}")

        self._adjacency: list[list[int]] = [[] for _ in range(node_count)]
        self._fixed_point_iterations = fixed_point_iterations
        self._max_cycles = max_cycles
        self._version = 0

        self._neighbors = VersionedCache(
            lambda: algorithms.undirected_neighbors(self._adjacency)
        )
        self._components = VersionedCache(self._compute_components)
        self._analysis = VersionedCache(self._compute_analysis)

    def __repr__(self) -> str:
        return f"GraphEngine(node_count={self.node_count}, edge_count={self.edge_count})"

    # -- Structure -----------------------------------------------------------

    @property
    def node_count(self) -> int:
        return len(self._adjacency)

    @property
    def version(self) -> int:
        """Mutation counter; increases on every edge insertion."""
        return self._version

    @property
    def is_stale(self) -> bool:
        """True when the cached component views predate the last mutation."""
        return not (
            self._components.is_fresh(self._version)
            and self._analysis.is_fresh(self._version)
        )

    def _check_index(self, node: int) -> None:
        if isinstance(node, bool) or not isinstance(node, int):
            raise NodeIndexError(f"node index must be an integer, got {node!r}")
        if not 0 <= node < self.node_count:
            raise NodeIndexError(
                f"node index {node} out of range for {self.node_count} nodes"
            )

    def add_edge(self, u: int, v: int) -> None:
        """Append ``v`` to ``u``'s neighbour list.

        One direction only. Pair with ``add_edge(v, u)`` or use
        ``add_undirected_edge`` to keep the adjacency symmetric.
        """
        self._check_index(u)
        self._check_index(v)
        self._adjacency[u].append(v)
        self._version += 1

    def add_undirected_edge(self, u: int, v: int) -> None:
        """Insert both directions of the edge ``{u, v}`` in one step."""
        self._check_index(u)
        self._check_index(v)
        self._adjacency[u].append(v)
        self._adjacency[v].append(u)
        self._version += 1

    def neighbors(self, node: int) -> list[int]:
        """Stored neighbour list of ``node``, duplicates included."""
        self._check_index(node)
        return list(self._adjacency[node])

    def has_edge(self, u: int, v: int) -> bool:
        """Whether ``{u, v}`` is stored in either direction."""
        self._check_index(u)
        self._check_index(v)
        return v in self._adjacency[u] or u in self._adjacency[v]

    def edges(self) -> list[tuple[int, int]]:
        """Distinct undirected edges, smaller index first, sorted."""
        return sorted(algorithms.canonical_edges(self._adjacency))

    # -- Cycles --------------------------------------------------------------

    def find_cycles(self) -> list[list[int]]:
        """Every simple cycle of three or more nodes, each reported once.

        Cycles appear in order of discovery; each starts at its smallest
        node.
        """
        return algorithms.find_simple_cycles(
            self._neighbors.get(self._version),
            max_cycles=self._max_cycles,
        )

    def find_cycle_to_highlight(
        self,
        rng: random.Random | None = None,
    ) -> list[int] | None:
        """Return the cycle of a randomly chosen unicyclic component.

        Much cheaper than ``find_cycles``: a unicyclic component has
        exactly one cycle, so one DFS from any member finds it. A component
        whose only cycle is a self-loop yields nothing, and the next
        candidate is tried. Returns ``None`` when no component holds a
        cycle of three or more nodes.
        """
        candidates = [c for c in self.component_analysis() if c.is_unicyclic]
        chooser = rng if rng is not None else random
        neighbors = self._neighbors.get(self._version)

        for chosen in chooser.sample(candidates, len(candidates)):
            cycle = algorithms.find_unicyclic_cycle(neighbors, chosen.members[0])
            if cycle is not None:
                return cycle
        return None

    # -- Components ----------------------------------------------------------

    def _compute_components(self) -> list[list[int]]:
        components = algorithms.connected_components(self._neighbors.get(self._version))
        logger.debug(
            "Recomputed components at version %d: %d components",
            self._version, len(components),
        )
        return components

    def _compute_analysis(self) -> list[ComponentAnalysis]:
        measured = []
        for members in self._components.get(self._version):
            vertices = len(members)
            edges = len(algorithms.canonical_edges(self._adjacency, members))
            measured.append((members, vertices, edges, max(0, edges - vertices + 1)))

        # Stable sort keeps discovery order among equal sizes.
        measured.sort(key=lambda m: m[1], reverse=True)

        return [
            ComponentAnalysis(
                component_id=rank,
                members=tuple(members),
                vertex_count=vertices,
                edge_count=edges,
                cycle_count=cycles,
            )
            for rank, (members, vertices, edges, cycles) in enumerate(measured)
        ]

    def components(self) -> list[list[int]]:
        """Connected components as node lists, in discovery order."""
        return [list(c) for c in self._components.get(self._version)]

    def component_analysis(self) -> list[ComponentAnalysis]:
        """Per-component analysis, largest component first."""
        return list(self._analysis.get(self._version))

    def component_assignment(self) -> list[int]:
        """``component_id`` of every node, indexed by node."""
        assignment = [-1] * self.node_count
        for record in self._analysis.get(self._version):
            for node in record.members:
                assignment[node] = record.component_id
        return assignment

    def component_size_distribution(self) -> dict[int, int]:
        """Number of components of each size, keyed by ascending size."""
        return algorithms.size_distribution(
            c.vertex_count for c in self._analysis.get(self._version)
        )

    # -- Statistics ----------------------------------------------------------

    @property
    def edge_count(self) -> int:
        return len(algorithms.canonical_edges(self._adjacency))

    @property
    def max_edge_count(self) -> int:
        n = self.node_count
        return n * (n - 1) // 2

    @property
    def edge_probability(self) -> float:
        """Observed edge density; 0.0 for graphs with fewer than two nodes."""
        if self.node_count <= 1:
            return 0.0
        return self.edge_count / self.max_edge_count

    @property
    def critical_threshold(self) -> float:
        """Erdős–Rényi giant component threshold ``1/n``; 0.0 when ``n <= 1``."""
        if self.node_count <= 1:
            return 0.0
        return 1.0 / self.node_count

    @property
    def is_above_giant_component_threshold(self) -> bool:
        if self.node_count <= 1:
            return False
        return self.edge_probability >= self.critical_threshold

    @property
    def expected_giant_component_size(self) -> int:
        """Theoretical giant component size for the current edge density."""
        if not self.is_above_giant_component_threshold:
            return 0

        mean_degree = self.edge_probability * (self.node_count - 1)
        theta = algorithms.giant_component_fraction(
            mean_degree, iterations=self._fixed_point_iterations,
        )
        # Round half up.
        return math.floor(theta * self.node_count + 0.5)

    @property
    def giant_component_size(self) -> int:
        analysis = self._analysis.get(self._version)
        return max((c.vertex_count for c in analysis), default=0)

    @property
    def total_cycle_count(self) -> int:
        return sum(c.cycle_count for c in self._analysis.get(self._version))

    @property
    def component_size_entropy(self) -> float:
        return algorithms.shannon_entropy(
            c.vertex_count for c in self._analysis.get(self._version)
        )

    @property
    def component_type_counts(self) -> ComponentTypeCounts:
        analysis = self._analysis.get(self._version)
        return ComponentTypeCounts(
            isolated=sum(1 for c in analysis if c.is_isolated),
            tree=sum(1 for c in analysis if c.is_tree),
            unicyclic=sum(1 for c in analysis if c.is_unicyclic),
            multicyclic=sum(1 for c in analysis if c.is_multicyclic),
        )

    def summary(self) -> dict[str, Any]:
        """All graph-wide statistics in one JSON-ready mapping."""
        return {
            "node_count": self.node_count,
            "edge_count": self.edge_count,
            "max_edge_count": self.max_edge_count,
            "edge_probability": self.edge_probability,
            "critical_threshold": self.critical_threshold,
            "above_giant_component_threshold": self.is_above_giant_component_threshold,
            "expected_giant_component_size": self.expected_giant_component_size,
            "giant_component_size": self.giant_component_size,
            "component_count": len(self._analysis.get(self._version)),
            "total_cycle_count": self.total_cycle_count,
            "component_size_entropy": self.component_size_entropy,
            "component_types": self.component_type_counts.as_dict(),
            "component_size_distribution": self.component_size_distribution(),
        }

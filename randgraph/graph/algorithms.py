"""Graph algorithms over plain adjacency lists.

Every function here is pure: it takes an adjacency structure (a list
indexed by node, each entry the ordered list of neighbour indices) and
returns fresh data. ``GraphEngine`` owns the adjacency and the caching;
this module owns the traversal logic.

Traversals interpret the adjacency as undirected. ``undirected_neighbors``
merges each node's stored out-neighbours with its in-neighbours, keeping
first-occurrence order, so a symmetric graph is walked in exactly the
order its neighbour lists were built while an asymmetric fixture still
connects both endpoints.

All traversals use explicit stacks; nothing here recurses, so graph size
is not bounded by the interpreter's recursion limit.
"""

from __future__ import annotations

import logging
import math
from collections import Counter
from typing import Iterable, Iterator, Sequence

logger = logging.getLogger(__name__)

Adjacency = Sequence[Sequence[int]]
Edge = tuple[int, int]


# ---------------------------------------------------------------------------
# Edges
# ---------------------------------------------------------------------------


def canonical_edge(u: int, v: int) -> Edge:
    """Unordered pair key with the smaller index first."""
    return (u, v) if u <= v else (v, u)


def canonical_edges(
    adjacency: Adjacency,
    members: Iterable[int] | None = None,
) -> set[Edge]:
    """Collect the distinct undirected edges stored in ``adjacency``.

    Both stored directions of an edge and any repeated insertions
    collapse onto one key. When ``members`` is given, only edges with
    both endpoints inside that node set are returned.
    """
    if members is None:
        return {
            canonical_edge(node, neighbor)
            for node, neighbors in enumerate(adjacency)
            for neighbor in neighbors
        }

    member_set = set(members)
    return {
        canonical_edge(node, neighbor)
        for node in member_set
        for neighbor in adjacency[node]
        if neighbor in member_set
    }


def undirected_neighbors(adjacency: Adjacency) -> list[list[int]]:
    """Out-neighbours followed by in-neighbours, without repeats."""
    incoming: list[list[int]] = [[] for _ in adjacency]
    for node, neighbors in enumerate(adjacency):
        for neighbor in neighbors:
            incoming[neighbor].append(node)

    return [
        list(dict.fromkeys([*adjacency[node], *incoming[node]]))
        for node in range(len(adjacency))
    ]


# ---------------------------------------------------------------------------
# Connected components
# ---------------------------------------------------------------------------


def connected_components(neighbors: Adjacency) -> list[list[int]]:
    """Partition the nodes into components using depth-first search.

    Start nodes are taken in ascending index order and members are listed
    in DFS pre-order, so the output is fully determined by the
    neighbour lists.
    """
    visited = [False] * len(neighbors)
    components: list[list[int]] = []

    for root in range(len(neighbors)):
        if visited[root]:
            continue

        visited[root] = True
        component = [root]
        stack: list[Iterator[int]] = [iter(neighbors[root])]

        while stack:
            for neighbor in stack[-1]:
                if not visited[neighbor]:
                    visited[neighbor] = True
                    component.append(neighbor)
                    stack.append(iter(neighbors[neighbor]))
                    break
            else:
                stack.pop()

        components.append(component)

    return components


# ---------------------------------------------------------------------------
# Cycles
# ---------------------------------------------------------------------------


def _rotate_to_min(sequence: Sequence[int]) -> tuple[int, ...]:
    pivot = sequence.index(min(sequence))
    return tuple(sequence[pivot:]) + tuple(sequence[:pivot])


def canonical_cycle_key(cycle: Sequence[int]) -> tuple[int, ...]:
    """Key shared by every rotation and reflection of ``cycle``.

    Both the forward and the reversed order are rotated so the smallest
    node comes first; the lexicographically smaller of the two wins.
    """
    forward = _rotate_to_min(cycle)
    backward = _rotate_to_min(list(reversed(cycle)))
    return min(forward, backward)


def find_simple_cycles(
    neighbors: Adjacency,
    max_cycles: int | None = None,
) -> list[list[int]]:
    """Enumerate every simple cycle of length three or more.

    For each start node ``s`` a depth-first search extends the current
    path only through neighbours greater than ``s`` that are not already
    on the path. Reaching ``s`` again from a path of at least three nodes
    closes a cycle. Cycles are reported once each, in order of first
    discovery, with reflections and rotations folded together by
    ``canonical_cycle_key``.

    This is an exhaustive search and is exponential on dense graphs.
    ``max_cycles`` stops it once that many distinct cycles are found.

    Parameters
    ----------
    neighbors:
        Adjacency lists to walk.
    max_cycles:
        Optional cap on the number of cycles returned. ``None`` means no
        cap.
    """
    cycles: list[list[int]] = []
    seen: set[tuple[int, ...]] = set()

    for start in range(len(neighbors)):
        path = [start]
        frames: list[Iterator[int]] = [iter(neighbors[start])]

        while frames:
            for neighbor in frames[-1]:
                if neighbor == start:
                    if len(path) < 3:
                        continue
                    key = canonical_cycle_key(path)
                    if key in seen:
                        continue
                    seen.add(key)
                    cycles.append(list(path))
                    if max_cycles is not None and len(cycles) >= max_cycles:
                        logger.warning(
                            "Cycle search stopped at limit of %d cycles", max_cycles,
                        )
                        return cycles
                elif neighbor > start and neighbor not in path:
                    path.append(neighbor)
                    frames.append(iter(neighbors[neighbor]))
                    break
            else:
                frames.pop()
                path.pop()

    return cycles


def find_unicyclic_cycle(neighbors: Adjacency, start: int) -> list[int] | None:
    """Trace the cycle reachable from ``start`` with a single DFS.

    Each node remembers the node it was reached from. The walk skips the
    edge back to that parent and stops at the first neighbour that is
    already visited: that neighbour and the current node are the two ends
    of a cycle, which is rebuilt by following parent pointers.

    Self-loops are skipped, so every cycle returned has at least three
    nodes. Only meaningful on a component known to hold exactly one
    cycle; on any other component it returns whichever cycle the DFS
    meets first. Returns ``None`` if no such cycle is reachable.
    """
    visited = {start}
    parent: dict[int, int] = {}
    frames: list[tuple[int, int | None, Iterator[int]]] = [
        (start, None, iter(neighbors[start]))
    ]

    while frames:
        node, came_from, pending = frames[-1]
        for neighbor in pending:
            if neighbor == node or (came_from is not None and neighbor == came_from):
                continue
            if neighbor in visited:
                cycle = [neighbor]
                current = node
                while current != neighbor:
                    cycle.append(current)
                    current = parent[current]
                return cycle
            visited.add(neighbor)
            parent[neighbor] = node
            frames.append((neighbor, node, iter(neighbors[neighbor])))
            break
        else:
            frames.pop()

    return None


# ---------------------------------------------------------------------------
# Statistics
# ---------------------------------------------------------------------------


def size_distribution(sizes: Iterable[int]) -> dict[int, int]:
    """Map each distinct size to how many times it occurs, ascending."""
    return dict(sorted(Counter(sizes).items()))


def shannon_entropy(values: Iterable[int]) -> float:
    """Base-2 entropy of the empirical distribution of ``values``."""
    counts = Counter(values)
    total = sum(counts.values())
    if total == 0:
        return 0.0

    entropy = 0.0
    for count in counts.values():
        p = count / total
        entropy -= p * math.log2(p)
    return entropy


def giant_component_fraction(
    mean_degree: float,
    iterations: int = 10,
    initial: float = 0.5,
) -> float:
    """Approximate the solution of ``θ = 1 - exp(-c·θ)`` by fixed-point iteration.

    ``θ`` is the expected fraction of nodes in the giant component of an
    Erdős–Rényi graph with mean degree ``c``.
    """
    theta = initial
    for _ in range(iterations):
        theta = 1.0 - math.exp(-mean_degree * theta)
    return theta

"""Random graph process driven one connection at a time.

Models the interactive experiment the engine was built for: start from
``n`` isolated nodes, keep joining random pairs, and watch the giant
component appear once the edge density passes ``1/n``. Also generates
whole Erdős–Rényi ``G(n, p)`` graphs in one go.

Usage::

    sim = RandomGraphSimulation(100, seed=7)
    sim.on_threshold_crossed(lambda engine: print("giant component!"))
    sim.run(60)
    sim.engine.summary()

    sim.generate(0.02)          # fresh G(100, 0.02)
    sim.highlight_cycle()
"""

from __future__ import annotations

import logging
import random
from typing import Callable

from randgraph.config.settings import settings
from randgraph.graph.engine import GraphEngine
from randgraph.graph.errors import InvalidArgumentError

logger = logging.getLogger(__name__)

ThresholdListener = Callable[[GraphEngine], None]


def _engine_from_settings(node_count: int) -> GraphEngine:
    return GraphEngine(
        node_count,
        fixed_point_iterations=settings.FIXED_POINT_ITERATIONS,
        max_cycles=settings.CYCLE_SEARCH_LIMIT or None,
    )


class RandomGraphSimulation:
    """Grow a random graph edge by edge on top of a ``GraphEngine``.

    Parameters
    ----------
    node_count:
        Number of nodes. Defaults to ``settings.DEFAULT_NODE_COUNT``.
    seed:
        Seed for the private RNG. Defaults to ``settings.RANDOM_SEED``.
    engine_factory:
        Builds a fresh engine for a node count. Called on every reset.
    """

    def __init__(
        self,
        node_count: int | None = None,
        *,
        seed: int | None = None,
        engine_factory: Callable[[int], GraphEngine] = _engine_from_settings,
    ) -> None:
        self._node_count = settings.DEFAULT_NODE_COUNT if node_count is None else node_count
        self._rng = random.Random(settings.RANDOM_SEED if seed is None else seed)
        self._engine_factory = engine_factory
        self._listeners: list[ThresholdListener] = []
        self._threshold_reached = False
        self._highlighted: list[int] | None = None
        self._engine = engine_factory(self._node_count)

    @property
    def engine(self) -> GraphEngine:
        return self._engine

    @property
    def rng(self) -> random.Random:
        return self._rng

    @property
    def threshold_reached(self) -> bool:
        return self._threshold_reached

    @property
    def highlighted_cycle(self) -> list[int] | None:
        return None if self._highlighted is None else list(self._highlighted)

    def on_threshold_crossed(self, listener: ThresholdListener) -> None:
        """Call ``listener(engine)`` when the giant component threshold is first reached."""
        self._listeners.append(listener)

    def reset(self) -> GraphEngine:
        """Discard the current graph and start again from isolated nodes."""
        self._engine = self._engine_factory(self._node_count)
        self._threshold_reached = False
        self._highlighted = None
        return self._engine

    # -- Mutation ------------------------------------------------------------

    def connect(self, a: int, b: int) -> bool:
        """Join ``a`` and ``b`` with an undirected edge.

        Returns False, without touching the graph, for out-of-range
        indices, self-loops and pairs that are already connected.
        """
        n = self._engine.node_count
        if not (0 <= a < n and 0 <= b < n) or a == b:
            logger.warning("Invalid node indices (%s, %s) for %d nodes", a, b, n)
            return False
        if self._engine.has_edge(a, b):
            logger.warning("Connection %d-%d already exists", a, b)
            return False

        self._engine.add_undirected_edge(a, b)
        logger.debug("Connected %d-%d (%d edges)", a, b, self._engine.edge_count)
        self._check_threshold()
        return True

    def add_random_connection(self) -> tuple[int, int] | None:
        """Pick a uniformly random pair of distinct nodes and connect them.

        Returns the pair that was tried, or ``None`` when the graph has
        fewer than two nodes. The pair may already have been connected,
        in which case the graph is unchanged.
        """
        n = self._engine.node_count
        if n < 2:
            logger.error("Need at least two nodes to add a connection, have %d", n)
            return None

        i = self._rng.randrange(n)
        j = self._rng.randrange(n)
        while j == i:
            j = self._rng.randrange(n)

        self.connect(i, j)
        return i, j

    def run(self, steps: int) -> int:
        """Attempt ``steps`` random connections; return how many added an edge."""
        if steps < 0:
            raise InvalidArgumentError(f"steps must be >= 0, got {steps}")

        added = 0
        for _ in range(steps):
            before = self._engine.version
            if self.add_random_connection() is None:
                break
            if self._engine.version != before:
                added += 1
        return added

    def generate(self, probability: float) -> GraphEngine:
        """Replace the graph with a fresh ``G(n, p)`` sample.

        Every unordered pair ``i < j`` is joined independently with
        probability ``p``.
        """
        if not 0.0 <= probability <= 1.0:
            raise InvalidArgumentError(
                f"probability must be between 0 and 1, got {probability}"
            )

        engine = self.reset()
        n = engine.node_count
        for i in range(n):
            for j in range(i + 1, n):
                if self._rng.random() < probability:
                    engine.add_undirected_edge(i, j)

        logger.info(
            "Generated G(%d, %.4f): %d edges, largest component %d",
            n, probability, engine.edge_count, engine.giant_component_size,
        )
        self._check_threshold()
        return engine

    # -- Views ---------------------------------------------------------------

    def highlight_cycle(self) -> list[int] | None:
        """Pick a cycle from a random unicyclic component and remember it."""
        self._highlighted = self._engine.find_cycle_to_highlight(self._rng)
        return self.highlighted_cycle

    def _check_threshold(self) -> None:
        above = self._engine.is_above_giant_component_threshold
        if above and not self._threshold_reached:
            logger.info(
                "Giant component threshold reached: p=%.4f >= 1/n=%.4f",
                self._engine.edge_probability, self._engine.critical_threshold,
            )
            for listener in self._listeners:
                listener(self._engine)
        self._threshold_reached = above

"""randgraph graph engine.

Incrementally built undirected graphs with cached component analysis,
cycle enumeration and Erdős–Rényi statistics.

Usage::

    from randgraph.graph import GraphEngine, RandomGraphSimulation

    engine = GraphEngine(10)
    engine.add_undirected_edge(0, 1)
    analysis = engine.component_analysis()
    cycles = engine.find_cycles()

    sim = RandomGraphSimulation(100, seed=1)
    sim.generate(0.02)
    sim.engine.summary()
"""

from randgraph.graph.engine import ComponentAnalysis, ComponentTypeCounts, GraphEngine
from randgraph.graph.errors import InvalidArgumentError, NodeIndexError, RandGraphError
from randgraph.graph.exporters import GraphExporter
from randgraph.graph.simulation import RandomGraphSimulation

__all__ = [
    "ComponentAnalysis",
    "ComponentTypeCounts",
    "GraphEngine",
    "GraphExporter",
    "InvalidArgumentError",
    "NodeIndexError",
    "RandGraphError",
    "RandomGraphSimulation",
]

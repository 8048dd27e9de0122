"""Graph export in multiple formats for external visualization tools.

Supported formats:
  - networkx: an ``nx.Graph`` for further analysis
  - GEXF: Gephi
  - GraphML: General-purpose XML graph format
  - D3 JSON: For D3.js force-directed layouts
  - CSV: Node and edge tables for spreadsheet analysis

Every node carries its component rank, component size, structural class
and a display colour keyed on that class.
"""

from __future__ import annotations

import csv
import io
import logging
from pathlib import Path
from typing import Any

import networkx as nx

from randgraph.graph.engine import ComponentAnalysis, GraphEngine

logger = logging.getLogger(__name__)

COMPONENT_COLORS = {
    "giant": "#ff5500",
    "isolated": "#0077ff",
    "tree": "#76f09b",
    "unicyclic": "#f5b862",
    "multicyclic": "#ff5500",
}

# Components at or below this size are never drawn as the giant one.
GIANT_MIN_SIZE = 3


def component_type(record: ComponentAnalysis) -> str:
    """Name of the structural class a component belongs to."""
    if record.is_isolated:
        return "isolated"
    if record.is_tree:
        return "tree"
    if record.is_unicyclic:
        return "unicyclic"
    return "multicyclic"


def component_color(record: ComponentAnalysis, giant_size: int) -> str:
    """Display colour for a component; the giant component stands out."""
    if record.vertex_count == giant_size and record.vertex_count > GIANT_MIN_SIZE:
        return COMPONENT_COLORS["giant"]
    return COMPONENT_COLORS[component_type(record)]


class GraphExporter:
    """Export a ``GraphEngine`` snapshot in various formats.

    Parameters
    ----------
    engine:
        The engine to export. Each export reads its current state.
    highlighted_cycle:
        Optional cycle whose nodes are flagged ``highlighted``.
    """

    def __init__(
        self,
        engine: GraphEngine,
        highlighted_cycle: list[int] | None = None,
    ) -> None:
        self._engine = engine
        self._highlighted = set(highlighted_cycle or [])

    # -- networkx ------------------------------------------------------------

    def to_networkx(self) -> nx.Graph:
        """Build an undirected simple ``nx.Graph`` with per-node attributes."""
        graph = nx.Graph()
        for node_id, attrs in enumerate(self._node_attributes()):
            graph.add_node(node_id, **attrs)
        graph.add_edges_from(self._engine.edges())
        return graph

    # -- GEXF (Gephi) -------------------------------------------------------

    def to_gexf(self, path: str | Path) -> None:
        """Export to GEXF format for Gephi."""
        graph = self.to_networkx()
        nx.write_gexf(graph, str(path))
        logger.info("Exported GEXF to %s (%d nodes, %d edges)",
                    path, graph.number_of_nodes(), graph.number_of_edges())

    # -- GraphML -------------------------------------------------------------

    def to_graphml(self, path: str | Path) -> None:
        """Export to GraphML format."""
        nx.write_graphml(self.to_networkx(), str(path))
        logger.info("Exported GraphML to %s", path)

    # -- D3 JSON -------------------------------------------------------------

    def to_d3_json(self) -> dict[str, Any]:
        """Export to D3.js force-directed JSON format, with graph statistics."""
        nodes = [
            {"id": node_id, **attrs}
            for node_id, attrs in enumerate(self._node_attributes())
        ]
        links = [{"source": u, "target": v} for u, v in self._engine.edges()]
        return {"nodes": nodes, "links": links, "stats": self._engine.summary()}

    # -- CSV -----------------------------------------------------------------

    def to_csv_nodes(self) -> str:
        """Export node table as CSV string."""
        output = io.StringIO()
        writer = csv.writer(output)
        writer.writerow([
            "id", "component_id", "component_size", "component_type", "highlighted",
        ])

        for node_id, attrs in enumerate(self._node_attributes()):
            writer.writerow([
                node_id,
                attrs["component_id"],
                attrs["component_size"],
                attrs["component_type"],
                attrs["highlighted"],
            ])

        return output.getvalue()

    def to_csv_edges(self) -> str:
        """Export edge table as CSV string."""
        output = io.StringIO()
        writer = csv.writer(output)
        writer.writerow(["source_id", "target_id"])
        writer.writerows(self._engine.edges())
        return output.getvalue()

    def to_csv_files(self, directory: str | Path) -> tuple[Path, Path]:
        """Write node and edge CSV files to a directory."""
        directory = Path(directory)
        directory.mkdir(parents=True, exist_ok=True)

        nodes_path = directory / "nodes.csv"
        edges_path = directory / "edges.csv"

        nodes_path.write_text(self.to_csv_nodes())
        edges_path.write_text(self.to_csv_edges())

        logger.info("Exported CSV to %s (nodes + edges)", directory)
        return nodes_path, edges_path

    # -- Helpers -------------------------------------------------------------

    def _node_attributes(self) -> list[dict[str, Any]]:
        """Per-node attribute dicts, indexed by node."""
        analysis = self._engine.component_analysis()
        giant_size = max((c.vertex_count for c in analysis), default=0)

        attributes: list[dict[str, Any]] = [{} for _ in range(self._engine.node_count)]
        for record in analysis:
            kind = component_type(record)
            color = component_color(record, giant_size)
            for node_id in record.members:
                attributes[node_id] = {
                    "component_id": record.component_id,
                    "component_size": record.vertex_count,
                    "component_type": kind,
                    "color": color,
                    "highlighted": node_id in self._highlighted,
                }
        return attributes

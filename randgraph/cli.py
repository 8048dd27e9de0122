"""randgraph CLI — grow random graphs and inspect their structure.

Usage:
    randgraph simulate --nodes 100 --probability 0.02
    randgraph simulate --nodes 100 --steps 80 --seed 3 --cycles --highlight
    randgraph simulate --nodes 50 --probability 0.05 --export net.gexf --format gexf
    randgraph sweep --nodes 200 --probabilities 0.001 0.005 0.01 0.02 --trials 20
"""

from __future__ import annotations

import argparse
import json
import logging
import random
import sys
from pathlib import Path
from typing import Any

from randgraph.config.settings import settings

logger = logging.getLogger(__name__)

EXPORT_FORMATS = ("gexf", "graphml", "d3", "csv")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="randgraph",
        description="randgraph — random graph structure explorer",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Verbose output"
    )

    subparsers = parser.add_subparsers(dest="command")

    # simulate
    sim = subparsers.add_parser("simulate", help="Build one random graph and report on it")
    sim.add_argument("--nodes", "-n", type=int, default=settings.DEFAULT_NODE_COUNT)
    mode = sim.add_mutually_exclusive_group()
    mode.add_argument("--probability", "-p", type=float, help="Generate G(n, p)")
    mode.add_argument("--steps", type=int, help="Add this many random connections")
    sim.add_argument("--seed", type=int, default=settings.RANDOM_SEED)
    sim.add_argument("--cycles", action="store_true", help="Enumerate all simple cycles")
    sim.add_argument("--highlight", action="store_true", help="Pick a unicyclic cycle")
    sim.add_argument("--output", "-o", help="Save statistics to a JSON file")
    sim.add_argument("--export", help="Export the graph to this path")
    sim.add_argument("--format", choices=EXPORT_FORMATS, default="gexf")

    # sweep
    swp = subparsers.add_parser("sweep", help="Compare observed and expected giant components")
    swp.add_argument("--nodes", "-n", type=int, default=settings.DEFAULT_NODE_COUNT)
    swp.add_argument("--probabilities", type=float, nargs="+", required=True)
    swp.add_argument("--trials", type=int, default=10)
    swp.add_argument("--seed", type=int, default=settings.RANDOM_SEED)

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    # Logging
    level = logging.DEBUG if args.verbose else getattr(logging, settings.LOG_LEVEL)
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    if not args.command:
        parser.print_help()
        sys.exit(1)

    # Dispatch
    try:
        if args.command == "simulate":
            _cmd_simulate(args)
        elif args.command == "sweep":
            _cmd_sweep(args)
    except KeyboardInterrupt:
        print("\nInterrupted.")
        sys.exit(130)
    except Exception as exc:
        logger.error("Error: %s", exc)
        if args.verbose:
            raise
        sys.exit(1)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def _cmd_simulate(args: argparse.Namespace) -> None:
    """Build a graph, print its statistics, optionally save and export."""
    from randgraph.graph import GraphExporter, RandomGraphSimulation

    sim = RandomGraphSimulation(args.nodes, seed=args.seed)
    if args.probability is not None:
        sim.generate(args.probability)
    elif args.steps is not None:
        sim.run(args.steps)

    engine = sim.engine
    _print_summary(engine.summary())

    report: dict[str, Any] = {
        "summary": engine.summary(),
        "components": [c.to_dict() for c in engine.component_analysis()],
    }

    if args.cycles:
        cycles = engine.find_cycles()
        print(f"\nSimple cycles: {len(cycles)}")
        for cycle in cycles:
            print(f"  {_format_cycle(cycle)}")
        report["cycles"] = cycles

    if args.highlight:
        cycle = sim.highlight_cycle()
        if cycle is None:
            print("\nNo unicyclic component to highlight.")
        else:
            print(f"\nHighlighted cycle: {_format_cycle(cycle)}")
        report["highlighted_cycle"] = cycle

    if args.output:
        _save_report(report, args.output)

    if args.export:
        _export(GraphExporter(engine, sim.highlighted_cycle), args.export, args.format)


def _cmd_sweep(args: argparse.Namespace) -> None:
    """Run repeated G(n, p) trials for each probability and tabulate results."""
    rows = sweep(args.nodes, args.probabilities, args.trials, args.seed)

    print(f"n = {args.nodes}, critical p = 1/n = {1 / max(args.nodes, 1):.4f}, "
          f"{args.trials} trials each\n")
    print(f"{'p':>8}  {'mean giant':>10}  {'expected':>8}  {'above 1/n':>9}")
    for row in rows:
        print(f"{row['probability']:>8.4f}  {row['mean_giant_size']:>10.1f}  "
              f"{row['mean_expected_size']:>8.1f}  {row['fraction_above']:>9.0%}")


def sweep(
    nodes: int,
    probabilities: list[float],
    trials: int,
    seed: int | None = None,
) -> list[dict[str, float]]:
    """Average giant component statistics over repeated ``G(n, p)`` samples."""
    from randgraph.graph import RandomGraphSimulation

    rng = random.Random(seed)
    rows = []
    for p in probabilities:
        giant = expected = above = 0
        for _ in range(trials):
            sim = RandomGraphSimulation(nodes, seed=rng.randrange(2**32))
            engine = sim.generate(p)
            giant += engine.giant_component_size
            expected += engine.expected_giant_component_size
            above += engine.is_above_giant_component_threshold
        rows.append({
            "probability": p,
            "mean_giant_size": giant / trials if trials else 0.0,
            "mean_expected_size": expected / trials if trials else 0.0,
            "fraction_above": above / trials if trials else 0.0,
        })
    return rows


# ---------------------------------------------------------------------------
# Output helpers
# ---------------------------------------------------------------------------


def _format_cycle(cycle: list[int]) -> str:
    return " → ".join(str(n) for n in [*cycle, cycle[0]])


def _print_summary(summary: dict[str, Any]) -> None:
    """Print the statistics panel."""
    n = summary["node_count"]
    share = (summary["giant_component_size"] / n * 100) if n else 0.0
    types = summary["component_types"]

    print("Random Graph Statistics")
    print(f"  Nodes:                      {n}")
    print(f"  Edges:                      {summary['edge_count']} / {summary['max_edge_count']}")
    print(f"  Edge probability (p):       {summary['edge_probability']:.4f}")
    print(f"  Critical threshold (1/n):   {summary['critical_threshold']:.4f}")
    print(f"  Components:                 {summary['component_count']}")
    print(f"  Largest component:          {summary['giant_component_size']} nodes ({share:.1f}%)")
    reached = "reached" if summary["above_giant_component_threshold"] else "not reached"
    print(f"  Giant component threshold:  {reached}")
    if summary["expected_giant_component_size"] > 0:
        expected = summary["expected_giant_component_size"]
        print(f"  Expected giant size:        ~{expected} nodes ({expected / n * 100:.1f}%)")
    print(f"  Component size entropy:     {summary['component_size_entropy']:.3f}")
    print(f"  Total cycles:               {summary['total_cycle_count']}")
    print("Component types")
    print(f"  Isolated nodes:             {types['isolated']}")
    print(f"  Trees:                      {types['tree']}")
    print(f"  Unicyclic:                  {types['unicyclic']}")
    print(f"  Multicyclic:                {types['multicyclic']}")
    print("Component sizes")
    for size, count in summary["component_size_distribution"].items():
        print(f"  Size {size}: {count}")


def _save_report(report: dict[str, Any], path: str) -> None:
    """Save the statistics report as JSON."""
    with open(path, "w") as f:
        json.dump(report, f, indent=2, default=str)
    print(f"\n📄 Report saved to {path}")


def _export(exporter: Any, path: str, fmt: str) -> None:
    if fmt == "gexf":
        exporter.to_gexf(path)
    elif fmt == "graphml":
        exporter.to_graphml(path)
    elif fmt == "d3":
        Path(path).write_text(json.dumps(exporter.to_d3_json(), indent=2))
    elif fmt == "csv":
        exporter.to_csv_files(path)
    print(f"Exported {fmt} to {path}")


if __name__ == "__main__":
    main()

"""Exception types raised by the graph engine and simulation."""

from __future__ import annotations


class RandGraphError(Exception):
    """Base class for every error raised by randgraph."""


class InvalidArgumentError(RandGraphError, ValueError):
    """Raised for malformed construction or configuration arguments.

    Negative or non-integer node counts, probabilities outside ``[0, 1]``,
    non-positive iteration counts.
    """


class NodeIndexError(RandGraphError, IndexError):
    """Raised when a node index falls outside ``[0, node_count)``.

    Passing an out-of-range index is a programming error on the caller's
    side; the engine checks before mutating so the graph is never left
    half-updated.
    """

"""randgraph — random graph structure explorer."""

__version__ = "0.1.0"

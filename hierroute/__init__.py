"""Shortest paths with Dijkstra, distance matrices and Contraction Hierarchies."""

__version__ = "0.1.0"

__all__ = [
    "ch_distance",
    "ch_path",
    "ch_preprocessor",
    "ch_query",
    "ch_unpack",
    "computors",
    "contraction_graph",
    "dijkstra",
    "edge_difference",
    "matrix",
    "numparse",
    "priority_queue",
    "structures",
    "witness",
]
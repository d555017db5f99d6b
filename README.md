# hierroute

Shortest-path tools for directed graphs with non-negative integer edge weights,
such as road networks:

- plain Dijkstra searches (`hierroute.dijkstra`): point-to-point distance,
  path reconstruction and one-to-all distances;
- full distance matrices (`hierroute.matrix`, `hierroute.computors`), where
  each query is one table lookup;
- Contraction Hierarchies: preprocessing (`hierroute.ch_preprocessor`) that
  ranks nodes and creates shortcut edges, and bidirectional queries for
  distances (`hierroute.ch_distance`) and for full paths unpacked back to
  original edges (`hierroute.ch_path`).

Unreachable targets are reported with the largest 32-bit unsigned value,
`4294967295`, available as `hierroute.structures.INFINITY`.

## Installation

```
pip install .
```

Running the tests needs the `test` extra:

```
pip install ".[test]"
pytest
```

## Dijkstra

`outgoing` is a list with one entry per node, each a list of
`(target, weight)` pairs.

```python
from hierroute.dijkstra import shortest_distance, shortest_path, format_path, one_to_all

outgoing = [
    [(1, 4), (2, 1)],
    [(3, 1)],
    [(1, 2), (3, 5)],
    [],
]

shortest_distance(0, 3, outgoing)   # 4
one_to_all(0, outgoing)             # [0, 3, 1, 4]

distance, path = shortest_path(0, 3, outgoing)
print(format_path(0, 3, distance, path))
```

`shortest_path` returns the distance and the edges of the path as `PathEdge`
values (`source`, `target`, `length`); `format_path` renders them as text.
Passing incoming adjacency lists to `one_to_all` gives distances in the
reversed graph.

## Distance matrices

```python
from hierroute.matrix import compute_distance_matrix

edges = [(0, 1, 4), (0, 2, 1), (2, 1, 2), (1, 3, 1), (2, 3, 5)]
matrix = compute_distance_matrix(4, edges)
matrix.find_distance(0, 3)          # 4
print(matrix.info())
```

`DistanceMatrix(nodes, distances)` wraps a flat row-major list of `nodes * nodes`
values; `set_distance` changes one entry. `SlowComputor` in
`hierroute.computors` builds such a list by running Dijkstra once from every
node, and `compute_reversed` does the same over reversed edges.
`adjacency_lists(nodes, edges)` turns `(source, target, weight)` triples into
outgoing and incoming adjacency lists.

## Contraction Hierarchies

Preprocessing works on a `ContractionGraph`. `preprocess` contracts every node,
records its rank in `graph.ranks` (1 for the first contracted node) and returns
the created shortcuts as `ShortcutEdge` values. Original edges are removed
from the graph during contraction, so the query graph is put together from
the original edges and the shortcuts.

Queries run on a `CHGraph`, where each edge is stored at its lower-ranked
endpoint: an edge `u -> v` is stored at `u` with `forward=True` when `u` has
the lower rank, and otherwise at `v` pointing to `u` with `backward=True`.

```python
from hierroute.contraction_graph import ContractionGraph
from hierroute.ch_preprocessor import preprocess
from hierroute.ch_distance import CHGraph, CHDistanceQueryManager
from hierroute.ch_path import CHPathQueryManager

edges = [(0, 1, 4), (0, 2, 1), (2, 1, 2), (1, 3, 1), (2, 3, 5)]

graph = ContractionGraph(4)
for source, target, weight in edges:
    graph.add_edge(source, target, weight)
shortcuts = preprocess(graph)

best = {}
for source, target, weight in edges:
    if (source, target) not in best or weight < best[(source, target)][0]:
        best[(source, target)] = (weight, None)
for shortcut in shortcuts:
    pair = (shortcut.source_node, shortcut.target_node)
    if pair not in best or shortcut.weight < best[pair][0]:
        best[pair] = (shortcut.weight, shortcut.middle_node)

hierarchy = CHGraph(graph.ranks)
for (source, target), (weight, middle) in best.items():
    if graph.ranks[source] < graph.ranks[target]:
        hierarchy.add_edge(source, target, weight, True, False, middle)
    else:
        hierarchy.add_edge(target, source, weight, False, True, middle)

CHDistanceQueryManager(hierarchy).find_distance(0, 3)   # 4

queries = CHPathQueryManager(hierarchy)
queries.find_path(0, 3)                 # (4, [(0, 2), (2, 1), (1, 3)])
queries.find_path_with_lengths(0, 3)    # distance and PathEdge values
queries.find_distance_output_path(0, 3) # writes the path to standard output
```

`unpack_forward_shortcut` and `unpack_backward_shortcut` expand a single edge of
the hierarchy into original edges.

The lower-level pieces can also be used on their own: `BidirectionalSearch`
(`hierroute.ch_query`), `WitnessSearch` and `ShortcutCandidates`
(`hierroute.witness`), `forward_chain`, `backward_chain`, `unpack_forward` and
`unpack_backward` (`hierroute.ch_unpack`), `ContractionQueue`
(`hierroute.priority_queue`) and `EdgeDifference`
(`hierroute.edge_difference`).

Progress and timings are reported through the standard `logging` module.

## Number parsing

`hierroute.numparse.parse_float` is a lenient decimal parser: it reads an
optional sign, digits, an optional fraction and an optional lower-case `e`
exponent, and stops quietly at the first character it does not expect. An
empty or unparsable string gives `0.0`. `pow10(n)` computes powers of ten by
repeated squaring.

## What this package does not do

- It has no command-line program; everything is used from Python.
- It reads and writes no files: there is no loader for graph files, node-id
  mappings or CSV distance matrices, and distance matrices cannot be saved to
  disk. Graphs are built in memory from edge lists.
- It does not turn a preprocessed `ContractionGraph` into a `CHGraph` for you;
  the example above shows how to do it.
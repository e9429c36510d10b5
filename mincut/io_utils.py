import os
from typing import Iterable, Union

import networkx as nx
import numpy as np

from mincut.graph import Graph


def _parse_int(token: str, lineno: int, what: str) -> int:
    try:
        return int(token)
    except ValueError:
        raise ValueError(f"line {lineno}: {what} must be an integer, got {token!r}") from None


def parse_graph(lines: Iterable[str]) -> Graph:
    """
    Parses the edge list format:
        first line: number of vertices n
        every other line: v w [weight], 0-indexed, weight defaults to 1
    Blank lines and lines starting with '#' are skipped.
    """
    n = None
    edges = []
    for lineno, line in enumerate(lines, start=1):
        line = line.strip()
        if not line or line.startswith('#'):
            continue

        tokens = line.split()
        if n is None:
            if len(tokens) != 1:
                raise ValueError(f"line {lineno}: expected the vertex count, got {line!r}")
            n = _parse_int(tokens[0], lineno, "vertex count")
            if n < 0:
                raise ValueError(f"line {lineno}: vertex count must be non-negative, got {n}")
            continue

        if len(tokens) not in (2, 3):
            raise ValueError(f"line {lineno}: expected 'v w [weight]', got {line!r}")
        v = _parse_int(tokens[0], lineno, "vertex")
        w = _parse_int(tokens[1], lineno, "vertex")
        weight = _parse_int(tokens[2], lineno, "weight") if len(tokens) == 3 else 1

        if not (0 <= v < n and 0 <= w < n):
            raise ValueError(f"line {lineno}: edge ({v}, {w}) out of range for {n} vertices")
        if weight < 0:
            raise ValueError(f"line {lineno}: negative weight {weight}")
        edges.append((v, w, weight))

    if n is None:
        raise ValueError("missing vertex count")

    return Graph.from_directed_edges(n, edges)


def read_graph(source: Union[str, os.PathLike, Iterable[str]]) -> Graph:
    if isinstance(source, (str, os.PathLike)):
        with open(source) as f:
            return parse_graph(f)
    return parse_graph(source)


def write_graph(graph: Graph, path: Union[str, os.PathLike]):
    with open(path, 'w') as f:
        f.write(f"{graph.num_vertices()}\n")
        for node in graph.adjacency_list():
            for other, weight in node.edges:
                f.write(f"{node.vertex} {other} {weight}\n")


def read_expected_min_cut(path: Union[str, os.PathLike]) -> int:
    with open(path) as f:
        return int(f.readline().strip())


def graph_from_matrix(matrix: np.ndarray) -> Graph:
    """
    Every positive entry matrix[i, j] (i != j) becomes the directed edge i -> j,
    so a symmetric matrix yields both directions of each undirected edge.
    """
    matrix = np.asarray(matrix)
    if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1]:
        raise ValueError("graph_matrix must be square")
    if (matrix < 0).any():
        raise ValueError("graph_matrix must not contain negative weights")
    if not np.all(np.mod(matrix, 1) == 0):
        raise ValueError("graph_matrix must contain integer weights")

    rows, cols = np.nonzero(matrix)
    weights = matrix[rows, cols].astype(np.int64)
    return Graph.from_directed_edges(matrix.shape[0], zip(rows.tolist(), cols.tolist(), weights.tolist()))


def graph_from_networkx(G: nx.Graph, weight: str = 'weight') -> Graph:
    """
    Converts an undirected networkx graph; nodes are relabeled 0..n-1 in
    sorted order and every edge is added in both directions.
    Edges without the weight attribute count as 1.
    """
    H = nx.convert_node_labels_to_integers(G, ordering="sorted")
    edges = []
    for u, v, w in H.edges(data=weight, default=1):
        if w != int(w):
            raise ValueError(f"edge ({u}, {v}) has non-integer weight {w}")
        edges.append((u, v, int(w)))
        edges.append((v, u, int(w)))
    return Graph.from_directed_edges(H.number_of_nodes(), edges)

from typing import Iterable, NamedTuple, Sequence

import numpy as np


class Edge(NamedTuple):
    other: int
    weight: int


class Node:
    __slots__ = ('vertex', 'weight', 'edges')

    def __init__(self, vertex: int, weight: int, edges: tuple):
        self.vertex = vertex
        self.weight = weight
        self.edges = edges

    @classmethod
    def from_pairs(cls, vertex: int, pairs: Iterable[Sequence[int]]) -> 'Node':
        edges = tuple(Edge(int(other), int(weight)) for other, weight in pairs)
        return cls(vertex, sum(edge.weight for edge in edges), edges)

    def __eq__(self, other):
        if not isinstance(other, Node):
            return NotImplemented
        return (self.vertex, self.weight, self.edges) == (other.vertex, other.weight, other.edges)

    def __repr__(self):
        return f"Node(vertex={self.vertex}, weight={self.weight}, edges={list(self.edges)})"


class MergeUtil:
    """
    Scratch space for merging edge lists. `merge_proxy` accumulates weight
    per target vertex and must be all-zero between uses, `stack` records
    which entries of the proxy were touched.
    """
    __slots__ = ('stack', 'merge_proxy')

    def __init__(self, n: int):
        self.stack = np.zeros(n, dtype=int)
        self.merge_proxy = np.zeros(n, dtype=np.int64)


def as_weighted_edge(edge: Sequence[int]) -> tuple[int, int, int]:
    """
    Normalises (v, w) and (v, w, weight) into (v, w, weight).
    """
    if len(edge) == 2:
        v, w = edge
        weight = 1
    elif len(edge) == 3:
        v, w, weight = edge
    else:
        raise ValueError(f"expected (v, w) or (v, w, weight), got {edge!r}")
    return int(v), int(w), int(weight)

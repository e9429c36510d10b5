from typing import Callable, Iterable, Sequence

import networkx as nx
import numpy as np

from mincut.fenwick_tree import FenwickTree
from mincut.graph_util import Edge, MergeUtil, Node, as_weighted_edge
from mincut.union_find import UnionFind


def _vertex_condenser(v: int,
                      edge_lists: Iterable[Sequence[Edge]],
                      merge_util: MergeUtil,
                      vertex_mapper: Callable[[int], int]) -> Node:
    """
    Builds node `v` out of the given edge lists. Every neighbour is redirected
    through `vertex_mapper`, edges that end up pointing at `v` are dropped and
    edges pointing at the same vertex are summed.
    Runs in time proportional to the number of edges, not to the vertex count.
    """
    stack = merge_util.stack
    merge_proxy = merge_util.merge_proxy
    stack_size = 0

    for edges in edge_lists:
        for other, weight in edges:
            target = vertex_mapper(other)
            if target == v or weight == 0:
                continue
            if merge_proxy[target] == 0:
                stack[stack_size] = target
                stack_size += 1
            merge_proxy[target] += weight

    node_weight = 0
    merged = []
    for i in range(stack_size):
        target = int(stack[i])
        weight = int(merge_proxy[target])
        merge_proxy[target] = 0
        node_weight += weight
        merged.append(Edge(target, weight))

    return Node(v, node_weight, tuple(merged))


class Graph:
    """
    Edge-weighted multigraph stored as one Node per vertex.

    Each directed edge only counts towards its source vertex, so an undirected
    edge has to be supplied in both directions. With symmetric input the
    weight of a 2-vertex contraction counts every crossing edge twice.
    """
    __slots__ = ['_n', '_weight', '_adj']

    def __init__(self, adj: Sequence[Node]):
        self._adj = tuple(adj)
        self._n = len(self._adj)
        self._weight = sum(node.weight for node in self._adj)

    @classmethod
    def from_directed_edges(cls, n: int, directed_edges: Iterable[Sequence[int]]) -> 'Graph':
        """
        Args:
            n (int): number of vertices, ids are 0..n-1.
            directed_edges: (v, w) or (v, w, weight) items. Parallel edges are
                summed, self-loops are discarded.
        """
        if n < 0:
            raise ValueError(f"vertex count must be non-negative, got {n}")

        adj = [{} for _ in range(n)]
        for edge in directed_edges:
            v, w, weight = as_weighted_edge(edge)
            if not (0 <= v < n and 0 <= w < n):
                raise ValueError(f"edge ({v}, {w}) out of range for {n} vertices")
            if weight < 0:
                raise ValueError(f"edge ({v}, {w}) has negative weight {weight}")
            if v == w:
                continue
            adj[v][w] = adj[v].get(w, 0) + weight

        return cls([Node.from_pairs(v, ((w, weight) for w, weight in targets.items() if weight > 0))
                    for v, targets in enumerate(adj)])

    @classmethod
    def from_adjacency(cls, adj: Sequence[Iterable[Sequence[int]]]) -> 'Graph':
        """
        Builds a graph from per-vertex lists of (other, weight) pairs.
        """
        return cls.from_directed_edges(len(adj), ((v, other, weight)
                                                  for v, edges in enumerate(adj)
                                                  for other, weight in edges))

    def num_vertices(self) -> int:
        return self._n

    def num_edges(self) -> int:
        return sum(len(node.edges) for node in self._adj)

    def weight(self) -> int:
        return self._weight

    def adjacency_list(self) -> tuple:
        return self._adj

    def is_symmetric(self) -> bool:
        """
        True if every directed edge has a reverse edge of the same weight.
        """
        weights = {(node.vertex, other): weight
                   for node in self._adj for other, weight in node.edges}
        return all(weights.get((w, v)) == weight for (v, w), weight in weights.items())

    def to_networkx(self) -> nx.Graph:
        """
        Undirected view where the weight of {v, w} is w(v, w) + w(w, v), i.e. the
        amount a cut separating v and w adds to the contracted weight.
        """
        G = nx.Graph()
        G.add_nodes_from(range(self._n))
        for node in self._adj:
            for other, weight in node.edges:
                if G.has_edge(node.vertex, other):
                    G[node.vertex][other]['weight'] += weight
                else:
                    G.add_edge(node.vertex, other, weight=weight)
        return G

    def contract_full(self, rng=None) -> 'Graph':
        return self.contract(2, rng)

    def contract(self, t: int, rng=None) -> 'Graph':
        """
        Randomly contracts edges, picked with probability proportional to
        their weight, until exactly `t` vertices are left.

        Args:
            t (int): target vertex count, 1 <= t <= n.
            rng: numpy Generator, seed or None.

        Returns:
            Graph: a new graph on vertices 0..t-1.
        """
        if not 1 <= t <= self._n:
            raise ValueError(f"cannot contract {self._n} vertices down to {t}")

        rng = np.random.default_rng(rng)

        weight = self._weight
        adj = list(self._adj)

        merge_util = MergeUtil(self._n)
        vertex_map = UnionFind(self._n)
        vertex_weights = FenwickTree.from_weights([node.weight for node in adj])

        for _ in range(self._n - t):
            if weight > 0:
                v, w = self._pick_random_edge(rng, weight, adj, vertex_map, vertex_weights)
            else:
                # only isolated components are left, any merge keeps a zero cut
                v, w = [i for i, node in enumerate(adj) if node is not None][:2]

            n1 = adj[v]
            n2 = adj[w]
            x = vertex_map.union(v, w)

            node = _vertex_condenser(x, (n1.edges, n2.edges), merge_util, vertex_map.root)
            weight -= n1.weight + n2.weight - node.weight

            vertex_weights.update(v, n1.weight, subtract=True)
            vertex_weights.update(w, n2.weight, subtract=True)
            vertex_weights.update(x, node.weight)

            adj[v] = None
            adj[w] = None
            adj[x] = node

        labels = vertex_map.condense(merge_util)
        relabel = labels.__getitem__

        return Graph([_vertex_condenser(int(labels[node.vertex]), (node.edges,), merge_util, relabel)
                      for node in adj if node is not None])

    @staticmethod
    def _pick_random_edge(rng: np.random.Generator,
                          weight: int,
                          adj: list,
                          vertex_map: UnionFind,
                          vertex_weights: FenwickTree) -> tuple[int, int]:
        """
        Picks vertex v with probability proportional to its weight, then one of
        its edges proportional to the edge weight. Returns the roots (v, w).
        """
        r = int(rng.integers(1, weight, endpoint=True))

        v, rw = vertex_weights.lower_entry(r)
        for edge in adj[v].edges:
            rw += edge.weight
            if rw >= r:
                break

        return v, vertex_map.root(edge.other)

    def __repr__(self):
        return f"Graph(n={self._n}, weight={self._weight}, adj={list(self._adj)})"

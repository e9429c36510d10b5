import math
import time

import numpy as np

from mincut.graph import Graph
from mincut.io_utils import graph_from_matrix
from mincut.karger import KargerAlgo
from mincut.min_cut_algo import MinCutAlgo

DEFAULT_THRESHOLD = 10


class KargerSteinAlgo(MinCutAlgo):
    """
    Recursive contraction: contract to ~n/sqrt(2) vertices twice, independently,
    recurse on both halves and keep the smaller cut. Graphs with at most
    `threshold` vertices are handed to plain Karger.
    """

    def __init__(self, graph: Graph, threshold: int = DEFAULT_THRESHOLD, rng=None):
        if threshold < 2:
            raise ValueError(f"threshold must be at least 2, got {threshold}")
        super().__init__(graph, rng)
        self.threshold = threshold

    def single_trial_fail_prob(self) -> float:
        branch_height = 2 * math.ceil(math.log2(self.graph.num_vertices()))
        return 1.0 - 1.0 / (branch_height + 1)

    def iterate(self) -> int:
        n = self.graph.num_vertices()
        if n <= 2:
            # only one cut left
            return self.graph.weight()

        if n <= self.threshold:
            karger = KargerAlgo(self.graph, self.rng)
            return karger.iterate_success_lower_bound(1.0 / math.log(n))

        # t < n, otherwise n = 3 would never shrink
        t = min(n - 1, max(2, math.ceil(n / math.sqrt(2))))
        g1 = self.graph.contract(t, self.rng)
        g2 = self.graph.contract(t, self.rng)

        min_cut1 = KargerSteinAlgo(g1, self.threshold, self.rng).iterate()
        min_cut2 = KargerSteinAlgo(g2, self.threshold, self.rng).iterate()
        return min(min_cut1, min_cut2)

    def approx_execute(self, verbose: bool = False) -> int:
        """
        Adaptive budget: starts at ceil(ln n) trials and, after every
        improvement at trial i, keeps going until trial i + ceil(ln n).
        """
        step = math.ceil(math.log(self.graph.num_vertices()))
        num_trials = step
        min_cut = None

        i = 0
        start_time = time.perf_counter()
        while i < num_trials:
            i += 1
            new_min_cut = self.iterate()
            if min_cut is None or new_min_cut < min_cut:
                min_cut = new_min_cut
                num_trials = i + step
        elapsed = time.perf_counter() - start_time

        if verbose:
            self.print_stats(num_trials, min_cut, elapsed)
        return min_cut


def karger_stein_wrapper(graph_matrix: np.ndarray, repetitions: int = None) -> float:
    """
    Public wrapper. graph_matrix is an (n x n) symmetric adjacency matrix with
    integer weights. Returns the undirected min cut value.
    """
    n = graph_matrix.shape[0]
    if n <= 1:
        return 0.0

    graph = graph_from_matrix(graph_matrix)
    algo = KargerSteinAlgo(graph)

    if repetitions is None:
        repetitions = max(1, int(np.ceil(np.log(max(2, n))**2)))

    # every undirected edge is stored in both directions
    return algo.iterate_n(repetitions) / 2

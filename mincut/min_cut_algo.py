import concurrent.futures
import copy
import math
import multiprocessing
import time
from abc import ABC, abstractmethod
from typing import Optional

import numpy as np

from mincut.graph import Graph


def _iterate_chunk(algo: 'MinCutAlgo', n_trials: int) -> int:
    # runs in a worker process
    return algo.iterate_n(n_trials, verbose=False)


class MinCutAlgo(ABC):
    """
    Trial control shared by the contraction algorithms. A subclass describes
    one randomized trial (`iterate`) and the probability that it misses the
    minimum cut; everything else is derived from those two.
    """

    def __init__(self, graph: Graph, rng=None):
        if graph.num_vertices() < 2:
            raise ValueError(
                f"a cut needs at least 2 vertices, got {graph.num_vertices()}")
        self.graph = graph
        self.rng = np.random.default_rng(rng)

    @abstractmethod
    def single_trial_fail_prob(self) -> float:
        ...

    @abstractmethod
    def iterate(self) -> int:
        ...

    @abstractmethod
    def approx_execute(self, verbose: bool = False) -> int:
        ...

    def success_lower_bound(self, n_trials: int) -> float:
        return 1.0 - self.single_trial_fail_prob() ** n_trials

    def min_num_trials(self, prob: float) -> int:
        """
        Smallest number of trials whose success lower bound reaches `prob`.
        """
        if not 0.0 < prob < 1.0:
            raise ValueError(f"target probability must be in (0, 1), got {prob}")
        n_trials = math.ceil(math.log2(1.0 - prob) / math.log2(self.single_trial_fail_prob()))
        # a low target can round down to 0 trials, which would yield no cut at all
        return max(1, n_trials)

    def execute(self, verbose: bool = False) -> int:
        expected_lower_bound = 1.0 - 1.0 / self.graph.num_vertices()
        return self.iterate_success_lower_bound(expected_lower_bound, verbose)

    def iterate_success_lower_bound(self, prob: float, verbose: bool = False) -> int:
        return self.iterate_n(self.min_num_trials(prob), verbose)

    def iterate_n(self, n: int, verbose: bool = False) -> int:
        if n < 1:
            raise ValueError(f"number of trials must be positive, got {n}")

        start_time = time.perf_counter()
        min_cut = min(self.iterate() for _ in range(n))
        elapsed = time.perf_counter() - start_time

        if verbose:
            self.print_stats(n, min_cut, elapsed)
        return min_cut

    def iterate_n_concurrent(self, n: int, workers: Optional[int] = None, verbose: bool = False) -> int:
        """
        Same as `iterate_n`, with the trials spread over a process pool.
        Every worker gets its own generator spawned from this algorithm's one.
        A failing chunk is reported and skipped, the minimum is taken over the
        chunks that finished. Raises RuntimeError only if every chunk failed.
        """
        if n < 1:
            raise ValueError(f"number of trials must be positive, got {n}")
        if workers is None:
            # leave 1 core free for the OS
            workers = max(1, multiprocessing.cpu_count() - 1)
        workers = min(workers, n)

        chunks = [n // workers + (1 if i < n % workers else 0) for i in range(workers)]
        children = self.rng.spawn(workers)

        start_time = time.perf_counter()
        with concurrent.futures.ProcessPoolExecutor(max_workers=workers) as executor:
            futures = {executor.submit(_iterate_chunk, self._with_rng(child), chunk): chunk
                       for child, chunk in zip(children, chunks)}

            results = []
            last_exc = None
            for future in concurrent.futures.as_completed(futures):
                try:
                    results.append(future.result())
                except Exception as exc:
                    print(f"Chunk of {futures[future]} trials generated an exception: {exc}")
                    last_exc = exc
        elapsed = time.perf_counter() - start_time

        if not results:
            raise RuntimeError(f"all {workers} trial chunks failed") from last_exc
        min_cut = min(results)

        if verbose:
            self.print_stats(n, min_cut, elapsed)
        return min_cut

    def _with_rng(self, rng: np.random.Generator) -> 'MinCutAlgo':
        algo = copy.copy(self)
        algo.rng = rng
        return algo

    def print_stats(self, num_trials: int, min_cut: int, elapsed: float):
        success_prob = self.success_lower_bound(num_trials) * 100
        print(f"Min Cut: {min_cut} | |V|: {self.graph.num_vertices()} | "
              f"|E|: {self.graph.num_edges()} | Number of trials: {num_trials} | "
              f"Probability of success: {success_prob:.2f}% | Elapsed time: {elapsed:.6f} seconds")

import time

from mincut.min_cut_algo import MinCutAlgo


class KargerAlgo(MinCutAlgo):
    """
    Repeated full contractions down to two vertices.
    """

    def single_trial_fail_prob(self) -> float:
        # a fixed min cut survives one full contraction with probability >= 2 / n^2
        return 1.0 - 2.0 / self.graph.num_vertices() ** 2

    def iterate(self) -> int:
        return self.graph.contract_full(self.rng).weight()

    def approx_execute(self, verbose: bool = False) -> int:
        """
        Adaptive budget: starts at n^2 trials and, after every improvement at
        trial i, keeps going until trial 2 * i + n.
        """
        step = self.graph.num_vertices()
        num_trials = step * step
        min_cut = None

        i = 0
        start_time = time.perf_counter()
        while i < num_trials:
            i += 1
            new_min_cut = self.iterate()
            if min_cut is None or new_min_cut < min_cut:
                min_cut = new_min_cut
                num_trials = 2 * i + step
        elapsed = time.perf_counter() - start_time

        if verbose:
            self.print_stats(num_trials, min_cut, elapsed)
        return min_cut

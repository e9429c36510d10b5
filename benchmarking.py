import os
import time
from typing import Any, Callable, Dict, List, Optional

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import networkx as nx
import numpy as np
import pandas as pd
from sklearn.linear_model import LinearRegression
from tqdm import tqdm

from mincut.graph import Graph
from mincut.io_utils import graph_from_matrix


def reference_min_cut(graph: Graph) -> int:
    """
    Exact min cut via networkx Stoer-Wagner, in the same units as the
    contracted weight (both directions of an edge counted).
    """
    G = graph.to_networkx()
    if not nx.is_connected(G):
        return 0
    value, _ = nx.stoer_wagner(G, weight='weight')
    return int(value)


class BenchmarkRunner:
    """
    Handles running benchmarks for different graph models and algorithms.
    """

    def __init__(self,
                 algorithms: Dict[str, Callable[[Graph], int]],
                 generators: Dict[str, Callable[..., np.ndarray]],
                 seed: Optional[int] = None):
        """
        Args:
            algorithms (Dict[str, Callable]):
                Dict of {'algo_name': algorithm_function}
                Each function must accept one arg: a Graph, and return the
                contracted cut weight.

            generators (Dict[str, Callable]):
                Dict of {'model_name': generator_function}
                Each function must accept n, rng and **kwargs and return a
                symmetric (n, n) integer adjacency matrix.

            seed (Optional[int]):
                Seed for the graph generators. If None, randomness is uncontrolled.
        """
        self.algorithms = algorithms
        self.generators = generators
        self.rng = np.random.default_rng(seed)

    def run(self,
            models: List[str],
            n_values: List[int],
            trials: int,
            model_params: Dict[str, Dict[str, Any]]) -> pd.DataFrame:
        """
        Runs the full benchmark.

        Args:
            models (List[str]): List of model names (e.g., ['ER', 'BA']).
            n_values (List[int]): List of graph sizes (n).
            trials (int): Number of graphs to generate for each (model, n) pair.
            model_params (Dict): Parameters for each model generator.
                                 e.g., {'ER': {'p': 0.3}, 'BA': {'m': 3}}

        Returns:
            pd.DataFrame: one row per (model, n, algorithm).
        """
        all_results = []

        for model_name in models:
            if model_name not in self.generators:
                print(f"Warning: Generator '{model_name}' not found. Skipping.")
                continue
            gen_func = self.generators[model_name]
            params = model_params.get(model_name, {})

            for n in n_values:
                trial_results = {name: {'times': [], 'cuts': [], 'exact': 0}
                                 for name in self.algorithms}
                reference_cuts = []

                desc = f"Model={model_name}, n={n}"
                for _ in tqdm(range(trials), desc=desc):
                    graph = graph_from_matrix(gen_func(n=n, rng=self.rng, **params))
                    true_value = reference_min_cut(graph)
                    reference_cuts.append(true_value)

                    for algo_name, algo_func in self.algorithms.items():
                        start_time = time.perf_counter()
                        cut_val = algo_func(graph)
                        end_time = time.perf_counter()

                        data = trial_results[algo_name]
                        data['times'].append(end_time - start_time)
                        data['cuts'].append(cut_val)
                        if cut_val == true_value:
                            data['exact'] += 1

                for algo_name, data in trial_results.items():
                    all_results.append({
                        'model': model_name,
                        'n': n,
                        'algorithm': algo_name,
                        'trials': trials,
                        'mean_time_s': np.mean(data['times']),
                        'std_time_s': np.std(data['times']),
                        'mean_cut': np.mean(data['cuts']),
                        'std_cut': np.std(data['cuts']),
                        'min_found_cut': np.min(data['cuts']),
                        'max_found_cut': np.max(data['cuts']),
                        'mean_reference_cut': np.mean(reference_cuts),
                        'success_rate': data['exact'] / trials,
                    })

        print("--- Benchmark Complete ---")
        return pd.DataFrame(all_results)


def loglog_regression(x, y) -> Dict[str, float]:
    """
    Fits log(y) = slope * log(x) + intercept, the slope being the empirical
    exponent of the running time.
    """
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)
    mask = (x > 0) & (y > 0)
    if mask.sum() < 2:
        return {"slope": np.nan, "intercept": np.nan, "r2": np.nan}
    lx = np.log(x[mask]).reshape(-1, 1)
    ly = np.log(y[mask])
    reg = LinearRegression().fit(lx, ly)
    return {
        "slope": float(reg.coef_[0]),
        "intercept": float(reg.intercept_),
        "r2": float(reg.score(lx, ly)),
    }


def plot_runtime(df: pd.DataFrame, output_dir: str) -> str:
    """
    Saves a log-log runtime plot per (model, algorithm) and returns its path.
    """
    os.makedirs(output_dir, exist_ok=True)

    fig, ax = plt.subplots(figsize=(10, 6))
    for (model, algo), sub in df.groupby(['model', 'algorithm']):
        sub = sub.sort_values('n')
        fit = loglog_regression(sub['n'], sub['mean_time_s'])
        ax.plot(sub['n'], sub['mean_time_s'], 'o-',
                label=f"{algo} / {model} (slope {fit['slope']:.2f})")

    ax.set_xscale('log')
    ax.set_yscale('log')
    ax.set_xlabel("Nodes (N)")
    ax.set_ylabel("Time (s)")
    ax.set_title("Runtime vs Number of Nodes")
    ax.grid(True, which="both", ls="-", alpha=0.2)
    ax.legend()

    out_path = os.path.join(output_dir, "runtime.png")
    fig.savefig(out_path, bbox_inches='tight')
    plt.close(fig)
    return out_path

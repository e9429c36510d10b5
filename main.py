import argparse
import os

import pandas as pd

from benchmarking import BenchmarkRunner, plot_runtime
from graph_generators.barabasi_albert import generate_ba
from graph_generators.erdos_renyi import generate_er
from mincut.io_utils import graph_from_matrix, read_graph
from mincut.karger import KargerAlgo
from mincut.karger_stein import DEFAULT_THRESHOLD, KargerSteinAlgo

RNG_SEED = 42
OUTPUT_DIR = "benchmark_results"
CSV_FILENAME = "benchmark_results.csv"

# Karger runs n^2 trials, keep the sizes small
N_VALUES = [10, 20, 30, 40]
R_TRIALS = 5

MODEL_PARAMS = {
    'ER': {'p': 0.3, 'max_weight': 9},
    'BA': {'m': 3, 'max_weight': 9},
}


def build_algo(args, graph):
    if args.algo == 'karger':
        return KargerAlgo(graph, rng=args.seed)
    return KargerSteinAlgo(graph, threshold=args.threshold, rng=args.seed)


def solve(args) -> int:
    if args.input is not None:
        graph = read_graph(args.input)
    else:
        generator = generate_er if args.model.upper() == "ER" else generate_ba
        params = MODEL_PARAMS[args.model.upper()]
        graph = graph_from_matrix(generator(n=args.n, rng=args.seed, **params))
        print(f"Generated Graph: {graph.num_vertices()} nodes, {graph.num_edges()} directed edges")

    algo = build_algo(args, graph)
    verbose = not args.quiet

    if args.mode == 'execute':
        return algo.execute(verbose)
    if args.mode == 'approx':
        return algo.approx_execute(verbose)
    if args.mode == 'probability':
        return algo.iterate_success_lower_bound(args.probability, verbose)
    if args.workers is not None:
        return algo.iterate_n_concurrent(args.iterations, args.workers, verbose)
    return algo.iterate_n(args.iterations, verbose)


def benchmark(args) -> pd.DataFrame:
    threshold = args.threshold
    algorithms_to_test = {
        'karger': lambda graph: KargerAlgo(graph).approx_execute(),
        'karger_stein': lambda graph: KargerSteinAlgo(graph, threshold).approx_execute(),
    }

    graph_generators = {
        'ER': generate_er,
        'BA': generate_ba,
    }

    runner = BenchmarkRunner(algorithms_to_test, graph_generators, seed=args.seed)
    results_df = runner.run(
        models=list(graph_generators),
        n_values=args.n_values,
        trials=args.trials,
        model_params=MODEL_PARAMS
    )

    pd.set_option('display.width', 1000)
    pd.set_option('display.max_rows', None)

    print("\nBenchmark Results:")
    print(results_df)

    os.makedirs(args.output_dir, exist_ok=True)
    csv_path = os.path.join(args.output_dir, CSV_FILENAME)
    results_df.to_csv(csv_path, index=False)
    print(f"\nResults saved to {csv_path}")

    if args.plot:
        print(f"Chart saved to {plot_runtime(results_df, args.output_dir)}")
    return results_df


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Randomized Min Cut (Karger / Karger-Stein)")

    parser.add_argument("--input", type=str, default=None,
                        help="Edge list file: vertex count, then 'v w [weight]' lines")

    parser.add_argument("--algo", type=str, default="karger_stein",
                        choices=["karger", "karger_stein"],
                        help="Contraction algorithm")

    parser.add_argument("--mode", type=str, default="approx",
                        choices=["execute", "approx", "iterations", "probability"],
                        help="execute: success >= 1 - 1/n, approx: adaptive budget, "
                             "iterations: fixed trial count, probability: target success")

    parser.add_argument("--iterations", type=int, default=100,
                        help="Number of trials for --mode iterations")

    parser.add_argument("--probability", type=float, default=0.99,
                        help="Target success probability for --mode probability")

    parser.add_argument("--threshold", type=int, default=DEFAULT_THRESHOLD,
                        help="Karger-Stein base case size")

    parser.add_argument("--seed", type=int, default=None,
                        help="Random seed")

    parser.add_argument("--workers", type=int, default=None,
                        help="Process pool size for --mode iterations")

    parser.add_argument("--quiet", action="store_true",
                        help="Only print the min cut")

    parser.add_argument("--model", type=str, default="ER", choices=["ER", "BA"],
                        help="Random graph model when no --input is given")

    parser.add_argument("--n", type=int, default=30,
                        help="Random graph size when no --input is given")

    parser.add_argument("--benchmark", action="store_true",
                        help="Run the benchmark instead of a single graph")

    parser.add_argument("--n_values", type=int, nargs="+", default=N_VALUES,
                        help="Graph sizes for --benchmark")

    parser.add_argument("--trials", type=int, default=R_TRIALS,
                        help="Graphs per (model, n) for --benchmark")

    parser.add_argument("--output_dir", type=str, default=OUTPUT_DIR,
                        help="Where --benchmark writes its csv / charts")

    parser.add_argument("--plot", action="store_true",
                        help="Save a runtime chart with --benchmark")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    if args.benchmark:
        if args.seed is None:
            args.seed = RNG_SEED
        benchmark(args)
        return

    min_cut = solve(args)
    if args.quiet:
        print(min_cut)


if __name__ == "__main__":
    main()

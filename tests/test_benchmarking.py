import os

import networkx as nx
import numpy as np
import pytest

import main
from benchmarking import BenchmarkRunner, loglog_regression, plot_runtime, reference_min_cut
from graph_generators.barabasi_albert import generate_ba
from graph_generators.erdos_renyi import generate_er
from mincut.io_utils import graph_from_matrix
from mincut.karger import KargerAlgo

FILES_DIR = os.path.join(os.path.dirname(__file__), "files")


def check_adjacency(matrix, n, max_weight):
    assert matrix.shape == (n, n)
    assert (matrix == matrix.T).all()
    assert (np.diag(matrix) == 0).all()
    assert matrix.min() >= 0
    assert matrix.max() <= max_weight


def test_generate_er():
    matrix = generate_er(30, 0.3, max_weight=7, rng=0)
    check_adjacency(matrix, 30, 7)
    assert matrix.max() > 1
    assert (generate_er(30, 0.3, max_weight=7, rng=0) == matrix).all()

    assert not generate_er(10, 0.0, rng=1).any()
    full = generate_er(10, 1.0, rng=1)
    assert full.sum() == 10 * 9

    with pytest.raises(ValueError):
        generate_er(10, 1.5)
    with pytest.raises(ValueError):
        generate_er(10, 0.5, max_weight=0)


def test_generate_ba():
    matrix = generate_ba(25, 3, max_weight=4, rng=0)
    check_adjacency(matrix, 25, 4)
    assert nx.is_connected(nx.from_numpy_array(matrix))
    # clique of 4 nodes, then 3 edges per new node
    assert np.count_nonzero(matrix) // 2 == 6 + 3 * 21

    with pytest.raises(ValueError):
        generate_ba(3, 3)
    with pytest.raises(ValueError):
        generate_ba(5, 0)


def test_reference_min_cut():
    ring = np.zeros((5, 5), dtype=int)
    for i in range(5):
        ring[i, (i + 1) % 5] = ring[(i + 1) % 5, i] = 1
    assert reference_min_cut(graph_from_matrix(ring)) == 4

    two_parts = np.zeros((4, 4), dtype=int)
    two_parts[0, 1] = two_parts[1, 0] = 1
    two_parts[2, 3] = two_parts[3, 2] = 1
    assert reference_min_cut(graph_from_matrix(two_parts)) == 0


def test_benchmark_runner():
    runner = BenchmarkRunner(
        {'karger': lambda graph: KargerAlgo(graph, rng=0).iterate_success_lower_bound(0.999)},
        {'BA': generate_ba},
        seed=1,
    )
    df = runner.run(models=['BA', 'missing'], n_values=[6, 8], trials=2,
                    model_params={'BA': {'m': 2, 'max_weight': 3}})

    assert len(df) == 2
    assert list(df['n']) == [6, 8]
    assert set(df['algorithm']) == {'karger'}
    assert (df['min_found_cut'] <= df['max_found_cut']).all()
    assert df['success_rate'].between(0.0, 1.0).all()
    assert (df['mean_time_s'] > 0).all()


def test_loglog_regression():
    x = np.array([10, 20, 40, 80])
    fit = loglog_regression(x, 3.0 * x ** 2)
    assert fit['slope'] == pytest.approx(2.0)
    assert fit['r2'] == pytest.approx(1.0)

    assert np.isnan(loglog_regression([1], [1])['slope'])


def test_plot_runtime(tmp_path):
    runner = BenchmarkRunner({'karger': lambda graph: KargerAlgo(graph).execute()},
                             {'ER': generate_er}, seed=2)
    df = runner.run(models=['ER'], n_values=[5, 7], trials=1,
                    model_params={'ER': {'p': 0.8}})
    out_path = plot_runtime(df, str(tmp_path))
    assert os.path.exists(out_path)


def test_main_with_input_file(capsys):
    path = os.path.join(FILES_DIR, "input_cycle_10.txt")
    main.main(["--input", path, "--algo", "karger", "--mode", "probability",
               "--probability", "0.99", "--seed", "1", "--quiet"])
    assert capsys.readouterr().out.strip() == "4"

    main.main(["--input", path, "--mode", "execute", "--seed", "1"])
    out = capsys.readouterr().out
    assert "Min Cut: 4" in out
    assert "|V|: 10" in out


def test_main_random_graph(capsys):
    main.main(["--model", "BA", "--n", "12", "--mode", "iterations", "--iterations", "5",
               "--seed", "3"])
    out = capsys.readouterr().out
    assert "Generated Graph: 12 nodes" in out
    assert "Number of trials: 5" in out


def test_main_benchmark(tmp_path):
    main.main(["--benchmark", "--n_values", "6", "--trials", "1",
               "--output_dir", str(tmp_path), "--plot"])
    assert os.path.exists(tmp_path / main.CSV_FILENAME)
    assert os.path.exists(tmp_path / "runtime.png")

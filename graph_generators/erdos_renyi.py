import numpy as np


def generate_er(n: int, p: float, max_weight: int = 1, rng=None) -> np.ndarray:
    """
    Generates a weighted Erdős-Rényi (G(n, p)) random graph.

    Args:
        n (int): Number of nodes.
        p (float): Probability of each edge.
        max_weight (int): Edge weights are drawn uniformly from [1, max_weight].
        rng: numpy Generator, seed or None.

    Returns:
        np.ndarray: An (n, n) symmetric adjacency matrix with integer weights.
    """
    if not 0.0 <= p <= 1.0:
        raise ValueError("p must be in [0, 1]")
    if max_weight < 1:
        raise ValueError("max_weight must be >= 1")
    rng = np.random.default_rng(rng)

    matrix = np.zeros((n, n), dtype=np.int64)

    # indices for the upper triangle (k=1 excludes the diagonal)
    rows, cols = np.triu_indices(n, k=1)

    edges = rng.random(rows.size) < p
    weights = rng.integers(1, max_weight, size=int(edges.sum()), endpoint=True)
    matrix[rows[edges], cols[edges]] = weights

    # mirror the matrix to make it symmetric (undirected)
    matrix[cols[edges], rows[edges]] = weights

    return matrix

import numpy as np


def generate_ba(n: int, m: int, max_weight: int = 1, rng=None) -> np.ndarray:
    """
    Generates a weighted Barabási-Albert (BA) random graph using preferential
    attachment. The first m + 1 nodes form a clique, so the graph is connected.

    Args:
        n (int): Total number of nodes.
        m (int): Number of edges to attach from a new node to existing nodes.
        max_weight (int): Edge weights are drawn uniformly from [1, max_weight].
        rng: numpy Generator, seed or None.

    Returns:
        np.ndarray: An (n, n) symmetric adjacency matrix with integer weights.
    """
    m0 = m + 1
    if m < 1 or n < m0:
        raise ValueError("need 1 <= m < n")
    if max_weight < 1:
        raise ValueError("max_weight must be >= 1")
    rng = np.random.default_rng(rng)

    matrix = np.zeros((n, n), dtype=np.int64)

    rows, cols = np.triu_indices(m0, k=1)
    weights = rng.integers(1, max_weight, size=rows.size, endpoint=True)
    matrix[rows, cols] = weights
    matrix[cols, rows] = weights

    # attachment is driven by the unweighted degree
    degrees = np.count_nonzero(matrix, axis=1)

    for i in range(m0, n):
        probabilities = degrees[:i] / degrees[:i].sum()
        targets = rng.choice(i, size=m, replace=False, p=probabilities)

        weights = rng.integers(1, max_weight, size=m, endpoint=True)
        matrix[i, targets] = weights
        matrix[targets, i] = weights

        degrees[i] = m
        degrees[targets] += 1

    return matrix

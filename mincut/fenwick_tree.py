import numpy as np


class FenwickTree:
    """
    Prefix-sum tree over non-negative integer weights.
    Index 0 of `tree` is unused, key i lives at tree position i + 1.
    """
    __slots__ = ['n', 'tree']

    def __init__(self, n: int):
        self.n = n
        self.tree = np.zeros(n + 1, dtype=np.int64)

    @classmethod
    def from_weights(cls, weights) -> 'FenwickTree':
        """
        Bulk build in O(n): every node pushes its partial sum to its parent once.
        """
        weights = np.asarray(weights, dtype=np.int64)
        if weights.size and weights.min() < 0:
            raise ValueError("weights must be non-negative")

        fenwick = cls(weights.size)
        tree = fenwick.tree
        tree[1:] = weights
        for i in range(1, fenwick.n + 1):
            j = i + (i & -i)
            if j <= fenwick.n:
                tree[j] += tree[i]
        return fenwick

    def _check(self, i: int):
        if i < 0 or i >= self.n:
            raise IndexError(f"index {i} out of range for {self.n} keys")

    def query(self, i: int) -> int:
        if i < 0:
            return 0
        self._check(i)
        i += 1
        total = 0
        while i > 0:
            total += int(self.tree[i])
            i -= i & -i
        return total

    def update(self, i: int, delta: int, subtract: bool = False):
        self._check(i)
        if subtract:
            delta = -delta
        i += 1
        while i <= self.n:
            self.tree[i] += delta
            i += i & -i

    def sum(self) -> int:
        return self.query(self.n - 1)

    def lower_entry(self, r: int) -> tuple[int, int]:
        """
        Returns (index, prefix) where index is the smallest key with
        query(index) >= r and prefix = query(index - 1).
        If r exceeds the total sum the last key is returned.
        """
        if self.n == 0:
            raise IndexError("lower_entry on an empty tree")

        pos = 0
        remaining = r
        step = 1 << (self.n.bit_length() - 1)
        while step:
            nxt = pos + step
            if nxt <= self.n and self.tree[nxt] < remaining:
                pos = nxt
                remaining -= int(self.tree[nxt])
            step >>= 1

        if pos >= self.n:
            last = self.n - 1
            return last, self.query(last - 1)
        return pos, r - remaining

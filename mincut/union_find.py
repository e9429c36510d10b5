import numpy as np


class UnionFind:
    __slots__ = ['ids', 'sizes', 'count']

    def __init__(self, n: int):
        self.ids = np.arange(n, dtype=int)
        self.sizes = np.ones(n, dtype=int)
        self.count = n

    def root(self, p: int) -> int:
        if self.ids is None:
            raise RuntimeError("union find has already been condensed")

        ids = self.ids
        # path halving
        while ids[p] != p:
            ids[p] = ids[ids[p]]
            p = ids[p]
        return int(p)

    def union(self, p: int, q: int) -> int:
        """
        Merges the sets of p and q and returns the surviving root.
        The larger set keeps its root, on ties the root of p survives.
        """
        root_p = self.root(p)
        root_q = self.root(q)
        if root_p == root_q:
            return root_p

        if self.sizes[root_p] >= self.sizes[root_q]:
            big, small = root_p, root_q
        else:
            big, small = root_q, root_p

        self.ids[small] = big
        self.sizes[big] += self.sizes[small]
        self.count -= 1
        return big

    def connected(self, p: int, q: int) -> bool:
        return self.root(p) == self.root(q)

    def condense(self, merge_util) -> np.ndarray:
        """
        Relabels every element with a compact id in [0, count).
        Roots are numbered in ascending index order. The forest is consumed
        and the scratch proxy is left zeroed.
        """
        if self.ids is None:
            raise RuntimeError("union find has already been condensed")

        stack = merge_util.stack
        merge_proxy = merge_util.merge_proxy
        n = len(self.ids)

        stack_size = 0
        for i in range(n):
            if self.root(i) == i:
                stack[stack_size] = i
                stack_size += 1
                merge_proxy[i] = stack_size

        ids = self.ids
        for i in range(n):
            ids[i] = self.root(ids[i])
        labels = merge_proxy[ids] - 1

        merge_proxy[stack[:stack_size]] = 0

        self.ids = None
        return labels

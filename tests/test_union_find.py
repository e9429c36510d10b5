import itertools

import numpy as np
import pytest

from mincut.graph_util import MergeUtil
from mincut.union_find import UnionFind


def test_union_and_root():
    union_find = UnionFind(5)
    assert list(union_find.ids) == [0, 1, 2, 3, 4]

    assert union_find.union(1, 3) == 1
    assert union_find.union(3, 4) == 1
    assert list(union_find.ids) == [0, 1, 2, 1, 1]

    assert union_find.count == 3
    assert union_find.root(4) == 1
    assert union_find.connected(1, 4)
    assert not union_find.connected(0, 4)

    # already connected, nothing changes
    assert union_find.union(3, 4) == 1
    assert union_find.count == 3
    assert union_find.root(4) == 1


def test_larger_set_keeps_its_root():
    union_find = UnionFind(4)
    union_find.union(1, 2)
    assert union_find.union(0, 2) == 1
    assert union_find.root(0) == 1


def test_condense():
    union_find = UnionFind(6)
    union_find.union(3, 4)
    union_find.union(0, 3)
    union_find.union(1, 2)
    assert list(union_find.ids) == [3, 1, 1, 3, 3, 5]

    merge_util = MergeUtil(6)
    ids = union_find.condense(merge_util)
    assert list(ids) == [1, 0, 0, 1, 1, 2]
    assert list(merge_util.merge_proxy) == [0, 0, 0, 0, 0, 0]

    union_find = UnionFind(8)
    union_find.union(3, 0)
    union_find.union(4, 7)
    union_find.union(1, 2)
    union_find.union(0, 4)
    assert list(union_find.ids) == [3, 1, 1, 3, 3, 5, 6, 4]

    merge_util = MergeUtil(8)
    ids = union_find.condense(merge_util)
    assert list(ids) == [1, 0, 0, 1, 1, 2, 3, 1]
    assert list(merge_util.merge_proxy) == [0, 0, 0, 0, 0, 0, 0, 0]


def test_condense_consumes_the_forest():
    union_find = UnionFind(3)
    union_find.condense(MergeUtil(3))
    with pytest.raises(RuntimeError):
        union_find.root(0)
    with pytest.raises(RuntimeError):
        union_find.condense(MergeUtil(3))


def test_random_unions_match_components():
    rng = np.random.default_rng(3)
    n = 30
    union_find = UnionFind(n)
    # reference: explicit set membership
    groups = [{i} for i in range(n)]

    for _ in range(20):
        p, q = (int(x) for x in rng.integers(0, n, size=2))
        union_find.union(p, q)
        if groups[p] is not groups[q]:
            merged = groups[p] | groups[q]
            for member in merged:
                groups[member] = merged

    for p, q in itertools.combinations(range(n), 2):
        assert union_find.connected(p, q) == (q in groups[p])

    distinct = {id(group) for group in groups}
    assert union_find.count == len(distinct)

    ids = union_find.condense(MergeUtil(n))
    assert sorted(set(ids.tolist())) == list(range(len(distinct)))
    for p, q in itertools.combinations(range(n), 2):
        assert (ids[p] == ids[q]) == (q in groups[p])

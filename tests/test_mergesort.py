import random
from collections import Counter

import numpy as np
import pytest

from perf_kernels.mergesort import merge, merge_sort, merge_sort_inplace, merge_sort_typed


def random_ints(n: int, seed: int = 0, hi: int = 50):
    rng = random.Random(seed)
    return [rng.randint(0, hi) for _ in range(n)]


def is_sorted(xs) -> bool:
    return all(xs[i] <= xs[i + 1] for i in range(len(xs) - 1))


def test_concrete_cases():
    assert merge_sort([3, 1, 2]) == [1, 2, 3]
    assert merge_sort([5, 3, 3, 1]) == [1, 3, 3, 5]


def test_boundaries():
    assert merge_sort([]) == []
    assert merge_sort([5]) == [5]


def test_returns_new_list_and_leaves_input_alone():
    data = [4, 2, 9, 1]
    out = merge_sort(data)
    assert data == [4, 2, 9, 1]
    assert out is not data
    single = [7]
    assert merge_sort(single) is not single


@pytest.mark.parametrize("seed", range(5))
def test_permutation_sorted_idempotent(seed):
    data = random_ints(200 + seed, seed=seed)
    out = merge_sort(data)
    assert Counter(out) == Counter(data)
    assert is_sorted(out)
    assert merge_sort(out) == out
    assert out == sorted(data)


def test_stability_by_key():
    assert merge_sort([(1, "a"), (1, "b")], key=lambda t: t[0]) == [(1, "a"), (1, "b")]
    data = [(1, "b"), (0, "z"), (1, "a"), (0, "y")]
    assert merge_sort(data, key=lambda t: t[0]) == [(0, "z"), (0, "y"), (1, "b"), (1, "a")]


def test_merge_prefers_left_on_ties():
    left = [(1, "L1"), (2, "L2")]
    right = [(1, "R1"), (2, "R2")]
    out = merge(left, right, key=lambda t: t[0])
    assert out == [(1, "L1"), (1, "R1"), (2, "L2"), (2, "R2")]


def test_merge_exhausted_cursors():
    assert merge([], [1, 2]) == [1, 2]
    assert merge([1, 2], []) == [1, 2]
    assert merge([], []) == []


def test_strings():
    assert merge_sort(["pear", "apple", "fig"]) == ["apple", "fig", "pear"]


@pytest.mark.parametrize("seed", range(3))
def test_inplace_matches_pure(seed):
    data = random_ints(123, seed=seed)
    expected = merge_sort(data)
    merge_sort_inplace(data)
    assert data == expected


def test_inplace_stable_and_trivial():
    data = [(2, "a"), (1, "b"), (2, "c"), (1, "d")]
    merge_sort_inplace(data, key=lambda t: t[0])
    assert data == [(1, "b"), (1, "d"), (2, "a"), (2, "c")]
    empty = []
    merge_sort_inplace(empty)
    assert empty == []


def test_typed_rejects_bad_input():
    with pytest.raises(ValueError):
        merge_sort_typed(np.zeros((2, 2)))
    with pytest.raises(TypeError):
        merge_sort_typed(np.array(["b", "a"], dtype=object))


def test_typed_matches_numpy():
    pytest.importorskip("numba")
    rng = np.random.default_rng(0)
    arr = rng.integers(0, 100, size=500)
    before = arr.copy()
    out = merge_sort_typed(arr)
    assert out.dtype == arr.dtype
    assert np.array_equal(out, np.sort(arr, kind="stable"))
    assert np.array_equal(arr, before)


def test_typed_floats_and_edges():
    pytest.importorskip("numba")
    assert merge_sort_typed(np.array([3.0, 1.0, 2.0])).tolist() == [1.0, 2.0, 3.0]
    assert merge_sort_typed(np.array([], dtype=np.float64)).shape == (0,)
    assert merge_sort_typed([5]).tolist() == [5]

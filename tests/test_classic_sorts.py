import random

import pytest

from classic_sorts import (
    bubble_sort,
    first_inversion,
    insertion_sort,
    is_sorted,
    selection_sort,
)

SORTS = [bubble_sort, selection_sort, insertion_sort]


@pytest.mark.parametrize("sort", SORTS)
def test_sorts_example_with_duplicates(sort) -> None:
    data = [5, 3, 8, 3, 1]
    assert sort(data) is None
    assert data == [1, 3, 3, 5, 8]
    assert is_sorted(data)


@pytest.mark.parametrize("sort", SORTS)
@pytest.mark.parametrize("n", [0, 1, 2, 3, 17, 100])
def test_random_input_becomes_sorted_permutation(sort, n: int) -> None:
    rng = random.Random(n)
    data = [rng.randint(-50, 50) for _ in range(n)]
    expected = sorted(data)
    sort(data)
    assert data == expected


@pytest.mark.parametrize("sort", SORTS)
def test_sorted_and_reversed_inputs_agree(sort) -> None:
    base = [9, 2, 7, 2, 4, 4, 0, -3]
    ascending = sorted(base)
    descending = ascending[::-1]
    shuffled = base[:]
    for data in (ascending, descending, shuffled):
        sort(data)
    assert ascending == descending == shuffled == sorted(base)


@pytest.mark.parametrize("sort", SORTS)
def test_already_sorted_is_unchanged(sort) -> None:
    data = [1, 1, 2, 5, 5, 9]
    sort(data)
    assert data == [1, 1, 2, 5, 5, 9]


@pytest.mark.parametrize("sort", SORTS)
@pytest.mark.parametrize("data", [[], [42]])
def test_trivial_inputs_are_noops(sort, data) -> None:
    before = list(data)
    sort(data)
    assert data == before
    assert is_sorted(data)


@pytest.mark.parametrize("sort", SORTS)
def test_all_equal_values(sort) -> None:
    data = [7] * 12
    sort(data)
    assert data == [7] * 12


def test_is_sorted_detects_inversion() -> None:
    assert not is_sorted([1, 3, 2])
    assert is_sorted([1, 2, 2, 3])
    assert is_sorted([])
    assert is_sorted([0])


def test_first_inversion_reports_first_pair() -> None:
    assert first_inversion([1, 3, 2, 0]) == 1
    assert first_inversion([2, 1]) == 0
    assert first_inversion([1, 2, 3]) is None
    assert first_inversion([]) is None


class Counted(int):
    """int that counts every ordering comparison made on it."""

    comparisons = 0

    def __gt__(self, other):
        Counted.comparisons += 1
        return int.__gt__(self, other)

    def __lt__(self, other):
        Counted.comparisons += 1
        return int.__lt__(self, other)


class WriteCountingList(list):
    def __init__(self, values):
        super().__init__(values)
        self.writes = 0

    def __setitem__(self, index, value):
        self.writes += 1
        super().__setitem__(index, value)


@pytest.fixture
def counted():
    Counted.comparisons = 0

    def make(values):
        return WriteCountingList(Counted(v) for v in values)

    return make


@pytest.mark.parametrize("sort", [bubble_sort, insertion_sort])
@pytest.mark.parametrize("n", [1, 2, 10, 40])
def test_linear_comparisons_on_sorted_input(sort, n: int, counted) -> None:
    data = counted(range(n))
    sort(data)
    assert Counted.comparisons == n - 1
    assert data == list(range(n))


def test_bubble_sort_stops_after_clean_pass(counted) -> None:
    data = counted([2, 1, 3, 4, 5])
    bubble_sort(data)
    # one pass of 4 comparisons with a swap, then a clean pass of 3
    assert Counted.comparisons == 7
    assert data == [1, 2, 3, 4, 5]


@pytest.mark.parametrize("n", [1, 2, 10, 40])
def test_selection_sort_scans_everything_but_writes_nothing_when_sorted(n: int, counted) -> None:
    data = counted(range(n))
    selection_sort(data)
    assert Counted.comparisons == n * (n - 1) // 2
    assert data.writes == 0


def test_selection_sort_swaps_only_misplaced_minimum(counted) -> None:
    data = counted([1, 3, 2])
    selection_sort(data)
    assert data == [1, 2, 3]
    # only position 1 needed a swap, which is two item writes
    assert data.writes == 2

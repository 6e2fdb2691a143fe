import numpy as np
import pytest

from splitarchitect.compatibility import is_compatible
from splitarchitect.elements import Split, SplitSystem
from splitarchitect.filters import (
    DimensionFilter,
    IncompatibilityGraph,
    apply_dimension_filter,
    remove_splits,
)
from splitarchitect.logger import sa_logger
from splitarchitect.progress import ProgressListener


class CancelAfter(ProgressListener):
    def __init__(self, progress: int):
        super().__init__()
        self.limit = progress

    def on_update(self):
        if self.maximum and self.progress >= self.limit:
            self.cancel()


def sides(splits):
    return [split.indices for split in splits]


def random_splits(ntax, nsplits, seed):
    rng = np.random.default_rng(seed)
    splits = SplitSystem(ntax)
    while len(splits) < nsplits:
        side = [t for t in range(1, ntax + 1) if rng.random() < 0.5]
        if 1 < len(side) < ntax - 1 and splits.index_of(Split(side, ntax)) < 0:
            splits.add(side, weight=float(rng.uniform(0.1, 1.0)))
    return splits


def test_box_loses_two_splits(box_splits):
    removed = apply_dimension_filter(box_splits, 1)
    assert removed == 2
    assert sides(box_splits) == [(2, 3), (1, 4)]
    assert is_compatible(box_splits)


@pytest.mark.parametrize("max_dimension, expected", [(1, 2), (2, 1), (3, 0)])
def test_quartet_triangle(quartet_splits, max_dimension, expected):
    removed = DimensionFilter().apply(quartet_splits, max_dimension)
    assert removed == expected
    assert len(quartet_splits) == 3 - expected


def test_lowest_weight_goes_first(quartet_splits):
    quartet_splits.set_weight(1, 3.0)
    quartet_splits.set_weight(2, 2.0)
    quartet_splits.set_weight(3, 1.0)
    assert apply_dimension_filter(quartet_splits, 2) == 1
    assert sides(quartet_splits) == [(1, 2), (1, 3)]


def test_compatible_system_is_unchanged():
    tree = SplitSystem.from_sides(6, [((1, 2), 1.0), ((1, 2, 3), 1.0), ((5, 6), 1.0)])
    assert apply_dimension_filter(tree, 1) == 0
    assert apply_dimension_filter(tree, 7) == 0
    assert len(tree) == 3


def test_empty_system():
    assert apply_dimension_filter(SplitSystem(5), 2) == 0


@pytest.mark.parametrize("max_dimension", [1, 2, 3])
@pytest.mark.parametrize("seed", [1, 2, 3])
def test_no_large_cliques_remain(max_dimension, seed):
    splits = random_splits(8, 14, seed)
    before = len(splits)
    removed = apply_dimension_filter(splits, max_dimension)
    assert len(splits) == before - removed
    graph = IncompatibilityGraph.from_splits(splits)
    assert graph.max_clique_size() <= max_dimension


def pairwise_incompatible(n):
    """Splits {1, k} on n + 1 taxa, every two of which are incompatible."""
    return SplitSystem.from_sides(n + 1, [((1, k), 1.0) for k in range(2, n + 2)])


def test_exact_search_on_eight_clique():
    splits = pairwise_incompatible(8)
    assert apply_dimension_filter(splits, 5) == 3
    assert sides(splits) == [(1, 5), (1, 6), (1, 7), (1, 8), (1, 9)]


def test_degree_heuristic_on_eight_clique():
    splits = pairwise_incompatible(8)
    assert apply_dimension_filter(splits, 6) == 3
    assert sides(splits) == [(1, 5), (1, 6), (1, 7), (1, 8), (1, 9)]


def test_degree_heuristic_keeps_small_cliques():
    splits = pairwise_incompatible(5)
    assert apply_dimension_filter(splits, 6) == 0


def test_progress_reaches_all_nodes(box_splits):
    listener = ProgressListener()
    DimensionFilter(listener).apply(box_splits, 1)
    assert listener.maximum == 4
    assert listener.progress == 4
    assert listener.task == "Dimension filter"


def test_cancel_before_start_removes_nothing(box_splits):
    listener = ProgressListener()
    listener.cancel()
    assert DimensionFilter(listener).apply(box_splits, 1) == 0
    assert len(box_splits) == 4


def test_cancel_keeps_partial_removal(box_splits):
    removed = DimensionFilter(CancelAfter(1)).apply(box_splits, 1)
    assert removed == 1
    assert sides(box_splits) == [(2, 3), (3, 4), (1, 4)]


def test_remove_splits_accounts_for_shifts():
    splits = SplitSystem.from_sides(
        6, [((1, 2), 1.0), ((2, 3), 2.0), ((3, 4), 3.0), ((4, 5), 4.0), ((5, 6), 5.0)]
    )
    assert remove_splits(splits, {2, 4, 5}) == 3
    assert splits.weights() == [1.0, 3.0]


def test_trace_lists_removed_splits_by_index(box_splits):
    start = len(sa_logger.entries)
    apply_dimension_filter(box_splits, 1)
    messages = [entry.text for entry in sa_logger.entries[start:] if entry.kind == "info"]
    assert "[1] 1, 2 | 3, 4, 5, 6" in messages
    assert "[3] 3, 4 | 1, 2, 5, 6" in messages

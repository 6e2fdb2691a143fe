import numpy as np
import pytest

from splitarchitect.bootstrap import (
    SplitMatrix,
    WeightMethod,
    compute_percentages,
    covariance_matrix,
    eval_confidences,
    get_confidence_intervals,
    get_confidence_network,
    get_old_confidence_intervals,
    singular_values,
    splits_to_array,
)
from splitarchitect.elements import Interval, Split, SplitSystem

OFFSETS = [0.1, -0.2, 0.05, -0.05, 0.25, 0.0, -0.15, 0.15, 0.2, -0.1]


@pytest.fixture
def estimate():
    return SplitSystem.from_sides(5, [((1, 2), 1.0), ((4, 5), 0.5)])


@pytest.fixture
def matrix(estimate):
    """Ten replicates scattering both split weights by the same offsets."""
    matrix = SplitMatrix(5, estimate)
    matrix.set_original(estimate)
    for offset in OFFSETS:
        matrix.add(
            SplitSystem.from_sides(5, [((1, 2), 1.0 + offset), ((4, 5), 0.5 + offset)])
        )
    return matrix


def test_confidences_of_seeded_splits():
    """Two of three seeded splits occur in all ten replicates, the third never."""
    seeded = SplitSystem.from_sides(5, [((1, 2), 1.0), ((1, 2, 3), 1.0), ((2, 4), 1.0)])
    matrix = SplitMatrix(5, seeded)
    for _ in range(10):
        matrix.add(SplitSystem.from_sides(5, [((1, 2), 0.8), ((1, 2, 3), 0.4)]))
    eval_confidences(matrix, seeded)
    assert [s.confidence for s in seeded] == [1.0, 1.0, 0.0]
    assert matrix.nsplits == 3


def test_confidence_counts_positive_weights_only():
    splits = SplitSystem.from_sides(4, [((1, 2), 1.0)])
    matrix = SplitMatrix(4, splits)
    matrix.add(SplitSystem.from_sides(4, [((1, 2), 1.0)]))
    matrix.add(SplitSystem.from_sides(4, [((1, 2), 0.0)]))
    matrix.add(SplitSystem(4))
    matrix.add(SplitSystem.from_sides(4, [((1, 3), 2.0)]))
    eval_confidences(matrix, splits)
    assert splits.get_confidence(1) == 0.25


def test_confidence_of_absent_split_is_zero(matrix):
    other = SplitSystem.from_sides(5, [((2, 3), 1.0)])
    eval_confidences(matrix, other)
    assert other.get_confidence(1) == 0.0


def test_compute_percentages():
    splits = SplitSystem.from_sides(4, [((1, 2), 1.0), ((1, 3), 1.0), ((1, 4), 1.0)])
    splits.set_confidence(1, 0.57)
    splits.set_confidence(2, 1.0)
    splits.set_confidence(3, 0.12345)
    compute_percentages(splits)
    assert splits.weights() == [57.0, 100.0, 12.3]


def test_simultaneous_intervals(matrix, estimate):
    get_confidence_intervals(matrix, estimate, level=0.95)
    # both splits rank the blocks alike, so the cutoffs are ranks 1 and 9
    first, second = estimate.get_interval(1), estimate.get_interval(2)
    assert first.low == pytest.approx(0.85)
    assert first.high == pytest.approx(1.25)
    assert second.low == pytest.approx(0.35)
    assert second.high == pytest.approx(0.75)


def test_intervals_are_ordered_and_non_negative():
    estimate = SplitSystem.from_sides(5, [((1, 2), 0.05), ((2, 3), 0.4), ((4, 5), 0.9)])
    matrix = SplitMatrix(5, estimate)
    rng = np.random.default_rng(2)
    for _ in range(50):
        weights = rng.uniform(0.0, 1.0, size=3) * (rng.random(3) < 0.8)
        matrix.add(
            SplitSystem.from_sides(
                5, [((1, 2), weights[0]), ((2, 3), weights[1]), ((4, 5), weights[2])]
            )
        )
    for level in (0.5, 0.9, 0.95):
        get_confidence_intervals(matrix, estimate, level)
        for split in estimate:
            assert 0.0 <= split.interval.low <= split.interval.high


def test_intervals_without_blocks_are_degenerate(estimate):
    matrix = SplitMatrix(5, estimate)
    get_confidence_intervals(matrix, estimate)
    assert estimate.get_interval(1) == Interval(0.0, 2.0)
    assert estimate.get_interval(2) == Interval(0.0, 1.0)


def test_interval_of_split_missing_from_matrix(matrix):
    splits = SplitSystem.from_sides(5, [((1, 2), 1.0), ((2, 3), 0.3)])
    get_confidence_intervals(matrix, splits)
    assert splits.get_interval(2) == Interval(0.0, 0.6)


def test_old_intervals_contain_estimate(matrix, estimate):
    get_old_confidence_intervals(matrix, estimate, level=0.9)
    for split in estimate:
        assert split.interval.low <= split.weight <= split.interval.high
        assert split.interval.low >= 0.0


def test_confidence_network_bundles_rare_splits(matrix):
    # (1, 3) shows up in a single replicate and is not in the original estimate
    matrix.add(SplitSystem.from_sides(5, [((1, 2), 1.0), ((4, 5), 0.5), ((1, 3), 0.3)]))
    bundled = get_confidence_network(matrix, level=0.95, cutoff=0.1)
    assert Split((1, 3), 5) not in bundled
    assert Split((1, 2), 5) in bundled
    assert Split((4, 5), 5) in bundled

    unbundled = get_confidence_network(matrix, level=0.95, cutoff=0.0)
    assert Split((1, 3), 5) in unbundled
    rare = unbundled.get(unbundled.index_of(Split((1, 3), 5)))
    assert rare.interval.low == 0.0
    assert rare.interval.high > 0.0


def test_confidence_network_weight_methods(matrix):
    frequency = get_confidence_network(matrix, weight_method="frequency")
    for split in frequency:
        assert split.weight == 1.0
        assert split.confidence == 1.0

    for method in ("lower", "estimated", "midpoint", "upper"):
        network = get_confidence_network(matrix, weight_method=method)
        for split in network:
            low, high = split.interval.low, split.interval.high
            assert low - 1e-12 <= split.weight <= high + 1e-12

    estimated = get_confidence_network(matrix, weight_method=WeightMethod.ESTIMATED)
    assert estimated.weights() == [1.0, 0.5]


def test_confidence_network_without_blocks(estimate):
    assert len(get_confidence_network(SplitMatrix(5, estimate))) == 0


@pytest.mark.parametrize(
    "name, expected",
    [
        ("frequency", WeightMethod.FREQUENCY),
        ("freq", WeightMethod.FREQUENCY),
        ("Lower", WeightMethod.LOWER),
        ("estimate", WeightMethod.ESTIMATED),
        ("mid", WeightMethod.MIDPOINT),
        (" upper ", WeightMethod.UPPER),
        (WeightMethod.UPPER, WeightMethod.UPPER),
    ],
)
def test_weight_method_parse(name, expected):
    assert WeightMethod.parse(name) is expected


def test_weight_method_parse_rejects_unknown():
    with pytest.raises(ValueError):
        WeightMethod.parse("median")


def test_splits_to_array(matrix):
    splits = SplitSystem.from_sides(5, [((4, 5), 3.0), ((2, 3), 1.0)])
    assert np.array_equal(splits_to_array(matrix, splits), [0.0, 3.0])


def test_covariance_and_singular_values(matrix):
    covariance = covariance_matrix(matrix)
    assert covariance.shape == (2, 2)
    # identical offsets: the two rows are perfectly correlated
    assert covariance[0, 1] == pytest.approx(covariance[0, 0])
    values = singular_values(matrix)
    assert len(values) == 2
    assert values[0] >= values[1] >= 0.0


def test_covariance_needs_two_blocks(estimate):
    matrix = SplitMatrix(5, estimate)
    matrix.add(estimate)
    with pytest.raises(ValueError):
        covariance_matrix(matrix)


@pytest.mark.parametrize(
    "present, nblocks, expected",
    [(1, 4, 0.3), (1, 20, 0.1), (3, 4, 0.8), (0, 4, None)],
)
def test_frequency_weight_rounds_halves_up(present, nblocks, expected):
    estimate = SplitSystem.from_sides(4, [((1, 2), 1.0)])
    matrix = SplitMatrix(4, estimate)
    matrix.set_original(estimate)
    for block in range(nblocks):
        weight = 1.0 if block < present else 0.0
        matrix.add(SplitSystem.from_sides(4, [((1, 2), weight)]))
    network = get_confidence_network(matrix, weight_method="frequency", bundle=False)
    if expected is None:
        assert all(split.confidence == 0.0 for split in network)
    else:
        assert network.weights() == [expected]

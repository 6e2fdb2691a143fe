"""
Analysis of the data in a split matrix: bootstrap confidences, simultaneous
confidence intervals and confidence networks.

The interval constructions follow the balanced simultaneous confidence sets of

    Beran, R. 1988 "Balanced Simultaneous Confidence Sets".
    J. Amer. Stat. Assoc. 83(403) 679--686
    Beran, R. 1990 "Refining Bootstrap Simultaneous Confidence Sets".
    J. Amer. Stat. Assoc. 85(410) 417--426

using the root ``x*_ij - x_i`` for split i, where ``x_i`` is the estimated
weight of split i and ``x*_ij`` its weight in bootstrap replicate j. A single
pair of rank cutoffs is shared by all splits so that the joint coverage over
all splits meets the requested level.
"""

import logging
import math
from enum import Enum
from typing import List, Optional, Tuple

import numpy as np
from numpy.typing import NDArray

from splitarchitect.bootstrap.split_matrix import SplitMatrix
from splitarchitect.elements.split import Interval, Split
from splitarchitect.elements.split_system import SplitSystem

logger = logging.getLogger(__name__)


class WeightMethod(str, Enum):
    """Weight shown for a split of a confidence network."""

    FREQUENCY = "frequency"
    LOWER = "lower"
    ESTIMATED = "estimated"
    MIDPOINT = "midpoint"
    UPPER = "upper"

    @classmethod
    def parse(cls, name: "str | WeightMethod") -> "WeightMethod":
        if isinstance(name, WeightMethod):
            return name
        aliases = {"freq": "frequency", "mid": "midpoint", "estimate": "estimated"}
        key = name.strip().lower()
        try:
            return cls(aliases.get(key, key))
        except ValueError:
            raise ValueError(
                f"Unknown weight method {name!r}; expected one of "
                + ", ".join(m.value for m in cls)
            ) from None


def _clamp(index: int, n: int) -> int:
    return min(max(index, 0), n - 1)


def _get_split_id(matrix: SplitMatrix, split: Split, old_id: int) -> int:
    """
    Find the row of a split in the matrix, first trying ``old_id``.

    Returns:
        int: row index, or -1 if the split doesn't appear
    """
    if 0 < old_id <= matrix.nsplits and matrix.get_split(old_id) == split:
        return old_id
    return matrix.find_split(split)


def _get_count(matrix: SplitMatrix, row: int) -> int:
    """Number of blocks in which the split has strictly positive weight."""
    return int(np.count_nonzero(matrix.get_matrix_row(row) > 0.0))


def eval_confidences(matrix: SplitMatrix, splits: SplitSystem) -> None:
    """
    For each split in ``splits``, set its confidence to the proportion of
    blocks of ``matrix`` in which it has strictly positive weight.
    """
    nblocks = matrix.nblocks
    for i, split in enumerate(splits, start=1):
        row = _get_split_id(matrix, split, i)
        if row > 0 and nblocks > 0:
            split.confidence = _get_count(matrix, row) / nblocks
        else:
            split.confidence = 0.0


def compute_percentages(splits: SplitSystem) -> None:
    """
    Replace the weights by the confidence as a percentage, truncated to one decimal.
    """
    for split in splits:
        confidence = split.confidence if split.confidence is not None else 0.0
        # guard against 0.57 * 1000 == 569.999...
        split.weight = math.floor(confidence * 1000 + 1e-9) / 10


def splits_to_array(matrix: SplitMatrix, splits: SplitSystem) -> NDArray[np.float64]:
    """
    Weights of ``splits`` laid out in matrix row order, indexed 0..nsplits-1.
    Rows of the matrix not in ``splits`` are zero.
    """
    values = np.zeros(matrix.nsplits, dtype=float)
    for split in splits:
        row = matrix.find_split(split)
        if row > 0:
            values[row - 1] = split.weight
    return values


def _low_ranks(sorted_roots: NDArray[np.float64]) -> NDArray[np.int_]:
    """Rank of each sorted position, ties sharing the lowest position."""
    return np.searchsorted(sorted_roots, sorted_roots, side="left")


def _high_ranks(sorted_roots: NDArray[np.float64]) -> NDArray[np.int_]:
    """Rank of each sorted position, ties sharing the highest position."""
    return np.searchsorted(sorted_roots, sorted_roots, side="right") - 1


def _degenerate_interval(estimate: float) -> Interval:
    return Interval(0.0, 2.0 * estimate)


def get_confidence_intervals(
    matrix: SplitMatrix, splits: SplitSystem, level: float = 0.95
) -> None:
    """
    Compute simultaneous confidence intervals for the splits of an estimate
    and store them on the splits.

    For split i with estimate w_i the roots R_ij = w_ij - w_i are sorted. For
    each block j, s_j is the largest rank R_ij attains among all splits
    (ties ranked low) and t_j the smallest (ties ranked high). The rank
    cutoffs are the (1+level)/2 quantile of s and the (1-level)/2 quantile of
    t; each split reads its bounds off its own sorted roots at these ranks.
    Splits missing from the matrix get the interval [0, 2 w_i].
    """
    nblocks = matrix.nblocks
    if nblocks == 0:
        logger.warning("No bootstrap blocks: using degenerate confidence intervals")
        for split in splits:
            split.interval = _degenerate_interval(split.weight)
        return

    roots: List[Optional[NDArray[np.float64]]] = []
    sn = np.zeros(nblocks, dtype=int)
    tn = np.full(nblocks, nblocks, dtype=int)

    for i, split in enumerate(splits, start=1):
        row = _get_split_id(matrix, split, i)
        if row < 0:
            roots.append(None)
            continue
        r = matrix.get_matrix_row(row) - split.weight
        order = np.argsort(r, kind="stable")
        sorted_r = r[order]
        # order[k] is the block sitting at sorted position k
        np.maximum.at(sn, order, _low_ranks(sorted_r))
        np.minimum.at(tn, order, _high_ranks(sorted_r))
        roots.append(sorted_r)

    sn.sort()
    tn.sort()
    upper_rank = int(sn[_clamp(math.floor((level + 1.0) / 2.0 * nblocks), nblocks)])
    lower_rank = int(tn[_clamp(math.ceil((1.0 - level) / 2.0 * nblocks), nblocks)])
    upper_rank = _clamp(upper_rank, nblocks)
    lower_rank = _clamp(lower_rank, nblocks)
    logger.debug(
        f"Simultaneous intervals at level {level}: rank cutoffs "
        f"lower={lower_rank}, upper={upper_rank} of {nblocks} blocks"
    )

    for split, sorted_r in zip(splits, roots):
        if sorted_r is None:
            split.interval = _degenerate_interval(split.weight)
            continue
        low = max(0.0, split.weight + float(sorted_r[lower_rank]))
        high = max(0.0, split.weight + float(sorted_r[upper_rank]))
        split.interval = Interval(min(low, high), max(low, high))


def get_old_confidence_intervals(
    matrix: SplitMatrix, splits: SplitSystem, level: float = 0.95
) -> None:
    """
    Legacy one-sided variant of :func:`get_confidence_intervals`.

    Uses absolute roots |R_ij| and a single rank cutoff at the ``level``
    quantile, giving intervals [max(0, w_i - d_i), w_i + d_i].
    """
    nblocks = matrix.nblocks
    if nblocks == 0:
        for split in splits:
            split.interval = _degenerate_interval(split.weight)
        return

    roots: List[Optional[NDArray[np.float64]]] = []
    sn = np.ones(nblocks, dtype=int)

    for i, split in enumerate(splits, start=1):
        row = _get_split_id(matrix, split, i)
        if row < 0:
            roots.append(None)
            continue
        r = np.abs(matrix.get_matrix_row(row) - split.weight)
        order = np.argsort(r, kind="stable")
        sorted_r = r[order]
        np.maximum.at(sn, order, _low_ranks(sorted_r))
        roots.append(sorted_r)

    sn.sort()
    rank = _clamp(int(sn[_clamp(math.floor(level * nblocks), nblocks)]), nblocks)

    for split, sorted_r in zip(splits, roots):
        if sorted_r is None:
            split.interval = _degenerate_interval(split.weight)
            continue
        d = float(sorted_r[rank])
        split.interval = Interval(max(0.0, split.weight - d), split.weight + d)


def _bundle_rows(
    matrix: SplitMatrix, cutoff: float, bundle: bool
) -> Tuple[List[bool], NDArray[np.float64]]:
    """
    Mark rows that have no original weight and a bootstrap frequency of at
    most ``cutoff``; returns the marks and the per-block sum of their weights.
    """
    nblocks = matrix.nblocks
    is_bundled = [False] * (matrix.nsplits + 1)
    bundled_sum = np.zeros(nblocks, dtype=float)
    if not bundle:
        return is_bundled, bundled_sum
    for row in range(1, matrix.nsplits + 1):
        weights = matrix.get_matrix_row(row)
        proportion = np.count_nonzero(weights > 0.0) / nblocks
        if matrix.get_original(row) <= 0.0 and proportion <= cutoff:
            is_bundled[row] = True
            bundled_sum += weights
    return is_bundled, bundled_sum


def get_confidence_network(
    matrix: SplitMatrix,
    level: float = 0.95,
    cutoff: float = 0.01,
    weight_method: "str | WeightMethod" = WeightMethod.FREQUENCY,
    bundle: bool = True,
) -> SplitSystem:
    """
    Return the splits of a simultaneous confidence set for the network.

    The estimate for each row is its original weight (block 0 of the matrix).
    Rows absent from the original estimate that occur in at most a proportion
    ``cutoff`` of the blocks are bundled into one aggregate row: they take
    part in the global rank cutoff but are not listed. Every other split
    whose interval upper bound exceeds zero is returned, with its interval,
    its bootstrap confidence and the weight chosen by ``weight_method``.
    """
    method = WeightMethod.parse(weight_method)
    nblocks = matrix.nblocks
    network = SplitSystem(matrix.ntax, name="confidence_network")
    if nblocks == 0:
        logger.warning("Confidence network requested for a matrix without blocks")
        return network

    is_bundled, bundled_sum = _bundle_rows(matrix, cutoff, bundle)
    num_bundled = sum(is_bundled)
    logger.info(
        f"Confidence interval on {matrix.nsplits - num_bundled} splits, "
        f"with {num_bundled} bundled."
    )

    candidates: List[Tuple[NDArray[np.float64], float]] = []
    if num_bundled > 0:
        candidates.append((bundled_sum, float(bundled_sum.mean())))
    for row in range(1, matrix.nsplits + 1):
        if not is_bundled[row]:
            candidates.append((matrix.get_matrix_row(row), matrix.get_original(row)))

    sn = np.zeros(nblocks, dtype=int)
    sorted_roots = {}
    for k, (weights, original) in enumerate(candidates):
        r = np.abs(weights - original)
        order = np.argsort(r, kind="stable")
        sorted_r = r[order]
        np.maximum.at(sn, order, _low_ranks(sorted_r))
        sorted_roots[k] = sorted_r
    sn.sort()
    rank = _clamp(int(sn[_clamp(math.floor(level * nblocks), nblocks)]), nblocks)

    k = 1 if num_bundled > 0 else 0
    for row in range(1, matrix.nsplits + 1):
        if is_bundled[row]:
            continue
        d = float(sorted_roots[k][rank])
        k += 1
        x = matrix.get_original(row)
        low = max(0.0, x - d)
        high = x + d
        if high <= 0.0:
            continue
        confidence = _get_count(matrix, row) / nblocks
        if method is WeightMethod.FREQUENCY:
            # halves round up
            weight = math.floor(10.0 * confidence + 0.5) / 10
        elif method is WeightMethod.LOWER:
            weight = low
        elif method is WeightMethod.ESTIMATED:
            weight = x
        elif method is WeightMethod.MIDPOINT:
            weight = (low + high) / 2.0
        else:
            weight = high
        split = matrix.get_split(row)
        network.add(
            split,
            weight=weight,
            confidence=confidence,
            interval=Interval(low, high),
            label=split.label or "",
        )
    return network


def covariance_matrix(matrix: SplitMatrix) -> NDArray[np.float64]:
    """Sample covariance (nsplits x nsplits) of the split weights over the blocks."""
    if matrix.nblocks < 2:
        raise ValueError("Covariance needs at least two blocks")
    return np.atleast_2d(np.cov(matrix.to_array(), rowvar=True, ddof=1))


def singular_values(matrix: SplitMatrix) -> NDArray[np.float64]:
    """Singular values of the nsplits x nblocks weight matrix, largest first."""
    values = np.linalg.svd(matrix.to_array(), compute_uv=False)
    return np.sort(values)[::-1]

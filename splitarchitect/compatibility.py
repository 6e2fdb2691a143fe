"""Compatibility predicates for splits and split systems.

Splits are handled as bitmasks over the taxa 1..ntax (bit ``t`` set for taxon
``t``); the predicates accept Split objects or raw bitmasks.
"""

from itertools import combinations
from typing import Sequence, Union

import numpy as np
from numpy.typing import NDArray

from splitarchitect.elements.split import Split, full_mask
from splitarchitect.elements.split_system import SplitSystem

SplitOrMask = Union[Split, int]


def _mask(split: SplitOrMask) -> int:
    return split.bitmask if isinstance(split, Split) else split


def are_compatible(ntax: int, split1: SplitOrMask, split2: SplitOrMask) -> bool:
    """
    Two splits are compatible iff at least one of A1∩A2, A1∩B2, B1∩A2, B1∩B2 is empty.
    """
    full = full_mask(ntax)
    a1 = _mask(split1) & full
    b1 = full & ~a1
    a2 = _mask(split2) & full
    b2 = full & ~a2
    return not (a1 & a2) or not (a1 & b2) or not (b1 & a2) or not (b1 & b2)


def are_weakly_compatible(
    ntax: int, split1: SplitOrMask, split2: SplitOrMask, split3: SplitOrMask
) -> bool:
    """
    Three splits are weakly compatible unless one of the two forbidden
    patterns of four non-empty triple intersections occurs.
    """
    full = full_mask(ntax)
    a1 = _mask(split1) & full
    b1 = full & ~a1
    a2 = _mask(split2) & full
    b2 = full & ~a2
    a3 = _mask(split3) & full
    b3 = full & ~a3

    first = bool(a1 & a2 & a3 and a1 & b2 & b3 and b1 & a2 & b3 and b1 & b2 & a3)
    second = bool(b1 & b2 & b3 and b1 & a2 & a3 and a1 & b2 & a3 and a1 & a2 & b3)
    return not (first or second)


def is_compatible(splits: SplitSystem) -> bool:
    """Return True if all splits are pairwise compatible."""
    return all(
        are_compatible(splits.ntax, s, t) for s, t in combinations(list(splits), 2)
    )


def is_weakly_compatible(splits: SplitSystem) -> bool:
    """Return True if every triple of splits is weakly compatible."""
    return all(
        are_weakly_compatible(splits.ntax, s, t, u)
        for s, t, u in combinations(list(splits), 3)
    )


def compatibility_matrix(splits: SplitSystem) -> NDArray[np.bool_]:
    """
    Boolean nsplits x nsplits matrix; entry [i, j] is True if splits i+1 and
    j+1 are compatible. The diagonal is True.
    """
    n = len(splits)
    matrix = np.ones((n, n), dtype=bool)
    split_list = list(splits)
    for i, j in combinations(range(n), 2):
        matrix[i, j] = matrix[j, i] = are_compatible(
            splits.ntax, split_list[i], split_list[j]
        )
    return matrix


def is_circular(ntax: int, cycle: Sequence[int], split: SplitOrMask) -> bool:
    """Return True if one side of the split is an interval of the circular ordering."""
    mask = _mask(split)
    # work with the side not containing cycle[0] to avoid wraparound
    if mask >> cycle[0] & 1:
        mask = full_mask(ntax) & ~mask
    positions = [i for i, taxon in enumerate(cycle) if mask >> taxon & 1]
    return bool(positions) and positions[-1] - positions[0] + 1 == len(positions)


def is_cyclic(splits: SplitSystem, cycle: Sequence[int] | None = None) -> bool:
    """Return True if every split is circular with respect to the ordering."""
    cycle = cycle if cycle is not None else splits.cycle
    if cycle is None:
        raise ValueError("No circular ordering given and none stored on the split system")
    return all(is_circular(splits.ntax, cycle, split) for split in splits)

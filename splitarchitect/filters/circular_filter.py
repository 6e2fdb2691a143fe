"""
Circular dimension filter: remove splits that are highly incompatible with a
circular ordering of the taxa. This reduces the number of boxes in the splits
graph without a full incompatibility analysis.
"""

import logging
from typing import Callable, List, Optional, Sequence

from splitarchitect.elements.split import Split
from splitarchitect.elements.split_system import SplitSystem
from splitarchitect.filters.dimension_filter import remove_splits
from splitarchitect.filters.ordering import spectral_ordering
from splitarchitect.logger import sa_logger

logger = logging.getLogger(__name__)

ComputeOrdering = Callable[[SplitSystem], Sequence[int]]


def num_crossings(ordering: Sequence[int], split: Split) -> int:
    """
    Count how often a walk around the circular ordering changes sides of the
    split, including the step from the last taxon back to the first, and
    return half of that number.

    A split that is circular with respect to the ordering has 1 crossing.
    """
    if not ordering:
        return 0
    mask = split.bitmask
    count = 0
    side = bool(mask >> ordering[0] & 1)
    for taxon in ordering[1:]:
        if bool(mask >> taxon & 1) != side:
            count += 1
            side = not side
    if bool(mask >> ordering[0] & 1) != side:
        count += 1
    return count // 2


class CircularDimensionFilter:
    """Removes splits that cross a circular ordering too often."""

    def __init__(self, compute_ordering: Optional[ComputeOrdering] = None):
        self.compute_ordering = compute_ordering or spectral_ordering

    def ordering_for(self, splits: SplitSystem) -> Sequence[int]:
        if splits.cycle is not None:
            return splits.cycle
        ordering = self.compute_ordering(splits)
        logger.info(f"No cycle on split system, computed ordering {list(ordering)}")
        return ordering

    def apply(self, splits: SplitSystem, max_crossing: int) -> int:
        """
        Remove every split whose crossing count exceeds ``max_crossing``.

        Returns:
            int: Number of splits removed
        """
        sa_logger.section(f"Circular dimension filter (maxCrossing={max_crossing})")
        ordering = self.ordering_for(splits)

        to_delete: List[int] = [
            s
            for s, split in enumerate(splits, start=1)
            if num_crossings(ordering, split) > max_crossing
        ]
        removed = remove_splits(splits, set(to_delete))

        sa_logger.result("Ordering", list(ordering))
        sa_logger.result("Splits removed", removed)
        sa_logger.end_section()
        logger.info(f"Circular filter removed {removed} of {removed + len(splits)} splits")
        return removed


def apply_circular_filter(
    splits: SplitSystem,
    max_crossing: int,
    compute_ordering: Optional[ComputeOrdering] = None,
) -> int:
    """Convenience wrapper around :class:`CircularDimensionFilter`."""
    return CircularDimensionFilter(compute_ordering).apply(splits, max_crossing)

"""Filters reducing the incompatibility of split systems."""

from splitarchitect.filters.incompatibility_graph import IncompatibilityGraph
from splitarchitect.filters.dimension_filter import (
    DimensionFilter,
    apply_dimension_filter,
    remove_splits,
)
from splitarchitect.filters.circular_filter import (
    CircularDimensionFilter,
    apply_circular_filter,
    num_crossings,
)
from splitarchitect.filters.ordering import spectral_ordering, split_distances

__all__ = [
    "IncompatibilityGraph",
    "DimensionFilter",
    "apply_dimension_filter",
    "remove_splits",
    "CircularDimensionFilter",
    "apply_circular_filter",
    "num_crossings",
    "spectral_ordering",
    "split_distances",
]

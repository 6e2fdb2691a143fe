"""
SplitArchitect: bootstrap support and incompatibility filters for split systems.
"""

from splitarchitect.elements import Characters, Interval, Split, SplitSystem
from splitarchitect.compatibility import (
    are_compatible,
    are_weakly_compatible,
    is_compatible,
    is_weakly_compatible,
    is_circular,
    is_cyclic,
)
from splitarchitect.bootstrap import (
    Bootstrap,
    BootstrapConfig,
    BootstrapResult,
    SplitMatrix,
    WeightMethod,
    bootstrap,
)
from splitarchitect.filters import (
    CircularDimensionFilter,
    DimensionFilter,
    apply_circular_filter,
    apply_dimension_filter,
)
from splitarchitect.progress import NullProgressListener, ProgressListener

__version__ = "0.1.0"

__all__ = [
    "Characters",
    "Interval",
    "Split",
    "SplitSystem",
    "are_compatible",
    "are_weakly_compatible",
    "is_compatible",
    "is_weakly_compatible",
    "is_circular",
    "is_cyclic",
    "Bootstrap",
    "BootstrapConfig",
    "BootstrapResult",
    "SplitMatrix",
    "WeightMethod",
    "bootstrap",
    "CircularDimensionFilter",
    "DimensionFilter",
    "apply_circular_filter",
    "apply_dimension_filter",
    "NullProgressListener",
    "ProgressListener",
]

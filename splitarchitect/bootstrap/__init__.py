"""Bootstrap support for split systems."""

from splitarchitect.bootstrap.split_matrix import SplitMatrix
from splitarchitect.bootstrap.analysis import (
    WeightMethod,
    eval_confidences,
    compute_percentages,
    get_confidence_intervals,
    get_old_confidence_intervals,
    get_confidence_network,
    covariance_matrix,
    singular_values,
    splits_to_array,
)
from splitarchitect.bootstrap.resampling import resample, sample_columns, make_rng
from splitarchitect.bootstrap.bootstrap import (
    Bootstrap,
    BootstrapConfig,
    BootstrapResult,
    bootstrap,
)

__all__ = [
    "SplitMatrix",
    "WeightMethod",
    "eval_confidences",
    "compute_percentages",
    "get_confidence_intervals",
    "get_old_confidence_intervals",
    "get_confidence_network",
    "covariance_matrix",
    "singular_values",
    "splits_to_array",
    "resample",
    "sample_columns",
    "make_rng",
    "Bootstrap",
    "BootstrapConfig",
    "BootstrapResult",
    "bootstrap",
]

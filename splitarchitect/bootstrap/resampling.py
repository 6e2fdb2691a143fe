"""Resampling of character matrices for the non-parametric bootstrap."""

import numpy as np
from numpy.typing import NDArray

from splitarchitect.elements.characters import Characters
from splitarchitect.exceptions import BootstrapConfigError


def make_rng(seed: int) -> np.random.Generator:
    """Deterministic generator for a non-zero seed, fresh entropy for seed 0."""
    return np.random.default_rng(seed if seed != 0 else None)


def check_sample_length(source: Characters, nchar_sample: int) -> None:
    if nchar_sample <= 0:
        raise BootstrapConfigError(
            f"Number of characters sampled must be positive, got {nchar_sample}"
        )
    if source.nchar == 0:
        raise BootstrapConfigError("Cannot resample a matrix without characters")
    if source.diploid and nchar_sample % 2 != 0:
        raise BootstrapConfigError(
            "When data is diploid, number of characters sampled must be even"
        )


def sample_columns(
    source: Characters, nchar_sample: int, rng: np.random.Generator
) -> NDArray[np.int_]:
    """
    Draw the 0-based source columns that make up one replicate.

    Haploid data: ``nchar_sample`` columns uniformly with replacement.
    Diploid data: ``nchar_sample / 2`` loci with replacement, each contributing
    both of its characters in order, so loci are never broken up. Loci are
    drawn from the first ``nchar_sample / 2`` loci of the source (all loci
    when the sample is longer than the source).
    """
    check_sample_length(source, nchar_sample)
    if not source.diploid:
        return rng.integers(0, source.nchar, size=nchar_sample)

    nloci = nchar_sample // 2
    available = min(nloci, source.nchar // 2)
    if available == 0:
        raise BootstrapConfigError("Diploid matrix has no complete locus to sample")
    loci = rng.integers(0, available, size=nloci)
    columns = np.empty(nchar_sample, dtype=int)
    columns[0::2] = 2 * loci
    columns[1::2] = 2 * loci + 1
    return columns


def resample(
    source: Characters, nchar_sample: int, rng: np.random.Generator
) -> Characters:
    """Return a bootstrap replicate of ``source`` with ``nchar_sample`` characters."""
    return source.select_columns(sample_columns(source, nchar_sample, rng))

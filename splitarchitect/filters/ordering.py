"""
Default circular ordering of the taxa of a split system.

The ordering is spectral: taxa are sorted by their entry in the Fiedler vector
of the normalised Laplacian of a similarity graph derived from the
split-induced distances.
"""

import logging
from typing import List

import numpy as np
from numpy.typing import NDArray
from scipy.linalg import eigh
from scipy.sparse.csgraph import laplacian

from splitarchitect.elements.split_system import SplitSystem

logger = logging.getLogger(__name__)


def split_distances(splits: SplitSystem) -> NDArray[np.float64]:
    """
    Distance matrix induced by a split system.

    ``d[x-1, y-1]`` is the total weight of the splits separating taxa x and y.
    """
    ntax = splits.ntax
    dist_matrix = np.zeros((ntax, ntax))
    for split in splits:
        side = np.zeros(ntax, dtype=bool)
        side[[i - 1 for i in split.indices]] = True
        separated = side[:, None] != side[None, :]
        dist_matrix += split.weight * separated
    return dist_matrix


def spectral_ordering(splits: SplitSystem) -> List[int]:
    """
    Circular ordering (a permutation of 1..ntax) by the Fiedler vector.

    Taxa that are close in the split-induced metric receive similar Fiedler
    values and therefore end up next to each other. Ties keep taxon order.
    """
    ntax = splits.ntax
    if ntax < 3:
        return list(range(1, ntax + 1))

    dist_matrix = split_distances(splits)
    max_dist = dist_matrix.max()
    if max_dist <= 0:
        return list(range(1, ntax + 1))

    similarity = max_dist - dist_matrix
    np.fill_diagonal(similarity, 0.0)
    if not similarity.any():
        return list(range(1, ntax + 1))

    L = laplacian(similarity, normed=True)
    eigvals, eigvecs = eigh(L)
    fiedler_vec = eigvecs[:, 1]
    ordering = [taxon for _, taxon in sorted(zip(fiedler_vec, range(1, ntax + 1)))]
    logger.debug(f"Spectral ordering: {ordering}")
    return ordering

"""
Container storing the weights of many split systems over the same taxa.

Rows correspond to splits and columns to blocks (one block per split system
merged in). Rows are indexed 1..nsplits and blocks 1..nblocks; block 0 is
reserved for weights of an original estimate.
"""

from typing import Dict, Optional, Tuple

import numpy as np
from numpy.typing import NDArray

from splitarchitect.elements.split import Split
from splitarchitect.elements.split_system import SplitSystem


class SplitMatrix:
    """Sparse split x block weight table with canonical split lookup."""

    def __init__(self, ntax: int, splits: Optional[SplitSystem] = None):
        """
        Create a new split matrix. If ``splits`` is given, each of its splits
        becomes an (empty) row, so the splits of an original estimate can be
        tracked even if no replicate reproduces them.
        """
        self._nblocks = 0
        self._table: Dict[Tuple[int, int], float] = {}
        self._split_indices: Dict[str, int] = {}
        self._all_splits = SplitSystem(ntax, name="all_splits")
        if splits is not None:
            self.add_splits_without_block(splits)

    def find_split(self, split: Split) -> int:
        """
        Search for a split in the matrix, indexed by its side not containing taxon 1.

        Returns:
            int: row index (1..nsplits) or -1 if the split is not present
        """
        return self._split_indices.get(split.key, -1)

    def _find_or_add_split(self, split: Split) -> int:
        row = self.find_split(split)
        if row < 0:
            row = self._all_splits.add(split, weight=1.0)
            self._split_indices[split.key] = row
        return row

    def add(self, splits: SplitSystem) -> int:
        """
        Add a new block holding the weights of ``splits``.

        Splits not seen before are appended as new rows. Returns the new block index.
        """
        new_block = self._nblocks + 1
        for split in splits:
            row = self._find_or_add_split(split)
            self.set(row, new_block, split.weight)
        self._nblocks = new_block
        return new_block

    def add_splits_without_block(self, splits: SplitSystem) -> None:
        """
        Add empty rows for the splits, without creating a block.

        Splits that are already present are skipped; the others are added in
        the order in which they appear.
        """
        for split in splits:
            self._find_or_add_split(split)

    def get(self, row: int, block: int) -> float:
        """Return a split weight, or 0.0 if the block doesn't have that split."""
        return self._table.get((row, block), 0.0)

    def set(self, row: int, block: int, value: float) -> None:
        self._table[(row, block)] = value

    def set_original(self, splits: SplitSystem) -> None:
        """Record the weights of an original estimate in block 0, adding rows as needed."""
        for split in splits:
            self.set(self._find_or_add_split(split), 0, split.weight)

    def get_original(self, row: int) -> float:
        """Weight recorded for the row in block 0."""
        return self.get(row, 0)

    def get_split(self, row: int) -> Split:
        return self._all_splits.get(row)

    @property
    def splits(self) -> SplitSystem:
        """Split system with all splits contained in the matrix."""
        return self._all_splits

    @property
    def nblocks(self) -> int:
        return self._nblocks

    @property
    def nsplits(self) -> int:
        return self._all_splits.nsplits

    @property
    def ntax(self) -> int:
        return self._all_splits.ntax

    def get_nsplits(self) -> int:
        return self.nsplits

    def get_nblocks(self) -> int:
        return self.nblocks

    def get_matrix_row(self, row: int) -> NDArray[np.float64]:
        """Weights of one split over blocks 1..nblocks, indexed 0..nblocks-1."""
        return np.array(
            [self.get(row, block) for block in range(1, self._nblocks + 1)],
            dtype=float,
        )

    def get_matrix_column(self, block: int) -> NDArray[np.float64]:
        """Weights of all splits in one block, indexed 0..nsplits-1."""
        return np.array(
            [self.get(row, block) for row in range(1, self.nsplits + 1)],
            dtype=float,
        )

    def to_array(self) -> NDArray[np.float64]:
        """Dense nsplits x nblocks array of blocks 1..nblocks."""
        dense = np.zeros((self.nsplits, self._nblocks), dtype=float)
        for (row, block), value in self._table.items():
            if block >= 1:
                dense[row - 1, block - 1] = value
        return dense

    def __repr__(self) -> str:
        return (
            f"SplitMatrix(ntax={self.ntax}, nsplits={self.nsplits}, "
            f"nblocks={self.nblocks})"
        )

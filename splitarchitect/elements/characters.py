"""Character matrix (primary data) used as bootstrap input."""

from typing import List, Optional, Sequence

import numpy as np
from numpy.typing import NDArray

from splitarchitect.exceptions import CharactersError


class Characters:
    """
    A taxa x characters matrix of single-symbol states.

    Rows correspond to taxa 1..ntax and columns to characters 1..nchar; the
    1-based accessors mirror the numbering used for splits. In diploid data
    characters ``2k-1`` and ``2k`` form locus ``k``.
    """

    def __init__(
        self,
        matrix: Sequence[Sequence[str]] | NDArray[np.str_],
        missing: str = "?",
        gap: str = "-",
        diploid: bool = False,
        labels: Optional[Sequence[str]] = None,
    ):
        data = np.array([list(row) for row in matrix], dtype="<U1")
        if data.ndim != 2 or data.shape[0] == 0:
            raise CharactersError("Character matrix must have at least one taxon")
        self.matrix: NDArray[np.str_] = data
        self.missing = missing
        self.gap = gap
        self.diploid = diploid
        if labels is None:
            labels = [f"t{i}" for i in range(1, data.shape[0] + 1)]
        if len(labels) != data.shape[0]:
            raise CharactersError(
                f"{len(labels)} labels given for {data.shape[0]} taxa"
            )
        self.labels: List[str] = list(labels)

    @classmethod
    def from_sequences(cls, sequences: Sequence[str], **kwargs) -> "Characters":
        """Build from aligned sequence strings, one per taxon."""
        lengths = {len(seq) for seq in sequences}
        if len(lengths) > 1:
            raise CharactersError(f"Sequences differ in length: {sorted(lengths)}")
        return cls([list(seq) for seq in sequences], **kwargs)

    @property
    def ntax(self) -> int:
        return self.matrix.shape[0]

    @property
    def nchar(self) -> int:
        return self.matrix.shape[1]

    @property
    def nloci(self) -> int:
        return self.nchar // 2 if self.diploid else self.nchar

    def get(self, taxon: int, char: int) -> str:
        return str(self.matrix[taxon - 1, char - 1])

    def set(self, taxon: int, char: int, state: str) -> None:
        self.matrix[taxon - 1, char - 1] = state

    def column(self, char: int) -> NDArray[np.str_]:
        return self.matrix[:, char - 1]

    def sequence(self, taxon: int) -> str:
        return "".join(self.matrix[taxon - 1])

    def select_columns(self, columns: Sequence[int] | NDArray[np.int_]) -> "Characters":
        """Return a new matrix made of the given 0-based columns, in order."""
        return Characters(
            self.matrix[:, np.asarray(columns, dtype=int)],
            missing=self.missing,
            gap=self.gap,
            diploid=self.diploid,
            labels=self.labels,
        )

    def copy(self) -> "Characters":
        return Characters(
            self.matrix.copy(),
            missing=self.missing,
            gap=self.gap,
            diploid=self.diploid,
            labels=self.labels,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Characters):
            return NotImplemented
        return (
            self.matrix.shape == other.matrix.shape
            and bool(np.all(self.matrix == other.matrix))
            and self.diploid == other.diploid
        )

    def __repr__(self) -> str:
        return f"Characters(ntax={self.ntax}, nchar={self.nchar}, diploid={self.diploid})"

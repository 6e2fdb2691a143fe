# split.py
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple
from functools import total_ordering

from splitarchitect.exceptions import SplitValidationError


@dataclass(frozen=True)
class Interval:
    """Closed interval ``[low, high]`` attached to a split weight."""

    low: float
    high: float

    def __contains__(self, value: float) -> bool:
        return self.low <= value <= self.high

    @property
    def width(self) -> float:
        return self.high - self.low


def full_mask(ntax: int) -> int:
    """Bitmask with bits ``1..ntax`` set."""
    return ((1 << ntax) - 1) << 1


def mask_to_indices(bitmask: int) -> Tuple[int, ...]:
    indices: List[int] = []
    t = 0
    while bitmask:
        if bitmask & 1:
            indices.append(t)
        bitmask >>= 1
        t += 1
    return tuple(indices)


def canonical_mask(bitmask: int, ntax: int) -> int:
    """Return the side of the bipartition that does not contain taxon 1."""
    if bitmask & 0b10:
        return full_mask(ntax) & ~bitmask
    return bitmask


@total_ordering
class Split:
    __slots__ = (
        "indices",
        "ntax",
        "bitmask",
        "weight",
        "confidence",
        "interval",
        "label",
    )

    def __init__(
        self,
        indices: Iterable[int],
        ntax: int,
        weight: float = 1.0,
        confidence: Optional[float] = None,
        interval: Optional[Interval] = None,
        label: Optional[str] = None,
    ):
        """
        Split represents a bipartition {A, B} of the taxa 1..ntax.

        Only the side A (as given) is stored; B is its complement. Equality and
        hashing ignore the orientation, so Split((1, 2), 4) == Split((3, 4), 4).
        """
        side = tuple(sorted(set(indices)))
        if ntax < 2:
            SplitValidationError.raise_bad_side(side, ntax, "need at least two taxa")
        if not side:
            SplitValidationError.raise_bad_side(side, ntax, "empty side")
        if side[0] < 1 or side[-1] > ntax:
            SplitValidationError.raise_bad_side(
                side, ntax, f"taxa must lie in 1..{ntax}"
            )
        if len(side) == ntax:
            SplitValidationError.raise_bad_side(side, ntax, "empty complement")

        self.indices: Tuple[int, ...] = side
        self.ntax: int = ntax
        bitmask = 0
        for idx in side:
            bitmask |= 1 << idx
        self.bitmask: int = bitmask
        self.weight: float = weight
        self.confidence: Optional[float] = confidence
        self.interval: Optional[Interval] = interval
        self.label: Optional[str] = label

    @classmethod
    def from_bitmask(cls, bitmask: int, ntax: int, **kwargs: Any) -> "Split":
        return cls(mask_to_indices(bitmask), ntax, **kwargs)

    def __iter__(self) -> Iterator[int]:
        return iter(self.indices)

    def __len__(self) -> int:
        return len(self.indices)

    def __contains__(self, taxon: object) -> bool:
        return isinstance(taxon, int) and bool(self.bitmask >> taxon & 1)

    @property
    def complement_mask(self) -> int:
        return full_mask(self.ntax) & ~self.bitmask

    def complementary_indices(self) -> Tuple[int, ...]:
        """
        Return the taxa on the other side of the split.
        """
        return mask_to_indices(self.complement_mask)

    @property
    def canonical_mask(self) -> int:
        return canonical_mask(self.bitmask, self.ntax)

    def canonical(self) -> Tuple[int, ...]:
        """Return the side of the split that excludes taxon 1."""
        return mask_to_indices(self.canonical_mask)

    @property
    def key(self) -> str:
        """Canonical string used to identify the bipartition across split systems."""
        return "{" + ", ".join(str(t) for t in self.canonical()) + "}"

    @property
    def size(self) -> int:
        """Size of the smaller side."""
        return min(len(self.indices), self.ntax - len(self.indices))

    def is_trivial(self) -> bool:
        return self.size == 1

    def separates(self, a: int, b: int) -> bool:
        return (a in self) != (b in self)

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Split):
            return self.ntax == other.ntax and self.canonical_mask == other.canonical_mask
        return NotImplemented

    def __lt__(self, other: Any) -> bool:
        if isinstance(other, Split):
            return (self.ntax, self.canonical()) < (other.ntax, other.canonical())
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self.ntax, self.canonical_mask))

    def __str__(self) -> str:
        left = ", ".join(str(t) for t in self.indices)
        right = ", ".join(str(t) for t in self.complementary_indices())
        return f"({left} | {right})"

    def __repr__(self) -> str:
        return f"Split({self.indices}, ntax={self.ntax}, weight={self.weight})"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "indices": self.indices,
            "ntax": self.ntax,
            "weight": self.weight,
            "confidence": self.confidence,
            "interval": None
            if self.interval is None
            else (self.interval.low, self.interval.high),
            "label": self.label,
        }

    def copy(self) -> "Split":
        return Split(
            self.indices,
            self.ntax,
            weight=self.weight,
            confidence=self.confidence,
            interval=self.interval,
            label=self.label,
        )

    def is_compatible_with(self, other: "Split") -> bool:
        """
        Check if this split is compatible with another split.

        Two splits are compatible if at least one of the four intersections is empty:
        - A ∩ B
        - A ∩ B_complement
        - A_complement ∩ B
        - A_complement ∩ B_complement

        Raises:
            SplitValidationError: If the splits are over different taxon sets
        """
        from splitarchitect.compatibility import are_compatible

        if self.ntax != other.ntax:
            raise SplitValidationError(
                "Cannot check compatibility between splits over different taxon sets"
            )
        return are_compatible(self.ntax, self, other)

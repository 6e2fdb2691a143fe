from typing import Iterable, Iterator, List, Optional, Sequence, Tuple, Union

from splitarchitect.elements.split import Interval, Split
from splitarchitect.exceptions import SplitValidationError

SplitLike = Union[Split, Iterable[int]]


class SplitSystem:
    """
    An ordered, weighted collection of splits over the taxa 1..ntax.

    Splits are addressed 1..nsplits by the accessor methods (get, get_weight,
    set_confidence, ...), which is the numbering used by split matrices and
    filters. Iteration yields the Split objects in order.

    Attributes:
        ntax: Number of taxa
        cycle: Optional circular ordering of the taxa (a permutation of 1..ntax)
        name: Name of this split system
    """

    __slots__ = ("ntax", "_splits", "cycle", "name")

    def __init__(
        self,
        ntax: int,
        splits: Optional[Iterable[SplitLike]] = None,
        cycle: Optional[Sequence[int]] = None,
        name: str = "SplitSystem",
    ) -> None:
        self.ntax = ntax
        self._splits: List[Split] = []
        self.cycle: Optional[Tuple[int, ...]] = None
        self.name = name
        if cycle is not None:
            self.set_cycle(cycle)
        if splits:
            for split in splits:
                self.add(split)

    @classmethod
    def from_sides(
        cls,
        ntax: int,
        sides: Iterable[Tuple[Iterable[int], float]],
        name: str = "SplitSystem",
    ) -> "SplitSystem":
        """Build a system from ``(side, weight)`` pairs."""
        system = cls(ntax, name=name)
        for side, weight in sides:
            system.add(side, weight=weight)
        return system

    def __len__(self) -> int:
        return len(self._splits)

    def __iter__(self) -> Iterator[Split]:
        return iter(self._splits)

    def __contains__(self, split: object) -> bool:
        return split in self._splits

    def __repr__(self) -> str:
        return f"SplitSystem(ntax={self.ntax}, nsplits={len(self)}, name={self.name!r})"

    @property
    def nsplits(self) -> int:
        return len(self._splits)

    def _check_index(self, index: int) -> None:
        if not 1 <= index <= len(self._splits):
            raise IndexError(f"split index {index} not in 1..{len(self._splits)}")

    def add(
        self,
        split: SplitLike,
        weight: Optional[float] = None,
        confidence: Optional[float] = None,
        interval: Optional[Interval] = None,
        label: Optional[str] = None,
    ) -> int:
        """
        Append a split and return its 1-based index.

        A Split argument is copied, keeping its own annotations unless they are
        overridden here. Anything else is taken as the taxa of one side.
        """
        if isinstance(split, Split):
            if split.ntax != self.ntax:
                raise SplitValidationError(
                    f"Split over {split.ntax} taxa added to a system over {self.ntax} taxa"
                )
            new_split = split.copy()
            if weight is not None:
                new_split.weight = weight
        else:
            new_split = Split(split, self.ntax, weight=1.0 if weight is None else weight)
        if confidence is not None:
            new_split.confidence = confidence
        if interval is not None:
            new_split.interval = interval
        if label is not None:
            new_split.label = label
        self._splits.append(new_split)
        return len(self._splits)

    def get(self, index: int) -> Split:
        self._check_index(index)
        return self._splits[index - 1]

    def remove(self, index: int) -> Split:
        """Remove the split at ``index``; later splits move down by one."""
        self._check_index(index)
        return self._splits.pop(index - 1)

    def index_of(self, split: Split) -> int:
        """Return the 1-based index of the bipartition, or -1 if absent."""
        for i, other in enumerate(self._splits, start=1):
            if other == split:
                return i
        return -1

    def get_weight(self, index: int) -> float:
        return self.get(index).weight

    def set_weight(self, index: int, weight: float) -> None:
        self.get(index).weight = weight

    def get_confidence(self, index: int) -> float:
        confidence = self.get(index).confidence
        return 1.0 if confidence is None else confidence

    def set_confidence(self, index: int, confidence: float) -> None:
        self.get(index).confidence = confidence

    def get_interval(self, index: int) -> Optional[Interval]:
        return self.get(index).interval

    def set_interval(self, index: int, interval: Interval) -> None:
        self.get(index).interval = interval

    def get_label(self, index: int) -> Optional[str]:
        return self.get(index).label

    def set_label(self, index: int, label: Optional[str]) -> None:
        self.get(index).label = label

    def set_cycle(self, cycle: Optional[Sequence[int]]) -> None:
        """Set the circular ordering; it must be a permutation of 1..ntax."""
        if cycle is None:
            self.cycle = None
            return
        cycle = tuple(cycle)
        if sorted(cycle) != list(range(1, self.ntax + 1)):
            raise SplitValidationError(
                f"Cycle {cycle} is not a permutation of 1..{self.ntax}"
            )
        self.cycle = cycle

    def weights(self) -> List[float]:
        return [split.weight for split in self._splits]

    def clear(self) -> None:
        self._splits.clear()
        self.cycle = None

    def copy(self) -> "SplitSystem":
        return SplitSystem(
            self.ntax, [split for split in self._splits], cycle=self.cycle, name=self.name
        )

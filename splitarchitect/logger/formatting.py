"""Text formatting utilities for logging."""

from typing import Any, Iterable, Optional, Set


def format_set(s: Set[Any]) -> str:
    """Format set for consistent display."""
    if not s:
        return "∅"
    return "{" + ", ".join(str(x) for x in sorted(s)) + "}"


def format_split(split: Any) -> str:
    """Format a Split as 'A | B' using its taxon indices.

    Falls back to a plain brace-enclosed listing for anything that is not a
    split but iterates over taxon indices.
    """
    if hasattr(split, "indices") and hasattr(split, "complementary_indices"):
        left = ", ".join(str(t) for t in split.indices)
        right = ", ".join(str(t) for t in split.complementary_indices())
        return f"{left} | {right}"
    return format_set(set(split))


def format_interval(interval: Optional[Any]) -> str:
    if interval is None:
        return "-"
    return f"[{interval.low:.4g}, {interval.high:.4g}]"


def format_split_system(splits: Iterable[Any]) -> str:
    """Format a split system as one split per line, prefixed by its 1-based index."""
    return "\n".join(
        f"[{i}] {format_split(split)}" for i, split in enumerate(splits, start=1)
    )

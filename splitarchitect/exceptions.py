"""
Custom exceptions for split system analysis.
"""

from __future__ import annotations
from typing import NoReturn


class SplitArchitectError(Exception):
    """Base exception for split system analysis errors."""

    pass


class SplitValidationError(SplitArchitectError, ValueError):
    """Raised when a bipartition does not partition the taxa ``1..ntax``."""

    @staticmethod
    def raise_bad_side(indices: tuple[int, ...], ntax: int, reason: str) -> NoReturn:
        """
        Raises a SplitValidationError describing a malformed split side.

        Args:
            indices: The taxon indices given for one side of the split
            ntax: Number of taxa of the split universe
            reason: Short description of the violated condition

        Raises:
            SplitValidationError: Always
        """
        from splitarchitect.logger import sa_logger

        message = f"Invalid split {indices} over {ntax} taxa: {reason}"
        if not sa_logger.disabled:
            sa_logger.error(message)
        raise SplitValidationError(message)


class CharactersError(SplitArchitectError, ValueError):
    """Raised for a malformed character matrix (ragged rows, no taxa, label mismatch)."""

    pass


class BootstrapConfigError(SplitArchitectError, ValueError):
    """Raised for invalid bootstrap settings, before any replicate is computed."""

    pass


class BootstrapError(SplitArchitectError):
    """Raised when a replicate fails with an unexpected error.

    The split matrix accumulated so far is not trusted for statistics, so the
    whole bootstrap is aborted.
    """

    def __init__(self, message: str, replicates_completed: int = 0):
        super().__init__(message)
        self.replicates_completed = replicates_completed


class OperationCancelled(SplitArchitectError):
    """Raised by a progress check when the user has requested cancellation."""

    pass

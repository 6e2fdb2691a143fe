"""Progress reporting and cooperative cancellation."""

import logging

from splitarchitect.exceptions import OperationCancelled

logger = logging.getLogger(__name__)


class ProgressListener:
    """
    Progress sink for long running computations.

    Subclasses override the ``on_*`` hooks to drive a progress bar; cancellation
    is requested through :meth:`cancel` (or by overriding
    :meth:`check_cancelled`) and is polled by the computation at well-defined
    points.
    """

    def __init__(self) -> None:
        self.maximum = 0
        self.progress = 0
        self.task = ""
        self.subtask = ""
        self._cancelled = False

    def set_tasks(self, task: str, subtask: str = "") -> None:
        self.task = task
        self.subtask = subtask
        logger.debug(f"{task}: {subtask}")

    def set_maximum(self, maximum: int) -> None:
        self.maximum = maximum
        self.on_update()

    def set_progress(self, progress: int) -> None:
        self.progress = progress
        self.on_update()

    def on_update(self) -> None:
        """Hook called whenever maximum or progress change."""
        pass

    def cancel(self) -> None:
        self._cancelled = True

    def check_cancelled(self) -> bool:
        """Return True if the computation should stop."""
        return self._cancelled

    def raise_if_cancelled(self) -> None:
        if self.check_cancelled():
            raise OperationCancelled(
                f"{self.task or 'Computation'} cancelled at {self.progress} of {self.maximum}"
            )


class NullProgressListener(ProgressListener):
    """Listener that never cancels and reports nothing."""

    def cancel(self) -> None:
        pass

"""
Bootstrap driver: resample the primary data, recompute a split system per
replicate and aggregate the replicates in a split matrix.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Optional

import numpy as np

from splitarchitect.bootstrap.analysis import (
    WeightMethod,
    compute_percentages,
    eval_confidences,
    get_confidence_intervals,
    get_confidence_network,
)
from splitarchitect.bootstrap.resampling import check_sample_length, make_rng, resample
from splitarchitect.bootstrap.split_matrix import SplitMatrix
from splitarchitect.elements.characters import Characters
from splitarchitect.elements.split_system import SplitSystem
from splitarchitect.exceptions import BootstrapConfigError, BootstrapError
from splitarchitect.logger import sa_logger
from splitarchitect.progress import NullProgressListener, ProgressListener

logger = logging.getLogger(__name__)

Recompute = Callable[[Characters], SplitSystem]
Simulate = Callable[[np.random.Generator], Characters]

DEFAULT_RUNS = 100
DEFAULT_LEVEL = 0.95
DEFAULT_NETWORK_CUTOFF = 0.01


@dataclass
class BootstrapConfig:
    """Configuration for a bootstrap run."""

    runs: int = DEFAULT_RUNS
    length: int = -1
    """Characters per replicate; -1 means the same as the original data."""
    seed: int = 0
    """Random seed; 0 draws fresh entropy, any other value is deterministic."""
    level: float = DEFAULT_LEVEL
    compute_intervals: bool = True
    compute_network: bool = False
    network_cutoff: float = DEFAULT_NETWORK_CUTOFF
    weight_method: WeightMethod = WeightMethod.FREQUENCY

    def __post_init__(self) -> None:
        if self.runs <= 0:
            raise BootstrapConfigError(f"runs must be positive, got {self.runs}")
        if self.length != -1 and self.length <= 0:
            raise BootstrapConfigError(
                f"length must be positive or -1 (same as original), got {self.length}"
            )
        if not 0.0 < self.level < 1.0:
            raise BootstrapConfigError(f"level must lie in (0, 1), got {self.level}")
        if not 0.0 <= self.network_cutoff <= 1.0:
            raise BootstrapConfigError(
                f"network_cutoff must lie in [0, 1], got {self.network_cutoff}"
            )
        try:
            self.weight_method = WeightMethod.parse(self.weight_method)
        except ValueError as e:
            raise BootstrapConfigError(str(e)) from e

    def sample_length(self, nchar: int) -> int:
        return nchar if self.length < 0 else self.length


@dataclass
class BootstrapResult:
    """Outcome of a bootstrap run."""

    splits: SplitSystem
    """Copy of the original splits with confidences and intervals set."""
    bootstrap_splits: SplitSystem
    """All splits seen in any replicate, weighted by percentage support."""
    split_matrix: SplitMatrix
    runs_requested: int
    runs_completed: int
    cancelled: bool = False
    out_of_memory: bool = False
    notice: Optional[str] = None
    confidence_network: Optional[SplitSystem] = field(default=None)

    @property
    def complete(self) -> bool:
        return self.runs_completed == self.runs_requested


class Bootstrap:
    """
    Runs bootstrap replicates through an external recompute function.

    ``recompute`` maps a replicate character matrix to its split system; it is
    where the surrounding analysis pipeline (distances, network method, ...)
    runs.
    """

    def __init__(
        self,
        config: BootstrapConfig,
        recompute: Recompute,
        progress: Optional[ProgressListener] = None,
    ):
        self.config = config
        self.recompute = recompute
        self.progress = progress if progress is not None else NullProgressListener()

    def run(self, characters: Characters, splits: SplitSystem) -> BootstrapResult:
        """
        Non-parametric bootstrap: resample columns (or loci) of ``characters``.

        Raises:
            BootstrapConfigError: If the settings do not fit the data
            BootstrapError: If a replicate fails with an unexpected error
        """
        if characters.ntax != splits.ntax:
            raise BootstrapConfigError(
                f"Characters have {characters.ntax} taxa but splits have {splits.ntax}"
            )
        source = characters.copy()
        length = self.config.sample_length(source.nchar)
        check_sample_length(source, length)

        def make_replicate(rng: np.random.Generator) -> Characters:
            return resample(source, length, rng)

        return self._run(make_replicate, splits, "Bootstrapping", f"length={length}")

    def run_parametric(self, simulate: Simulate, splits: SplitSystem) -> BootstrapResult:
        """
        Parametric bootstrap: every replicate is produced by ``simulate``, e.g.
        a substitution model evolved along a fixed reference tree.
        """
        return self._run(simulate, splits, "Parametric bootstrapping", "simulated")

    def _run(
        self, make_replicate: Simulate, splits: SplitSystem, task: str, detail: str
    ) -> BootstrapResult:
        config = self.config
        matrix = SplitMatrix(splits.ntax, splits)
        matrix.set_original(splits)
        rng = make_rng(config.seed)

        self.progress.set_tasks(task, f"runs={config.runs}, {detail}")
        self.progress.set_maximum(config.runs)
        self.progress.set_progress(0)
        sa_logger.section(task)
        sa_logger.info(f"runs={config.runs}, seed={config.seed}, {detail}")

        completed = 0
        cancelled = False
        out_of_memory = False
        notice = None
        for r in range(1, config.runs + 1):
            try:
                replicate = make_replicate(rng)
                matrix.add(self.recompute(replicate))
            except MemoryError:
                out_of_memory = True
                notice = f"Out of memory error: only {r - 1} bootstraps performed"
                logger.warning(notice)
                break
            except Exception as e:
                message = (
                    f"Bootstrapping failed in replicate {r} "
                    f"({r - 1} replicates completed): {e}"
                )
                logger.error(message)
                raise BootstrapError(message, replicates_completed=r - 1) from e
            completed = r
            self.progress.set_progress(r)
            if self.progress.check_cancelled():
                cancelled = True
                notice = f"Bootstrap cancelled after {r} replicates"
                logger.warning(notice)
                break

        return self._finalize(matrix, splits, completed, cancelled, out_of_memory, notice)

    def _finalize(
        self,
        matrix: SplitMatrix,
        splits: SplitSystem,
        completed: int,
        cancelled: bool,
        out_of_memory: bool,
        notice: Optional[str],
    ) -> BootstrapResult:
        config = self.config
        annotated = splits.copy()
        eval_confidences(matrix, annotated)
        if config.compute_intervals:
            get_confidence_intervals(matrix, annotated, config.level)

        bootstrap_splits = matrix.splits.copy()
        bootstrap_splits.name = "bootstrap_splits"
        eval_confidences(matrix, bootstrap_splits)
        compute_percentages(bootstrap_splits)

        network = None
        if config.compute_network:
            network = get_confidence_network(
                matrix,
                level=config.level,
                cutoff=config.network_cutoff,
                weight_method=config.weight_method,
            )

        sa_logger.result("Replicates", f"{completed} of {config.runs}")
        sa_logger.split_table(annotated, title="Original splits with bootstrap support")
        sa_logger.end_section()

        return BootstrapResult(
            splits=annotated,
            bootstrap_splits=bootstrap_splits,
            split_matrix=matrix,
            runs_requested=config.runs,
            runs_completed=completed,
            cancelled=cancelled,
            out_of_memory=out_of_memory,
            notice=notice,
            confidence_network=network,
        )


def bootstrap(
    characters: Characters,
    splits: SplitSystem,
    recompute: Recompute,
    runs: int = DEFAULT_RUNS,
    seed: int = 0,
    length: int = -1,
    level: float = DEFAULT_LEVEL,
    progress: Optional[ProgressListener] = None,
) -> BootstrapResult:
    """Convenience wrapper around :class:`Bootstrap`."""
    config = BootstrapConfig(runs=runs, seed=seed, length=length, level=level)
    return Bootstrap(config, recompute, progress).run(characters, splits)

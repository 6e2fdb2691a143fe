import os
import logging
from pathlib import Path

import pytest

from splitarchitect.elements import SplitSystem
from splitarchitect.logger import sa_logger


def _trace_dir() -> Path:
    return Path(os.path.dirname(os.path.dirname(__file__))) / "output" / "test_debug"


def pytest_configure(config):
    """Prepare the trace directory, console logging and the algorithm logger."""
    _trace_dir().mkdir(parents=True, exist_ok=True)

    # Configure logging
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    # Enable algorithm logger
    sa_logger.disabled = False


def pytest_sessionfinish(session, exitstatus):
    """Write the collected algorithm trace."""
    sa_logger.write_html(str(_trace_dir() / "splitarchitect_trace.html"))


@pytest.fixture
def box_splits():
    """Four splits on six taxa whose incompatibility graph is a 4-cycle."""
    return SplitSystem.from_sides(
        6, [((1, 2), 1.0), ((2, 3), 1.0), ((3, 4), 1.0), ((1, 4), 1.0)]
    )


@pytest.fixture
def quartet_splits():
    """The three pairwise incompatible quartet splits on four taxa."""
    return SplitSystem.from_sides(4, [((1, 2), 1.0), ((1, 3), 1.0), ((1, 4), 1.0)])

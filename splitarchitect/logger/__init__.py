"""Logging package for SplitArchitect."""

from splitarchitect.logger.base_logger import AlgorithmLogger
from splitarchitect.logger.table_logger import TableLogger
from splitarchitect.logger.combined_logger import Logger
from splitarchitect.logger.formatting import (
    format_set,
    format_split,
    format_interval,
    format_split_system,
)

# Unified singleton for algorithm tracing
sa_logger = Logger("SplitArchitect")
sa_logger.disabled = True

__all__ = [
    "AlgorithmLogger",
    "TableLogger",
    "Logger",
    "sa_logger",
    "format_set",
    "format_split",
    "format_interval",
    "format_split_system",
]

"""Logger used throughout the package."""

from typing import Any, Iterable, List

from splitarchitect.logger.formatting import format_interval, format_split
from splitarchitect.logger.table_logger import TableLogger


class Logger(TableLogger):
    """
    Trace logger of the bootstrap driver and the split filters.

    Usage:
        logger = Logger("bootstrap")
        logger.section("Bootstrapping")
        logger.info("runs=100")
        logger.split_table(split_system, title="Original splits")
        logger.write_html("trace.html")
    """

    def split_table(
        self, splits: Iterable[Any], title: str = "Splits", tablefmt: str = "grid"
    ) -> None:
        """Tabulate weight, confidence and interval of every split."""
        if self.disabled:
            return
        rows: List[List[Any]] = []
        for i, split in enumerate(splits, start=1):
            confidence = split.confidence
            rows.append(
                [
                    str(i),
                    format_split(split),
                    f"{split.weight:.6g}",
                    "-" if confidence is None else f"{confidence:.3f}",
                    format_interval(split.interval),
                    split.label or "",
                ]
            )
        self.table(
            rows,
            headers=["#", "split", "weight", "confidence", "interval", "label"],
            title=title,
            tablefmt=tablefmt,
        )

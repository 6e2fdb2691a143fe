"""Tables in the trace, rendered through ``tabulate``."""

from typing import Any, List, Optional, Sequence

from tabulate import tabulate

from splitarchitect.logger.base_logger import AlgorithmLogger


class TableLogger(AlgorithmLogger):
    """AlgorithmLogger that can also record tables."""

    def table(
        self,
        data: List[List[Any]],
        headers: Optional[Sequence[str]] = None,
        title: Optional[str] = None,
        tablefmt: str = "grid",
    ) -> None:
        """
        Log a table. The console gets ``tablefmt``; the HTML report always
        gets an HTML table. Cells are shown as given, without number parsing.
        """
        if self.disabled:
            return
        headers = list(headers) if headers is not None else []
        if title:
            self.logger.info(f"\n{title}:")
            self.raw_html(f"<h4>{title}</h4>")
        if tablefmt != "html":
            self.logger.info(
                tabulate(data, headers=headers, tablefmt=tablefmt, disable_numparse=True)
            )
        self.raw_html(
            tabulate(data, headers=headers, tablefmt="html", disable_numparse=True)
        )

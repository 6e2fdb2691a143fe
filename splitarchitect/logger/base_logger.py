"""Trace logger for bootstrap runs and split filters.

Every message goes to a standard :mod:`logging` logger and is also kept as a
trace entry, so the steps of a run can be rendered as an HTML report after
the fact.
"""

import html
import logging
from dataclasses import dataclass
from typing import Any, List, Optional

REPORT_CSS = """
body { font-family: monospace; }
section { margin-bottom: 1.5em; }
section h3 { border-bottom: 1px solid #ccc; }
.warning { color: #b8860b; }
.error { color: #d9534f; }
.result strong { color: #0072B2; }
table { border-collapse: collapse; }
td, th { border: 1px solid #ddd; padding: 2px 6px; }
"""


@dataclass
class TraceEntry:
    """One recorded step: ``kind`` is section, info, warning, error, debug, result or html."""

    kind: str
    text: str
    section: Optional[str] = None


class AlgorithmLogger:
    """Base logger for bootstrap and filter tracing."""

    def __init__(self, name: str):
        self.name = name
        self.disabled = False
        self.entries: List[TraceEntry] = []
        self.current_section: Optional[str] = None

        self.logger = logging.getLogger(name)
        # one handler per logger name, however many instances share it
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter("%(message)s"))
            self.logger.addHandler(handler)
            self.logger.setLevel(logging.INFO)
            self.logger.propagate = False

    def _record(self, kind: str, text: str, level: Optional[int]) -> None:
        if self.disabled:
            return
        if level is not None:
            self.logger.log(level, text)
        self.entries.append(TraceEntry(kind, text, self.current_section))

    def section(self, title: str) -> None:
        """Start a new section; an open section is closed implicitly."""
        if self.disabled:
            return
        self.current_section = title
        self._record("section", title, None)
        self.logger.info(f"\n{'=' * 20} {title} {'=' * 20}\n")

    def end_section(self) -> None:
        self.current_section = None

    def info(self, message: str) -> None:
        self._record("info", message, logging.INFO)

    def warning(self, message: str) -> None:
        self._record("warning", message, logging.WARNING)

    def error(self, message: str) -> None:
        self._record("error", message, logging.ERROR)

    def debug(self, message: str) -> None:
        self._record("debug", message, logging.DEBUG)

    def result(self, label: str, value: Any) -> None:
        """Record a labelled outcome, e.g. the number of splits removed."""
        self._record("result", f"{label}: {value}", logging.INFO)

    def raw_html(self, content: str) -> None:
        """Add pre-rendered HTML to the report only."""
        self._record("html", content, None)

    def clear(self) -> None:
        self.entries = []
        self.current_section = None

    def render_html(self) -> str:
        """Render the recorded entries, one ``<section>`` per section."""
        parts: List[str] = []
        in_section = False
        for entry in self.entries:
            if entry.kind == "section":
                if in_section:
                    parts.append("</section>")
                parts.append(f"<section><h3>{html.escape(entry.text)}</h3>")
                in_section = True
            elif entry.kind == "html":
                parts.append(entry.text)
            elif entry.kind == "result":
                label, _, value = entry.text.partition(": ")
                parts.append(
                    f'<div class="result"><strong>{html.escape(label)}:</strong> '
                    f"{html.escape(value)}</div>"
                )
            elif "\n" in entry.text:
                parts.append(f'<pre class="{entry.kind}">{html.escape(entry.text)}</pre>')
            else:
                parts.append(f'<p class="{entry.kind}">{html.escape(entry.text)}</p>')
        if in_section:
            parts.append("</section>")
        return "\n".join(parts)

    def write_html(self, path: str) -> None:
        """Write the trace as a standalone HTML page."""
        page = (
            f"<html><head><title>{html.escape(self.name)}</title>"
            f"<style>{REPORT_CSS}</style></head><body>\n"
            f"{self.render_html()}\n</body></html>"
        )
        with open(path, "w", encoding="utf-8") as handle:
            handle.write(page)

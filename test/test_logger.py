from splitarchitect.elements import Interval, SplitSystem
from splitarchitect.logger import (
    Logger,
    format_interval,
    format_set,
    format_split,
    format_split_system,
)


def test_formatting_helpers():
    splits = SplitSystem.from_sides(4, [((1, 2), 1.0), ((1, 3), 0.5)])
    assert format_set(set()) == "∅"
    assert format_set({3, 1}) == "{1, 3}"
    assert format_split(splits.get(1)) == "1, 2 | 3, 4"
    assert format_interval(None) == "-"
    assert format_interval(Interval(0.25, 1.5)) == "[0.25, 1.5]"
    assert format_split_system(splits) == "[1] 1, 2 | 3, 4\n[2] 1, 3 | 2, 4"


def test_split_table_goes_to_html_buffer(tmp_path):
    logger = Logger("test_split_table")
    splits = SplitSystem.from_sides(4, [((1, 2), 1.0)])
    splits.set_confidence(1, 0.9)
    splits.set_interval(1, Interval(0.5, 1.5))

    logger.section("Bootstrap")
    logger.split_table(splits, title="Support", tablefmt="html")
    logger.result("Replicates", 10)
    html = logger.render_html()
    assert "<h4>Support</h4>" in html
    assert "<table>" in html
    assert "0.900" in html
    assert "[0.5, 1.5]" in html
    assert "<strong>Replicates:</strong> 10" in html

    path = tmp_path / "trace.html"
    logger.write_html(str(path))
    assert "Replicates" in path.read_text(encoding="utf-8")


def test_disabled_logger_records_nothing():
    logger = Logger("test_disabled")
    logger.disabled = True
    logger.section("hidden")
    logger.info("hidden")
    logger.split_table(SplitSystem.from_sides(4, [((1, 2), 1.0)]))
    assert "hidden" not in logger.render_html()

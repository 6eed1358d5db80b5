"""
Console display tests.
"""

import io

from rich.console import Console

from config.constants import StatusStyles
from config.settings import Environment, Settings
from display.console import ConsoleDisplay, build_table, status_style
from monitoring.models import ProbeOutcome, URLStatus
from utils.logger import get_logger, setup_logging


def make_console():
    return Console(file=io.StringIO(), width=120, color_system=None)


def test_status_styles():
    assert status_style(URLStatus.waiting()) == StatusStyles.WAITING
    assert status_style(URLStatus.checking()) == StatusStyles.PENDING
    assert status_style(URLStatus.resolved(ProbeOutcome.success(200))) == StatusStyles.POSITIVE
    assert status_style(URLStatus.resolved(ProbeOutcome.timeout())) == StatusStyles.NEGATIVE
    assert status_style(URLStatus.resolved(ProbeOutcome.http_error(404))) == StatusStyles.NEGATIVE


def test_build_table_has_one_row_per_url():
    rows = [
        ("https://a.example", URLStatus.waiting()),
        ("https://a.example", URLStatus.checking()),
    ]
    table = build_table(rows, title="Sites")

    assert table.row_count == 2
    assert [column.header for column in table.columns] == ["#", "URL", "Status"]


def test_snapshot_lists_urls_and_statuses(store):
    store.reset(["https://good.example", "https://nohost.invalid"])
    store.set(0, URLStatus.resolved(ProbeOutcome.success(200)))
    store.set(1, URLStatus.resolved(ProbeOutcome.connection_error()))
    console = make_console()

    ConsoleDisplay(store, console=console, title="Sites").print_snapshot()
    output = console.file.getvalue()

    assert "https://good.example" in output
    assert "OK (200)" in output
    assert "Connection Error" in output
    assert "1 up · 1 down · 0 pending" in output


def test_display_follows_store_until_stopped(store):
    store.reset(["https://good.example"])
    display = ConsoleDisplay(store, console=make_console())

    with display:
        store.set(0, URLStatus.checking())
        seen = display._last_update
        assert seen is not None

    store.set(0, URLStatus.resolved(ProbeOutcome.success(200)))
    assert display._last_update == seen


def test_log_lines_print_through_the_live_console(store):
    setup_logging(Settings(environment=Environment.TESTING))
    store.reset(["https://good.example"])
    console = make_console()
    log = get_logger("DisplayTest")

    with ConsoleDisplay(store, console=console):
        log.warning("cycle finished [2 down]")
    log.warning("after the table")

    output = console.file.getvalue()
    assert "cycle finished [2 down]" in output
    assert "after the table" not in output


def test_display_without_logging_setup_still_starts(store):
    store.reset(["https://good.example"])
    display = ConsoleDisplay(store, console=make_console())

    display.start()
    display.stop()

    assert display._live is None

"""
Command-line tests.
"""

import asyncio
import time

import httpx
import pytest
from typer.testing import CliRunner

import main
from monitoring.prober import HTTPProber


runner = CliRunner()


def use_transport(monkeypatch, handler):
    """Route every probe made by the CLI through a MockTransport."""
    monkeypatch.setattr(
        main,
        "HTTPProber",
        lambda settings: HTTPProber(settings, transport=httpx.MockTransport(handler)),
    )


@pytest.fixture
def mock_network(monkeypatch):
    def handler(request):
        if request.url.host == "down.example":
            return httpx.Response(503)
        return httpx.Response(200)

    use_transport(monkeypatch, handler)


def write_urls(tmp_path, *urls):
    path = tmp_path / "urls.txt"
    path.write_text("".join(f"{url}\n" for url in urls), encoding="utf-8")
    return path


def test_missing_url_file_exits_before_monitoring(tmp_path):
    result = runner.invoke(main.app, ["--urls-file", str(tmp_path / "missing.txt")])

    assert result.exit_code == 1
    assert "URL list file not found" in result.output


def test_empty_url_file_exits_before_monitoring(tmp_path):
    path = tmp_path / "urls.txt"
    path.write_text("# nothing yet\n", encoding="utf-8")

    result = runner.invoke(main.app, ["--urls-file", str(path)])

    assert result.exit_code == 1
    assert "No URLs to monitor" in result.output


def test_out_of_range_option_is_a_configuration_error(tmp_path, mock_network):
    path = write_urls(tmp_path, "https://good.example")

    result = runner.invoke(main.app, ["-f", str(path), "--once", "--timeout", "500"])

    assert result.exit_code == 1
    assert "Invalid configuration" in result.output


def test_once_exits_zero_when_every_url_is_up(tmp_path, mock_network):
    path = write_urls(tmp_path, "https://good.example", "https://also-good.example")

    result = runner.invoke(main.app, ["--urls-file", str(path), "--once"])

    assert result.exit_code == 0
    assert "https://good.example" in result.output
    assert "OK (200)" in result.output


def test_once_exits_two_when_a_url_is_down(tmp_path, mock_network):
    path = write_urls(tmp_path, "https://good.example", "https://down.example")

    result = runner.invoke(main.app, ["-f", str(path), "--once", "--timeout", "1"])

    assert result.exit_code == 2
    assert "HTTP Error (503)" in result.output


def test_url_file_defaults_to_the_urls_file_setting(tmp_path, monkeypatch, mock_network):
    path = write_urls(tmp_path, "https://good.example")
    monkeypatch.setenv("URLS_FILE", str(path))

    result = runner.invoke(main.app, ["--once"])

    assert result.exit_code == 0
    assert "OK (200)" in result.output


def test_shutdown_request_ends_once_promptly(tmp_path, monkeypatch):
    requested = []

    async def never_answers(request):
        requested.append(request.url.host)
        await asyncio.sleep(30)
        return httpx.Response(200)

    use_transport(monkeypatch, never_answers)

    install = main._install_signal_handlers

    def install_and_interrupt(loop, application):
        install(loop, application)
        # stands in for Ctrl+C arriving while the first probe is in flight
        loop.call_later(0.3, application.request_shutdown)

    monkeypatch.setattr(main, "_install_signal_handlers", install_and_interrupt)
    path = write_urls(tmp_path, *(f"https://hang{i}.example" for i in range(5)))

    start = time.monotonic()
    result = runner.invoke(main.app, ["-f", str(path), "--once", "--timeout", "10"])
    elapsed = time.monotonic() - start

    assert elapsed < 3.0
    assert result.exit_code == 2
    assert requested == ["hang0.example"]

"""
Prober classification tests against an in-process httpx MockTransport.
"""

import asyncio
import time

import httpx
import pytest

from config.settings import MonitoringSettings
from monitoring.models import OutcomeKind, ProbeOutcome
from monitoring.prober import HTTPProber


def make_prober(handler, overhead=0.1, **settings):
    return HTTPProber(
        MonitoringSettings(**settings),
        transport=httpx.MockTransport(handler),
        overhead=overhead,
    )


def raising(exc_type, message="boom"):
    def handler(request):
        raise exc_type(message, request=request)
    return handler


async def test_response_below_400_is_success_with_code():
    prober = make_prober(lambda request: httpx.Response(200))
    assert await prober.probe("https://good.example") == ProbeOutcome.success(200)


async def test_probe_sends_head_request_without_body():
    seen = []

    def handler(request):
        seen.append((request.method, request.headers["user-agent"]))
        return httpx.Response(204)

    prober = make_prober(handler, user_agent="test-agent")
    outcome = await prober.probe("https://good.example/health")

    assert outcome == ProbeOutcome.success(204)
    assert seen == [("HEAD", "test-agent")]


async def test_unfollowed_redirect_counts_as_reachable():
    prober = make_prober(
        lambda request: httpx.Response(301, headers={"Location": "https://elsewhere.example"}),
        follow_redirects=False,
    )
    assert await prober.probe("https://moved.example") == ProbeOutcome.success(301)


async def test_redirects_are_followed_by_default():
    def handler(request):
        if request.url.host == "moved.example":
            return httpx.Response(301, headers={"Location": "https://gone.example/"})
        return httpx.Response(404)

    prober = make_prober(handler)

    assert prober.settings.follow_redirects is True
    assert await prober.probe("https://moved.example") == ProbeOutcome.http_error(404)


def test_default_timeout_comes_from_settings():
    assert HTTPProber(MonitoringSettings()).default_timeout == 3.0
    assert HTTPProber(MonitoringSettings(timeout=1.5)).default_timeout == 1.5


@pytest.mark.parametrize("code", [400, 404, 500, 503])
async def test_error_status_is_http_error(code):
    prober = make_prober(lambda request: httpx.Response(code))
    assert await prober.probe("https://broken.example") == ProbeOutcome.http_error(code)


@pytest.mark.parametrize("exc_type", [httpx.ConnectTimeout, httpx.ReadTimeout, httpx.PoolTimeout])
async def test_httpx_timeouts_are_timeout(exc_type):
    prober = make_prober(raising(exc_type, "timed out"))
    assert await prober.probe("https://slow.example") == ProbeOutcome.timeout()


async def test_endpoint_that_never_responds_is_exactly_timeout():
    async def handler(request):
        await asyncio.sleep(30)
        return httpx.Response(200)

    prober = make_prober(handler, overhead=0.1, timeout=0.2)
    start = time.perf_counter()
    outcome = await prober.probe("https://slow.example")
    elapsed = time.perf_counter() - start

    assert outcome.kind == OutcomeKind.TIMEOUT
    assert outcome == ProbeOutcome.timeout()
    assert elapsed < 1.0


async def test_explicit_timeout_overrides_default():
    async def handler(request):
        await asyncio.sleep(30)
        return httpx.Response(200)

    prober = make_prober(handler, overhead=0.05, timeout=60)
    start = time.perf_counter()
    assert await prober.probe("https://slow.example", timeout=0.1) == ProbeOutcome.timeout()
    assert time.perf_counter() - start < 1.0


@pytest.mark.parametrize("exc_type", [httpx.ConnectError, httpx.ReadError])
async def test_transport_failure_is_connection_error(exc_type):
    prober = make_prober(raising(exc_type, "[Errno -2] Name or service not known"))
    assert await prober.probe("https://nohost.invalid") == ProbeOutcome.connection_error()


async def test_protocol_error_is_other_error():
    prober = make_prober(raising(httpx.RemoteProtocolError, "Server disconnected"))
    outcome = await prober.probe("https://weird.example")

    assert outcome.kind == OutcomeKind.OTHER_ERROR
    assert "RemoteProtocolError" in outcome.message


async def test_unexpected_exception_is_other_error():
    def handler(request):
        raise RuntimeError("boom")

    prober = make_prober(handler)
    outcome = await prober.probe("https://good.example")

    assert outcome == ProbeOutcome.other_error("RuntimeError: boom")


@pytest.mark.parametrize("url", ["not a url", "ftp://files.example/x", "http://", ""])
async def test_unusable_url_is_other_error_without_request(url):
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200)

    prober = make_prober(handler)
    outcome = await prober.probe(url)

    assert outcome.kind == OutcomeKind.OTHER_ERROR
    assert outcome.message
    assert calls == []


async def test_other_error_message_is_short():
    def handler(request):
        raise ValueError("x" * 1000)

    prober = make_prober(handler)
    outcome = await prober.probe("https://good.example")

    assert outcome.kind == OutcomeKind.OTHER_ERROR
    assert len(outcome.message) <= 200

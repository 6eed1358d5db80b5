"""
============================================================================
URL STATUS MONITOR - PROBER
============================================================================
Issues one lightweight reachability probe (HEAD by default) against a
single URL and classifies what happened.

Classification, first match wins
--------------------------------
1.  response received, status below 400     → SUCCESS(code)
2.  response received, status 4xx / 5xx     → HTTP_ERROR(code)
3.  any httpx timeout, or the hard bound    → TIMEOUT
4.  network failure without a response      → CONNECTION_ERROR
    (DNS failure, refused connection, TLS failure, reset)
5.  anything else, including unusable URLs  → OTHER_ERROR(message)

``probe()`` never raises; every failure path ends in a ProbeOutcome.
Task cancellation is the only exception that propagates.

Version: 1.0.0
License: MIT
============================================================================
"""

import asyncio
import time
from typing import Optional

import httpx

from config.constants import Defaults
from config.settings import MonitoringSettings, get_settings
from monitoring.models import ProbeOutcome
from utils.logger import get_logger


logger = get_logger("Prober")


def _short(error: BaseException) -> str:
    """One-line diagnostic for OTHER_ERROR outcomes."""
    text = str(error).strip() or type(error).__name__
    return f"{type(error).__name__}: {text}"[:Defaults.MAX_MESSAGE_LENGTH]


class HTTPProber:
    """
    Performs reachability probes using an httpx async client.

    Features
    --------
    • Header-only request (HEAD) so no response body is downloaded
    • Per-probe timeout plus a hard outer bound of timeout + overhead
    • Deterministic mapping of every httpx failure to one outcome kind
    • Optional transport injection (e.g. ``httpx.MockTransport``)
    """

    def __init__(
        self,
        settings: Optional[MonitoringSettings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        overhead: float = Defaults.PROBE_OVERHEAD,
    ):
        self.settings = settings or get_settings().monitoring
        self.default_timeout = self.settings.timeout
        self.method = self.settings.http_method.value
        self.overhead = overhead
        self._transport = transport

    # ------------------------------------------------------------------
    # PUBLIC API
    # ------------------------------------------------------------------

    async def probe(self, url: str, timeout: Optional[float] = None) -> ProbeOutcome:
        """
        Probe *url* once and classify the result.

        Parameters
        ----------
        url : str
            The monitored URL, exactly as listed.
        timeout : float | None
            Seconds before the probe counts as TIMEOUT. Defaults to
            the configured ``MONITOR_TIMEOUT``.

        Returns
        -------
        ProbeOutcome
        """
        timeout = self.default_timeout if timeout is None else timeout

        invalid = self._check_url(url)
        if invalid is not None:
            logger.debug(f"[PROBE] {url!r} → {invalid.describe()}")
            return invalid

        start_time = time.perf_counter()
        try:
            outcome = await asyncio.wait_for(
                self._request(url, timeout),
                timeout=timeout + self.overhead,
            )
        except asyncio.TimeoutError:
            # the transport ignored its own timeout; the hard bound fired
            outcome = ProbeOutcome.timeout()

        elapsed = time.perf_counter() - start_time
        if outcome.is_success:
            logger.debug(f"[PROBE] {url} → {outcome.describe()} in {elapsed:.3f}s")
        else:
            logger.info(f"[PROBE] {url} → {outcome.describe()} after {elapsed:.3f}s")
        return outcome

    # ------------------------------------------------------------------
    # INTERNALS
    # ------------------------------------------------------------------

    @staticmethod
    def _check_url(url: str) -> Optional[ProbeOutcome]:
        """Return OTHER_ERROR for URLs that cannot be requested at all."""
        try:
            parsed = httpx.URL(url)
        except (httpx.InvalidURL, TypeError) as e:
            return ProbeOutcome.other_error(f"Invalid URL: {_short(e)}")
        if parsed.scheme not in ("http", "https"):
            return ProbeOutcome.other_error(f"Unsupported URL scheme: {parsed.scheme or 'none'}")
        if not parsed.host:
            return ProbeOutcome.other_error("Invalid URL: missing host")
        return None

    async def _request(self, url: str, timeout: float) -> ProbeOutcome:
        try:
            async with httpx.AsyncClient(
                timeout=httpx.Timeout(timeout),
                follow_redirects=self.settings.follow_redirects,
                verify=self.settings.verify_ssl,
                headers={"User-Agent": self.settings.user_agent},
                transport=self._transport,
            ) as client:
                response = await client.request(self.method, url)

            if response.is_error:
                return ProbeOutcome.http_error(response.status_code)
            return ProbeOutcome.success(response.status_code)

        except httpx.TimeoutException:
            return ProbeOutcome.timeout()
        except (httpx.InvalidURL, httpx.UnsupportedProtocol) as e:
            return ProbeOutcome.other_error(_short(e))
        except httpx.NetworkError:
            # ConnectError covers DNS, refused and TLS handshake failures
            return ProbeOutcome.connection_error()
        except Exception as e:
            return ProbeOutcome.other_error(_short(e))

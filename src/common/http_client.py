"""Shared HTTP transport used by the registry probes.

Encapsulates request/timeout/retry handling behind a small client object so
callers receive either a response (any status) or a ``TransportError``.
The client is passed explicitly to every component that performs I/O.
"""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled, safe_url, Timer

logger = logging.getLogger(__name__)


class TransportError(Exception):
    """Raised when a request could not produce an HTTP response.

    Also used for server-side failures (5xx) once classified by a caller.
    """

    def __init__(self, url: str, reason: str, status_code: Optional[int] = None):
        super().__init__(f"{safe_url(url)}: {reason}")
        self.url = url
        self.reason = reason
        self.status_code = status_code


@dataclass(frozen=True)
class HttpResponse:
    """Status and decoded body of a completed request."""
    status_code: int
    text: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class HttpClient:
    """GET-only HTTP client with timeout and retry handling."""

    def __init__(
        self,
        *,
        context: str = Constants.HOST_TYPE,
        timeout: Optional[float] = None,
        retries: Optional[int] = None,
        session: Optional[requests.Session] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        """Initialize the client.

        Args:
            context: Human-readable source tag for logs (e.g., "sbt").
            timeout: Request timeout in seconds; defaults to Constants.REQUEST_TIMEOUT.
            retries: Attempts per request on connection errors and timeouts.
            session: Optional pre-configured requests session (pooling, auth).
            headers: Extra headers sent with every request.
        """
        self.context = context
        self.timeout = timeout if timeout is not None else Constants.REQUEST_TIMEOUT
        self.retries = max(1, retries if retries is not None else Constants.HTTP_RETRY_MAX)
        self._session = session or requests.Session()
        self._headers = {
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            "User-Agent": Constants.USER_AGENT,
        }
        if headers:
            self._headers.update(headers)

    def close(self) -> None:
        """Release pooled connections."""
        self._session.close()

    def __enter__(self) -> "HttpClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def get(self, url: str) -> HttpResponse:
        """Perform a GET request, retrying transient network failures.

        Returns:
            HttpResponse for any received status code.

        Raises:
            TransportError: when no response could be obtained.
        """
        safe_target = safe_url(url)
        last_error = "unknown error"
        for attempt in range(self.retries):
            with Timer() as t:
                if is_debug_enabled(logger):
                    logger.debug(
                        "HTTP request",
                        extra=extra_context(
                            event="http_request",
                            component="http_client",
                            action="GET",
                            target=safe_target,
                            attempt=attempt + 1,
                            context=self.context,
                        )
                    )
                try:
                    res = self._session.get(url, timeout=self.timeout, headers=self._headers)
                except requests.Timeout:
                    last_error = f"timed out after {self.timeout} seconds"
                    outcome = "timeout"
                except requests.RequestException as exc:  # includes ConnectionError
                    last_error = f"connection error: {exc}"
                    outcome = "request_exception"
                else:
                    if is_debug_enabled(logger):
                        logger.debug(
                            "HTTP response",
                            extra=extra_context(
                                event="http_response",
                                component="http_client",
                                action="GET",
                                outcome="success" if res.ok else "non_2xx",
                                status_code=res.status_code,
                                duration_ms=t.duration_ms(),
                                target=safe_target,
                                context=self.context,
                            )
                        )
                    return HttpResponse(status_code=res.status_code, text=res.text)

            if is_debug_enabled(logger):
                logger.debug(
                    "HTTP exception",
                    extra=extra_context(
                        event="http_exception",
                        component="http_client",
                        action="GET",
                        outcome=outcome,
                        attempt=attempt + 1,
                        target=safe_target,
                        context=self.context,
                    )
                )
            if attempt + 1 < self.retries:
                time.sleep(Constants.HTTP_RETRY_BASE_DELAY_SEC * (2 ** attempt))

        logger.warning("%s request failed for %s: %s", self.context, safe_target, last_error)
        raise TransportError(url, last_error)

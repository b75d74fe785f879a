"""HttpLoader: fetch YAML input over HTTP(S).

Responses are streamed and capped at ``max_bytes`` (10 MB by default),
requests time out after ``timeout`` seconds (30 by default), and any non-2xx
status is an error.

Transport failures and retryable statuses (429 and 5xx) are retried with
jittered exponential backoff via ``tenacity``.  The retry decorator is built
in ``__init__`` so each loader carries its own attempt and backoff settings.
Once retries are exhausted the last failure surfaces as ``LoadError``.

Example::

    loader = SourceLoader()
    loader.load("deploy.yaml")                         # local file
    loader.load("https://example.com/deploy.yaml")     # HTTP fetch
"""

from __future__ import annotations

from typing import Any

import httpx
from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_random_exponential,
)

from yaml_semantic_diff.errors import LoadError
from yaml_semantic_diff.loaders.local import FileLoader
from yaml_semantic_diff.observability import get_logger

__all__ = ["DEFAULT_TIMEOUT", "MAX_RESPONSE_SIZE", "HttpLoader", "SourceLoader", "is_remote_source"]

log = get_logger("loaders.remote")

MAX_RESPONSE_SIZE = 10 * 1024 * 1024
DEFAULT_TIMEOUT = 30.0


def is_remote_source(source: str) -> bool:
    """Return True for ``http://`` and ``https://`` sources."""
    return source.startswith(("http://", "https://"))


class _RetryableStatus(Exception):
    """Raised internally for statuses worth another attempt."""

    def __init__(self, status_code: int) -> None:
        self.status_code = status_code
        super().__init__(f"HTTP {status_code}")


class HttpLoader:
    """Loads a URL into bytes with a size cap, timeout and retries.

    Args:
        timeout: Per-request timeout in seconds.
        max_bytes: Largest accepted response body.
        max_attempts: Total attempts for retryable failures (>= 1).
        backoff: Multiplier for the jittered exponential wait between
            attempts, in seconds.  ``0`` retries immediately.
        transport: Optional ``httpx`` transport, e.g. ``httpx.MockTransport``.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        max_bytes: int = MAX_RESPONSE_SIZE,
        max_attempts: int = 3,
        backoff: float = 1.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        if max_attempts < 1:
            msg = f"max_attempts must be >= 1, got {max_attempts}"
            raise ValueError(msg)
        self._timeout = timeout
        self._max_bytes = max_bytes
        self._transport = transport

        _retry = retry(
            retry=retry_if_exception_type((httpx.TransportError, _RetryableStatus)),
            wait=wait_random_exponential(multiplier=backoff, max=30),
            stop=stop_after_attempt(max_attempts),
            before_sleep=self._log_retry,
            reraise=True,
        )
        self._fetch = _retry(self._fetch_once)

    def __repr__(self) -> str:
        return f"HttpLoader(timeout={self._timeout!r}, max_bytes={self._max_bytes!r})"

    def load(self, source: str) -> bytes:
        try:
            data: bytes = self._fetch(source)
        except _RetryableStatus as exc:
            raise LoadError(source, f"HTTP {exc.status_code}") from exc
        except httpx.TimeoutException as exc:
            raise LoadError(source, "request timed out") from exc
        except httpx.HTTPError as exc:
            raise LoadError(source, str(exc) or type(exc).__name__) from exc
        return data

    def _fetch_once(self, url: str) -> bytes:
        with (
            httpx.Client(
                timeout=self._timeout,
                transport=self._transport,
                follow_redirects=True,
            ) as client,
            client.stream("GET", url) as response,
        ):
            status = response.status_code
            if status == 429 or status >= 500:
                raise _RetryableStatus(status)
            if not response.is_success:
                raise LoadError(url, f"HTTP {status}")
            chunks: list[bytes] = []
            size = 0
            for chunk in response.iter_bytes():
                size += len(chunk)
                if size > self._max_bytes:
                    raise LoadError(url, f"response exceeds {self._max_bytes} byte limit")
                chunks.append(chunk)
        return b"".join(chunks)

    @staticmethod
    def _log_retry(retry_state: RetryCallState) -> None:
        outcome: Any = retry_state.outcome
        log.warning(
            "fetch_retry",
            url=retry_state.args[0] if retry_state.args else None,
            attempt=retry_state.attempt_number,
            error=str(outcome.exception()) if outcome is not None else None,
        )


class SourceLoader:
    """Dispatches URLs to ``HttpLoader`` and everything else to ``FileLoader``."""

    def __init__(
        self,
        file_loader: FileLoader | None = None,
        http_loader: HttpLoader | None = None,
    ) -> None:
        self._file_loader = file_loader or FileLoader()
        self._http_loader = http_loader or HttpLoader()

    def load(self, source: str) -> bytes:
        if is_remote_source(source):
            return self._http_loader.load(source)
        return self._file_loader.load(source)

# statusbot/ingestion/http.py
"""
HTTP access for the FAA feed and reference data downloads.

Uses httpx for requests and tenacity for retrying transient failures
(timeouts and 5xx responses) with exponential backoff. 4xx responses fail
on the first attempt.
"""

from typing import Any, Dict, Optional

import httpx
from tenacity import (
    Retrying,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

DEFAULT_TIMEOUT = 10.0

DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_WAIT_MIN = 1
DEFAULT_WAIT_MAX = 10


class HttpClientError(Exception):
    """A download could not be completed."""
    pass


class HttpTimeoutError(HttpClientError):
    """Every attempt timed out."""
    pass


class HttpStatusError(HttpClientError):
    """The server answered the last attempt with an error status."""
    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        super().__init__(f"HTTP {status_code}: {message}")


def is_transient(error: BaseException) -> bool:
    """Timeouts and server-side errors are worth another attempt."""
    if isinstance(error, httpx.TimeoutException):
        return True
    if isinstance(error, httpx.HTTPStatusError):
        return error.response.status_code >= 500
    return False


def _request_once(
    url: str,
    method: str,
    params: Optional[Dict[str, Any]],
    headers: Optional[Dict[str, str]],
    timeout: float,
) -> httpx.Response:
    # Exceptions must escape so tenacity can retry them.
    with httpx.Client(timeout=timeout, follow_redirects=True) as client:
        response = client.request(method=method, url=url, params=params, headers=headers)
        response.raise_for_status()
        return response


def fetch_with_retry(
    url: str,
    method: str = "GET",
    params: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None,
    timeout: float = DEFAULT_TIMEOUT,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> httpx.Response:
    """
    Fetch URL, retrying transient failures.

    Args:
        url: URL to fetch
        method: HTTP method
        params: Query parameters
        headers: HTTP headers
        timeout: Per-attempt timeout in seconds
        max_attempts: Attempts before giving up

    Returns:
        httpx.Response

    Raises:
        HttpTimeoutError: Every attempt timed out
        HttpStatusError: Last attempt returned an error status
        HttpClientError: Any other transport failure
    """
    retrying = Retrying(
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential(multiplier=1, min=DEFAULT_WAIT_MIN, max=DEFAULT_WAIT_MAX),
        retry=retry_if_exception(is_transient),
        reraise=True,
    )
    try:
        return retrying(_request_once, url, method, params, headers, timeout)
    except httpx.TimeoutException as e:
        raise HttpTimeoutError(f"{url} timed out ({max_attempts} attempts): {e}")
    except httpx.HTTPStatusError as e:
        raise HttpStatusError(e.response.status_code, f"{method} {url} failed: {e}")
    except httpx.HTTPError as e:
        raise HttpClientError(f"{method} {url} failed: {e}")


class HttpClient:
    """
    Base URL, timeout and default headers shared by a series of downloads.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
        headers: Optional[Dict[str, str]] = None,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ):
        self.base_url = base_url or ""
        self.timeout = timeout
        self.headers = headers or {}
        self.max_attempts = max_attempts

    def url_for(self, path: str) -> str:
        return f"{self.base_url}{path}" if self.base_url else path

    def get(
        self,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> httpx.Response:
        """GET with retry; path is appended to base_url."""
        return fetch_with_retry(
            url=self.url_for(path),
            params=params,
            headers={**self.headers, **(headers or {})},
            timeout=self.timeout,
            max_attempts=self.max_attempts,
        )

    def get_text(self, path: str, params: Optional[Dict[str, Any]] = None) -> str:
        """GET returning the response body as text."""
        return self.get(path, params).text

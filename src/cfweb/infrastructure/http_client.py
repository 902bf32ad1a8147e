"""Synchronous HTTP transport built on curl_cffi.

curl_cffi reproduces a real browser TLS fingerprint, which the anti-bot
layer in front of the site checks alongside the clearance cookie.
Every body read is capped so an oversized or hostile response cannot
exhaust memory.
"""

from dataclasses import dataclass, field
from http.cookiejar import CookieJar
from typing import Any, Iterable, Mapping, Optional

from curl_cffi import CurlError
from curl_cffi import requests as cf_requests
from loguru import logger

from cfweb.domain.exceptions import FetchError

DEFAULT_TIMEOUT = 30.0
MAX_PAGE_SIZE = 5 * 1024 * 1024
CHUNK_SIZE = 64 * 1024

REDIRECT_CODES = frozenset({301, 302, 303, 307, 308})


@dataclass(frozen=True)
class Page:
    """A fetched response with its body already decoded."""

    url: str
    status_code: int
    text: str
    headers: Mapping[str, str] = field(default_factory=dict)
    truncated: bool = False

    @property
    def is_redirect(self) -> bool:
        return self.status_code in REDIRECT_CODES

    @property
    def location(self) -> str:
        return self.headers.get("location", "")


def read_capped(chunks: Iterable[bytes], limit: int = MAX_PAGE_SIZE) -> tuple[bytes, bool]:
    """
    Collect chunks until ``limit`` bytes have been read.

    Returns:
        The body (at most ``limit`` bytes) and whether it was cut short.
    """
    buffer = bytearray()
    for chunk in chunks:
        if not chunk:
            continue
        remaining = limit - len(buffer)
        if len(chunk) > remaining:
            buffer.extend(chunk[:remaining])
            # Anything beyond the cap is never buffered.
            return bytes(buffer), True
        buffer.extend(chunk)
    return bytes(buffer), False


class HTTPClient:
    """Blocking HTTP client impersonating a desktop Chrome browser."""

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        max_page_size: int = MAX_PAGE_SIZE,
        impersonate: str = "chrome",
    ):
        """
        Initialize client.

        Args:
            timeout: Per-request timeout in seconds
            max_page_size: Maximum number of body bytes kept per response
            impersonate: curl_cffi browser fingerprint to use
        """
        self.timeout = timeout
        self.max_page_size = max_page_size
        self._session = cf_requests.Session(impersonate=impersonate)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    @property
    def cookies(self) -> CookieJar:
        return self._session.cookies.jar

    def get(
        self,
        url: str,
        headers: Optional[Mapping[str, str]] = None,
        allow_redirects: bool = True,
    ) -> Page:
        return self._request("GET", url, headers=headers, allow_redirects=allow_redirects)

    def post_form(
        self,
        url: str,
        data: Mapping[str, str],
        headers: Optional[Mapping[str, str]] = None,
        allow_redirects: bool = False,
    ) -> Page:
        return self._request(
            "POST", url, headers=headers, data=dict(data), allow_redirects=allow_redirects
        )

    def close(self) -> None:
        self._session.close()

    def _request(self, method: str, url: str, **kwargs: Any) -> Page:
        logger.debug(f"{method} {url}")
        try:
            response = self._session.request(
                method, url, timeout=self.timeout, stream=True, **kwargs
            )
        except CurlError as e:
            logger.warning(f"{method} {url} failed: {e}")
            raise FetchError(url, str(e)) from e

        try:
            body, truncated = read_capped(
                response.iter_content(chunk_size=CHUNK_SIZE), self.max_page_size
            )
        except CurlError as e:
            logger.warning(f"Reading body of {url} failed: {e}")
            raise FetchError(url, str(e)) from e
        finally:
            response.close()

        if truncated:
            logger.warning(f"Response from {url} exceeded {self.max_page_size} bytes, truncated")

        return Page(
            url=str(response.url),
            status_code=response.status_code,
            text=body.decode("utf-8", errors="replace"),
            headers={k.lower(): v for k, v in response.headers.items()},
            truncated=truncated,
        )

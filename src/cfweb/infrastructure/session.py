"""Cookie-based Codeforces session.

There is no login flow: the user copies cookies out of a browser that has
passed the anti-bot challenge and is logged in. The clearance cookie is
only honoured together with the exact User-Agent that obtained it, so the
two are stored as one value and always replaced together.

A session is not safe for concurrent use. One workflow (CSRF refresh,
problem parse, submit/poll) should own it at a time; independent sessions
share nothing and can run in parallel.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from http.cookiejar import Cookie
from typing import Callable, Mapping, Optional

from curl_cffi import CurlError
from loguru import logger

from cfweb.domain.exceptions import (
    CredentialsMissingError,
    ErrorCategory,
    NotAuthenticatedError,
    SessionInitError,
    TokenNotFoundError,
    ValidationFailedError,
)

from .extractors import extract_csrf_token, mask_secret
from .http_client import DEFAULT_TIMEOUT, MAX_PAGE_SIZE, HTTPClient, Page

BASE_URL = "https://codeforces.com"
DOMAIN = "codeforces.com"
USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)
SESSION_EXPIRY = timedelta(hours=24)
IDENTITY_COOKIE_TTL = timedelta(days=365)

BYPASS_COOKIE = "cf_clearance"
JSESSIONID_COOKIE = "JSESSIONID"
CE7_COOKIE = "39ce7"
IDENTITY_COOKIES = frozenset({JSESSIONID_COOKIE, CE7_COOKIE})

CHALLENGE_MARKERS = ("Attention Required", "Just a moment...", "cf-chl-")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _make_cookie(
    name: str,
    value: str,
    domain: str,
    expires: Optional[datetime] = None,
    secure: bool = False,
) -> Cookie:
    return Cookie(
        version=0,
        name=name,
        value=value,
        port=None,
        port_specified=False,
        domain=domain,
        domain_specified=True,
        domain_initial_dot=domain.startswith("."),
        path="/",
        path_specified=True,
        secure=secure,
        expires=int(expires.timestamp()) if expires else None,
        discard=expires is None,
        comment=None,
        comment_url=None,
        rest={"HttpOnly": ""},
        rfc2109=False,
    )


def is_challenge_page(page: Page) -> bool:
    if page.status_code not in (403, 503):
        return False
    return any(marker in page.text for marker in CHALLENGE_MARKERS)


def _is_site_cookie(cookie: Cookie) -> bool:
    domain = cookie.domain.lstrip(".")
    return domain == DOMAIN or domain.endswith("." + DOMAIN)


@dataclass(frozen=True)
class BypassToken:
    """Anti-bot clearance cookie with the User-Agent it is bound to."""

    value: str
    user_agent: str
    expires_at: datetime


class CodeforcesSession:
    """Authenticated browsing context shared by the parser and submitter."""

    def __init__(
        self,
        http_client: HTTPClient,
        user_agent: Optional[str] = None,
        clock: Callable[[], datetime] = _utcnow,
    ):
        """
        Initialize session.

        Args:
            http_client: Transport whose cookie jar holds the site cookies
            user_agent: User-Agent to send until a bypass token pins one
            clock: Returns the current time; replaceable in tests
        """
        self.http_client = http_client
        self._default_user_agent = user_agent or USER_AGENT
        self._clock = clock
        self._bypass: Optional[BypassToken] = None
        self._handle = ""
        self._csrf_token = ""
        self._expires_at: Optional[datetime] = None

    @classmethod
    def create(
        cls,
        user_agent: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
        max_page_size: int = MAX_PAGE_SIZE,
    ) -> "CodeforcesSession":
        """Build a session with a fresh cookie store."""
        try:
            http_client = HTTPClient(timeout=timeout, max_page_size=max_page_size)
        except (CurlError, OSError) as e:
            logger.error(f"Failed to create HTTP client: {e}")
            raise SessionInitError(f"create cookie store: {e}") from e
        return cls(http_client, user_agent=user_agent)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self) -> None:
        self.http_client.close()

    # Credentials

    def set_bypass_cookie(self, token: str, user_agent: str, expires_at: datetime) -> None:
        """
        Install the clearance cookie and pin the User-Agent it belongs to.

        Raises:
            CredentialsMissingError: If the token or User-Agent is empty
        """
        missing = [
            name
            for name, value in (("cf_clearance", token), ("user_agent", user_agent))
            if not value
        ]
        if missing:
            raise CredentialsMissingError(missing)

        bypass = BypassToken(value=token, user_agent=user_agent, expires_at=_as_utc(expires_at))
        self.http_client.cookies.set_cookie(
            _make_cookie(
                BYPASS_COOKIE, token, "." + DOMAIN, expires=bypass.expires_at, secure=True
            )
        )
        self._bypass = bypass
        logger.debug(
            f"Installed {BYPASS_COOKIE}={mask_secret(token)} "
            f"valid until {bypass.expires_at.isoformat()}"
        )

    def set_identity_cookies(self, jsessionid: str, ce7: str, handle: str) -> None:
        """Install whichever identity cookies are non-empty and record the handle."""
        jar = self.http_client.cookies
        if jsessionid:
            jar.set_cookie(_make_cookie(JSESSIONID_COOKIE, jsessionid, DOMAIN))
        if ce7:
            jar.set_cookie(
                _make_cookie(
                    CE7_COOKIE, ce7, "." + DOMAIN, expires=self._clock() + IDENTITY_COOKIE_TTL
                )
            )

        self._handle = handle
        self._expires_at = self._clock() + SESSION_EXPIRY
        logger.debug(
            f"Identity cookies set for handle '{handle}' "
            f"(JSESSIONID={mask_secret(jsessionid)}, 39ce7={mask_secret(ce7)})"
        )

    def set_full_auth(
        self,
        cf_clearance: str,
        user_agent: str,
        clearance_expires_at: datetime,
        jsessionid: str,
        ce7: str,
        handle: str,
    ) -> None:
        """Set clearance and identity cookies in one step."""
        self.set_bypass_cookie(cf_clearance, user_agent, clearance_expires_at)
        self.set_identity_cookies(jsessionid, ce7, handle)

    # Predicates

    def is_bypass_valid(self) -> bool:
        if self._bypass is None or not self._bypass.value:
            return False
        return self._clock() < self._bypass.expires_at

    def has_identity_cookies(self) -> bool:
        """Check the cookie jar itself, so expired or removed cookies are noticed."""
        now = self._clock().timestamp()
        for cookie in self.http_client.cookies:
            if cookie.name in IDENTITY_COOKIES and _is_site_cookie(cookie):
                if not cookie.is_expired(now):
                    return True
        return False

    def is_authenticated(self) -> bool:
        return self.is_bypass_valid() and self.has_identity_cookies()

    def is_ready_for_submission(self) -> bool:
        return self.is_authenticated() and self._handle != ""

    # Accessors

    @property
    def handle(self) -> str:
        return self._handle

    @property
    def csrf_token(self) -> str:
        return self._csrf_token

    @property
    def user_agent(self) -> str:
        if self._bypass is not None:
            return self._bypass.user_agent
        return self._default_user_agent

    @property
    def bypass_token(self) -> Optional[BypassToken]:
        return self._bypass

    @property
    def expires_at(self) -> Optional[datetime]:
        return self._expires_at

    @property
    def bypass_expires_at(self) -> Optional[datetime]:
        if self._bypass is None:
            return None
        return self._bypass.expires_at

    def bypass_expires_in(self) -> timedelta:
        if self._bypass is None:
            return timedelta(0)
        return self._bypass.expires_at - self._clock()

    def remember_csrf_token(self, token: str) -> None:
        if token:
            self._csrf_token = token

    # Transport

    def fetch(self, url: str) -> Page:
        """
        GET a page with the pinned User-Agent and browser-like headers.

        Raises:
            FetchError: On network failure or timeout
            NotAuthenticatedError: If the anti-bot challenge page is served
        """
        page = self.http_client.get(
            url,
            headers={
                "User-Agent": self.user_agent,
                "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
                "Accept-Language": "en-US,en;q=0.5",
            },
        )
        if is_challenge_page(page):
            logger.warning(f"Anti-bot challenge served for {url}")
            raise NotAuthenticatedError(
                "Cloudflare challenge served - cf_clearance or its User-Agent was rejected"
            )
        return page

    def post_form(self, url: str, data: Mapping[str, str], referer: str = "") -> Page:
        """POST a form without following redirects."""
        return self.http_client.post_form(
            url,
            data,
            headers={
                "User-Agent": self.user_agent,
                "Referer": referer or url,
                "Origin": BASE_URL,
            },
        )

    # Live checks

    def refresh_csrf_token(self) -> str:
        """
        Fetch the homepage and cache its CSRF token.

        Raises:
            FetchError: If the homepage cannot be fetched
            TokenNotFoundError: If no token pattern matches
        """
        page = self.fetch(BASE_URL)
        token = extract_csrf_token(page.text)
        if not token:
            raise TokenNotFoundError(f"CSRF token not found on {page.url}")

        self._csrf_token = token
        logger.debug("CSRF token refreshed")
        return token

    def validate(self) -> None:
        """
        Confirm the cookies still belong to a logged-in user.

        Raises:
            NotAuthenticatedError: If clearance has lapsed or no handle is set
            ValidationFailedError: If the handle does not appear on the homepage
            FetchError: If the homepage cannot be fetched
        """
        if not self.is_bypass_valid():
            raise NotAuthenticatedError("cf_clearance expired or not set")
        if not self._handle:
            raise NotAuthenticatedError("handle not set", category=ErrorCategory.CONFIGURATION)

        page = self.fetch(BASE_URL)
        if self._handle not in page.text:
            logger.warning(f"Handle '{self._handle}' not found on homepage")
            raise ValidationFailedError("session invalid - handle not found on page")

        token = extract_csrf_token(page.text)
        if token:
            self._csrf_token = token

        logger.info(f"Session validated for '{self._handle}'")

"""Credentials and runtime settings loaded from the environment.

Values come from process environment variables, falling back to a dotenv
file (``~/.cfweb.env`` unless ``CFWEB_ENV_FILE`` points elsewhere).
Variables already set in the environment win over the file.
"""

import os
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from loguru import logger

from cfweb.infrastructure.http_client import DEFAULT_TIMEOUT, MAX_PAGE_SIZE
from cfweb.infrastructure.submitter import POLL_INTERVAL

DEFAULT_ENV_FILE = Path.home() / ".cfweb.env"


@dataclass(frozen=True)
class CookieAuthTokens:
    """Cookies and handle copied from a logged-in browser."""

    cf_clearance: str = ""
    user_agent: str = ""
    clearance_expires_at: Optional[datetime] = None
    jsessionid: str = ""
    ce7: str = ""
    handle: str = ""

    def missing(self) -> list[str]:
        """Names of required values that are empty.

        Only one of the two identity cookies is needed.
        """
        missing = []
        if not self.cf_clearance:
            missing.append("CF_CLEARANCE")
        if not self.user_agent:
            missing.append("CF_CLEARANCE_UA")
        if self.clearance_expires_at is None:
            missing.append("CF_CLEARANCE_EXPIRES")
        if not self.jsessionid and not self.ce7:
            missing.append("CF_JSESSIONID or CF_39CE7")
        if not self.handle:
            missing.append("CF_HANDLE")
        return missing


@dataclass(frozen=True)
class Settings:
    timeout: float = DEFAULT_TIMEOUT
    max_page_size: int = MAX_PAGE_SIZE
    poll_interval: float = POLL_INTERVAL


def load_env_file(path: Optional[str] = None) -> None:
    """Load the dotenv file into ``os.environ`` without overriding existing keys."""
    env_file = Path(path or os.getenv("CFWEB_ENV_FILE") or DEFAULT_ENV_FILE).expanduser()
    if env_file.exists():
        load_dotenv(env_file, override=False)
        logger.debug(f"Loaded settings from {env_file}")


def _parse_expiry(raw: str) -> Optional[datetime]:
    if not raw:
        return None
    try:
        return datetime.fromtimestamp(int(raw), tz=timezone.utc)
    except ValueError:
        logger.warning(f"Ignoring CF_CLEARANCE_EXPIRES={raw!r}: not unix seconds")
        return None


def _number(name: str, default, cast):
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return cast(raw)
    except ValueError:
        logger.warning(f"Ignoring {name}={raw!r}: expected a number")
        return default


def load_cookie_auth_tokens(env_file: Optional[str] = None) -> CookieAuthTokens:
    load_env_file(env_file)
    return CookieAuthTokens(
        cf_clearance=os.getenv("CF_CLEARANCE", ""),
        user_agent=os.getenv("CF_CLEARANCE_UA", ""),
        clearance_expires_at=_parse_expiry(os.getenv("CF_CLEARANCE_EXPIRES", "")),
        jsessionid=os.getenv("CF_JSESSIONID", ""),
        ce7=os.getenv("CF_39CE7", ""),
        handle=os.getenv("CF_HANDLE", ""),
    )


def load_settings(env_file: Optional[str] = None) -> Settings:
    load_env_file(env_file)
    return Settings(
        timeout=_number("CFWEB_TIMEOUT", DEFAULT_TIMEOUT, float),
        max_page_size=_number("CFWEB_MAX_PAGE_SIZE", MAX_PAGE_SIZE, int),
        poll_interval=_number("CFWEB_POLL_INTERVAL", POLL_INTERVAL, float),
    )

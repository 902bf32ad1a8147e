"""Shared fixtures: a fake transport with a real cookie jar and a settable clock."""

from datetime import datetime, timedelta, timezone
from http.cookiejar import CookieJar
from unittest.mock import MagicMock

import pytest

from cfweb.infrastructure.session import CodeforcesSession

NOW = datetime(2025, 1, 15, 12, 0, tzinfo=timezone.utc)

TEST_UA = "Mozilla/5.0 (X11; Linux x86_64) TestBrowser/1.0"


class FakeClock:
    def __init__(self, now: datetime = NOW):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now += delta


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def http_client() -> MagicMock:
    client = MagicMock()
    client.cookies = CookieJar()
    return client


@pytest.fixture
def session(http_client, clock) -> CodeforcesSession:
    return CodeforcesSession(http_client, clock=clock)


@pytest.fixture
def ready_session(session, clock) -> CodeforcesSession:
    session.set_full_auth(
        cf_clearance="clearance-token-0123456789",
        user_agent=TEST_UA,
        clearance_expires_at=clock() + timedelta(hours=1),
        jsessionid="JSESSION0123456789",
        ce7="ce7cookie0123456789",
        handle="tourist",
    )
    return session

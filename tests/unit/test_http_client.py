"""Unit tests for the capped HTTP transport."""

from unittest.mock import MagicMock, patch

import pytest
from curl_cffi import CurlError

from cfweb.domain.exceptions import FetchError
from cfweb.infrastructure.http_client import HTTPClient, Page, read_capped


def test_read_capped_under_limit():
    body, truncated = read_capped([b"abc", b"", b"def"], limit=10)

    assert body == b"abcdef"
    assert not truncated


def test_read_capped_exactly_at_limit_is_not_truncated():
    body, truncated = read_capped([b"ab", b"cd"], limit=4)

    assert body == b"abcd"
    assert not truncated


def test_read_capped_stops_at_limit():
    consumed = []

    def chunks():
        for chunk in (b"aaaa", b"bbbb", b"cccc", b"dddd"):
            consumed.append(chunk)
            yield chunk

    body, truncated = read_capped(chunks(), limit=6)

    assert body == b"aaaabb"
    assert truncated
    assert len(consumed) == 2


def test_page_redirect_helpers():
    page = Page(
        url="https://codeforces.com/contest/1/submit",
        status_code=302,
        text="",
        headers={"location": "https://codeforces.com/contest/1/my"},
    )

    assert page.is_redirect
    assert page.location == "https://codeforces.com/contest/1/my"
    assert not Page(url="u", status_code=200, text="").is_redirect
    assert Page(url="u", status_code=200, text="").location == ""


def _response(chunks, status_code=200, url="https://codeforces.com/", headers=None):
    response = MagicMock()
    response.iter_content.return_value = iter(chunks)
    response.status_code = status_code
    response.url = url
    response.headers = headers or {"Content-Type": "text/html"}
    return response


@patch("cfweb.infrastructure.http_client.cf_requests.Session")
def test_get_decodes_and_lowercases_headers(session_cls):
    session_cls.return_value.request.return_value = _response(
        ["Привет".encode("utf-8")], headers={"Location": "/x"}
    )

    page = HTTPClient().get("https://codeforces.com/")

    assert page.text == "Привет"
    assert page.headers == {"location": "/x"}
    assert not page.truncated
    session_cls.assert_called_once_with(impersonate="chrome")
    _, kwargs = session_cls.return_value.request.call_args
    assert kwargs["stream"] is True
    assert kwargs["timeout"] == 30.0


@patch("cfweb.infrastructure.http_client.cf_requests.Session")
def test_oversized_body_is_truncated(session_cls):
    response = _response([b"x" * 8, b"y" * 8])
    session_cls.return_value.request.return_value = response

    page = HTTPClient(max_page_size=10).get("https://codeforces.com/")

    assert page.truncated
    assert page.text == "x" * 8 + "y" * 2
    response.close.assert_called_once()


@patch("cfweb.infrastructure.http_client.cf_requests.Session")
def test_transport_errors_become_fetch_errors(session_cls):
    session_cls.return_value.request.side_effect = CurlError("connection reset")

    with pytest.raises(FetchError) as exc_info:
        HTTPClient().get("https://codeforces.com/")

    assert exc_info.value.url == "https://codeforces.com/"
    assert isinstance(exc_info.value.__cause__, CurlError)


@patch("cfweb.infrastructure.http_client.cf_requests.Session")
def test_post_form_does_not_follow_redirects(session_cls):
    session_cls.return_value.request.return_value = _response([], status_code=302)

    page = HTTPClient().post_form("https://codeforces.com/contest/1/submit", {"a": "b"})

    assert page.status_code == 302
    args, kwargs = session_cls.return_value.request.call_args
    assert args == ("POST", "https://codeforces.com/contest/1/submit")
    assert kwargs["data"] == {"a": "b"}
    assert kwargs["allow_redirects"] is False

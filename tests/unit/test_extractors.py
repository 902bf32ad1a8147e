"""Unit tests for CSRF token and hidden field extraction."""

import pytest

from cfweb.infrastructure.extractors import extract_csrf_token, extract_hidden_input, mask_secret


@pytest.mark.parametrize(
    "html, expected",
    [
        ('<input type="hidden" name="csrf_token" value="abc123def456"/>', "abc123def456"),
        ('<input type="hidden" value="xyz789" name="csrf_token"/>', "xyz789"),
        ('<meta name="X-Csrf-Token" content="meta-token-42"/>', "meta-token-42"),
        ('<script>Codeforces.getCsrfToken = function() { return "js-token-7"; }</script>', "js-token-7"),
        ("<html><body>No token here</body></html>", ""),
        ("", ""),
    ],
)
def test_extract_csrf_token(html, expected):
    assert extract_csrf_token(html) == expected


def test_input_token_wins_over_meta():
    html = (
        '<meta name="X-Csrf-Token" content="from-meta"/>'
        '<input type="hidden" name="csrf_token" value="from-input"/>'
    )

    assert extract_csrf_token(html) == "from-input"


@pytest.mark.parametrize(
    "html",
    [
        '<input type="hidden" name="ftaa" value="n8w7pa6c2q"/>',
        '<input type="hidden" value="n8w7pa6c2q" name="ftaa"/>',
    ],
)
def test_extract_hidden_input_either_attribute_order(html):
    assert extract_hidden_input(html, "ftaa") == "n8w7pa6c2q"


def test_extract_hidden_input_picks_named_field():
    html = (
        '<input type="hidden" name="csrf_token" value="tok"/>'
        '<input type="hidden" name="bfaa" value="f1b3f18c715565b589b7823cda7448ce"/>'
    )

    assert extract_hidden_input(html, "bfaa") == "f1b3f18c715565b589b7823cda7448ce"
    assert extract_hidden_input(html, "ftaa") == ""


@pytest.mark.parametrize(
    "value, expected",
    [
        ("", "<unset>"),
        ("short", "*****"),
        ("abcdefghijklmnopqrstuvwxyz", "abcdef...uvwxyz"),
    ],
)
def test_mask_secret(value, expected):
    assert mask_secret(value) == expected

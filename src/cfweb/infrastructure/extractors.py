"""Regex extraction of anti-forgery tokens and hidden form fields.

The site has alternated attribute order and delivery mechanism for its
CSRF token across deployments, so several patterns are tried in a fixed
order and the first match wins.
"""

import re

_CSRF_PATTERNS = (
    re.compile(r'<input[^>]+name="csrf_token"[^>]+value="([^"]+)"'),
    re.compile(r'<input[^>]+value="([^"]+)"[^>]+name="csrf_token"'),
    re.compile(r'<meta[^>]+name="X-Csrf-Token"[^>]+content="([^"]+)"'),
    re.compile(r'Codeforces\.getCsrfToken[^"]*"([^"]+)"'),
)

_HIDDEN_NAME_FIRST = re.compile(r'<input[^>]+name="([^"]+)"[^>]+value="([^"]*)"')
_HIDDEN_VALUE_FIRST = re.compile(r'<input[^>]+value="([^"]*)"[^>]+name="([^"]+)"')


def extract_csrf_token(html: str) -> str:
    """Return the page's CSRF token, or an empty string if none is found."""
    for pattern in _CSRF_PATTERNS:
        match = pattern.search(html)
        if match:
            return match.group(1)
    return ""


def extract_hidden_input(html: str, name: str) -> str:
    """Return the value of the input called ``name``, or an empty string."""
    for field_name, value in _HIDDEN_NAME_FIRST.findall(html):
        if field_name == name:
            return value

    for value, field_name in _HIDDEN_VALUE_FIRST.findall(html):
        if field_name == name:
            return value

    return ""


def mask_secret(value: str, keep: int = 6) -> str:
    """Shorten a cookie value for log output."""
    if not value:
        return "<unset>"
    if len(value) <= keep * 2:
        return "*" * len(value)
    return f"{value[:keep]}...{value[-keep:]}"

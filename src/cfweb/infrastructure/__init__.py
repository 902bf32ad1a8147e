"""Infrastructure layer: transport, session, selectors, parsers and submitter."""

from .http_client import HTTPClient, Page
from .languages import SUPPORTED_LANGUAGES
from .selectors import SelectorSet, current_selectors, selector_version
from .session import BypassToken, CodeforcesSession
from .submitter import Submitter

__all__ = [
    "BypassToken",
    "CodeforcesSession",
    "HTTPClient",
    "Page",
    "SUPPORTED_LANGUAGES",
    "SelectorSet",
    "Submitter",
    "current_selectors",
    "selector_version",
]

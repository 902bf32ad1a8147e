"""Exception hierarchy for the Codeforces web layer.

Every error carries a category so callers can decide between retrying,
aborting and asking the user for fresh cookies without string matching.
"""

from enum import Enum
from typing import Optional


class ErrorCategory(str, Enum):
    """Broad classification of what went wrong."""

    CONFIGURATION = "configuration"
    EXPIRY = "expiry"
    EXTRACTION_MISMATCH = "extraction_mismatch"
    UPSTREAM_REJECTION = "upstream_rejection"
    TRANSIENT = "transient"
    TIMEOUT = "timeout"


class RecoveryAction(str, Enum):
    """What a caller is expected to do about an error."""

    USER_PROMPT = "prompt"
    MANUAL_FIX = "manual"
    ABORT = "abort"
    RETRY = "retry"


_RECOVERY = {
    ErrorCategory.CONFIGURATION: RecoveryAction.USER_PROMPT,
    ErrorCategory.EXPIRY: RecoveryAction.USER_PROMPT,
    ErrorCategory.EXTRACTION_MISMATCH: RecoveryAction.MANUAL_FIX,
    ErrorCategory.UPSTREAM_REJECTION: RecoveryAction.ABORT,
    ErrorCategory.TRANSIENT: RecoveryAction.RETRY,
    ErrorCategory.TIMEOUT: RecoveryAction.RETRY,
}


class CodeforcesWebError(Exception):
    """Base class for all errors raised by cfweb."""

    category: ErrorCategory = ErrorCategory.TRANSIENT
    suggestion: str = ""

    def __init__(self, message: str = "", *, category: Optional[ErrorCategory] = None):
        super().__init__(message)
        if category is not None:
            self.category = category

    @property
    def recovery(self) -> RecoveryAction:
        return _RECOVERY[self.category]

    @property
    def retryable(self) -> bool:
        return self.recovery is RecoveryAction.RETRY


# Session and credentials


class SessionInitError(CodeforcesWebError):
    """The HTTP transport or cookie store could not be constructed."""

    category = ErrorCategory.CONFIGURATION


class CredentialsMissingError(CodeforcesWebError):
    """Required cookies were not supplied."""

    category = ErrorCategory.CONFIGURATION
    suggestion = "Extract cf_clearance, its User-Agent and JSESSIONID/39ce7 from your browser"

    def __init__(self, missing: list[str]):
        self.missing = list(missing)
        super().__init__(f"Missing credentials: {', '.join(self.missing)}")


class NotAuthenticatedError(CodeforcesWebError):
    """The session lacks a valid bypass token or a handle."""

    category = ErrorCategory.EXPIRY
    suggestion = "Re-extract cookies from a logged-in browser session"


class ValidationFailedError(CodeforcesWebError):
    """The homepage did not show the claimed handle."""

    category = ErrorCategory.EXPIRY
    suggestion = "Identity cookies are stale or belong to another account"


class TokenNotFoundError(CodeforcesWebError):
    """No CSRF token pattern matched the fetched page."""

    category = ErrorCategory.EXTRACTION_MISMATCH


class NotReadyError(CodeforcesWebError):
    """The session cannot be used for submission yet."""

    category = ErrorCategory.CONFIGURATION
    suggestion = "Set cf_clearance, session cookies and handle before submitting"


# Fetching and parsing


class FetchError(CodeforcesWebError):
    """Network failure or timeout while talking to the site."""

    category = ErrorCategory.TRANSIENT

    def __init__(self, url: str, reason: str = ""):
        self.url = url
        message = f"Failed to fetch {url}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class NotFoundError(CodeforcesWebError):
    """The requested page or record does not exist."""

    category = ErrorCategory.UPSTREAM_REJECTION


class ParsingError(CodeforcesWebError, ValueError):
    """Error parsing HTML content."""

    category = ErrorCategory.EXTRACTION_MISMATCH
    suggestion = "The site markup probably changed; the selector set needs an update"


class ExtractionError(ParsingError):
    """A required selector matched nothing."""

    def __init__(self, field: str, url: str = "", *, truncated: bool = False):
        self.field = field
        self.url = url
        self.truncated = truncated
        message = f"Could not extract '{field}'"
        if url:
            message = f"{message} from {url}"
        if truncated:
            message = f"{message} (page exceeded the size cap and was truncated)"
        super().__init__(message)


class URLParsingError(ParsingError):
    """Invalid URL format or unable to parse URL."""

    category = ErrorCategory.CONFIGURATION


# Submission


class CSRFNotFoundError(TokenNotFoundError):
    """The submit page did not carry a CSRF token."""


class SubmissionRejectedError(CodeforcesWebError):
    """The judge explicitly refused the submission."""

    category = ErrorCategory.UPSTREAM_REJECTION
    marker: str = ""


class DuplicateSubmissionError(SubmissionRejectedError):
    marker = "You have submitted exactly the same code before"


class SourceTooLongError(SubmissionRejectedError):
    marker = "Source code is too long"


class NotAllowedError(SubmissionRejectedError):
    marker = "You are not allowed to submit"


class ContestOverError(SubmissionRejectedError):
    marker = "Contest is over"


class SubmissionFailedError(CodeforcesWebError):
    """The submit POST produced neither a redirect nor a known rejection."""

    category = ErrorCategory.TRANSIENT

    def __init__(self, status_code: int, detail: str = ""):
        self.status_code = status_code
        message = f"Submission failed (status {status_code})"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class VerdictTimeoutError(CodeforcesWebError):
    """Verdict polling exceeded its time budget."""

    category = ErrorCategory.TIMEOUT


class PollCancelledError(CodeforcesWebError):
    """Verdict polling was cancelled by the caller."""

    category = ErrorCategory.TIMEOUT


class MissingElementsError(CodeforcesWebError):
    """The submit page lacks form elements the submitter relies on."""

    category = ErrorCategory.EXTRACTION_MISMATCH

    def __init__(self, missing: list[str]):
        self.missing = list(missing)
        super().__init__(f"Submit page missing elements: {', '.join(self.missing)}")


class UnsupportedLanguageError(CodeforcesWebError):
    """No registered language matches the requested id, extension or compiler ID."""

    category = ErrorCategory.CONFIGURATION

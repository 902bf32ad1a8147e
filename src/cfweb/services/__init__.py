from typing import Optional

from loguru import logger

from cfweb.config import CookieAuthTokens, Settings, load_cookie_auth_tokens, load_settings
from cfweb.domain.exceptions import CredentialsMissingError
from cfweb.infrastructure.session import CodeforcesSession
from cfweb.services.problem import ProblemService
from cfweb.services.submission import SubmissionService, resolve_language


def create_session(
    tokens: Optional[CookieAuthTokens] = None,
    settings: Optional[Settings] = None,
) -> CodeforcesSession:
    """
    Factory function to create an authenticated session.

    Tokens and settings are read from the environment when not given.

    Raises:
        CredentialsMissingError: If a required cookie or the handle is absent
        SessionInitError: If the transport cannot be constructed
    """
    tokens = tokens or load_cookie_auth_tokens()
    settings = settings or load_settings()

    missing = tokens.missing()
    if missing:
        raise CredentialsMissingError(missing)

    session = CodeforcesSession.create(
        user_agent=tokens.user_agent,
        timeout=settings.timeout,
        max_page_size=settings.max_page_size,
    )
    session.set_full_auth(
        cf_clearance=tokens.cf_clearance,
        user_agent=tokens.user_agent,
        clearance_expires_at=tokens.clearance_expires_at,
        jsessionid=tokens.jsessionid,
        ce7=tokens.ce7,
        handle=tokens.handle,
    )
    logger.info(f"Session created for '{tokens.handle}'")
    return session


def create_problem_service(session: CodeforcesSession) -> ProblemService:
    """Factory function to create problem service with all dependencies."""
    from cfweb.infrastructure.parsers import ContestPageParser, ProblemPageParser, URLParser

    return ProblemService(
        parser=ProblemPageParser(session),
        contest_parser=ContestPageParser(session),
        url_parser=URLParser,
    )


def create_submission_service(
    session: CodeforcesSession,
    settings: Optional[Settings] = None,
) -> SubmissionService:
    """
    Factory function to create submission service.

    Raises:
        NotReadyError: If the session cannot submit
    """
    from cfweb.infrastructure.submitter import Submitter

    settings = settings or load_settings()
    return SubmissionService(Submitter(session, poll_interval=settings.poll_interval))


__all__ = [
    "ProblemService",
    "SubmissionService",
    "create_problem_service",
    "create_session",
    "create_submission_service",
    "resolve_language",
]

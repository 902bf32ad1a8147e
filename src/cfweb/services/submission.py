"""Service for submitting solutions and waiting for their verdicts."""

import threading
from datetime import timedelta
from typing import Optional, Union

from loguru import logger

from cfweb.domain.exceptions import UnsupportedLanguageError
from cfweb.domain.models import Language, SubmissionResult
from cfweb.infrastructure.languages import (
    get_language_by_compiler_id,
    get_language_by_extension,
    get_language_by_id,
)
from cfweb.infrastructure.submitter import Submitter

DEFAULT_VERDICT_TIMEOUT = timedelta(minutes=5)


def resolve_language(language: Union[Language, int, str]) -> Language:
    """
    Find a registered language.

    Accepts a ``Language``, a judge compiler ID (int or digit string),
    a file extension such as ".cpp" or a short id such as "cpp17".

    Raises:
        UnsupportedLanguageError: If nothing matches
    """
    if isinstance(language, Language):
        return language

    found = None
    if isinstance(language, int) or language.isdigit():
        found = get_language_by_compiler_id(int(language))
    elif language.startswith("."):
        found = get_language_by_extension(language)
    else:
        found = get_language_by_id(language)

    if found is None:
        raise UnsupportedLanguageError(f"Unsupported language: {language}")
    return found


class SubmissionService:
    """Submits a solution and polls it to a final verdict."""

    def __init__(self, submitter: Submitter):
        self.submitter = submitter

    def submit_and_wait(
        self,
        contest_id: int,
        index: str,
        language: Union[Language, int, str],
        source: str,
        timeout: Union[float, timedelta] = DEFAULT_VERDICT_TIMEOUT,
        cancel: Optional[threading.Event] = None,
        is_gym: bool = False,
    ) -> SubmissionResult:
        """
        Submit ``source`` and block until it is judged.

        Raises:
            UnsupportedLanguageError: If ``language`` is not registered
            VerdictTimeoutError: If judging takes longer than ``timeout``
            PollCancelledError: If ``cancel`` is set while waiting
        """
        lang = resolve_language(language)
        logger.info(f"Submitting {contest_id}{index} as {lang.name}")

        if is_gym:
            submitted = self.submitter.submit_to_gym(contest_id, index, lang.compiler_id, source)
        else:
            submitted = self.submitter.submit(contest_id, index, lang.compiler_id, source)

        if submitted.is_final:
            return submitted

        return self.submitter.wait_for_verdict(
            submitted.submission_id,
            contest_id,
            timeout,
            cancel=cancel,
            is_gym=is_gym,
        )

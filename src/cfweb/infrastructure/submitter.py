"""Solution submission and verdict polling over the web interface.

The flow mirrors what a browser does: load the submit page for its CSRF
token and anti-automation fields, post the form, follow the redirect to
"my submissions" and read the newest row. Verdicts are then polled from
the submission page.
"""

import threading
import time
from datetime import datetime, timedelta, timezone
from typing import Optional, Union

from bs4 import BeautifulSoup, Tag
from loguru import logger

from cfweb.domain.exceptions import (
    ContestOverError,
    CSRFNotFoundError,
    DuplicateSubmissionError,
    MissingElementsError,
    NotAllowedError,
    NotFoundError,
    NotReadyError,
    ParsingError,
    PollCancelledError,
    SourceTooLongError,
    SubmissionFailedError,
    VerdictTimeoutError,
)
from cfweb.domain.models import SubmissionResult, SubmissionStatus, Verdict
from cfweb.domain.verdicts import (
    infer_status,
    normalize_verdict,
    parse_memory_bytes,
    parse_passed_tests,
    parse_time_ms,
)

from .extractors import extract_csrf_token, extract_hidden_input
from .http_client import Page
from .parsers.problem_page_parser import clean_html, extract_problem_index
from .parsers.url_parser import URLParser
from .selectors import SelectorSet, current_selectors
from .session import CodeforcesSession

POLL_INTERVAL = 2.0
TAB_SIZE = "4"
SUBMIT_ACTION = "submitSolutionFormSubmitted"
WAITING_CLASS = "verdict-waiting"

# Checked in this order against a non-redirect response.
REJECTIONS = (
    DuplicateSubmissionError,
    SourceTooLongError,
    NotAllowedError,
    ContestOverError,
)


def build_submit_form(
    csrf_token: str,
    problem_index: str,
    language_id: Union[int, str],
    source_code: str,
    ftaa: str = "",
    bfaa: str = "",
) -> dict[str, str]:
    """Form fields for the submit POST. Absent hidden fields are left out."""
    form = {
        "csrf_token": csrf_token,
        "action": SUBMIT_ACTION,
        "submittedProblemIndex": problem_index,
        "programTypeId": str(language_id),
        "source": source_code,
        "tabSize": TAB_SIZE,
    }
    if ftaa:
        form["ftaa"] = ftaa
    if bfaa:
        form["bfaa"] = bfaa
    return form


def classify_rejection(page: Page) -> Exception:
    """Map a failed submit response to the matching error."""
    for error_cls in REJECTIONS:
        if error_cls.marker in page.text:
            return error_cls(error_cls.marker)

    detail = f"redirected to {page.location}" if page.is_redirect else ""
    return SubmissionFailedError(page.status_code, detail)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _is_waiting(verdict: Optional[Tag]) -> bool:
    return verdict is not None and WAITING_CLASS in verdict.get("class", [])


def _snapshot(
    submission_id: int,
    contest_id: int,
    problem_index: str,
    judging_text: str,
    time_ms: int = 0,
    memory_bytes: int = 0,
    waiting: bool = False,
) -> SubmissionResult:
    status = infer_status(judging_text)
    if waiting and status is SubmissionStatus.JUDGED:
        status = SubmissionStatus.RUNNING
    verdict = normalize_verdict(judging_text)
    passed = 0
    if status is SubmissionStatus.JUDGED and verdict != Verdict.OK:
        passed = parse_passed_tests(judging_text)

    return SubmissionResult(
        submission_id=submission_id,
        contest_id=contest_id,
        problem_index=problem_index,
        verdict=verdict,
        status=status,
        submitted_at=_now(),
        time_ms=time_ms,
        memory_bytes=memory_bytes,
        passed_tests=passed,
    )


class Submitter:
    """Submits solutions through an authenticated session."""

    def __init__(
        self,
        session: CodeforcesSession,
        selectors: Optional[SelectorSet] = None,
        poll_interval: float = POLL_INTERVAL,
    ):
        """
        Initialize submitter.

        Args:
            session: Session with clearance, identity cookies and handle set
            selectors: Selector set to extract with, defaults to the current one
            poll_interval: Seconds between verdict polls

        Raises:
            NotReadyError: If the session cannot submit
        """
        if not session.is_ready_for_submission():
            raise NotReadyError(
                "session not ready for submission - need cf_clearance + session cookies + handle"
            )
        self.session = session
        self.selectors = selectors or current_selectors()
        self.poll_interval = poll_interval

    def submit(
        self,
        contest_id: int,
        problem_index: str,
        language_id: Union[int, str],
        source_code: str,
    ) -> SubmissionResult:
        """
        Submit a solution to a contest problem.

        Raises:
            CSRFNotFoundError: If the submit page has no CSRF token
            DuplicateSubmissionError, SourceTooLongError, NotAllowedError,
            ContestOverError: If the judge rejects the submission
            SubmissionFailedError: For any other unsuccessful response
            FetchError: On network failure
        """
        return self._submit(contest_id, problem_index, language_id, source_code, is_gym=False)

    def submit_to_gym(
        self,
        gym_id: int,
        problem_index: str,
        language_id: Union[int, str],
        source_code: str,
    ) -> SubmissionResult:
        """Submit a solution to a gym problem. Same errors as ``submit``."""
        return self._submit(gym_id, problem_index, language_id, source_code, is_gym=True)

    def _submit(
        self,
        contest_id: int,
        problem_index: str,
        language_id: Union[int, str],
        source_code: str,
        is_gym: bool,
    ) -> SubmissionResult:
        submit_url = URLParser.build_submit_url(contest_id, is_gym=is_gym)
        logger.info(f"Submitting {contest_id}{problem_index} (language {language_id})")

        page = self.session.fetch(submit_url)
        csrf_token = extract_csrf_token(page.text)
        if not csrf_token:
            raise CSRFNotFoundError(f"csrf token not found on {submit_url}")
        self.session.remember_csrf_token(csrf_token)

        form = build_submit_form(
            csrf_token,
            problem_index,
            language_id,
            source_code,
            ftaa=extract_hidden_input(page.text, "ftaa"),
            bfaa=extract_hidden_input(page.text, "bfaa"),
        )

        response = self.session.post_form(submit_url, form, referer=submit_url)
        location = response.location
        if response.is_redirect and ("/my" in location or "/status" in location):
            logger.debug(f"Submission accepted for judging, redirected to {location}")
            return self.get_latest_submission(contest_id, problem_index, is_gym=is_gym)

        error = classify_rejection(response)
        logger.warning(f"Submission to {contest_id}{problem_index} rejected: {error}")
        raise error

    def get_latest_submission(
        self,
        contest_id: int,
        problem_index: str = "",
        is_gym: bool = False,
    ) -> SubmissionResult:
        """
        Read the newest row of the "my submissions" table.

        Raises:
            NotFoundError: If the table has no submission rows
        """
        url = URLParser.build_my_submissions_url(contest_id, is_gym=is_gym)
        page = self.session.fetch(url)
        soup = BeautifulSoup(page.text, "lxml")

        row = soup.select_one(self.selectors.status.submission_row)
        if row is None:
            raise NotFoundError(f"no submissions found on {url}")

        return self.parse_submission_row(row, contest_id, problem_index)

    def parse_submission_row(
        self,
        row: Tag,
        contest_id: int,
        problem_index: str = "",
    ) -> SubmissionResult:
        sel = self.selectors.status

        raw_id = row.get("data-submission-id", "")
        try:
            submission_id = int(raw_id)
        except ValueError as e:
            raise ParsingError(f"invalid submission ID: {raw_id!r}") from e

        link = row.select_one(sel.problem_link)
        if link is not None:
            problem_index = extract_problem_index(link.get("href", "")) or problem_index

        judging_text = ""
        verdict = None
        status_cell = row.select_one(sel.status_cell)
        if status_cell is not None:
            verdict = status_cell.select_one(sel.verdict)
            judging_text = clean_html((verdict or status_cell).get_text())

        time_cell = row.select_one(sel.time_cell)
        memory_cell = row.select_one(sel.memory_cell)

        return _snapshot(
            submission_id,
            contest_id,
            problem_index,
            judging_text,
            time_ms=parse_time_ms(time_cell.get_text()) if time_cell else 0,
            memory_bytes=parse_memory_bytes(memory_cell.get_text()) if memory_cell else 0,
            waiting=_is_waiting(verdict),
        )

    def get_submission(
        self,
        submission_id: int,
        contest_id: int,
        is_gym: bool = False,
    ) -> SubmissionResult:
        """
        Fetch the current state of one submission.

        Raises:
            FetchError: On network failure
            NotFoundError: If the submission page does not exist
        """
        url = URLParser.build_submission_url(contest_id, submission_id, is_gym=is_gym)
        page = self.session.fetch(url)
        if page.status_code == 404:
            raise NotFoundError(f"submission {submission_id} not found")

        sel = self.selectors.status
        soup = BeautifulSoup(page.text, "lxml")

        verdict = soup.select_one(sel.detail_verdict)
        judging_text = clean_html(verdict.get_text()) if verdict else ""

        # Column order of the info table is not stable, so cells are
        # recognised by their units.
        problem_index = ""
        time_ms = 0
        memory_bytes = 0
        for cell in soup.select(sel.detail_cells):
            text = clean_html(cell.get_text())
            time_ms = parse_time_ms(text) or time_ms
            memory_bytes = parse_memory_bytes(text) or memory_bytes
            if not problem_index:
                link = cell.select_one(sel.problem_link)
                if link is not None:
                    problem_index = extract_problem_index(link.get("href", ""))

        return _snapshot(
            submission_id,
            contest_id,
            problem_index,
            judging_text,
            time_ms=time_ms,
            memory_bytes=memory_bytes,
            waiting=_is_waiting(verdict),
        )

    def wait_for_verdict(
        self,
        submission_id: int,
        contest_id: int,
        timeout: Union[float, timedelta],
        cancel: Optional[threading.Event] = None,
        is_gym: bool = False,
    ) -> SubmissionResult:
        """
        Poll a submission until it is judged.

        Args:
            submission_id: Submission to watch
            contest_id: Contest the submission belongs to
            timeout: Total time budget, in seconds or as a timedelta
            cancel: Optional event; setting it stops the wait early

        Raises:
            VerdictTimeoutError: If judging did not finish in time
            PollCancelledError: If ``cancel`` was set
            FetchError: If a poll fails; failures are not retried
        """
        if isinstance(timeout, timedelta):
            timeout = timeout.total_seconds()
        deadline = time.monotonic() + timeout

        while time.monotonic() < deadline:
            if cancel is not None and cancel.is_set():
                raise PollCancelledError(f"polling of submission {submission_id} cancelled")

            result = self.get_submission(submission_id, contest_id, is_gym=is_gym)
            if result.is_final:
                logger.info(f"Submission {submission_id} judged: {result.verdict}")
                return result

            logger.debug(f"Submission {submission_id}: {result.status.value}")
            pause = max(0.0, min(self.poll_interval, deadline - time.monotonic()))
            if cancel is not None:
                if cancel.wait(pause):
                    raise PollCancelledError(f"polling of submission {submission_id} cancelled")
            else:
                time.sleep(pause)

        raise VerdictTimeoutError(f"timeout waiting for verdict of submission {submission_id}")

    def verify_submit_page(self, contest_id: int, is_gym: bool = False) -> None:
        """
        Check that the submit form still has every element the submitter uses.

        Raises:
            MissingElementsError: Listing the elements that were not found
        """
        url = URLParser.build_submit_url(contest_id, is_gym=is_gym)
        page = self.session.fetch(url)
        soup = BeautifulSoup(page.text, "lxml")

        sel = self.selectors.submit
        checks = (
            ("csrf_token", sel.csrf_token),
            ("problem_index", sel.problem_index),
            ("language_select", sel.language_select),
            ("source_code", sel.source_code),
            ("submit_button", sel.submit_button),
        )
        missing = [name for name, selector in checks if soup.select_one(selector) is None]
        if missing:
            logger.error(f"Submit page {url} is missing: {', '.join(missing)}")
            raise MissingElementsError(missing)

        logger.debug(f"Submit page {url} has all required elements")

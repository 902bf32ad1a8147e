"""Parser and builder for Codeforces URLs."""

import re
from urllib.parse import urlparse

from loguru import logger

from cfweb.domain.exceptions import URLParsingError
from cfweb.domain.models import ContestIdentifier, ProblemIdentifier

BASE_URL = "https://codeforces.com"


class URLParser:
    """Parser for various Codeforces URL formats."""

    # Matches problemset/problem/1234/A
    PROBLEMSET_PATTERN = r"codeforces\.(?:com|ru)/problemset/problem/(\d+)/([A-Z]\d*)"
    # Matches contest/1234/problem/A and gym/100001/problem/A
    CONTEST_PROBLEM_PATTERN = r"codeforces\.(?:com|ru)/(contest|gym)/(\d+)/problem/([A-Z]\d*)"
    # Matches contest/1234 or gym/1234
    CONTEST_PATTERN = r"codeforces\.(?:com|ru)/(contest|gym)/(\d+)"

    @classmethod
    def parse(cls, url: str) -> ProblemIdentifier:
        """
        Parse Codeforces problem URL and extract problem identifier.
        """
        logger.debug(f"Parsing URL: {url}")
        cls._check_absolute(url)

        match = re.search(cls.CONTEST_PROBLEM_PATTERN, url)
        if match:
            kind, contest_id, index = match.groups()
            identifier = ProblemIdentifier(
                contest_id=int(contest_id),
                problem_index=index,
                is_gym=kind == "gym",
            )
            logger.debug(f"Parsed URL to problem: {identifier}")
            return identifier

        match = re.search(cls.PROBLEMSET_PATTERN, url)
        if match:
            contest_id, index = match.groups()
            identifier = ProblemIdentifier(contest_id=int(contest_id), problem_index=index)
            logger.debug(f"Parsed URL to problem: {identifier}")
            return identifier

        raise URLParsingError(
            f"Unrecognized Codeforces URL format: {url}. "
            "Expected format: https://codeforces.com/contest/<contest_id>/problem/<index>"
        )

    @classmethod
    def parse_contest_url(cls, url: str) -> ContestIdentifier:
        """
        Parse Codeforces contest URL and extract contest identifier.
        """
        logger.debug(f"Parsing contest URL: {url}")
        cls._check_absolute(url)

        match = re.search(cls.CONTEST_PATTERN, url)
        if match:
            kind, contest_id = match.groups()
            return ContestIdentifier(contest_id=int(contest_id), is_gym=kind == "gym")

        raise URLParsingError(
            f"Unrecognized Codeforces contest URL format: {url}. "
            "Expected format: https://codeforces.com/contest/<contest_id>"
        )

    @staticmethod
    def _check_absolute(url: str) -> None:
        try:
            parsed = urlparse(url)
        except ValueError as e:
            raise URLParsingError(f"Failed to parse URL: {url}") from e
        if not parsed.scheme or not parsed.netloc:
            raise URLParsingError(f"Invalid URL format: {url}")

    @staticmethod
    def _section(is_gym: bool) -> str:
        return "gym" if is_gym else "contest"

    @classmethod
    def build_problem_url(cls, identifier: ProblemIdentifier) -> str:
        """Canonical problem URL, always under the contest path."""
        section = cls._section(identifier.is_gym)
        return f"{BASE_URL}/{section}/{identifier.contest_id}/problem/{identifier.problem_index}"

    @classmethod
    def build_contest_url(cls, identifier: ContestIdentifier) -> str:
        return f"{BASE_URL}/{cls._section(identifier.is_gym)}/{identifier.contest_id}"

    @classmethod
    def build_submit_url(cls, contest_id: int, is_gym: bool = False) -> str:
        return f"{BASE_URL}/{cls._section(is_gym)}/{contest_id}/submit"

    @classmethod
    def build_my_submissions_url(cls, contest_id: int, is_gym: bool = False) -> str:
        return f"{BASE_URL}/{cls._section(is_gym)}/{contest_id}/my"

    @classmethod
    def build_submission_url(cls, contest_id: int, submission_id: int, is_gym: bool = False) -> str:
        return f"{BASE_URL}/{cls._section(is_gym)}/{contest_id}/submission/{submission_id}"


def parse_problem_url(url: str) -> ProblemIdentifier:
    """Convenience wrapper around ``URLParser.parse``."""
    return URLParser.parse(url)

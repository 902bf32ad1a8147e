"""Service for handling problem-related operations."""

from typing import Optional

from loguru import logger

from cfweb.domain.exceptions import ParsingError
from cfweb.domain.models import ContestProblemLink, ParsedProblem
from cfweb.infrastructure.parsers import ContestPageParser, ProblemPageParser, URLParser
from cfweb.schemas import ProblemSchema


class ProblemService:
    """Service for fetching Codeforces problems."""

    def __init__(
        self,
        parser: ProblemPageParser,
        contest_parser: Optional[ContestPageParser] = None,
        url_parser: type[URLParser] = URLParser,
    ):
        """
        Initialize service with dependencies.

        Args:
            parser: Problem page parser
            contest_parser: Contest page parser, needed for contest listings
            url_parser: URL parser class
        """
        self.parser = parser
        self.contest_parser = contest_parser
        self.url_parser = url_parser

    def get_problem(self, contest_id: int, index: str, is_gym: bool = False) -> ParsedProblem:
        logger.info(f"Getting problem via service: {contest_id}{index}")
        return self.parser.parse(contest_id, index, is_gym=is_gym)

    def get_problem_by_url(self, url: str) -> ParsedProblem:
        """Get problem by Codeforces problem URL."""
        logger.info(f"Getting problem by URL: {url}")
        identifier = self.url_parser.parse(url)
        return self.get_problem(
            identifier.contest_id, identifier.problem_index, is_gym=identifier.is_gym
        )

    def get_problem_schema(self, contest_id: int, index: str, is_gym: bool = False) -> ProblemSchema:
        """Fetch a problem and convert it to its persisted form."""
        return self.get_problem(contest_id, index, is_gym=is_gym).to_schema_problem()

    def get_contest_problems(self, contest_id: int, is_gym: bool = False) -> list[ContestProblemLink]:
        if self.contest_parser is None:
            raise ParsingError("Contest parser not configured")
        logger.info(f"Listing problems of contest {contest_id}")
        return self.contest_parser.parse_contest(contest_id, is_gym=is_gym)

"""Parser for extracting the problem list from contest pages."""

from typing import Optional

from bs4 import BeautifulSoup
from loguru import logger

from cfweb.domain.exceptions import ExtractionError, NotFoundError, ParsingError
from cfweb.domain.models import ContestIdentifier, ContestProblemLink
from cfweb.infrastructure.selectors import SelectorSet, current_selectors
from cfweb.infrastructure.session import CodeforcesSession

from .problem_page_parser import clean_html, extract_problem_index
from .url_parser import BASE_URL, URLParser


class ContestPageParser:
    """Parser for extracting data from Codeforces contest HTML pages."""

    def __init__(
        self,
        session: Optional[CodeforcesSession] = None,
        selectors: Optional[SelectorSet] = None,
    ):
        self.session = session
        self.selectors = selectors or current_selectors()

    def parse_contest(self, contest_id: int, is_gym: bool = False) -> list[ContestProblemLink]:
        """
        Fetch a contest page and list its problems in table order.

        Raises:
            FetchError: If the page cannot be fetched
            NotFoundError: If the contest does not exist
            ExtractionError: If the problem table is missing
        """
        url = URLParser.build_contest_url(ContestIdentifier(contest_id=contest_id, is_gym=is_gym))
        logger.debug(f"Parsing contest page: {url}")

        if self.session is None:
            raise ParsingError(f"Session not initialized for {url}")

        page = self.session.fetch(url)
        if page.status_code == 404:
            raise NotFoundError(f"Contest {contest_id} not found")

        problems = self.parse_contest_html(page.text, contest_id, url, truncated=page.truncated)
        logger.info(f"Parsed {len(problems)} problems from contest {contest_id}")
        return problems

    def parse_contest_html(
        self,
        html: str,
        contest_id: int,
        url: str = "",
        truncated: bool = False,
    ) -> list[ContestProblemLink]:
        sel = self.selectors.contest
        soup = BeautifulSoup(html, "lxml")

        if soup.select_one(sel.problem_list) is None:
            raise ExtractionError("problem_list", url, truncated=truncated)

        problems = []
        for row in soup.select(sel.problem_row):
            link = row.select_one(sel.problem_link)
            if link is None:
                # Header row
                continue

            href = link.get("href", "")
            index = extract_problem_index(href) or clean_html(link.get_text())
            name_link = row.select_one(sel.problem_name)
            name = clean_html(name_link.get_text()) if name_link else ""

            if href.startswith("/"):
                href = f"{BASE_URL}{href}"

            problems.append(
                ContestProblemLink(contest_id=contest_id, index=index, name=name, url=href)
            )

        return problems

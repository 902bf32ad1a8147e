"""Parser for extracting problem data from Codeforces problem pages."""

import re
from typing import Optional

from bs4 import BeautifulSoup, NavigableString, Tag
from loguru import logger

from cfweb.domain.exceptions import ExtractionError, NotFoundError, ParsingError
from cfweb.domain.models import ParsedProblem, ProblemIdentifier, Sample
from cfweb.infrastructure.selectors import ProblemSelectors, SelectorSet, current_selectors
from cfweb.infrastructure.session import CodeforcesSession

from .url_parser import URLParser

TIME_LIMIT_PREFIX = "time limit per test"
MEMORY_LIMIT_PREFIX = "memory limit per test"

# Children of the statement block that are not part of the legend.
_NON_LEGEND_CLASSES = frozenset(
    {"header", "input-specification", "output-specification", "sample-tests", "note"}
)

_TITLE_INDEX = re.compile(r"^[A-Z]\d?\.\s+")
_RATING = re.compile(r"\*(\d+)")
_PROBLEM_HREF = re.compile(r"/(?:contest|gym)/\d+/problem/([A-Za-z]\d*)")


def clean_title(text: str) -> str:
    """Strip an index prefix such as "A. " or "B2. " from a problem title."""
    return _TITLE_INDEX.sub("", text.strip())


def extract_limit(text: str, prefix: str) -> str:
    """Remove a label like "time limit per test" from limit text."""
    text = text.strip()
    if prefix in text:
        text = text.replace(prefix, "", 1)
    return text.strip()


def clean_html(text: str) -> str:
    """Collapse runs of whitespace to single spaces."""
    return " ".join(text.split())


def parse_rating(text: str) -> int:
    """Parse a difficulty badge like "*1400". Anything else is unrated (0)."""
    match = _RATING.fullmatch(text.strip())
    if match:
        return int(match.group(1))
    return 0


def extract_problem_index(href: str) -> str:
    match = _PROBLEM_HREF.search(href)
    if match:
        return match.group(1)
    return ""


def extract_pre_content(pre: Tag) -> str:
    """
    Text of a sample block with its line structure intact.

    ``<br>`` tags and per-line ``<div>`` wrappers become newlines; spacing
    is collapsed within each line only.
    """
    parts: list[str] = []
    for node in pre.descendants:
        if isinstance(node, NavigableString):
            parts.append(str(node))
        elif node.name == "br":
            parts.append("\n")
        elif node.name == "div" and parts and not parts[-1].endswith("\n"):
            parts.append("\n")

    lines = [clean_html(line) for line in "".join(parts).split("\n")]
    return "\n".join(lines).strip("\n")


def _text_without(tag: Tag, skip_classes: frozenset[str]) -> str:
    parts: list[str] = []
    for child in tag.children:
        if isinstance(child, NavigableString):
            parts.append(str(child))
        elif isinstance(child, Tag):
            if skip_classes.intersection(child.get("class") or ()):
                continue
            parts.append(child.get_text(" "))
    return clean_html(" ".join(parts))


def build_statement(statement: Optional[Tag]) -> str:
    """Legend text of a problem: the statement block minus header and sections."""
    if statement is None:
        return ""
    return _text_without(statement, _NON_LEGEND_CLASSES)


def _section_text(section: Optional[Tag]) -> str:
    if section is None:
        return ""
    return _text_without(section, frozenset({"section-title"}))


def parse_samples(container: Optional[Tag], selectors: ProblemSelectors) -> tuple[Sample, ...]:
    """Pair up sample inputs and outputs in document order."""
    if container is None:
        return ()

    inputs = container.select(selectors.sample_input)
    outputs = container.select(selectors.sample_output)
    if len(inputs) != len(outputs):
        logger.warning(f"Sample count mismatch: {len(inputs)} inputs, {len(outputs)} outputs")

    return tuple(
        Sample(index=i, input=extract_pre_content(inp), output=extract_pre_content(out))
        for i, (inp, out) in enumerate(zip(inputs, outputs), start=1)
    )


class ProblemPageParser:
    """Parser for extracting data from Codeforces problem HTML pages."""

    def __init__(
        self,
        session: Optional[CodeforcesSession] = None,
        selectors: Optional[SelectorSet] = None,
    ):
        """
        Initialize parser.

        Args:
            session: Session used to fetch pages
            selectors: Selector set to extract with, defaults to the current one
        """
        self.session = session
        self.selectors = selectors or current_selectors()

    def parse(self, contest_id: int, index: str, is_gym: bool = False) -> ParsedProblem:
        """
        Fetch and parse a problem page.

        Raises:
            FetchError: If the page cannot be fetched
            NotFoundError: If the problem does not exist
            ExtractionError: If a required field is missing from the page
        """
        identifier = ProblemIdentifier(contest_id=contest_id, problem_index=index, is_gym=is_gym)
        url = URLParser.build_problem_url(identifier)
        logger.debug(f"Parsing problem page: {url}")

        if self.session is None:
            raise ParsingError(f"Session not initialized for {url}")

        page = self.session.fetch(url)
        if page.status_code == 404:
            raise NotFoundError(f"Problem {identifier} not found")

        soup = BeautifulSoup(page.text, "lxml")
        if soup.select_one(self.selectors.problem.statement) is None and "/problem/" not in page.url:
            # The site redirects unknown problems to the contest page.
            raise NotFoundError(f"Problem {identifier} not found (redirected to {page.url})")

        problem = self._parse_soup(soup, contest_id, index, url, truncated=page.truncated)
        logger.info(f"Successfully parsed problem: {identifier}")
        return problem

    def parse_problem_html(
        self,
        html: str,
        contest_id: int,
        index: str,
        url: str,
        truncated: bool = False,
    ) -> ParsedProblem:
        """Parse already-fetched problem HTML."""
        return self._parse_soup(BeautifulSoup(html, "lxml"), contest_id, index, url, truncated)

    def _parse_soup(
        self,
        soup: BeautifulSoup,
        contest_id: int,
        index: str,
        url: str,
        truncated: bool,
    ) -> ParsedProblem:
        sel = self.selectors.problem

        def required(field: str, selector: str) -> Tag:
            element = soup.select_one(selector)
            if element is None:
                logger.error(f"Selector for '{field}' matched nothing on {url}")
                raise ExtractionError(field, url, truncated=truncated)
            return element

        statement = required("statement", sel.statement)
        title = required("title", sel.title)
        time_limit = required("time_limit", sel.time_limit)
        memory_limit = required("memory_limit", sel.memory_limit)

        return ParsedProblem(
            contest_id=contest_id,
            index=index,
            name=clean_title(title.get_text()),
            time_limit=extract_limit(time_limit.get_text(), TIME_LIMIT_PREFIX),
            memory_limit=extract_limit(memory_limit.get_text(), MEMORY_LIMIT_PREFIX),
            statement=build_statement(statement),
            input_spec=_section_text(soup.select_one(sel.input_spec)),
            output_spec=_section_text(soup.select_one(sel.output_spec)),
            note=_section_text(soup.select_one(sel.note)),
            rating=self._extract_rating(soup),
            tags=self._extract_tags(soup),
            url=url,
            samples=parse_samples(soup.select_one(sel.sample_tests), sel),
        )

    def _extract_rating(self, soup: BeautifulSoup) -> int:
        element = soup.select_one(self.selectors.problem.rating)
        if element is None:
            return 0
        return parse_rating(element.get_text())

    def _extract_tags(self, soup: BeautifulSoup) -> tuple[str, ...]:
        rating_boxes = {id(el) for el in soup.select(self.selectors.problem.rating)}
        tags = []
        for element in soup.select(self.selectors.problem.tags):
            if id(element) in rating_boxes:
                continue
            text = clean_html(element.get_text())
            if text:
                tags.append(text)
        return tuple(tags)

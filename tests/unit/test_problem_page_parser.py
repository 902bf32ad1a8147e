"""Unit tests for problem page parsing."""

import dataclasses
import re
from unittest.mock import MagicMock

import pytest
from bs4 import BeautifulSoup

from cfweb.domain.exceptions import ExtractionError, NotFoundError, ParsingError
from cfweb.domain.models import Sample
from cfweb.infrastructure.http_client import Page
from cfweb.infrastructure.parsers import (
    ProblemPageParser,
    clean_html,
    clean_title,
    extract_limit,
    extract_pre_content,
    parse_rating,
)
from cfweb.infrastructure.selectors import current_selectors

PROBLEM_URL = "https://codeforces.com/contest/1/problem/B"

PROBLEM_HTML = """
<html><body>
<div class="problem-statement">
  <div class="header">
    <div class="title">B. Sum of Two</div>
    <div class="time-limit"><div class="property-title">time limit per test</div>2 seconds</div>
    <div class="memory-limit"><div class="property-title">memory limit per test</div>256 megabytes</div>
  </div>
  <div><p>Given two integers, print their sum.</p></div>
  <div class="input-specification"><div class="section-title">Input</div><p>Two integers a and b.</p></div>
  <div class="output-specification"><div class="section-title">Output</div><p>Print a+b.</p></div>
  <div class="sample-tests">
    <div class="section-title">Example</div>
    <div class="sample-test">
      <div class="input"><div class="title">Input</div><pre>1 2</pre></div>
      <div class="output"><div class="title">Output</div><pre>3</pre></div>
    </div>
  </div>
  <div class="note"><div class="section-title">Note</div><p>1+2=3.</p></div>
</div>
<div class="roundbox">
  <span class="tag-box" title="Difficulty">*1200</span>
  <span class="tag-box">math</span>
  <span class="tag-box">implementation</span>
</div>
</body></html>
"""


def _with_samples(pairs: list[tuple[str, str]]) -> str:
    blocks = "".join(
        f'<div class="sample-test"><div class="input"><pre>{inp}</pre></div>'
        f'<div class="output"><pre>{out}</pre></div></div>'
        for inp, out in pairs
    )
    return re.sub(
        r'<div class="sample-tests">.*?</div>\n  <div class="note">',
        f'<div class="sample-tests">{blocks}</div>\n  <div class="note">',
        PROBLEM_HTML,
        flags=re.S,
    )


def _pre(html: str):
    return BeautifulSoup(html, "lxml").pre


@pytest.mark.parametrize(
    "title, expected",
    [
        ("A. Watermelon", "Watermelon"),
        ("B2. Hard Version", "Hard Version"),
        ("  C. Padded  ", "Padded"),
        ("Plain Title", "Plain Title"),
    ],
)
def test_clean_title(title, expected):
    assert clean_title(title) == expected


def test_extract_limit():
    assert extract_limit("time limit per test2 seconds", "time limit per test") == "2 seconds"
    assert extract_limit(" 256 megabytes ", "memory limit per test") == "256 megabytes"


def test_clean_html():
    assert clean_html("  a \n\t b   c ") == "a b c"


@pytest.mark.parametrize(
    "text, expected",
    [
        ("*1400", 1400),
        (" *800 ", 800),
        ("* 1400", 0),
        ("1400", 0),
        ("*", 0),
        ("", 0),
    ],
)
def test_parse_rating(text, expected):
    assert parse_rating(text) == expected


def test_pre_content_keeps_br_lines():
    assert extract_pre_content(_pre("<pre>1 2<br/>3   4<br/></pre>")) == "1 2\n3 4"


def test_pre_content_keeps_div_lines():
    html = '<pre><div class="test-example-line">1</div><div class="test-example-line">2 3</div></pre>'

    assert extract_pre_content(_pre(html)) == "1\n2 3"


def test_parse_problem_html():
    problem = ProblemPageParser().parse_problem_html(PROBLEM_HTML, 1, "B", PROBLEM_URL)

    assert problem.contest_id == 1
    assert problem.index == "B"
    assert problem.problem_id == "1B"
    assert problem.name == "Sum of Two"
    assert problem.time_limit == "2 seconds"
    assert problem.memory_limit == "256 megabytes"
    assert problem.statement == "Given two integers, print their sum."
    assert problem.input_spec == "Two integers a and b."
    assert problem.output_spec == "Print a+b."
    assert problem.note == "1+2=3."
    assert problem.rating == 1200
    assert problem.tags == ("math", "implementation")
    assert problem.samples == (Sample(index=1, input="1 2", output="3"),)
    assert problem.url == PROBLEM_URL
    assert str(problem.identifier) == "1/B"

    data = problem.to_dict()
    assert data["tags"] == ["math", "implementation"]
    assert data["samples"] == [{"index": 1, "input": "1 2", "output": "3"}]


def test_optional_fields_default_when_absent():
    html = PROBLEM_HTML.split('<div class="roundbox">')[0] + "</body></html>"

    problem = ProblemPageParser().parse_problem_html(html, 1, "B", PROBLEM_URL)

    assert problem.rating == 0
    assert problem.tags == ()


def test_missing_required_field_raises_extraction_error():
    html = PROBLEM_HTML.replace('<div class="title">B. Sum of Two</div>', "")
    html = html.replace('<div class="title">Input</div>', "").replace('<div class="title">Output</div>', "")

    with pytest.raises(ExtractionError) as exc_info:
        ProblemPageParser().parse_problem_html(html, 1, "B", PROBLEM_URL, truncated=True)

    assert exc_info.value.field == "title"
    assert exc_info.value.truncated


@pytest.mark.parametrize(
    "pairs, expected",
    [
        ([], ()),
        (
            [("1 2", "3"), ("5 7", "12"), ("0 0", "0")],
            (
                Sample(index=1, input="1 2", output="3"),
                Sample(index=2, input="5 7", output="12"),
                Sample(index=3, input="0 0", output="0"),
            ),
        ),
    ],
)
def test_samples_are_numbered_in_document_order(pairs, expected):
    html = _with_samples(pairs)

    problem = ProblemPageParser().parse_problem_html(html, 1, "B", PROBLEM_URL)

    assert problem.samples == expected
    assert problem.note == "1+2=3."


def test_injected_problem_selectors_are_used():
    selectors = current_selectors()
    selectors = dataclasses.replace(
        selectors, problem=dataclasses.replace(selectors.problem, title=".alt-title")
    )
    html = PROBLEM_HTML.replace(
        '<div class="title">B. Sum of Two</div>', '<span class="alt-title">C1. Alt</span>'
    )

    problem = ProblemPageParser(selectors=selectors).parse_problem_html(html, 1, "C1", PROBLEM_URL)

    assert problem.name == "Alt"
    assert problem.time_limit == "2 seconds"


def _session_returning(page: Page) -> MagicMock:
    session = MagicMock()
    session.fetch.return_value = page
    return session


def test_parse_fetches_canonical_url():
    session = _session_returning(Page(url=PROBLEM_URL, status_code=200, text=PROBLEM_HTML))

    problem = ProblemPageParser(session).parse(1, "B")

    session.fetch.assert_called_once_with(PROBLEM_URL)
    assert problem.name == "Sum of Two"


def test_parse_gym_problem():
    url = "https://codeforces.com/gym/100001/problem/B"
    session = _session_returning(Page(url=url, status_code=200, text=PROBLEM_HTML))

    problem = ProblemPageParser(session).parse(100001, "B", is_gym=True)

    session.fetch.assert_called_once_with(url)
    assert problem.url == url


def test_parse_404_is_not_found():
    session = _session_returning(Page(url=PROBLEM_URL, status_code=404, text=""))

    with pytest.raises(NotFoundError):
        ProblemPageParser(session).parse(1, "B")


def test_redirect_to_contest_page_is_not_found():
    session = _session_returning(
        Page(url="https://codeforces.com/contest/1", status_code=200, text="<html><body></body></html>")
    )

    with pytest.raises(NotFoundError):
        ProblemPageParser(session).parse(1, "Z")


def test_parse_without_session():
    with pytest.raises(ParsingError):
        ProblemPageParser().parse(1, "B")


def test_truncated_page_reports_truncation():
    cut = PROBLEM_HTML.split('<div class="title">B. Sum of Two</div>')[0]
    session = _session_returning(Page(url=PROBLEM_URL, status_code=200, text=cut, truncated=True))

    with pytest.raises(ExtractionError) as exc_info:
        ProblemPageParser(session).parse(1, "B")

    assert exc_info.value.field == "title"
    assert exc_info.value.truncated

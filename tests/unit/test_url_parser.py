import pytest

from cfweb.domain.exceptions import URLParsingError
from cfweb.domain.models import ContestIdentifier, ProblemIdentifier
from cfweb.infrastructure.parsers import URLParser, parse_problem_url


@pytest.mark.parametrize(
    "url, expected_contest, expected_problem, expected_gym",
    [
        ("https://codeforces.com/problemset/problem/500/A", 500, "A", False),
        ("https://codeforces.ru/problemset/problem/1234/C", 1234, "C", False),
        ("https://codeforces.com/problemset/problem/1350/B1", 1350, "B1", False),
        ("https://codeforces.com/contest/1325/problem/D", 1325, "D", False),
        ("https://codeforces.com/gym/100001/problem/A", 100001, "A", True),
    ],
)
def test_parse_valid_urls(url, expected_contest, expected_problem, expected_gym) -> None:
    identifier = URLParser.parse(url=url)

    assert identifier.contest_id == expected_contest
    assert identifier.problem_index == expected_problem
    assert identifier.is_gym is expected_gym


@pytest.mark.parametrize(
    "url",
    [
        "codeforces.com/contest/1/problem/A",
        "https://codeforces.com/blog/entry/1",
        "https://example.com/contest/1/problem/A",
        "",
    ],
)
def test_parse_invalid_urls(url) -> None:
    with pytest.raises(URLParsingError):
        URLParser.parse(url)


def test_parse_convenience_function() -> None:
    identifier = parse_problem_url("https://codeforces.com/problemset/problem/777/A")

    assert identifier.contest_id == 777
    assert identifier.problem_index == "A"


def test_parse_contest_url() -> None:
    assert URLParser.parse_contest_url("https://codeforces.com/contest/1325") == ContestIdentifier(1325)
    assert URLParser.parse_contest_url("https://codeforces.com/gym/100001/standings").is_gym


def test_build_problem_url() -> None:
    identifier = ProblemIdentifier(contest_id=1234, problem_index="A")

    assert URLParser.build_problem_url(identifier) == "https://codeforces.com/contest/1234/problem/A"


def test_build_contest_url() -> None:
    identifier = ContestIdentifier(contest_id=1234)

    assert URLParser.build_contest_url(identifier) == "https://codeforces.com/contest/1234"


def test_build_submission_urls() -> None:
    assert URLParser.build_submit_url(1) == "https://codeforces.com/contest/1/submit"
    assert URLParser.build_submit_url(100001, is_gym=True) == "https://codeforces.com/gym/100001/submit"
    assert URLParser.build_my_submissions_url(1) == "https://codeforces.com/contest/1/my"
    assert URLParser.build_submission_url(1, 42) == "https://codeforces.com/contest/1/submission/42"

"""Parsers for extracting data from Codeforces pages."""

from .contest_page_parser import ContestPageParser
from .problem_page_parser import (
    ProblemPageParser,
    build_statement,
    clean_html,
    clean_title,
    extract_limit,
    extract_pre_content,
    extract_problem_index,
    parse_rating,
    parse_samples,
)
from .url_parser import URLParser, parse_problem_url

__all__ = [
    "ContestPageParser",
    "ProblemPageParser",
    "URLParser",
    "build_statement",
    "clean_html",
    "clean_title",
    "extract_limit",
    "extract_pre_content",
    "extract_problem_index",
    "parse_problem_url",
    "parse_rating",
    "parse_samples",
]

"""Versioned CSS selector sets for Codeforces pages.

When the site changes its markup a new ``SelectorSet`` is appended to
``SELECTOR_HISTORY`` and becomes current. Older sets stay here for
reference only; nothing falls back to them at runtime.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class SelectorVersion:
    """Metadata describing when a selector set became valid."""

    version: str
    valid_from: str
    valid_until: str = ""
    description: str = ""


@dataclass(frozen=True)
class ProblemSelectors:
    title: str
    time_limit: str
    memory_limit: str
    statement: str
    input_spec: str
    output_spec: str
    note: str
    sample_tests: str
    sample_input: str
    sample_output: str
    tags: str
    rating: str


@dataclass(frozen=True)
class LoginSelectors:
    form: str
    handle_or_email: str
    password: str
    csrf_token: str
    remember: str
    submit_button: str


@dataclass(frozen=True)
class SubmitSelectors:
    form: str
    problem_index: str
    language_select: str
    source_code: str
    csrf_token: str
    submit_button: str
    ftaa: str
    bfaa: str


@dataclass(frozen=True)
class ContestSelectors:
    problem_list: str
    problem_row: str
    problem_link: str
    problem_name: str
    standings_table: str


@dataclass(frozen=True)
class StatusSelectors:
    submission_row: str
    problem_link: str
    status_cell: str
    verdict: str
    time_cell: str
    memory_cell: str
    detail_verdict: str
    detail_cells: str


@dataclass(frozen=True)
class SelectorSet:
    version: SelectorVersion
    problem: ProblemSelectors
    login: LoginSelectors
    submit: SubmitSelectors
    contest: ContestSelectors
    status: StatusSelectors


SELECTORS_2024_12 = SelectorSet(
    version=SelectorVersion(
        version="2024.12",
        valid_from="2024-12-01",
        description="CF selectors as of December 2024",
    ),
    problem=ProblemSelectors(
        title=".problem-statement .title",
        time_limit=".problem-statement .time-limit",
        memory_limit=".problem-statement .memory-limit",
        statement=".problem-statement",
        input_spec=".problem-statement .input-specification",
        output_spec=".problem-statement .output-specification",
        note=".problem-statement .note",
        sample_tests=".sample-tests",
        sample_input=".sample-tests .input pre",
        sample_output=".sample-tests .output pre",
        tags=".tag-box",
        rating="span.tag-box[title='Difficulty']",
    ),
    login=LoginSelectors(
        form="form#enterForm, form.enter-form",
        handle_or_email="input[name='handleOrEmail']",
        password="input[name='password']",
        csrf_token="input[name='csrf_token'], meta[name='X-Csrf-Token']",
        remember="input[name='remember']",
        submit_button="input[type='submit']",
    ),
    submit=SubmitSelectors(
        form="form.submit-form",
        problem_index="select[name='submittedProblemIndex'], input[name='submittedProblemIndex']",
        language_select="select[name='programTypeId']",
        source_code="textarea[name='source'], #sourceCodeTextarea",
        csrf_token="input[name='csrf_token']",
        submit_button="input[type='submit']",
        ftaa="input[name='ftaa']",
        bfaa="input[name='bfaa']",
    ),
    contest=ContestSelectors(
        problem_list=".problems",
        problem_row=".problems tr",
        problem_link="td.id a",
        problem_name="td:not(.id) a",
        standings_table=".standings",
    ),
    status=StatusSelectors(
        submission_row="table.status-frame-datatable tr[data-submission-id]",
        problem_link="a[href*='/problem/']",
        status_cell="td.status-cell",
        verdict=".verdict-accepted, .verdict-rejected, .verdict-waiting",
        time_cell="td.time-consumed-cell",
        memory_cell="td.memory-consumed-cell",
        detail_verdict=".verdict-accepted, .verdict-rejected, .verdict-waiting",
        detail_cells=".datatable tr td",
    ),
)

# Oldest first; the last entry is current.
SELECTOR_HISTORY: tuple[SelectorSet, ...] = (SELECTORS_2024_12,)


def current_selectors() -> SelectorSet:
    """Return the selector set used for all extraction."""
    return SELECTOR_HISTORY[-1]


def selector_version() -> SelectorVersion:
    """Version metadata of the current set, for diagnostics only."""
    return current_selectors().version

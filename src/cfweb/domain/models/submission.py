from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum


class SubmissionStatus(str, Enum):
    """Lifecycle of a submission: IN_QUEUE -> RUNNING -> JUDGED."""

    IN_QUEUE = "In queue"
    RUNNING = "Running"
    JUDGED = "Judged"


class Verdict(str, Enum):
    OK = "OK"
    WRONG_ANSWER = "WRONG_ANSWER"
    TIME_LIMIT_EXCEEDED = "TIME_LIMIT_EXCEEDED"
    MEMORY_LIMIT_EXCEEDED = "MEMORY_LIMIT_EXCEEDED"
    RUNTIME_ERROR = "RUNTIME_ERROR"
    COMPILATION_ERROR = "COMPILATION_ERROR"
    PRESENTATION_ERROR = "PRESENTATION_ERROR"
    IDLENESS_LIMIT_EXCEEDED = "IDLENESS_LIMIT_EXCEEDED"
    CHALLENGED = "CHALLENGED"


@dataclass(frozen=True)
class SubmissionResult:
    """A snapshot of a submission as seen on the site.

    Polling produces a new snapshot each time; snapshots are never updated
    in place. ``verdict`` is a ``Verdict`` value when the judging text was
    recognised, otherwise the raw text from the page.
    """

    submission_id: int
    contest_id: int
    problem_index: str
    verdict: str
    status: SubmissionStatus
    submitted_at: datetime
    time_ms: int = 0
    memory_bytes: int = 0
    passed_tests: int = 0

    @property
    def elapsed(self) -> timedelta:
        return timedelta(milliseconds=self.time_ms)

    @property
    def is_final(self) -> bool:
        return self.status is SubmissionStatus.JUDGED

    @property
    def is_accepted(self) -> bool:
        return self.verdict == Verdict.OK

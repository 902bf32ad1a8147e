"""Domain models package."""

from .identifiers import ContestIdentifier, ProblemIdentifier
from .language import Language
from .problem import ContestProblemLink, ParsedProblem, Sample
from .submission import SubmissionResult, SubmissionStatus, Verdict

__all__ = [
    "ContestIdentifier",
    "ContestProblemLink",
    "Language",
    "ParsedProblem",
    "ProblemIdentifier",
    "Sample",
    "SubmissionResult",
    "SubmissionStatus",
    "Verdict",
]

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import TYPE_CHECKING, Any

from .identifiers import ProblemIdentifier

if TYPE_CHECKING:
    from cfweb.schemas.problem import ProblemSchema


@dataclass(frozen=True)
class Sample:
    """One example test from a problem statement, numbered from 1."""

    index: int
    input: str
    output: str


@dataclass(frozen=True)
class ContestProblemLink:
    """A problem row from a contest's problem table."""

    contest_id: int
    index: str
    name: str
    url: str


@dataclass(frozen=True)
class ParsedProblem:
    """Problem data scraped from a problem page.

    Limits are kept exactly as rendered (e.g. "2 seconds", "256 megabytes").
    A rating of 0 means the problem is unrated.
    """

    contest_id: int
    index: str
    name: str
    time_limit: str
    memory_limit: str
    statement: str
    url: str
    input_spec: str = ""
    output_spec: str = ""
    note: str = ""
    rating: int = 0
    tags: tuple[str, ...] = field(default_factory=tuple)
    samples: tuple[Sample, ...] = field(default_factory=tuple)

    @property
    def problem_id(self) -> str:
        """Cross-reference ID such as "1325A"."""
        return f"{self.contest_id}{self.index}"

    @property
    def identifier(self) -> ProblemIdentifier:
        return ProblemIdentifier(contest_id=self.contest_id, problem_index=self.index)

    def to_schema_problem(self) -> ProblemSchema:
        from cfweb.schemas.problem import ProblemSchema

        return ProblemSchema.from_parsed(self)

    def to_dict(self) -> dict[str, Any]:
        return {
            "contest_id": self.contest_id,
            "index": self.index,
            "name": self.name,
            "time_limit": self.time_limit,
            "memory_limit": self.memory_limit,
            "statement": self.statement,
            "input_spec": self.input_spec,
            "output_spec": self.output_spec,
            "note": self.note,
            "rating": self.rating,
            "tags": list(self.tags),
            "url": self.url,
            "samples": [asdict(s) for s in self.samples],
        }

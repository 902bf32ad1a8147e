"""Pydantic schemas for persisting parsed problems."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from .version import CURRENT_VERSION

if TYPE_CHECKING:
    from cfweb.domain.models import ParsedProblem

PLATFORM = "codeforces"


class SampleSchema(BaseModel):
    """One example test."""

    index: int
    input: str
    output: str

    class Config:
        from_attributes = True


class ProblemLimits(BaseModel):
    time_limit: str  # As rendered, e.g. "2 seconds"
    memory_limit: str  # As rendered, e.g. "256 megabytes"


class ProblemMetadata(BaseModel):
    rating: int | None = None  # None for unrated problems
    tags: list[str] = Field(default_factory=list)


class ProblemSchema(BaseModel):
    """Problem document as stored by a workspace."""

    id: str
    platform: str = PLATFORM
    contest_id: int
    index: str
    name: str
    url: str
    limits: ProblemLimits
    metadata: ProblemMetadata = Field(default_factory=ProblemMetadata)
    samples: list[SampleSchema] = Field(default_factory=list)
    schema_version: str = str(CURRENT_VERSION)

    class Config:
        from_attributes = True

    @classmethod
    def from_parsed(cls, problem: ParsedProblem) -> ProblemSchema:
        """Map a scraped problem onto the persisted layout."""
        return cls(
            id=problem.problem_id,
            contest_id=problem.contest_id,
            index=problem.index,
            name=problem.name,
            url=problem.url,
            limits=ProblemLimits(
                time_limit=problem.time_limit,
                memory_limit=problem.memory_limit,
            ),
            metadata=ProblemMetadata(
                rating=problem.rating or None,
                tags=list(problem.tags),
            ),
            samples=[SampleSchema.model_validate(sample) for sample in problem.samples],
        )

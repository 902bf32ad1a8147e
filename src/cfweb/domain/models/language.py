from dataclasses import dataclass


@dataclass(frozen=True)
class Language:
    """A submission language accepted by the judge."""

    id: str
    name: str
    extension: str
    compiler_id: int

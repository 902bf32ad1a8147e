"""Persistence hand-off schemas."""

from .problem import ProblemLimits, ProblemMetadata, ProblemSchema, SampleSchema
from .version import CURRENT_VERSION, SchemaVersion

__all__ = [
    "CURRENT_VERSION",
    "ProblemLimits",
    "ProblemMetadata",
    "ProblemSchema",
    "SampleSchema",
    "SchemaVersion",
]

"""Versioning of persisted schema documents."""

from dataclasses import dataclass

from cfweb.domain.exceptions import ParsingError


@dataclass(frozen=True, order=True)
class SchemaVersion:
    """Semantic version stamped on every persisted document."""

    major: int
    minor: int
    patch: int

    @classmethod
    def parse(cls, text: str) -> "SchemaVersion":
        """
        Parse "MAJOR.MINOR.PATCH".

        Raises:
            ParsingError: If the text does not have three integer parts
        """
        parts = text.split(".")
        if len(parts) != 3:
            raise ParsingError(f"invalid version format: {text!r}")
        try:
            major, minor, patch = (int(part) for part in parts)
        except ValueError as e:
            raise ParsingError(f"invalid version format: {text!r}") from e
        return cls(major, minor, patch)

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    def compare(self, other: "SchemaVersion") -> int:
        """Return -1, 0 or 1 as this version is older, equal or newer."""
        if self < other:
            return -1
        if self > other:
            return 1
        return 0

    def is_compatible(self, other: "SchemaVersion") -> bool:
        """Documents with the same major version can be read as-is."""
        return self.major == other.major

    def needs_migration(self, other: "SchemaVersion") -> bool:
        # Patch-level differences never migrate; any minor or major difference does.
        return self.major != other.major or self.minor != other.minor


CURRENT_VERSION = SchemaVersion(1, 0, 0)

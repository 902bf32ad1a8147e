"""Interpretation of the judge's human-readable status text.

The site exposes judging progress only as text ("Running on test 4",
"Wrong answer on test 2", ...), so status and verdict are derived from
substrings.
"""

import re

from .models.submission import SubmissionStatus, Verdict

_TIME_MS = re.compile(r"(\d+)\s*ms")
_MEMORY_KB = re.compile(r"(\d+)\s*KB")
_MEMORY_MB = re.compile(r"(\d+)\s*MB")
_ON_TEST = re.compile(r"on test (\d+)")

# Checked in order, first substring match wins.
_VERDICT_MARKERS: tuple[tuple[str, Verdict], ...] = (
    ("Accepted", Verdict.OK),
    ("Wrong answer", Verdict.WRONG_ANSWER),
    ("Time limit", Verdict.TIME_LIMIT_EXCEEDED),
    ("Memory limit", Verdict.MEMORY_LIMIT_EXCEEDED),
    ("Runtime error", Verdict.RUNTIME_ERROR),
    ("Compilation error", Verdict.COMPILATION_ERROR),
    ("Presentation error", Verdict.PRESENTATION_ERROR),
    ("Idleness", Verdict.IDLENESS_LIMIT_EXCEEDED),
    ("Hacked", Verdict.CHALLENGED),
)


def normalize_verdict(text: str) -> str:
    """Map judging text to a ``Verdict``; unknown text is returned trimmed."""
    text = text.strip()
    for marker, verdict in _VERDICT_MARKERS:
        if marker in text:
            return verdict
    return text


def infer_status(text: str) -> SubmissionStatus:
    """Judging progress from text alone.

    Only empty text, "queue" and "Running" read as pending. Other
    in-progress wording such as "Compiling" reads as judged, so callers
    holding the verdict element should also check its waiting class.
    """
    text = text.strip()
    if not text or "queue" in text:
        return SubmissionStatus.IN_QUEUE
    if "Running" in text:
        return SubmissionStatus.RUNNING
    return SubmissionStatus.JUDGED


def parse_time_ms(text: str) -> int:
    """Parse "46 ms" into 46. Returns 0 when no value is present."""
    match = _TIME_MS.search(text)
    if match:
        return int(match.group(1))
    return 0


def parse_memory_bytes(text: str) -> int:
    """Parse "1024 KB" or "2 MB" into bytes. Returns 0 when no value is present."""
    match = _MEMORY_MB.search(text)
    if match:
        return int(match.group(1)) * 1024 * 1024

    match = _MEMORY_KB.search(text)
    if match:
        return int(match.group(1)) * 1024

    return 0


def parse_passed_tests(text: str) -> int:
    """Tests passed before a failure reported as "... on test N"."""
    match = _ON_TEST.search(text)
    if match:
        return max(int(match.group(1)) - 1, 0)
    return 0

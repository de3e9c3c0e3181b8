"""Slicing a plan document down to one ``PHASE <n>`` section."""
import re
from typing import List

NEXT_PHASE_RE = re.compile(r"^#+\s*PHASE\s+(\d+)\b", re.IGNORECASE)


def _phase_header_re(phase: int) -> "re.Pattern[str]":
    return re.compile(rf"^#+\s*PHASE\s+{int(phase)}\b", re.IGNORECASE)


def slice_to_phase(text: str, phase: int) -> str:
    """
    Return the lines from the ``# PHASE <phase>`` heading up to (not including)
    the next ``# PHASE`` heading, or to the end of the text.

    Headings may carry any number of ``#`` and are matched case-insensitively.
    Returns "" when the heading is absent; callers treat that as fatal.
    """
    lines = text.splitlines()
    header_re = _phase_header_re(phase)

    start = next((i for i, line in enumerate(lines) if header_re.match(line.strip())), -1)
    if start == -1:
        return ""

    end = len(lines)
    for i in range(start + 1, len(lines)):
        if NEXT_PHASE_RE.match(lines[i].strip()):
            end = i
            break

    return "\n".join(lines[start:end])


def list_phases(text: str) -> List[int]:
    """Phase numbers in document order, without duplicates."""
    seen: List[int] = []
    for line in text.splitlines():
        m = NEXT_PHASE_RE.match(line.strip())
        if m:
            n = int(m.group(1))
            if n not in seen:
                seen.append(n)
    return seen

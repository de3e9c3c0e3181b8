"""
Extract required repository paths from plan markdown.

Two kinds of references count:
1) code-span paths: `apps/campaign_compliance/app/page.tsx`
2) bare paths in prose or bullets: apps/campaign_compliance/lib/env.ts

Only paths under PERMITTED_ROOTS are kept; anything else is treated as a
false positive and dropped without complaint.
"""
import re
from typing import List, Optional, Set

from plan_guard.constants import PERMITTED_ROOTS, PLAN_DOCUMENT_NAMES

from .phases import slice_to_phase

CODE_SPAN_RE = re.compile(r"`([^`\n\r]+)`")

_PATH_CHARS = r"[A-Za-z0-9._\-/]+"
# Not preceded by a word char, "/" or "." so URL tails and ../ paths stay out.
# Trailing punctuation is left to normalize_candidate.
BARE_PATH_RE = re.compile(
    r"(?<![\w./])((?:\./)?(?:"
    + "|".join(
        [rf"{root}/{_PATH_CHARS}" for root in ("apps", "db", "scripts", "public")]
        + [re.escape(name) + r"(?!\w)" for name in PLAN_DOCUMENT_NAMES]
    )
    + r"))"
)

TRAILING_PUNCTUATION = "),.;:"
DOCUMENT_SUFFIX = ".md"
_WHITESPACE_RE = re.compile(r"\s")


def normalize_candidate(raw: Optional[str]) -> Optional[str]:
    """Normalize one candidate token, or return None if it is not a plan path."""
    if not raw:
        return None
    p = raw.strip().replace("\\", "/")
    p = p.rstrip(TRAILING_PUNCTUATION)

    # Reject obvious non-paths
    if "://" in p or "`" in p:
        return None
    if "{" in p or "}" in p or ";" in p:
        return None
    if _WHITESPACE_RE.search(p) and not p.endswith(DOCUMENT_SUFFIX):
        return None

    while p.startswith("./"):
        p = p[2:]
    if not p:
        return None
    # repository-relative only
    if ".." in p.split("/"):
        return None

    if not any(p == root or p.startswith(root) for root in PERMITTED_ROOTS):
        return None
    return p


def extract_plan_paths(text: str, phase: Optional[int] = None) -> List[str]:
    """Return the sorted, de-duplicated plan paths in ``text``.

    When ``phase`` is given only that PHASE section is considered.
    """
    scoped = slice_to_phase(text, phase) if phase else text
    found: Set[str] = set()

    for m in CODE_SPAN_RE.finditer(scoped):
        candidate = normalize_candidate(m.group(1))
        if candidate:
            found.add(candidate)

    for m in BARE_PATH_RE.finditer(scoped):
        candidate = normalize_candidate(m.group(1))
        if candidate:
            found.add(candidate)

    # `db/sql` and `db/sql/` name the same directory; keep the marked form
    found = {p for p in found if p + "/" not in found}
    return sorted(found)

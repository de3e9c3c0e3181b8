"""
Reconcile the plan's required paths with the files on disk.

missing: required by the plan, absent on disk (OFF-PLAN)
extra:   present under a watched root, never declared (DRIFT)
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Set


@dataclass
class DiffResult:
    missing: List[str] = field(default_factory=list)
    extra: List[str] = field(default_factory=list)
    satisfied: List[str] = field(default_factory=list)

    @property
    def clean(self) -> bool:
        return not self.missing and not self.extra


def _abs(repo_root: Path, rel: str) -> str:
    return os.path.normpath(os.path.join(str(repo_root), rel))


def compute_diff(
    repo_root: Path, required: Iterable[str], actual: Iterable[str]
) -> DiffResult:
    """Compare required paths against the scanned file set.

    Required paths are checked with a direct existence test because a
    required directory never shows up in the (files only) scan.
    """
    repo_root = Path(repo_root)
    required = sorted(set(required))

    missing: List[str] = []
    satisfied: List[str] = []
    for rel in required:
        if os.path.exists(_abs(repo_root, rel)):
            satisfied.append(rel)
        else:
            missing.append(rel)

    required_abs: Set[str] = {_abs(repo_root, rel) for rel in required}
    extra = sorted(
        rel for rel in set(actual) if _abs(repo_root, rel) not in required_abs
    )

    return DiffResult(missing=missing, extra=extra, satisfied=satisfied)

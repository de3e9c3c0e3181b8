"""Plan document loading and path extraction."""
from __future__ import annotations

import hashlib
from dataclasses import dataclass
from pathlib import Path

from plan_guard.core.errors import PlanReadError
from plan_guard.core.logger import logger

from .extractor import extract_plan_paths, normalize_candidate
from .phases import list_phases, slice_to_phase


@dataclass(frozen=True)
class PlanDocument:
    path: Path
    rel_path: str
    text: str

    @property
    def sha256(self) -> str:
        return hashlib.sha256(self.text.encode("utf-8")).hexdigest()


def read_plan(plan_path: Path, repo_root: Path) -> PlanDocument:
    """Read the plan once; any failure here is fatal for the run."""
    if not plan_path.is_file():
        raise PlanReadError(f"Plan not found: {plan_path}")
    try:
        text = plan_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise PlanReadError(f"Cannot read plan {plan_path}: {e}") from e

    try:
        rel = plan_path.relative_to(repo_root).as_posix()
    except ValueError:
        rel = plan_path.as_posix()

    logger.info(f"Loaded plan {rel} ({len(text)} chars)")
    return PlanDocument(path=plan_path, rel_path=rel, text=text)


__all__ = [
    "PlanDocument",
    "read_plan",
    "extract_plan_paths",
    "normalize_candidate",
    "list_phases",
    "slice_to_phase",
]

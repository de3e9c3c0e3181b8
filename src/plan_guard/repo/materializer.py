"""
Create placeholders for required paths that do not exist yet.

Never deletes or overwrites anything, so running it again is a no-op.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List

from plan_guard.core.errors import MaterializeError
from plan_guard.core.logger import logger

from .kinds import PathKind, classify_path


@dataclass
class CreatedPaths:
    dirs: List[str] = field(default_factory=list)
    files: List[str] = field(default_factory=list)

    @property
    def empty(self) -> bool:
        return not self.dirs and not self.files

    def to_dict(self) -> dict:
        return {"dirs": sorted(self.dirs), "files": sorted(self.files)}


def _missing_ancestors(repo_root: Path, path: Path) -> List[str]:
    """Directories between repo_root and ``path`` (inclusive) that do not exist yet."""
    missing = []
    while path != repo_root and not path.exists():
        missing.append(path.relative_to(repo_root).as_posix())
        path = path.parent
    return missing


def materialize(repo_root: Path, required: Iterable[str]) -> CreatedPaths:
    repo_root = Path(repo_root).resolve()
    created = CreatedPaths()

    for rel in required:
        target = repo_root / rel
        if not target.resolve().is_relative_to(repo_root):
            raise MaterializeError(f"Refusing to create {rel}: outside {repo_root}")
        if target.exists():
            continue

        try:
            if classify_path(rel) is PathKind.FILE:
                parent = target.parent
                new_dirs = _missing_ancestors(repo_root, parent)
                parent.mkdir(parents=True, exist_ok=True)
                created.dirs.extend(new_dirs)
                try:
                    # "x" refuses to clobber a file that appeared in the meantime
                    with open(target, "x", encoding="utf-8"):
                        pass
                except FileExistsError:
                    continue
                created.files.append(rel)
            else:
                new_dirs = _missing_ancestors(repo_root, target.parent)
                target.mkdir(parents=True, exist_ok=True)
                created.dirs.extend(new_dirs)
                created.dirs.append(rel)
        except OSError as e:
            raise MaterializeError(f"Cannot create {rel}: {e}") from e

    created.dirs.sort()
    created.files.sort()
    if created.empty:
        logger.info("Materialize: nothing to create")
    else:
        logger.info(
            f"Materialized {len(created.dirs)} dirs, {len(created.files)} files",
            extra={"meta": created.to_dict()},
        )
    return created

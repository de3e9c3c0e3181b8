"""Walk the watched roots and list the files actually present."""
import os
from pathlib import Path
from typing import Iterable, List, Set

from plan_guard.constants import WATCHED_ROOTS
from plan_guard.core.logger import logger

from .ignore import should_ignore


def _rel(path: str, repo_root: str) -> str:
    return os.path.relpath(path, repo_root).replace(os.sep, "/")


def list_files_under(root_abs: Path, repo_root_abs: Path) -> List[str]:
    """Repo-relative paths of every non-ignored file below ``root_abs``."""
    root = str(root_abs)
    repo = str(repo_root_abs)
    out: List[str] = []
    if not os.path.isdir(root):
        return out

    for dirpath, dirnames, filenames in os.walk(root):
        # Prune ignored subtrees before descending
        dirnames[:] = [
            d for d in dirnames if not should_ignore(_rel(os.path.join(dirpath, d), repo))
        ]
        for name in filenames:
            rel = _rel(os.path.join(dirpath, name), repo)
            if not should_ignore(rel):
                out.append(rel)
    return out


def scan_watched_roots(
    repo_root: Path, roots: Iterable[str] = WATCHED_ROOTS
) -> Set[str]:
    repo_root = Path(repo_root)
    actual: Set[str] = set()
    for root in roots:
        root_abs = repo_root / root
        if not root_abs.is_dir():
            logger.info(f"Watched root {root} does not exist; skipping")
            continue
        files = list_files_under(root_abs, repo_root)
        logger.info(f"Scanned {root}: {len(files)} files")
        actual.update(files)
    return actual

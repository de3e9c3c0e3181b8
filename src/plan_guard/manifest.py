"""
Persisted record of one guard run.

.plan_guard/manifest.json is rewritten on every run; a named snapshot
(.plan_guard/manifest.<name>.json) keeps a copy for later comparison.
"""
from __future__ import annotations

import json
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from plan_guard.constants import GUARD_DIR_NAME, manifest_file_name
from plan_guard.core.errors import ManifestWriteError
from plan_guard.core.logger import logger


def utc_timestamp() -> str:
    return (
        datetime.now(timezone.utc)
        .isoformat(timespec="milliseconds")
        .replace("+00:00", "Z")
    )


class CreatedRecord(BaseModel):
    dirs: List[str] = Field(default_factory=list)
    files: List[str] = Field(default_factory=list)


class Manifest(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )

    generated_at: str = Field(default_factory=utc_timestamp)
    repo_root: str
    plan: str
    plan_hash: str
    phase_filter: Optional[int] = None
    required_paths: List[str] = Field(default_factory=list)
    missing_paths: List[str] = Field(default_factory=list)
    extra_paths: List[str] = Field(default_factory=list)
    created: Optional[CreatedRecord] = None

    def to_payload(self) -> dict:
        """JSON-ready dict; ``created`` is left out when nothing was materialized."""
        payload = self.model_dump(mode="json", by_alias=True)
        if self.created is None:
            payload.pop("created", None)
        return payload


class ManifestStore:
    """Writes manifests under <repo>/.plan_guard/."""

    def __init__(self, repo_root: Path):
        self.repo_root = Path(repo_root)
        self.guard_dir = self.repo_root / GUARD_DIR_NAME

    def path_for(self, snapshot: Optional[str] = None) -> Path:
        return self.guard_dir / manifest_file_name(snapshot)

    def write(self, manifest: Manifest, snapshot: Optional[str] = None) -> List[Path]:
        """Write the canonical manifest and, if named, a snapshot copy.

        Raises ManifestWriteError on any failure; audit state is never dropped silently.
        """
        body = json.dumps(manifest.to_payload(), indent=2)
        targets = [self.path_for()]
        if snapshot:
            targets.append(self.path_for(snapshot))

        try:
            self.guard_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ManifestWriteError(f"Cannot create {self.guard_dir}: {e}") from e

        for target in targets:
            self._atomic_write(target, body)
            logger.info(f"Manifest saved: {target}")
        return targets

    def _atomic_write(self, target: Path, body: str) -> None:
        """Write via temp file + rename so a manifest is either complete or absent."""
        temp = target.with_name(target.name + ".tmp")
        try:
            with open(temp, "w", encoding="utf-8") as f:
                f.write(body)
                f.write("\n")
                f.flush()
                os.fsync(f.fileno())
            temp.replace(target)
        except OSError as e:
            try:
                temp.unlink()
            except FileNotFoundError:
                pass
            except OSError as cleanup_err:
                logger.warning(f"Could not remove {temp}: {cleanup_err}")
            raise ManifestWriteError(f"Failed to write manifest {target}: {e}") from e

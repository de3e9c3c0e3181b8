"""One guard pass: plan -> required paths -> [create] -> diff -> manifest."""
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel

from plan_guard.core.config import GuardConfig
from plan_guard.core.errors import NoPlanPathsError, PhaseNotFoundError
from plan_guard.core.logger import logger
from plan_guard.diff import compute_diff
from plan_guard.manifest import CreatedRecord, Manifest, ManifestStore
from plan_guard.plan import extract_plan_paths, list_phases, read_plan, slice_to_phase
from plan_guard.repo.ignore import should_ignore
from plan_guard.repo.materializer import materialize
from plan_guard.repo.scanner import scan_watched_roots
from plan_guard.reporting import GuardOutcome, select_outcome


class GuardRun(BaseModel):
    manifest: Manifest
    outcome: GuardOutcome
    manifest_rel_path: str
    snapshot_rel_path: Optional[str] = None

    @property
    def exit_code(self) -> int:
        return int(self.outcome)


def required_paths_for(text: str, phase: Optional[int] = None) -> List[str]:
    """Extract the required path set, failing loudly when there is nothing to enforce."""
    if phase and not slice_to_phase(text, phase):
        known = ", ".join(str(n) for n in list_phases(text)) or "none"
        raise PhaseNotFoundError(
            f'No "# PHASE {phase}" section in the plan (phases found: {known})'
        )

    required = [p for p in extract_plan_paths(text, phase) if not should_ignore(p)]
    if not required:
        if phase:
            raise NoPlanPathsError(f'No paths found under "# PHASE {phase}".')
        raise NoPlanPathsError(
            "No plan paths were detected. The guard cannot enforce anything."
        )
    return required


def run_guard(config: GuardConfig) -> GuardRun:
    repo_root = config.repo_root
    plan = read_plan(config.plan_path, repo_root)
    required = required_paths_for(plan.text, config.phase)
    logger.info(
        f"Required paths detected: {len(required)}",
        extra={"meta": {"plan": plan.rel_path, "phase": config.phase}},
    )

    created = None
    if config.create:
        created = CreatedRecord(**materialize(repo_root, required).to_dict())

    actual = scan_watched_roots(repo_root)
    diff = compute_diff(repo_root, required, actual)

    manifest = Manifest(
        repo_root=str(repo_root),
        plan=plan.rel_path,
        plan_hash=plan.sha256,
        phase_filter=config.phase,
        required_paths=required,
        missing_paths=diff.missing,
        extra_paths=diff.extra,
        created=created,
    )
    store = ManifestStore(repo_root)
    written = store.write(manifest, snapshot=config.snapshot)

    outcome = select_outcome(diff)
    logger.info(
        f"Guard result: {outcome.name}",
        extra={"meta": {"missing": len(diff.missing), "extra": len(diff.extra)}},
    )

    rel = [p.relative_to(repo_root).as_posix() for p in written]
    return GuardRun(
        manifest=manifest,
        outcome=outcome,
        manifest_rel_path=rel[0],
        snapshot_rel_path=rel[1] if len(rel) > 1 else None,
    )

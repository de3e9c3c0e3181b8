from __future__ import annotations
import os
import re
from pathlib import Path
from typing import Optional, Dict, Any
from pydantic import BaseModel, ValidationError, field_validator
import yaml

from plan_guard.constants import (
    DEFAULT_PLAN,
    ENV_PREFIX,
    GUARD_DIR_NAME,
    REPO_CONFIG_NAME,
)
from plan_guard.core.errors import (
    GuardConfigError,
    InvalidPhaseError,
    InvalidSnapshotNameError,
)

SNAPSHOT_NAME_RE = re.compile(r"^[A-Za-z0-9_-][A-Za-z0-9._-]*$")

# Keys a repository may set in .plan_guard/config.yaml or via PG_* variables
FILE_KEYS = ("plan", "log_level", "log_dir")


class GuardConfig(BaseModel):
    plan: str = DEFAULT_PLAN
    repo: Path = Path(".")
    phase: Optional[int] = None
    create: bool = False
    report: bool = False
    snapshot: Optional[str] = None
    log_level: str = "WARNING"
    log_dir: Optional[str] = None

    @field_validator("phase", mode="before")
    def parse_phase(cls, v: Any) -> Optional[int]:
        """Accept positive integers or their decimal string form; nothing else."""
        if v is None:
            return None
        if isinstance(v, bool):
            raise ValueError(f"Invalid --phase value: {v}")
        if isinstance(v, str):
            text = v.strip()
            if not text.isdecimal():
                raise ValueError(f"Invalid --phase value: {v}")
            v = int(text)
        if not isinstance(v, int) or v <= 0:
            raise ValueError(f"Invalid --phase value: {v}")
        return v

    @field_validator("snapshot", mode="before")
    def check_snapshot(cls, v: Any) -> Optional[str]:
        if v is None:
            return None
        if not isinstance(v, str) or not SNAPSHOT_NAME_RE.match(v):
            raise ValueError(f"Invalid --snapshot name: {v!r}")
        return v

    @field_validator("log_level", mode="before")
    def normalize_level(cls, v: Any) -> str:
        return str(v or "WARNING").upper()

    @property
    def repo_root(self) -> Path:
        return self.repo.resolve()

    @property
    def plan_path(self) -> Path:
        """Plan location; relative plans are resolved against the repository."""
        return (self.repo_root / self.plan).resolve()

    @property
    def do_report(self) -> bool:
        """--report is implied unless --create or --snapshot was asked for."""
        return self.report or not (self.create or self.snapshot)


def load_guard_config(overrides: Optional[Dict[str, Any]] = None) -> GuardConfig:
    """Load and validate configuration with priority: overrides > env > repo file > defaults."""
    overrides = {k: v for k, v in (overrides or {}).items() if v is not None}
    data: Dict[str, Any] = {}

    # 1. Repository config file
    repo = Path(overrides.get("repo", "."))
    data.update(_load_repo_file(repo / GUARD_DIR_NAME / REPO_CONFIG_NAME))

    # 2. Environment Variables (PG_ prefix)
    for key in FILE_KEYS:
        env_val = os.environ.get(f"{ENV_PREFIX}{key.upper()}")
        if env_val:
            data[key] = env_val

    # 3. Overrides (CLI flags)
    data.update(overrides)

    try:
        return GuardConfig(**data)
    except ValidationError as e:
        raise _config_error(e) from None


def _load_repo_file(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            loaded = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise GuardConfigError(f"Cannot read {path}: {e}") from e
    if not isinstance(loaded, dict):
        raise GuardConfigError(f"{path} must contain a mapping")
    return {k: v for k, v in loaded.items() if k in FILE_KEYS and v is not None}


def _config_error(exc: ValidationError) -> GuardConfigError:
    err = exc.errors()[0]
    field = err["loc"][0] if err.get("loc") else ""
    msg = str(err.get("msg", exc)).removeprefix("Value error, ")
    if field == "phase":
        return InvalidPhaseError(msg)
    if field == "snapshot":
        return InvalidSnapshotNameError(msg)
    return GuardConfigError(f"{field}: {msg}" if field else msg)

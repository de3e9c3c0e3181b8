import os
import pytest
from pathlib import Path

from plan_guard.constants import ENV_PREFIX


@pytest.fixture(autouse=True)
def clean_guard_env(monkeypatch):
    """Keep PG_* variables from the developer's shell out of the tests."""
    for key in list(os.environ):
        if key.startswith(ENV_PREFIX):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def repo(tmp_path) -> Path:
    root = tmp_path / "repo"
    root.mkdir()
    return root


@pytest.fixture
def write_plan(repo):
    """Write plan text to <repo>/master_build.md (or another name)."""

    def _write(text: str, name: str = "master_build.md") -> Path:
        path = repo / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def touch(repo):
    """Create files (with parent dirs) under the repo."""

    def _touch(*rels: str) -> None:
        for rel in rels:
            path = repo / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text("", encoding="utf-8")

    return _touch

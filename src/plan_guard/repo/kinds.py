from enum import Enum
from pathlib import PurePosixPath

from plan_guard.constants import PLAN_DOCUMENT_NAMES


class PathKind(str, Enum):
    FILE = "file"
    DIRECTORY = "directory"


# Extensionless names that are still files
KNOWN_FILES = frozenset(
    {
        "Makefile",
        "Dockerfile",
        "Procfile",
        "LICENSE",
        "CODEOWNERS",
        "package.json",
        "schema.prisma",
        ".gitignore",
        ".npmrc",
        "netlify.toml",
        "README.md",
    }
    | set(PLAN_DOCUMENT_NAMES)
)


def classify_path(rel: str) -> PathKind:
    """Guess whether a required path names a file or a directory."""
    if rel.endswith("/"):
        return PathKind.DIRECTORY
    base = PurePosixPath(rel).name
    if "." in base or base in KNOWN_FILES:
        return PathKind.FILE
    return PathKind.DIRECTORY

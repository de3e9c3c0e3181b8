"""
Generated or incidental files that never need to appear in the plan.
Applies to required paths and to drift scanning alike.
"""
from pathlib import PurePosixPath

# Directory segments ignored at any depth
IGNORED_DIR_SEGMENTS = frozenset(
    {
        "node_modules",
        ".next",
        "dist",
        "build",
        ".turbo",
        ".cache",
        ".vercel",
        ".netlify",
        "__pycache__",
        ".pytest_cache",
    }
)

# Basenames ignored wherever they appear
IGNORED_FILES = frozenset(
    {
        "package-lock.json",
        "pnpm-lock.yaml",
        "yarn.lock",
        ".DS_Store",
        "Thumbs.db",
        # Local-only environment files
        ".env",
        ".env.local",
        ".env.development",
        ".env.production",
    }
)


def should_ignore(rel_path: str) -> bool:
    parts = PurePosixPath(rel_path.replace("\\", "/")).parts
    if not parts:
        return False
    if any(seg in IGNORED_DIR_SEGMENTS for seg in parts):
        return True
    return parts[-1] in IGNORED_FILES

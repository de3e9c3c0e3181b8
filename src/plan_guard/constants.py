# Plan documents
DEFAULT_PLAN = "master_build.md"
PLAN_DOCUMENT_NAMES = (
    "master_build.md",
    "MASTER_BUILD_DIRECTIONS.md",
    "PHASE_LOG.md",
    "PROTOCOLS.md",
)

# Guard state lives in the guarded repository
GUARD_DIR_NAME = ".plan_guard"
MANIFEST_NAME = "manifest.json"
REPO_CONFIG_NAME = "config.yaml"

# Only paths under these roots count as plan references
PERMITTED_ROOTS = (
    "apps/",
    "db/",
    "scripts/",
    "public/",
    GUARD_DIR_NAME + "/",
) + PLAN_DOCUMENT_NAMES

# Directories scanned for drift (repo-relative)
WATCHED_ROOTS = (
    "apps/campaign_compliance",
    "db/sql",
    "scripts",
)

# Exit codes
EXIT_CLEAN = 0
EXIT_FATAL = 1
EXIT_OFF_PLAN = 2
EXIT_DRIFT = 3

# Environment overrides
ENV_PREFIX = "PG_"


def manifest_file_name(snapshot=None) -> str:
    if not snapshot:
        return MANIFEST_NAME
    return f"manifest.{snapshot}.json"

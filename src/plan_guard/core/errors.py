"""Typed exception hierarchy for fatal guard errors.

Missing and extra paths are findings, not errors; they never raise.
"""


class PlanGuardError(Exception):
    """Base for all fatal guard errors."""


class GuardConfigError(PlanGuardError):
    """Invalid configuration or command-line value."""


class InvalidPhaseError(GuardConfigError):
    """--phase is not a positive integer."""


class InvalidSnapshotNameError(GuardConfigError):
    """--snapshot cannot be used as part of a file name."""


class PlanReadError(PlanGuardError):
    """Plan document missing or unreadable."""


class PhaseNotFoundError(PlanGuardError):
    """Requested PHASE heading does not exist in the plan."""


class NoPlanPathsError(PlanGuardError):
    """Nothing to enforce: the plan (or phase) references no paths."""


class ManifestWriteError(PlanGuardError):
    """Manifest could not be persisted."""


class MaterializeError(PlanGuardError):
    """A placeholder could not be created."""


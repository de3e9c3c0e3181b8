"""Plan guard: keep a repository's layout on the build plan."""

__version__ = "1.0.0"

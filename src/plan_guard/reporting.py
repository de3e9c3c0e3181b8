from __future__ import annotations

from enum import IntEnum
from typing import TYPE_CHECKING, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from plan_guard.constants import EXIT_CLEAN, EXIT_DRIFT, EXIT_OFF_PLAN
from plan_guard.diff import DiffResult

if TYPE_CHECKING:
    from plan_guard.runner import GuardRun


class GuardOutcome(IntEnum):
    CLEAN = EXIT_CLEAN
    OFF_PLAN = EXIT_OFF_PLAN
    DRIFT = EXIT_DRIFT

    @property
    def label(self) -> str:
        return {
            GuardOutcome.CLEAN: "[green]ON-PLAN (no missing, no drift)[/green]",
            GuardOutcome.OFF_PLAN: "[red]OFF-PLAN (missing required paths)[/red]",
            GuardOutcome.DRIFT: "[yellow]ON-PLAN but drift detected (extra files present)[/yellow]",
        }[self]


def select_outcome(diff: DiffResult) -> GuardOutcome:
    """Missing paths outrank drift."""
    if diff.clean:
        return GuardOutcome.CLEAN
    if diff.missing:
        return GuardOutcome.OFF_PLAN
    return GuardOutcome.DRIFT


def _print_items(console: Console, items, marker: str, style: str) -> None:
    if not items:
        console.print("  [green]none[/green]")
    for item in items:
        console.print(f"  [{style}]{marker}[/{style}] {escape(item)}")


def render_report(run: "GuardRun", console: Optional[Console] = None) -> None:
    console = console or Console()
    manifest = run.manifest

    console.print("\n[bold blue]=== PLAN GUARD REPORT ===[/bold blue]\n")

    table = Table(show_header=False, box=None)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("Plan", escape(manifest.plan))
    table.add_row("Plan hash", manifest.plan_hash)
    if manifest.phase_filter:
        table.add_row("Phase filter", str(manifest.phase_filter))
    table.add_row("Required paths detected", str(len(manifest.required_paths)))
    table.add_row("Manifest saved", escape(run.manifest_rel_path))
    if run.snapshot_rel_path:
        table.add_row("Snapshot saved", escape(run.snapshot_rel_path))
    console.print(table)
    console.print()

    if manifest.created is not None:
        console.print("[bold]-- Created --[/bold]")
        console.print(f"Dirs: {len(manifest.created.dirs)}")
        for d in manifest.created.dirs:
            console.print(f"  [green]+[/green] {escape(d)}")
        console.print(f"Files: {len(manifest.created.files)}")
        for f in manifest.created.files:
            console.print(f"  [green]+[/green] {escape(f)}")
        console.print()

    console.print("[bold]-- Missing required paths (OFF-PLAN) --[/bold]")
    _print_items(console, manifest.missing_paths, "x", "red")
    console.print()

    console.print("[bold]-- Extra files under watched roots (POTENTIAL DRIFT) --[/bold]")
    _print_items(console, manifest.extra_paths, "!", "yellow")
    console.print()

    console.print(f"Result: {run.outcome.label}\n")

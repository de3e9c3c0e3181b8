import sys
from typing import Optional

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape

from plan_guard import __version__
from plan_guard.constants import EXIT_FATAL
from plan_guard.core.config import load_guard_config
from plan_guard.core.errors import PlanGuardError
from plan_guard.core.logger import setup_logger
from plan_guard.reporting import render_report
from plan_guard.runner import run_guard

app = typer.Typer(
    help="Check that the repository layout matches master_build.md", add_completion=False
)
console = Console()
err_console = Console(stderr=True)


def _version_callback(value: bool):
    if value:
        console.print(f"plan-guard {__version__}")
        raise typer.Exit()


@app.command()
def guard(
    plan: Optional[str] = typer.Option(None, "--plan", help="Plan document (relative to --repo)"),
    repo: Optional[str] = typer.Option(None, "--repo", help="Repository root"),
    phase: Optional[str] = typer.Option(None, "--phase", help="Only enforce paths under '# PHASE n'"),
    create: bool = typer.Option(False, "--create", help="Create missing dirs and placeholder files"),
    report: bool = typer.Option(False, "--report", help="Print the report (default unless --create/--snapshot)"),
    snapshot: Optional[str] = typer.Option(None, "--snapshot", help="Also save .plan_guard/manifest.<name>.json"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log progress to stderr"),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show version and exit"
    ),
):
    """Exit 0 when on-plan, 2 when required paths are missing, 3 on drift only."""
    try:
        config = load_guard_config(
            {
                "plan": plan,
                "repo": repo,
                # phase stays a string so bad values are ours to report, not the parser's
                "phase": phase,
                "create": create,
                "report": report,
                "snapshot": snapshot,
                "log_level": "INFO" if verbose else None,
            }
        )
        setup_logger(config.log_level, config.log_dir)
        run = run_guard(config)
    except PlanGuardError as e:
        err_console.print(f"\n[bold red]ERROR:[/bold red] {escape(str(e))}\n")
        raise typer.Exit(code=EXIT_FATAL)

    if config.do_report:
        render_report(run, console)

    raise typer.Exit(code=run.exit_code)


def main() -> None:
    """Console entry point; usage errors exit 1 so they never look like exit 2 (off-plan)."""
    load_dotenv()
    try:
        code = app(standalone_mode=False)
    except typer.TyperException as e:
        # unknown flags, missing option values
        err_console.print(f"\n[bold red]ERROR:[/bold red] {escape(e.format_message())}\n")
        sys.exit(EXIT_FATAL)
    except typer.Abort:
        err_console.print("[red]Aborted.[/red]")
        sys.exit(EXIT_FATAL)
    sys.exit(code or 0)


if __name__ == "__main__":
    main()

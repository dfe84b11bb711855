"""Script analysis CLI commands.

This module provides CLI commands for reviewing a script before dispatch:
- scan: Validate and list findings (table or JSON)
- report: Print the plain-text security report
- gate: Print the execution decision and exit non-zero on DENY
"""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from scriptgate_core.cli.common import load_script, resolve_language
from scriptgate_core.exceptions import ScriptReadError
from scriptgate_core.scripts import (
    generate_security_report,
    is_safe_for_execution,
    validate_script,
)
from scriptgate_core.types import Severity, ValidationResult

scripts_app = typer.Typer(help="Analyze scripts before execution")

SEVERITY_STYLES = {
    Severity.CRITICAL: "bold red",
    Severity.HIGH: "red",
    Severity.MEDIUM: "yellow",
    Severity.LOW: "dim",
}


def _validate_file(
    console: Console,
    path: Path,
    language: Optional[str],
    allow_elevated: bool,
) -> ValidationResult:
    """Load and validate a script, exiting with code 2 if it cannot be read."""
    try:
        content = load_script(path)
    except ScriptReadError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(2)
    return validate_script(content, resolve_language(path, language), allow_elevated)


@scripts_app.command("scan")
def scan(
    path: Path = typer.Argument(..., help="Script file to analyze"),
    language: Optional[str] = typer.Option(
        None, "--language", "-l", help="Script language (default: from extension)"
    ),
    allow_elevated: bool = typer.Option(
        False, "--allow-elevated", help="Caller has authorized elevated execution"
    ),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """Validate a script and list its findings."""
    console = Console()
    result = _validate_file(console, path, language, allow_elevated)

    if json_output:
        print(result.model_dump_json(indent=2))
    else:
        status = "[green]VALID[/green]" if result.is_valid else "[red]INVALID[/red]"
        secure = "[green]SECURE[/green]" if result.is_secure else "[red]INSECURE[/red]"
        console.print(f"[bold]Score:[/bold] {result.security_score}/100  {status}  {secure}")

        if result.findings:
            table = Table(title=f"Findings: {path.name}")
            table.add_column("#", justify="right", style="dim")
            table.add_column("Severity")
            table.add_column("Category", style="cyan")
            table.add_column("Line", justify="right")
            table.add_column("Description")

            for index, finding in enumerate(result.findings, start=1):
                style = SEVERITY_STYLES[finding.severity]
                table.add_row(
                    str(index),
                    f"[{style}]{finding.severity.value}[/{style}]",
                    finding.category,
                    str(finding.line) if finding.line else "-",
                    finding.description,
                )
            console.print(table)
        else:
            console.print("[green]No findings[/green]")

    if not result.is_valid:
        raise typer.Exit(1)


@scripts_app.command("report")
def report(
    path: Path = typer.Argument(..., help="Script file to analyze"),
    language: Optional[str] = typer.Option(
        None, "--language", "-l", help="Script language (default: from extension)"
    ),
    allow_elevated: bool = typer.Option(
        False, "--allow-elevated", help="Caller has authorized elevated execution"
    ),
) -> None:
    """Print the plain-text security report for a script."""
    console = Console()
    result = _validate_file(console, path, language, allow_elevated)
    print(generate_security_report(result), end="")


@scripts_app.command("gate")
def gate(
    path: Path = typer.Argument(..., help="Script file to check"),
    language: Optional[str] = typer.Option(
        None, "--language", "-l", help="Script language (default: from extension)"
    ),
    allow_elevated: bool = typer.Option(
        False, "--allow-elevated", help="Caller has authorized elevated execution"
    ),
) -> None:
    """Decide whether a script may be executed (exit 0 = ALLOW, 1 = DENY)."""
    console = Console()
    result = _validate_file(console, path, language, allow_elevated)

    if is_safe_for_execution(result):
        console.print(f"[green]ALLOW[/green] (score {result.security_score})")
        return

    console.print(
        f"[red]DENY[/red] (score {result.security_score}, "
        f"{result.critical_count} critical, {result.high_count} high)"
    )
    raise typer.Exit(1)

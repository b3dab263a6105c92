"""Typer CLI for tmrw-audit."""

import asyncio
import logging

import typer
from rich import markup
from rich.console import Console
from rich.logging import RichHandler

from tmrw_audit.config import settings
from tmrw_audit.errors import AuditError
from tmrw_audit.report import generate_report, load_report, render_report, render_summary, report_to_json
from tmrw_audit.scanner import scan_codebase

app = typer.Typer(
    name="tmrw",
    help="tmrw audit: your escape kit from the cloud cage.",
)
console = Console()


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose or settings.debug else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@app.command()
def audit(
    directory: str = typer.Option("", "--dir", "-d", help="Directory to scan (default: current directory)"),
    pattern: list[str] = typer.Option([], "--pattern", "-p", help="Glob pattern to scan; repeatable, prefix with ! to exclude"),
    output: str = typer.Option("", "--output", "-o", help="Report path (default: TMRW_REPORT_PATH)"),
    json_output: bool = typer.Option(False, "--json", help="Output raw JSON results"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log discovery and parsing details"),
):
    """Scan a codebase for cloud lock-in vulnerabilities."""
    _configure_logging(verbose or settings.verbose)

    try:
        result = asyncio.run(scan_codebase(directory or None, pattern or None))
        report_path = generate_report(result, output or settings.report_path)
    except AuditError as e:
        console.print(f"[red]Error:[/red] {markup.escape(str(e))}")
        raise typer.Exit(code=1)

    if json_output:
        typer.echo(report_to_json(result))
        return

    for err in result.errors:
        console.print(f"[yellow]Warning:[/yellow] {markup.escape(err)}")
    render_summary(result, console)
    console.print(f"Report saved to: {report_path}")


@app.command()
def report(file: str = typer.Argument("", help="Report file (default: TMRW_REPORT_PATH)")):
    """View a saved report."""
    try:
        saved = load_report(file or settings.report_path)
    except AuditError as e:
        console.print(f"[red]Error:[/red] {markup.escape(str(e))}")
        raise typer.Exit(code=1)

    render_report(saved, console)


@app.command()
def escape():
    """Learn how to deploy the Sovereign Stack."""
    console.print("Deploy the Sovereign Stack: https://tmrw.it/stack")
    console.print("Follow the Escape Manifesto to build user-owned infrastructure.")


if __name__ == "__main__":
    app()

"""Audit report persistence and Rich terminal rendering."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from tmrw_audit.errors import ReportError
from tmrw_audit.models import AuditReport, DeplatformingRisk, RiskLabel, ScanResult
from tmrw_audit.scoring import DEPLATFORMING_WEIGHT, LOCK_IN_WEIGHT, PROPRIETARY_FORMAT_WEIGHT

RISK_STYLES = {
    RiskLabel.VULNERABLE: "bold red",
    RiskLabel.AT_RISK: "yellow",
    RiskLabel.CAUTIOUS: "green",
}

DEPLATFORMING_STYLES = {
    DeplatformingRisk.HIGH: "bold red",
    DeplatformingRisk.MODERATE: "yellow",
    DeplatformingRisk.LOW: "green",
}


def build_report(result: ScanResult, timestamp: datetime | None = None) -> AuditReport:
    """Stamp a ScanResult with a UTC timestamp."""
    if timestamp is None:
        timestamp = datetime.now(timezone.utc).replace(microsecond=0)
    return AuditReport(**result.model_dump(), timestamp=timestamp)


def report_to_json(report: ScanResult) -> str:
    """Serialize a report (or bare result) to JSON."""
    return report.model_dump_json(indent=2)


def generate_report(result: ScanResult, output_path: str | Path) -> Path:
    """Save scan results as a timestamped JSON report."""
    path = Path(output_path)
    report = build_report(result)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(report_to_json(report) + "\n", encoding="utf-8")
    except OSError as e:
        raise ReportError(f"Failed to save report: {e}") from e
    return path


def load_report(path: str | Path) -> AuditReport:
    """Read a report written by :func:`generate_report`."""
    try:
        return AuditReport.model_validate_json(Path(path).read_text(encoding="utf-8"))
    except OSError as e:
        raise ReportError(f"Failed to read report: {e}") from e
    except ValidationError as e:
        raise ReportError(f"Invalid report {path}: {e}") from e


def render_summary(result: ScanResult, console: Console | None = None) -> None:
    """Print the short post-audit summary."""
    if console is None:
        console = Console()

    risk_style = RISK_STYLES[result.risk_label]
    deplat_style = DEPLATFORMING_STYLES[result.deplatforming_risk]
    console.print("[bold]AUDIT COMPLETE: YOUR INFRA'S FATE EXPOSED[/bold]")
    console.print(
        f"Freedom Score: {result.freedom_score}/100 "
        f"([{risk_style}]{result.risk_label.value}[/{risk_style}])"
    )
    console.print(f"Vendor Lock-In: {result.lock_in_score:.1f}%")
    console.print(f"Deplatforming Risk: [{deplat_style}]{result.deplatforming_risk.value}[/{deplat_style}]")
    console.print("Recommendations:")
    for rec in result.recommendations:
        console.print(f"- {rec}")


def render_report(report: AuditReport, console: Console | None = None) -> None:
    """Render a Rich-formatted audit report to the console."""
    if console is None:
        console = Console()

    risk_style = RISK_STYLES[report.risk_label]
    deplat_style = DEPLATFORMING_STYLES[report.deplatforming_risk]

    header = (
        f"Timestamp: {report.timestamp.isoformat()}\n"
        f"[bold]Freedom Score: {report.freedom_score}/100[/bold] "
        f"([{risk_style}]{report.risk_label.value}[/{risk_style}])\n"
        f"Vendor Lock-In: {report.lock_in_score:.1f}%\n"
        f"Deplatforming Risk: [{deplat_style}]{report.deplatforming_risk.value}[/{deplat_style}]\n"
        f"Portability: {report.portability_score:.0%}  |  Files analyzed: {report.files_analyzed}"
    )
    console.print(Panel(header, title="AUDIT REPORT: YOUR INFRA'S WEAKNESS", border_style="red"))

    breakdown = Table(title="Freedom Score Calculation", show_header=False)
    breakdown.add_column("Term")
    breakdown.add_column("Points", justify="right")
    breakdown.add_row("Base Score", "100.0")
    breakdown.add_row("[red]- Vendor Lock-In Penalty[/red]", f"{report.lock_in_score * LOCK_IN_WEIGHT:.1f}")
    breakdown.add_row(
        "[red]- Deplatforming Risk Penalty[/red]",
        f"{report.deplatforming_risk_score * DEPLATFORMING_WEIGHT:.1f}",
    )
    breakdown.add_row(
        "[red]- Proprietary Format Penalty[/red]",
        f"{(1 - report.portability_score) * PROPRIETARY_FORMAT_WEIGHT:.1f}",
    )
    breakdown.add_row("[bold]= Freedom Score[/bold]", f"[bold]{report.freedom_score}[/bold]")
    console.print(breakdown)

    if report.vendor_services:
        counts: dict[str, int] = {}
        for name in report.vendor_services:
            counts[name] = counts.get(name, 0) + 1
        services = Table(title=f"Detected Services (providers: {escape(', '.join(report.providers)) or 'none'})")
        services.add_column("Service", style="bold cyan")
        services.add_column("Occurrences", justify="right")
        for name, count in counts.items():
            services.add_row(escape(name), str(count))
        console.print(services)

    if report.errors:
        for err in report.errors:
            console.print(f"[yellow]Warning:[/yellow] {escape(err)}")

    console.print("[bold]Real-World Wake-Up Calls:[/bold]")
    for example in report.deplatforming_examples:
        console.print(f"[yellow]- {example}[/yellow]")

    console.print("[bold]Escape Plan:[/bold]")
    for rec in report.recommendations:
        console.print(f"- {rec}")

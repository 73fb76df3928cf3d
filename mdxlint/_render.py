"""Wspólne tabele rich dla komend mdxlint."""

from __future__ import annotations

from typing import Iterable

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from data_model.findings import Finding, Severity
from validator.report_builder import summary_line
from validator.types import DocumentReport, RunReport

SEVERITY_STYLE: dict[Severity, str] = {
    Severity.ERROR:   "red",
    Severity.WARNING: "yellow",
    Severity.INFO:    "blue",
}


def findings_table(findings: Iterable[Finding]) -> Table:
    table = Table(box=box.SIMPLE, show_header=True, header_style="bold")
    table.add_column("Linia",     justify="right", no_wrap=True, style="dim")
    table.add_column("Poziom",    no_wrap=True)
    table.add_column("Kod",       style="cyan", no_wrap=True)
    table.add_column("Sekcja",    style="dim", max_width=30)
    table.add_column("Komunikat")

    for f in findings:
        style = SEVERITY_STYLE[f.severity]
        table.add_row(
            f"{f.line}:{f.column}",
            f"[{style}]{f.severity}[/{style}]",
            str(f.code),
            escape(f.heading) if f.heading else "(intro)",
            escape(f.message),
        )
    return table


def print_document(console: Console, report: DocumentReport) -> None:
    counts = report.counts()
    if not report.findings:
        console.print(
            f"[green]OK[/green]  [bold]{escape(report.path)}[/bold]  "
            f"[dim]({report.sections} sekcji, {report.fences} bloków, "
            f"{len(report.units)} par)[/dim]"
        )
        return

    label = "[red]BŁĄD[/red]" if report.has_errors else "[yellow]UWAGA[/yellow]"
    console.print(
        f"{label}  [bold]{escape(report.path)}[/bold]  "
        f"{counts['error']} error, {counts['warning']} warning, {counts['info']} info"
    )
    console.print(findings_table(report.findings))


def print_run(console: Console, report: RunReport) -> None:
    for doc in report.documents:
        print_document(console, doc)
    style = "red" if report.has_errors else "green"
    console.print(f"\n[{style}]{summary_line(report)}[/{style}]")

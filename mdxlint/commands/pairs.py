"""Komenda: mdxlint pairs — pary Before/After w dokumencie."""

from __future__ import annotations

import argparse
import json

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from data_model.documents import ComparisonUnit, Document
from mdxlint._render import findings_table
from mdxlint.commands.fences import load_extraction
from validator.pair_matcher import match_pairs

console = Console()


def _show_units(document: Document, units: tuple[ComparisonUnit, ...]) -> None:
    if not units:
        console.print("[yellow]Brak par Before/After.[/yellow]")
        return

    table = Table(box=box.SIMPLE_HEAD, show_header=True, header_style="bold white")
    table.add_column("SEKCJA", style="bold cyan", max_width=40)
    table.add_column("BEFORE", justify="right", no_wrap=True)
    table.add_column("AFTER",  justify="right", no_wrap=True)
    table.add_column("JĘZYK",  no_wrap=True)
    table.add_column("PLIK",   no_wrap=True)

    for unit in units:
        heading = document.section(unit.section).heading or "(intro)"
        langs = {unit.before.language, unit.after.language}
        table.add_row(
            escape(heading),
            str(unit.before.start_line),
            str(unit.after.start_line),
            " / ".join(sorted(langs)) or "-",
            escape(unit.filename or "-"),
        )

    console.print(table)
    console.print(f"  [dim]{len(units)} par[/dim]\n")


def run(args: argparse.Namespace) -> None:
    extraction = load_extraction(args.file, args.language)
    document = extraction.document
    result = match_pairs(document)

    if args.json:
        out = {
            "path": document.path,
            "units": [
                {
                    "section": u.section,
                    "filename": u.filename,
                    "before_line": u.before.start_line,
                    "after_line": u.after.start_line,
                    "language": [u.before.language, u.after.language],
                }
                for u in result.units
            ],
            "findings": [f.to_dict() for f in result.findings],
        }
        print(json.dumps(out, ensure_ascii=False, indent=2))
        return

    _show_units(document, result.units)
    if result.findings:
        console.print(f"[yellow]Wyniki dopasowania ({len(result.findings)}):[/yellow]")
        console.print(findings_table(result.findings))


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "pairs",
        help="Pokazuje pary bloków Before:/After: w dokumencie.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Łączy bloki kodu poprzedzone znacznikami "Before:" i "After:" w pary
(w obrębie sekcji) i pokazuje wiszące Before: oraz osierocone After:.

Przykłady:
  mdxlint pairs docs/messages/sync-dynamic-apis.mdx
  mdxlint pairs docs/messages/sync-dynamic-apis.mdx --json
        """,
    )
    p.add_argument("file", metavar="PLIK", help="Ścieżka do dokumentu .md/.mdx.")
    p.add_argument(
        "--json",
        action="store_true",
        help="Wypisz pary i wyniki jako JSON na stdout.",
    )
    p.add_argument(
        "--language", "-l",
        action="append",
        metavar="TAG",
        help="Dodatkowy dozwolony tag języka (można powtarzać).",
    )
    p.set_defaults(func=run)

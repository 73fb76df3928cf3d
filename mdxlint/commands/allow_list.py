"""Komenda: mdxlint allow-list — wczytanie i listowanie allow-listy."""

from __future__ import annotations

import argparse

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from data_model.errors import AllowListLoadError
from validator.allow_list import AllowList

console = Console(width=220)


def run(args: argparse.Namespace) -> None:
    try:
        allow_list = AllowList.from_file(args.file)
    except AllowListLoadError as e:
        console.print(f"[red]Nie można wczytać allow-listy:[/red] {escape(str(e))}")
        raise SystemExit(2)

    if not len(allow_list):
        console.print("[yellow]Allow-lista jest pusta.[/yellow]")
        return

    table = Table(
        box=box.SIMPLE_HEAD,
        show_header=True,
        header_style="bold white",
        row_styles=["", "dim"],
    )
    table.add_column("NAZWA", style="bold cyan", no_wrap=True)
    table.add_column("URL",   no_wrap=True)

    for entry in allow_list:
        table.add_row(escape(entry.name), escape(entry.url) if entry.url else "[dim]-[/dim]")

    console.print(table)
    console.print(f"  [dim]{len(allow_list)} pozycji ({escape(allow_list.source)})[/dim]")


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "allow-list",
        help="Wczytuje allow-listę i listuje jej pozycje.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Wczytuje allow-listę (JSON lub tekst: "nazwa url" w każdej linii),
sprawdza jej poprawność i wypisuje pozycje posortowane po nazwie.

Przykłady:
  mdxlint allow-list allowlist.txt
  mdxlint allow-list api-reference.json
        """,
    )
    p.add_argument("file", metavar="PLIK", help="Ścieżka do allow-listy.")
    p.set_defaults(func=run)

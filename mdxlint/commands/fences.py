"""Komenda: mdxlint fences — sekcje i bloki kodu jednego dokumentu."""

from __future__ import annotations

import argparse
import json
import pathlib
from typing import Any

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from data_model.documents import Document, Fence
from data_model.errors import ConfigError
from mdx_parser.fences import Extraction, extract_document
from mdx_parser.languages import build_language_set
from mdxlint._render import findings_table
from mdxlint.config import load_settings

console = Console()


def _highlight_str(lines: frozenset[int] | None) -> str:
    return ",".join(str(n) for n in sorted(lines)) if lines else ""


def fence_to_dict(fence: Fence) -> dict[str, Any]:
    return {
        "language": fence.language,
        "filename": fence.filename,
        "highlight": sorted(fence.highlight) if fence.highlight else None,
        "flags": sorted(fence.flags),
        "attributes": dict(fence.attributes),
        "start_line": fence.start_line,
        "end_line": fence.end_line,
        "body": fence.body,
    }


def document_to_dict(document: Document) -> list[dict[str, Any]]:
    return [
        {
            "index": s.index,
            "heading": s.heading,
            "level": s.level,
            "line": s.line,
            "slug": s.slug,
            "parent": s.parent,
            "fences": [fence_to_dict(f) for f in s.fences],
        }
        for s in document.sections
    ]


# ---------------------------------------------------------------------------
# Wyświetlanie w terminalu
# ---------------------------------------------------------------------------

def _show_table(document: Document) -> None:
    table = Table(
        box=box.SIMPLE_HEAD,
        show_header=True,
        header_style="bold white",
        row_styles=["", "dim"],
        expand=False,
    )
    table.add_column("LVL",       justify="right", no_wrap=True, style="dim")
    table.add_column("SEKCJA",    no_wrap=True, style="bold cyan", max_width=40)
    table.add_column("LINIE",     justify="center", no_wrap=True)
    table.add_column("JĘZYK",     no_wrap=True)
    table.add_column("PLIK",      no_wrap=True)
    table.add_column("HIGHLIGHT", no_wrap=True, style="dim")
    table.add_column("FLAGI",     no_wrap=True, style="dim")

    n_fences = 0
    for section in document.sections:
        indent = "  " * max(section.level - 1, 0)
        title = section.heading or "(intro)"
        if not section.fences:
            table.add_row(str(section.level), indent + escape(title), "-", "", "", "", "")
            continue
        for i, fence in enumerate(section.fences):
            n_fences += 1
            table.add_row(
                str(section.level) if i == 0 else "",
                (indent + escape(title)) if i == 0 else "",
                f"{fence.start_line}–{fence.end_line}",
                fence.language or "-",
                escape(fence.filename or "-"),
                _highlight_str(fence.highlight),
                ", ".join(sorted(fence.flags)),
            )

    console.print()
    console.print(table)
    console.print(f"  [dim]{len(document.sections)} sekcji, {n_fences} bloków[/dim]\n")


# ---------------------------------------------------------------------------
# Główna logika komendy
# ---------------------------------------------------------------------------

def load_extraction(file: str, extra_languages: list[str] | None = None) -> Extraction:
    """Wczytuje i parsuje jeden dokument; błędy wejścia kończą komendę (kod 2)."""
    path = pathlib.Path(file)
    if not path.is_file():
        console.print(f"[red]Plik nie istnieje:[/red] {escape(str(path))}")
        raise SystemExit(2)

    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        console.print(f"[red]Niepoprawne UTF-8:[/red] {escape(str(e))}")
        raise SystemExit(2)

    try:
        settings = load_settings()
    except ConfigError as e:
        console.print(f"[red]Błąd konfiguracji:[/red] {escape(str(e))}")
        raise SystemExit(2)

    languages = build_language_set([*settings.extra_languages, *(extra_languages or [])])
    return extract_document(path.as_posix(), text, languages)


def run(args: argparse.Namespace) -> None:
    extraction = load_extraction(args.file, args.language)

    if args.json:
        out = {
            "path": extraction.document.path,
            "sections": document_to_dict(extraction.document),
            "findings": [f.to_dict() for f in extraction.findings],
        }
        print(json.dumps(out, ensure_ascii=False, indent=2))
        return

    _show_table(extraction.document)
    if extraction.findings:
        console.print(f"[yellow]Wyniki ekstrakcji ({len(extraction.findings)}):[/yellow]")
        console.print(findings_table(extraction.findings))


# ---------------------------------------------------------------------------
# Rejestracja parsera
# ---------------------------------------------------------------------------

def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "fences",
        help="Pokazuje sekcje i bloki kodu wyekstrahowane z dokumentu.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Parsuje jeden dokument i pokazuje drzewo sekcji z blokami kodu
(język, filename, highlight, flagi) oraz wyniki ekstrakcji.

Przykłady:
  mdxlint fences docs/app/page.mdx
  mdxlint fences docs/app/page.mdx --json
        """,
    )
    p.add_argument("file", metavar="PLIK", help="Ścieżka do dokumentu .md/.mdx.")
    p.add_argument(
        "--json",
        action="store_true",
        help="Wypisz sekcje i bloki jako JSON na stdout.",
    )
    p.add_argument(
        "--language", "-l",
        action="append",
        metavar="TAG",
        help="Dodatkowy dozwolony tag języka (można powtarzać).",
    )
    p.set_defaults(func=run)

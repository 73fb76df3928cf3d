"""Komenda: mdxlint check — analiza dokumentów MDX i raport wyników."""

from __future__ import annotations

import argparse
import pathlib
import sys
from typing import NoReturn

from rich.console import Console
from rich.markup import escape

from data_model.errors import AllowListLoadError, ConfigError
from mdx_parser.languages import build_language_set
from mdxlint._render import print_run
from mdxlint.config import ENV_ALLOW_LIST, load_settings, parse_severity, parse_workers
from validator import (
    AllowList,
    DocumentReadError,
    LintOptions,
    lint_documents,
    read_sources,
    render_json,
    summary_line,
)
from validator.types import DocumentReport, RunReport

console = Console()
err_console = Console(stderr=True)

EXIT_FATAL = 2


def _fatal(label: str, exc: Exception | str) -> NoReturn:
    err_console.print(f"[red]{label}[/red] {escape(str(exc))}")
    raise SystemExit(EXIT_FATAL)


# ---------------------------------------------------------------------------
# Zapis raportu
# ---------------------------------------------------------------------------

def _write_report(report: RunReport, fmt: str, output: str | None) -> None:
    if fmt == "json":
        payload = render_json(report)
        if output:
            pathlib.Path(output).write_text(payload, encoding="utf-8")
        else:
            sys.stdout.write(payload)
        return

    if output:
        with open(output, "w", encoding="utf-8") as fh:
            print_run(Console(file=fh, no_color=True, width=200), report)
    else:
        print_run(console, report)


# ---------------------------------------------------------------------------
# Główna logika komendy
# ---------------------------------------------------------------------------

def run(args: argparse.Namespace) -> None:
    # --- Konfiguracja ----------------------------------------------------
    try:
        settings = load_settings()
        workers = parse_workers(str(args.workers)) if args.workers is not None else settings.workers
        fail_on = parse_severity(args.fail_on) if args.fail_on else settings.fail_on
    except ConfigError as e:
        _fatal("Błąd konfiguracji:", e)

    allow_path = args.allow_list or settings.allow_list
    if not allow_path:
        _fatal("Brak allow-listy:", f"podaj --allow-list lub ustaw {ENV_ALLOW_LIST}.")

    # --- Allow-lista (przed jakimkolwiek dokumentem) ----------------------
    try:
        allow_list = AllowList.from_file(allow_path)
    except AllowListLoadError as e:
        _fatal("Nie można wczytać allow-listy:", e)

    # --- Dokumenty -------------------------------------------------------
    try:
        sources = read_sources(args.paths)
    except DocumentReadError as e:
        _fatal("Błąd odczytu dokumentu:", e)
    if not sources:
        _fatal("Brak dokumentów:", "nie znaleziono plików .md/.mdx.")

    options = LintOptions(
        known_languages=build_language_set([*settings.extra_languages, *(args.language or [])])
    )

    if not args.quiet:
        err_console.print(
            f"Analiza [bold]{len(sources)}[/bold] dokument(ów), "
            f"allow-lista: [cyan]{escape(allow_path)}[/cyan] ({len(allow_list)} pozycji), "
            f"wątki: {workers}"
        )

    def progress(doc: DocumentReport) -> None:
        if args.quiet:
            return
        counts = doc.counts()
        style = "red" if counts["error"] else "yellow" if counts["warning"] else "green"
        err_console.print(
            f"  [{style}]·[/{style}] {escape(doc.path)} "
            f"[dim]({len(doc.findings)} wyników)[/dim]"
        )

    report = lint_documents(
        sources,
        allow_list,
        options,
        workers=workers,
        on_done=progress,
    )

    # --- Wynik -----------------------------------------------------------
    try:
        _write_report(report, args.format, args.output)
    except OSError as e:
        _fatal("Nie można zapisać raportu:", e)

    if not args.quiet and (args.format == "json" or args.output):
        err_console.print(summary_line(report))
    if args.output and not args.quiet:
        err_console.print(f"[green]Raport:[/green] {escape(args.output)}")

    code = report.exit_code(fail_on)
    if code:
        raise SystemExit(code)


# ---------------------------------------------------------------------------
# Rejestracja parsera
# ---------------------------------------------------------------------------

def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "check",
        help="Analizuje dokumenty MDX i wypisuje raport wyników.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description=f"""\
Analizuje dokumenty (*.md, *.mdx) w czterech krokach:

  1  Bloki kodu        (niezamknięte, puste, nieznany język, highlight)
  2  Pary Before/After (wiszące Before:, osierocone After:, różne pliki)
  3  Referencje API    (identyfikatory spoza allow-listy, złe adresy linków)
  4  Raport            (wyniki per dokument + podsumowanie)

Kod wyjścia: 0: brak wyników na poziomie --fail-on lub wyższym,
             1: są takie wyniki, 2: błąd krytyczny (np. allow-lista,
             nieudany zapis raportu).

Przykłady:
  mdxlint check docs/ --allow-list allowlist.txt
  mdxlint check docs/errors/*.mdx -a api.json --format json -o raport.json
  mdxlint check docs/ -a allowlist.txt --fail-on warning --workers 4
  {ENV_ALLOW_LIST}=allowlist.txt mdxlint check docs/
        """,
    )
    p.add_argument(
        "paths",
        nargs="+",
        metavar="ŚCIEŻKA",
        help="Pliki lub katalogi z dokumentami (.md, .mdx).",
    )
    p.add_argument(
        "--allow-list", "-a",
        default=None,
        metavar="PLIK",
        help=f"Allow-lista identyfikatorów API (domyślnie: ${ENV_ALLOW_LIST}).",
    )
    p.add_argument(
        "--format", "-f",
        choices=["text", "json"],
        default="text",
        help="Format raportu (domyślnie: text).",
    )
    p.add_argument(
        "--output", "-o",
        default=None,
        metavar="PLIK",
        help="Zapisz raport do pliku zamiast na stdout.",
    )
    p.add_argument(
        "--workers", "-j",
        type=int,
        default=None,
        metavar="N",
        help="Liczba wątków (domyślnie: $MDXLINT_WORKERS lub min(8, CPU)).",
    )
    p.add_argument(
        "--fail-on",
        choices=["info", "warning", "error"],
        default=None,
        help="Najniższy poziom wyniku dający kod wyjścia 1 (domyślnie: error).",
    )
    p.add_argument(
        "--language", "-l",
        action="append",
        metavar="TAG",
        help="Dodatkowy dozwolony tag języka (można powtarzać).",
    )
    p.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Bez komunikatów postępu na stderr.",
    )
    p.set_defaults(func=run)

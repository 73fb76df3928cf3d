"""
validator/pipeline.py — przebieg analizy dla zbioru dokumentów.

Kroki dla jednego dokumentu (ściśle po kolei):
  ekstrakcja bloków → pary Before/After → referencje → raport dokumentu

Dokumenty są od siebie niezależne: lint_documents() rozdziela je na pulę
wątków. Allow-lista jest współdzielona wyłącznie do odczytu. Teksty
dokumentów wczytujemy raz, zanim ruszy przetwarzanie (read_sources).
"""

from __future__ import annotations

import pathlib
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Callable, Iterable

from data_model.errors import MdxLintError
from mdx_parser.fences import extract_document
from mdx_parser.languages import KNOWN_LANGUAGES

from .allow_list import AllowList
from .pair_matcher import match_pairs
from .reference_checker import ReferenceChecker
from .report_builder import build_document_report, build_run_report
from .types import DocumentReport, RunReport

DOCUMENT_SUFFIXES = (".md", ".mdx")


class DocumentReadError(MdxLintError):
    """Nie można odczytać dokumentu wejściowego (błąd krytyczny)."""


@dataclass(frozen=True, slots=True)
class LintOptions:
    known_languages: frozenset[str] = KNOWN_LANGUAGES


@dataclass(frozen=True, slots=True)
class Source:
    path: str
    text: str


# ---------------------------------------------------------------------------
# Wejście
# ---------------------------------------------------------------------------

def discover(paths: Iterable[str | pathlib.Path]) -> list[pathlib.Path]:
    """
    Rozwija katalogi do plików *.md / *.mdx (rekurencyjnie, posortowane)
    i usuwa duplikaty. Jawnie podane pliki przyjmujemy bez względu na
    rozszerzenie.
    """
    out: list[pathlib.Path] = []
    seen: set[pathlib.Path] = set()
    for raw in paths:
        p = pathlib.Path(raw)
        if p.is_dir():
            found = sorted(
                f for f in p.rglob("*")
                if f.is_file() and f.suffix.lower() in DOCUMENT_SUFFIXES
            )
        else:
            found = [p]
        for f in found:
            key = f.resolve()
            if key not in seen:
                seen.add(key)
                out.append(f)
    return out


def read_sources(paths: Iterable[str | pathlib.Path]) -> list[Source]:
    """Wczytuje teksty wszystkich dokumentów (UTF-8)."""
    sources: list[Source] = []
    for p in discover(paths):
        try:
            text = p.read_text(encoding="utf-8")
        except FileNotFoundError:
            raise DocumentReadError(f"{p}: plik nie istnieje") from None
        except UnicodeDecodeError as e:
            raise DocumentReadError(f"{p}: niepoprawne UTF-8 ({e})") from e
        except OSError as e:
            raise DocumentReadError(f"{p}: {e}") from e
        sources.append(Source(path=p.as_posix(), text=text))
    return sources


# ---------------------------------------------------------------------------
# Przetwarzanie
# ---------------------------------------------------------------------------

def lint_document(
    source: Source,
    allow_list: AllowList,
    options: LintOptions = LintOptions(),
) -> DocumentReport:
    extraction = extract_document(source.path, source.text, options.known_languages)
    document = extraction.document
    pairs = match_pairs(document)
    references = ReferenceChecker(allow_list).check(document)
    return build_document_report(
        document,
        findings=(*extraction.findings, *pairs.findings, *references),
        units=pairs.units,
    )


def lint_documents(
    sources: Iterable[Source],
    allow_list: AllowList,
    options: LintOptions = LintOptions(),
    workers: int = 1,
    on_done: Callable[[DocumentReport], None] | None = None,
) -> RunReport:
    """
    Analizuje wszystkie dokumenty; przy workers > 1 równolegle w puli wątków.

    on_done jest wołane w wątku wywołującym, po zakończeniu każdego
    dokumentu (kolejność zakończeń dowolna). Raport końcowy jest zawsze
    posortowany po ścieżce.
    """
    sources = list(sources)
    reports: list[DocumentReport] = []

    if workers <= 1 or len(sources) <= 1:
        for src in sources:
            report = lint_document(src, allow_list, options)
            reports.append(report)
            if on_done is not None:
                on_done(report)
        return build_run_report(reports)

    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="mdxlint") as pool:
        futures = [pool.submit(lint_document, src, allow_list, options) for src in sources]
        try:
            for fut in as_completed(futures):
                report = fut.result()
                reports.append(report)
                if on_done is not None:
                    on_done(report)
        except BaseException:
            for fut in futures:
                fut.cancel()
            raise

    return build_run_report(reports)

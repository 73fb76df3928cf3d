"""
validator — analiza dokumentów MDX: pary Before/After, referencje API, raport.

Interfejs publiczny:
    AllowList         — indeks allow-listy (AllowList.from_file)
    match_pairs       — łączenie bloków Before:/After:
    ReferenceChecker  — weryfikacja identyfikatorów API w prozie
    lint_document(s)  — pełny przebieg dla dokumentu / zbioru dokumentów
    DocumentReport, RunReport, render_json — typy i serializacja raportu

Typowe użycie:
    from validator import AllowList, lint_documents, read_sources, render_json

    allow   = AllowList.from_file("allowlist.txt")
    sources = read_sources(["docs/"])
    report  = lint_documents(sources, allow, workers=4)
    print(render_json(report))
    raise SystemExit(report.exit_code())
"""

from .allow_list import AllowEntry, AllowList
from .pair_matcher import PairMatch, match_pairs
from .pipeline import (
    DocumentReadError,
    LintOptions,
    Source,
    discover,
    lint_document,
    lint_documents,
    read_sources,
)
from .reference_checker import ReferenceChecker
from .report_builder import (
    build_document_report,
    build_run_report,
    render_json,
    report_to_dict,
    summary_line,
)
from .types import DocumentReport, RunReport

__all__ = [
    "AllowEntry",
    "AllowList",
    "PairMatch",
    "match_pairs",
    "DocumentReadError",
    "LintOptions",
    "Source",
    "discover",
    "lint_document",
    "lint_documents",
    "read_sources",
    "ReferenceChecker",
    "build_document_report",
    "build_run_report",
    "render_json",
    "report_to_dict",
    "summary_line",
    "DocumentReport",
    "RunReport",
]

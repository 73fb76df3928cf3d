"""
validator/report_builder.py — agregacja wyników do raportu.

build_document_report(...) -> DocumentReport
build_run_report(reports)  -> RunReport
report_to_dict(report)     -> dict  (stabilna struktura do JSON)
render_json(report)        -> str   (identyczne bajty dla identycznego wejścia)

Kolejność wyników w dokumencie: sekcja, severity malejąco, linia, kolumna,
a przy remisie kod i komunikat.
"""

from __future__ import annotations

import json
from typing import Any, Iterable

from data_model.documents import ComparisonUnit, Document
from data_model.findings import Finding

from .types import DocumentReport, RunReport

REPORT_VERSION = 1


def sort_findings(findings: Iterable[Finding]) -> tuple[Finding, ...]:
    return tuple(sorted(findings, key=Finding.sort_key))


def build_document_report(
    document: Document,
    findings: Iterable[Finding],
    units: Iterable[ComparisonUnit] = (),
) -> DocumentReport:
    return DocumentReport(
        path=document.path,
        findings=sort_findings(findings),
        units=tuple(units),
        sections=len(document.sections),
        fences=sum(1 for _ in document.fences),
    )


def build_run_report(reports: Iterable[DocumentReport]) -> RunReport:
    """Dokumenty w kolejności ścieżek, niezależnie od kolejności przetwarzania."""
    return RunReport(documents=tuple(sorted(reports, key=lambda r: r.path)))


def document_to_dict(report: DocumentReport) -> dict[str, Any]:
    return {
        "path": report.path,
        "sections": report.sections,
        "fences": report.fences,
        "comparisons": len(report.units),
        "summary": report.counts(),
        "findings": [f.to_dict() for f in report.findings],
    }


def report_to_dict(report: RunReport) -> dict[str, Any]:
    return {
        "version": REPORT_VERSION,
        "summary": report.counts(),
        "documents": [document_to_dict(d) for d in report.documents],
    }


def render_json(report: RunReport) -> str:
    return json.dumps(report_to_dict(report), ensure_ascii=False, indent=2, sort_keys=True) + "\n"


def summary_line(report: RunReport) -> str:
    counts = report.counts()
    return (
        f"{len(report.documents)} dokument(ów): "
        f"{counts['error']} error, {counts['warning']} warning, {counts['info']} info"
    )

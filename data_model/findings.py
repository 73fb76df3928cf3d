"""
data_model/findings.py — wyniki analizy (Finding) i ich klasyfikacja.

Finding powstaje w ekstraktorze, matcherze par albo w checkerze referencji,
gdy naruszony jest któryś z niezmienników dokumentu. Po utworzeniu nie
jest modyfikowany.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any


class Severity(StrEnum):
    INFO    = "info"
    WARNING = "warning"
    ERROR   = "error"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]


_SEVERITY_RANK: dict[Severity, int] = {
    Severity.INFO:    0,
    Severity.WARNING: 1,
    Severity.ERROR:   2,
}


class FindingCode(StrEnum):
    """Stałe kody wyników."""

    # Ekstraktor bloków
    MALFORMED_FENCE        = "MalformedFenceError"
    EMPTY_FENCE            = "EmptyFence"
    UNKNOWN_LANGUAGE       = "UnknownLanguage"
    INVALID_HIGHLIGHT      = "InvalidHighlight"

    # Pary Before/After
    DANGLING_COMPARISON    = "DanglingComparisonError"
    PAIR_FILENAME_MISMATCH = "PairFilenameMismatch"
    ORPHAN_AFTER           = "OrphanAfter"

    # Referencje
    UNKNOWN_REFERENCE      = "UnknownReferenceError"
    REFERENCE_URL_MISMATCH = "ReferenceUrlMismatch"


@dataclass(frozen=True, slots=True)
class Finding:
    """
    Pojedynczy wynik analizy dokumentu.

    - code:     klasa wyniku (FindingCode)
    - severity: info / warning / error
    - document: ścieżka dokumentu
    - section:  indeks sekcji (Section.index)
    - heading:  tekst nagłówka sekcji ("" dla intro)
    - line:     numer linii (1-based)
    - column:   numer kolumny (1-based, 1 gdy dotyczy całej linii)
    - message:  czytelny opis
    - details:  dodatkowe dane (posortowane pary klucz-wartość)
    """

    code: FindingCode
    severity: Severity
    document: str
    section: int
    heading: str
    line: int
    column: int
    message: str
    details: tuple[tuple[str, Any], ...] = ()

    def sort_key(self) -> tuple:
        return (
            self.section,
            -self.severity.rank,
            self.line,
            self.column,
            str(self.code),
            self.message,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": str(self.code),
            "severity": str(self.severity),
            "section": self.section,
            "heading": self.heading,
            "line": self.line,
            "column": self.column,
            "message": self.message,
            "details": dict(self.details),
        }

"""
validator/types.py — struktury raportu.

DocumentReport — wyniki jednego dokumentu w ustalonej kolejności.
RunReport      — raport całego przebiegu: dokumenty posortowane po ścieżce
                 oraz podsumowanie liczby wyników per severity.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from data_model.documents import ComparisonUnit
from data_model.findings import Finding, Severity


def _empty_counts() -> dict[str, int]:
    return {str(s): 0 for s in Severity}


@dataclass(frozen=True, slots=True)
class DocumentReport:
    """
    Wynik analizy jednego dokumentu.

    - path:     ścieżka dokumentu
    - findings: wyniki posortowane (sekcja, severity malejąco, pozycja)
    - units:    znalezione pary Before/After
    - sections: liczba sekcji (z intro)
    - fences:   liczba poprawnie wyekstrahowanych bloków kodu
    """

    path: str
    findings: tuple[Finding, ...] = ()
    units: tuple[ComparisonUnit, ...] = field(default=(), repr=False)
    sections: int = 0
    fences: int = 0

    def counts(self) -> dict[str, int]:
        out = _empty_counts()
        for f in self.findings:
            out[str(f.severity)] += 1
        return out

    def has_at_least(self, severity: Severity) -> bool:
        return any(f.severity.rank >= severity.rank for f in self.findings)

    @property
    def has_errors(self) -> bool:
        return self.has_at_least(Severity.ERROR)


@dataclass(frozen=True, slots=True)
class RunReport:
    """Raport przebiegu: jeden wpis na dokument, w kolejności ścieżek."""

    documents: tuple[DocumentReport, ...]

    def counts(self) -> dict[str, int]:
        out = _empty_counts()
        for doc in self.documents:
            for key, n in doc.counts().items():
                out[key] += n
        return out

    def has_at_least(self, severity: Severity) -> bool:
        return any(d.has_at_least(severity) for d in self.documents)

    @property
    def has_errors(self) -> bool:
        return self.has_at_least(Severity.ERROR)

    def exit_code(self, fail_on: Severity = Severity.ERROR) -> int:
        return 1 if self.has_at_least(fail_on) else 0

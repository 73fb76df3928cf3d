"""
data_model/errors.py — taksonomia błędów mdxlint.

Błędy odzyskiwalne (DocumentIssue i podklasy) nie są rzucane: komponenty
tworzą je i od razu zamieniają na Finding przez to_finding(), a analiza
dokumentu trwa dalej. Jedynie AllowListLoadError (i ConfigError w CLI)
przerywa przebieg, zanim zostanie przetworzony jakikolwiek dokument.
"""

from __future__ import annotations

from typing import Any, ClassVar

from .findings import Finding, FindingCode, Severity


class MdxLintError(Exception):
    """Bazowy wyjątek mdxlint."""


class DocumentIssue(MdxLintError):
    """
    Naruszenie niezmiennika w konkretnym miejscu dokumentu.

    Podklasy ustalają code i severity; instancja bazowa przyjmuje je
    jawnie (dla kodów bez własnej klasy, np. EmptyFence).
    """

    code: ClassVar[FindingCode | None] = None
    severity: ClassVar[Severity | None] = None

    def __init__(
        self,
        message: str,
        *,
        line: int,
        column: int = 1,
        details: dict[str, Any] | None = None,
        code: FindingCode | None = None,
        severity: Severity | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.line = line
        self.column = column
        self.details = details or {}
        self._code = code or type(self).code
        self._severity = severity or type(self).severity
        if self._code is None or self._severity is None:
            raise TypeError("DocumentIssue wymaga code i severity.")

    def to_finding(self, document: str, section: int, heading: str) -> Finding:
        return Finding(
            code=self._code,
            severity=self._severity,
            document=document,
            section=section,
            heading=heading,
            line=self.line,
            column=self.column,
            message=self.message,
            details=tuple(sorted(self.details.items())),
        )


class MalformedFenceError(DocumentIssue):
    """Blok kodu otwarty i niezamknięty przed końcem dokumentu."""
    code = FindingCode.MALFORMED_FENCE
    severity = Severity.ERROR


class DanglingComparisonError(DocumentIssue):
    """Znacznik Before: bez pasującego bloku After: w tej samej sekcji."""
    code = FindingCode.DANGLING_COMPARISON
    severity = Severity.WARNING


class UnknownReferenceError(DocumentIssue):
    """Identyfikator API spoza allow-listy."""
    code = FindingCode.UNKNOWN_REFERENCE
    severity = Severity.ERROR


class AllowListLoadError(MdxLintError):
    """Allow-lista nie istnieje albo nie daje się sparsować (błąd krytyczny)."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class ConfigError(MdxLintError):
    """Niepoprawna wartość konfiguracji (zmienna środowiskowa lub opcja)."""

"""
data_model — struktury danych mdxlint.

Użycie:
  from data_model import Document, Section, Fence, Finding, Severity, ...

Moduły:
  documents — Document, Section, Fence, ProseLine, ComparisonUnit
  findings  — Finding, FindingCode, Severity
  errors    — MdxLintError, DocumentIssue, MalformedFenceError,
              DanglingComparisonError, UnknownReferenceError,
              AllowListLoadError, ConfigError
"""

from .documents import (
    ComparisonUnit,
    Document,
    Fence,
    ProseLine,
    Section,
)
from .findings import (
    Finding,
    FindingCode,
    Severity,
)
from .errors import (
    AllowListLoadError,
    ConfigError,
    DanglingComparisonError,
    DocumentIssue,
    MalformedFenceError,
    MdxLintError,
    UnknownReferenceError,
)

__all__ = [
    # documents
    "ComparisonUnit",
    "Document",
    "Fence",
    "ProseLine",
    "Section",
    # findings
    "Finding",
    "FindingCode",
    "Severity",
    # errors
    "AllowListLoadError",
    "ConfigError",
    "DanglingComparisonError",
    "DocumentIssue",
    "MalformedFenceError",
    "MdxLintError",
    "UnknownReferenceError",
]

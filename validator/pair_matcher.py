"""
validator/pair_matcher.py — łączenie bloków Before:/After: w pary.

match_pairs(document) -> PairMatch

Zasady (w obrębie jednej sekcji):
  - Blok jest oznaczony, gdy ostatni znacznik "Before:"/"After:" w jego
    preambule (proza przed blokiem) to odpowiednio Before albo After.
  - Nieoznaczony blok z flagą `switcher` i pustą preambułą, stojący zaraz
    po oznaczonym bloku, jest jego wariantem (np. tsx + js).
  - Grupa Before czeka na najbliższą grupę After; bloki nieoznaczone
    nie przerywają oczekiwania.
  - Warianty łączymy najpierw po języku, potem po pozycji.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Literal

from data_model.documents import ComparisonUnit, Document, Fence, Section
from data_model.errors import DanglingComparisonError, DocumentIssue
from data_model.findings import Finding, FindingCode, Severity

Marker = Literal["Before", "After"]

# "Before:", "**Before:**", "**Before**:", "_After_:"
_MARKER_RE = re.compile(r"(?<![A-Za-z])(Before|After)(?:\*\*|__|\*|_)?[ \t]*:")


@dataclass(frozen=True, slots=True)
class PairMatch:
    units: tuple[ComparisonUnit, ...]
    findings: tuple[Finding, ...]


@dataclass(slots=True)
class _Group:
    marker: Marker | None
    fences: list[Fence] = field(default_factory=list)

    @property
    def line(self) -> int:
        return self.fences[0].start_line


def fence_marker(fence: Fence) -> Marker | None:
    """Ostatni znacznik Before/After w preambule bloku (albo None)."""
    found = _MARKER_RE.findall(fence.preamble)
    return found[-1] if found else None


def _group_fences(section: Section) -> list[_Group]:
    groups: list[_Group] = []
    for fence in section.fences:
        marker = fence_marker(fence)
        if (
            marker is None
            and groups
            and groups[-1].marker is not None
            and fence.is_switcher
            and not fence.preamble.strip()
        ):
            groups[-1].fences.append(fence)
            continue
        groups.append(_Group(marker=marker, fences=[fence]))
    return groups


def _pair_variants(
    before: list[Fence],
    after: list[Fence],
) -> tuple[list[tuple[Fence, Fence]], list[Fence], list[Fence]]:
    """Zwraca (pary, nadmiarowe Before, nadmiarowe After)."""
    remaining = list(range(len(after)))
    pairs: list[tuple[Fence, Fence]] = []
    unmatched: list[Fence] = []

    for b in before:
        idx = next((j for j in remaining if after[j].language == b.language), None)
        if idx is None:
            unmatched.append(b)
            continue
        remaining.remove(idx)
        pairs.append((b, after[idx]))

    rest = [after[j] for j in remaining]
    n = min(len(unmatched), len(rest))
    pairs.extend(zip(unmatched[:n], rest[:n]))
    pairs.sort(key=lambda p: p[0].start_line)
    return pairs, unmatched[n:], rest[n:]


class _SectionMatcher:
    """Dopasowanie par w jednej sekcji."""

    def __init__(self, document: Document, section: Section) -> None:
        self._doc = document
        self._section = section
        self.units: list[ComparisonUnit] = []
        self.findings: list[Finding] = []

    def _record(self, issue: DocumentIssue) -> None:
        self.findings.append(
            issue.to_finding(self._doc.path, self._section.index, self._section.heading)
        )

    def _dangling(self, fence: Fence, reason: str) -> None:
        self._record(DanglingComparisonError(
            f"Znacznik Before: (linia {fence.start_line}) bez pasującego "
            f"bloku After: ({reason}).",
            line=fence.start_line,
            details={"filename": fence.filename or "", "language": fence.language},
        ))

    def _orphan(self, fence: Fence) -> None:
        self._record(DocumentIssue(
            f"Blok After: (linia {fence.start_line}) bez poprzedzającego bloku Before:.",
            line=fence.start_line,
            code=FindingCode.ORPHAN_AFTER,
            severity=Severity.INFO,
            details={"filename": fence.filename or "", "language": fence.language},
        ))

    def _add_pair(self, before: Fence, after: Fence) -> None:
        if before.filename and after.filename and before.filename != after.filename:
            self._record(DocumentIssue(
                f"Para Before/After dotyczy różnych plików: "
                f"'{before.filename}' i '{after.filename}'.",
                line=after.start_line,
                code=FindingCode.PAIR_FILENAME_MISMATCH,
                severity=Severity.WARNING,
                details={"before": before.filename, "after": after.filename},
            ))
            return
        self.units.append(ComparisonUnit(before=before, after=after, section=self._section.index))

    def run(self) -> None:
        pending: _Group | None = None
        for group in _group_fences(self._section):
            if group.marker == "Before":
                if pending is not None:
                    self._dangling(pending.fences[0], "kolejny znacznik Before: przed After:")
                pending = group
            elif group.marker == "After":
                if pending is None:
                    self._orphan(group.fences[0])
                    continue
                pairs, extra_before, extra_after = _pair_variants(pending.fences, group.fences)
                for b, a in pairs:
                    self._add_pair(b, a)
                for b in extra_before:
                    self._dangling(b, "brak wariantu After: dla tego bloku")
                for a in extra_after:
                    self._orphan(a)
                pending = None

        if pending is not None:
            self._dangling(pending.fences[0], "sekcja kończy się przed After:")


def match_pairs(document: Document) -> PairMatch:
    """Zwraca pary Before/After oraz wyniki dla całego dokumentu."""
    units: list[ComparisonUnit] = []
    findings: list[Finding] = []
    for section in document.sections:
        matcher = _SectionMatcher(document, section)
        matcher.run()
        units.extend(matcher.units)
        findings.extend(matcher.findings)
    return PairMatch(units=tuple(units), findings=tuple(findings))

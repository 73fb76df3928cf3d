"""
validator/reference_checker.py — weryfikacja identyfikatorów API w prozie.

ReferenceChecker.check(document) -> tuple[Finding, ...]

Źródła kandydatów (tylko linie prozy, bez bloków kodu i front matter):
  - tekst linków [text](url); gdy zawiera `code`, liczą się te fragmenty,
    w przeciwnym razie cały tekst linku
  - fragmenty inline `code` poza linkami

Kandydat jest sprawdzany tylko wtedy, gdy wygląda jak nazwa API:
  - wywołanie:      connection(), cookies().get('x'), router.push('/')
  - komponent JSX:  <Link>, <Image />
  - lowerCamelCase: useOptimistic, generateMetadata
Zwykłe słowa, ścieżki plików i polecenia powłoki są pomijane.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from urllib.parse import urlsplit

from data_model.documents import Document, ProseLine
from data_model.errors import DocumentIssue, UnknownReferenceError
from data_model.findings import Finding, FindingCode, Severity

from .allow_list import AllowList

_IDENT = r"[A-Za-z_$][\w$]*(?:\.[A-Za-z_$][\w$]*)*"

_LINK_RE = re.compile(r"\[(?P<text>[^\]\n]+)\]\((?P<url>[^)\s]*)(?:\s+\"[^\"]*\")?\)")
_CODE_SPAN_RE = re.compile(r"`(?P<code>[^`\n]+)`")

_JSX_RE = re.compile(rf"^<\s*/?\s*(?P<name>{_IDENT})(?:\s[^<>]*)?/?\s*>$")
_CALL_RE = re.compile(rf"^(?P<name>{_IDENT})\s*\(.*\)$")
_PLAIN_RE = re.compile(rf"^(?P<name>{_IDENT})$")
_CAMEL_RE = re.compile(r"^[a-z][a-z0-9]*[A-Z][A-Za-z0-9]*$")

# Słowa kluczowe JS, po których stoi nawias, ale które nie są wywołaniem API
_JS_KEYWORDS = frozenset({
    "if", "for", "while", "switch", "catch", "with", "return", "typeof",
    "new", "await", "function", "do", "else", "import", "export", "yield",
    "delete", "void", "in", "of", "super", "throw", "case",
})


@dataclass(frozen=True, slots=True)
class Candidate:
    """Identyfikator wyłuskany z prozy."""
    name: str
    raw: str
    line: int
    column: int
    link_url: str | None = None


def api_name(raw: str) -> str | None:
    """
    Zwraca nazwę API dla fragmentu tekstu albo None, gdy fragment
    nie pasuje do żadnego wzorca nazewnictwa API.
    """
    s = raw.strip().rstrip(";")
    if s.startswith("@"):
        s = s[1:]

    m = _JSX_RE.match(s)
    if m:
        name = m.group("name")
        return name if name[0].isupper() else None

    m = _CALL_RE.match(s)
    if m:
        name = m.group("name")
        return None if name in _JS_KEYWORDS else name

    m = _PLAIN_RE.match(s)
    if m and _CAMEL_RE.match(m.group("name")):
        return m.group("name")
    return None


def _mask(line: str, start: int, end: int) -> str:
    return line[:start] + " " * (end - start) + line[end:]


def extract_candidates(prose: ProseLine) -> list[Candidate]:
    """Kandydaci z jednej linii prozy, w kolejności kolumn."""
    found: list[Candidate] = []
    masked = prose.text

    for link in _LINK_RE.finditer(prose.text):
        masked = _mask(masked, link.start(), link.end())
        # obrazki ![alt](src) pomijamy
        if link.start() > 0 and prose.text[link.start() - 1] == "!":
            continue
        text = link.group("text")
        text_col = link.start("text")
        url = link.group("url")
        spans = list(_CODE_SPAN_RE.finditer(text))
        pieces = (
            [(s.group("code"), text_col + s.start()) for s in spans]
            if spans
            else [(text, text_col)]
        )
        for raw, col in pieces:
            name = api_name(raw)
            if name is not None:
                found.append(Candidate(name, raw, prose.number, col + 1, url))

    for span in _CODE_SPAN_RE.finditer(masked):
        raw = span.group("code")
        name = api_name(raw)
        if name is not None:
            found.append(Candidate(name, raw, prose.number, span.start() + 1))

    found.sort(key=lambda c: c.column)
    return found


def _path(url: str) -> str:
    return urlsplit(url).path.rstrip("/") or "/"


def same_target(target: str, canonical: str) -> bool:
    """
    Czy adres linku wskazuje kanoniczny adres dokumentacji.

    Fragment, query i końcowy '/' są ignorowane; gdy któryś adres jest
    względny (bez hosta), porównujemy same ścieżki.
    """
    t, c = urlsplit(target), urlsplit(canonical)
    if not t.netloc or not c.netloc:
        return _path(target) == _path(canonical)
    return (t.netloc.lower(), _path(target)) == (c.netloc.lower(), _path(canonical))


class ReferenceChecker:
    """Sprawdza referencje API względem allow-listy (tylko odczyt)."""

    def __init__(self, allow_list: AllowList) -> None:
        self._allow = allow_list

    def check(self, document: Document) -> tuple[Finding, ...]:
        findings: list[Finding] = []
        for prose in document.prose:
            section = document.section(prose.section)
            for cand in extract_candidates(prose):
                issue = self._check_candidate(cand)
                if issue is not None:
                    findings.append(issue.to_finding(document.path, section.index, section.heading))
        return tuple(findings)

    def _check_candidate(self, cand: Candidate) -> DocumentIssue | None:
        entry = self._allow.lookup(cand.name)
        if entry is None:
            return UnknownReferenceError(
                f"Nieznana referencja '{cand.name}' (brak w allow-liście).",
                line=cand.line,
                column=cand.column,
                details={"name": cand.name, "raw": cand.raw},
            )

        # Adres linku sprawdzamy tylko dla dokładnych trafień z kanonicznym URL
        if (
            cand.link_url
            and entry.name == cand.name
            and entry.url
            and urlsplit(cand.link_url).path
            and not same_target(cand.link_url, entry.url)
        ):
            return DocumentIssue(
                f"Link do '{cand.name}' wskazuje '{cand.link_url}', "
                f"a kanoniczny adres to '{entry.url}'.",
                line=cand.line,
                column=cand.column,
                code=FindingCode.REFERENCE_URL_MISMATCH,
                severity=Severity.WARNING,
                details={"name": cand.name, "url": cand.link_url, "canonical": entry.url},
            )
        return None

"""
mdx_parser/fences.py — ekstrakcja bloków kodu i sekcji z dokumentu MDX.

Architektura:
  text → linie → pominięcie front matter
  → skan liniowy: nagłówek ATX | linia otwierająca blok | proza
  → dla bloku: szukanie linii zamykającej → Fence albo Finding
  → SectionBuilder → Document

Kluczowe funkcje publiczne:
  extract_document(path, text, known_languages) -> Extraction
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from data_model.documents import Document, Fence, ProseLine
from data_model.errors import DocumentIssue, MalformedFenceError
from data_model.findings import Finding, FindingCode, Severity
from mdx_parser.front_matter import front_matter_length
from mdx_parser.headings import SectionBuilder, match_heading
from mdx_parser.languages import KNOWN_LANGUAGES
from mdx_parser.metadata import FenceInfo, parse_highlight, parse_info_string

# Linia otwierająca: do 3 spacji wcięcia, ≥3 backticki lub tyldy, info string
_OPEN_RE = re.compile(r"^(?P<indent> {0,3})(?P<fence>`{3,}|~{3,})(?P<info>.*)$")

# Linia zamykająca: ten sam znak, bez info stringu
_CLOSE_RE = re.compile(r"^ {0,3}(?P<fence>`{3,}|~{3,})[ \t]*$")


@dataclass(frozen=True, slots=True)
class _Opening:
    char: str
    length: int
    info: str


@dataclass(frozen=True, slots=True)
class Extraction:
    """Wynik ekstrakcji: niemutowalny dokument + wyniki znalezione po drodze."""
    document: Document
    findings: tuple[Finding, ...]


# ---------------------------------------------------------------------------
# Ograniczniki
# ---------------------------------------------------------------------------

def _match_opening(line: str) -> _Opening | None:
    m = _OPEN_RE.match(line)
    if not m:
        return None
    fence = m.group("fence")
    info = m.group("info")
    # info string bloku z backtickami nie może zawierać backticków
    if fence[0] == "`" and "`" in info:
        return None
    return _Opening(char=fence[0], length=len(fence), info=info.strip())


def _next_opening(lines: list[str], start: int) -> int:
    """Indeks najbliższej linii otwierającej blok od `start` (albo len(lines))."""
    for i in range(start, len(lines)):
        if _match_opening(lines[i]) is not None:
            return i
    return len(lines)


def _find_closing(lines: list[str], start: int, opening: _Opening) -> int | None:
    """Indeks linii zamykającej blok otwarty przed `start` albo None."""
    for i in range(start, len(lines)):
        m = _CLOSE_RE.match(lines[i])
        if not m:
            continue
        fence = m.group("fence")
        if fence[0] == opening.char and len(fence) >= opening.length:
            return i
    return None


def _split_lines(text: str) -> list[str]:
    # Tylko "\n" (i "\r\n") kończy linię; inne znaki, które rozpoznaje
    # str.splitlines(), zostają w treści bloku.
    lines = [line[:-1] if line.endswith("\r") else line for line in text.split("\n")]
    if lines and lines[-1] == "":
        lines.pop()
    return lines


# ---------------------------------------------------------------------------
# Budowa Fence
# ---------------------------------------------------------------------------

def _build_fence(
    info: FenceInfo,
    body: str,
    start_line: int,
    end_line: int,
    preamble: str,
    known_languages: frozenset[str],
    issues: list[DocumentIssue],
) -> Fence | None:
    if not body.strip():
        issues.append(DocumentIssue(
            "Pusty blok kodu.",
            line=start_line,
            code=FindingCode.EMPTY_FENCE,
            severity=Severity.WARNING,
        ))
        return None

    if info.language and info.language not in known_languages:
        issues.append(DocumentIssue(
            f"Nieznany tag języka '{info.language}'.",
            line=start_line,
            code=FindingCode.UNKNOWN_LANGUAGE,
            severity=Severity.WARNING,
            details={"language": info.language},
        ))
        return None

    highlight: frozenset[int] | None = None
    raw_highlight = info.get("highlight")
    if raw_highlight is not None:
        try:
            highlight = parse_highlight(raw_highlight, max_line=body.count("\n") + 1)
        except ValueError as e:
            issues.append(DocumentIssue(
                f"Niepoprawny atrybut highlight: {e}.",
                line=start_line,
                code=FindingCode.INVALID_HIGHLIGHT,
                severity=Severity.WARNING,
                details={"highlight": raw_highlight},
            ))

    return Fence(
        language=info.language,
        filename=info.get("filename"),
        highlight=highlight,
        body=body,
        start_line=start_line,
        end_line=end_line,
        preamble=preamble,
        flags=info.flags,
        attributes=info.attributes,
    )


# ---------------------------------------------------------------------------
# Publiczne API
# ---------------------------------------------------------------------------

def extract_document(
    path: str,
    text: str,
    known_languages: frozenset[str] = KNOWN_LANGUAGES,
) -> Extraction:
    """
    Parsuje tekst dokumentu do Document i listy wyników ekstrakcji.

    Niezamknięty blok daje MalformedFenceError (jako Finding) na linii
    otwierającej; skan jest kontynuowany od następnej linii otwierającej
    blok. Linie pomiędzy nie są prozą ani nagłówkami.
    """
    lines = _split_lines(text)
    builder = SectionBuilder()
    findings: list[Finding] = []
    prose: list[ProseLine] = []
    preamble: list[str] = []

    def record(issue: DocumentIssue) -> None:
        current = builder.current
        findings.append(issue.to_finding(path, current.index, current.heading))

    i = front_matter_length(lines)
    while i < len(lines):
        line = lines[i]
        lineno = i + 1

        opening = _match_opening(line)
        if opening is not None:
            close = _find_closing(lines, i + 1, opening)
            if close is None:
                record(MalformedFenceError(
                    f"Blok kodu otwarty w linii {lineno} nie został zamknięty "
                    f"przed końcem dokumentu.",
                    line=lineno,
                    details={"delimiter": opening.char * opening.length},
                ))
                i = _next_opening(lines, i + 1)
                continue

            issues: list[DocumentIssue] = []
            fence = _build_fence(
                parse_info_string(opening.info),
                "\n".join(lines[i + 1:close]),
                start_line=lineno,
                end_line=close + 1,
                preamble="\n".join(preamble),
                known_languages=known_languages,
                issues=issues,
            )
            for issue in issues:
                record(issue)
            if fence is not None:
                builder.add_fence(fence)
            preamble = []
            i = close + 1
            continue

        heading = match_heading(line)
        if heading is not None:
            builder.open(heading, lineno)
            preamble = []
        else:
            preamble.append(line)
        prose.append(ProseLine(lineno, line, builder.current.index))
        i += 1

    document = Document(
        path=path,
        text=text,
        sections=builder.build(),
        prose=tuple(prose),
    )
    return Extraction(document=document, findings=tuple(findings))

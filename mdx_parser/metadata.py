"""
mdx_parser/metadata.py — parsowanie info stringu linii otwierającej blok.

Przykłady info stringów:
  jsx filename="app/page.js" switcher
  tsx filename="app/layout.tsx" highlight={1,3-5}
  bash
  filename="next.config.js"      (bez języka)

Pierwszy token to język, chyba że zawiera '='. Pozostałe tokeny to pary
key=value (wartość w "...", '...', {...} lub bez ograniczników) albo flagi.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

# key=value z wartością w cudzysłowach, klamrach albo "gołą"
_ATTR_RE = re.compile(
    r"""
    (?P<key>[A-Za-z_][\w-]*)
    =
    (?:
        "(?P<dq>[^"]*)"
      | '(?P<sq>[^']*)'
      | \{(?P<br>[^}]*)\}
      | (?P<bare>[^\s"'{}]+)
    )
    """,
    re.VERBOSE,
)

_FLAG_RE = re.compile(r"[A-Za-z_][\w-]*")

# Pojedynczy element zakresu highlight: "3" lub "3-5"
_RANGE_RE = re.compile(r"^(\d+)(?:\s*-\s*(\d+))?$")


@dataclass(frozen=True, slots=True)
class FenceInfo:
    language: str
    attributes: tuple[tuple[str, str], ...]
    flags: frozenset[str]

    def get(self, key: str) -> str | None:
        for k, v in self.attributes:
            if k == key:
                return v
        return None


def parse_info_string(info: str) -> FenceInfo:
    """Rozbija info string na język, atrybuty i flagi."""
    info = info.strip()
    language = ""
    rest = info

    first, _, tail = info.partition(" ")
    if first and "=" not in first and not first.startswith("{"):
        language = first.lower()
        rest = tail

    attributes: list[tuple[str, str]] = []
    flags: set[str] = set()

    pos = 0
    while pos < len(rest):
        if rest[pos].isspace():
            pos += 1
            continue
        m = _ATTR_RE.match(rest, pos)
        if m:
            value = next(
                v for v in (m.group("dq"), m.group("sq"), m.group("br"), m.group("bare"))
                if v is not None
            )
            attributes.append((m.group("key"), value))
            pos = m.end()
            continue
        m = _FLAG_RE.match(rest, pos)
        if m and (m.end() == len(rest) or rest[m.end()].isspace()):
            flags.add(m.group())
            pos = m.end()
            continue
        # nierozpoznany token (np. "{1,3}" bez klucza) pomijamy do najbliższej spacji
        end = rest.find(" ", pos)
        pos = len(rest) if end == -1 else end

    return FenceInfo(
        language=language,
        attributes=tuple(attributes),
        flags=frozenset(flags),
    )


def parse_highlight(value: str, max_line: int | None = None) -> frozenset[int]:
    """
    Zamienia "1,3-5" (bez klamer) na {1, 3, 4, 5}.

    Rzuca ValueError przy pustej wartości, niepoprawnym elemencie,
    zerze, odwróconym zakresie albo numerze większym niż max_line.
    Zakres sprawdzamy przed rozwinięciem, więc koszt zależy od max_line,
    a nie od liczb zapisanych w atrybucie.
    """
    lines: set[int] = set()
    parts = [p.strip() for p in value.split(",")]
    if not any(parts):
        raise ValueError("pusty zakres highlight")
    for part in parts:
        if not part:
            continue
        m = _RANGE_RE.match(part)
        if not m:
            raise ValueError(f"niepoprawny element highlight: '{part}'")
        start = int(m.group(1))
        end = int(m.group(2)) if m.group(2) else start
        if start < 1 or end < start:
            raise ValueError(f"niepoprawny zakres highlight: '{part}'")
        if max_line is not None and end > max_line:
            raise ValueError(f"highlight wskazuje linię {end}, a blok ma {max_line} linii")
        lines.update(range(start, end + 1))
    return frozenset(lines)

"""
data_model/documents.py — model dokumentu MDX (sekcje i bloki kodu).

Document to wczytany raz plik dokumentacji; Section odpowiada nagłówkowi
ATX (lub niejawnej sekcji "intro" przed pierwszym nagłówkiem), Fence to
pojedynczy ogrodzony blok kodu wraz z metadanymi z linii otwierającej.

Wszystkie struktury są niemutowalne: powstają w ekstraktorze i żyją
tylko do końca przebiegu.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator


@dataclass(frozen=True, slots=True)
class Fence:
    """
    Ogrodzony blok kodu.

    - language:   tag języka z linii otwierającej ("" gdy brak)
    - filename:   atrybut filename="..." (None gdy brak)
    - highlight:  numery linii z highlight={...} (1-based, None gdy brak)
    - body:       treść bloku bez linii ograniczników
    - start_line: numer linii otwierającej (1-based)
    - end_line:   numer linii zamykającej
    - preamble:   proza między poprzednim blokiem (lub początkiem sekcji)
                  a linią otwierającą; tu szukamy znaczników Before:/After:
    - flags:      atrybuty bez wartości, np. "switcher"
    - attributes: wszystkie pary key=value (wartości bez cudzysłowów)
    """

    language: str
    filename: str | None
    highlight: frozenset[int] | None
    body: str
    start_line: int
    end_line: int
    preamble: str = ""
    flags: frozenset[str] = frozenset()
    attributes: tuple[tuple[str, str], ...] = ()

    def __post_init__(self) -> None:
        if not self.body.strip():
            raise ValueError(f"Pusty blok kodu (linia {self.start_line}).")

    @property
    def is_switcher(self) -> bool:
        return "switcher" in self.flags


@dataclass(frozen=True, slots=True)
class Section:
    """
    Sekcja dokumentu wyznaczona nagłówkiem.

    index 0 z level=0 i pustym heading to sekcja "intro" (treść przed
    pierwszym nagłówkiem); występuje zawsze, nawet gdy jest pusta.
    """

    index: int
    heading: str
    level: int
    line: int
    slug: str
    parent: str | None = None
    fences: tuple[Fence, ...] = ()


@dataclass(frozen=True, slots=True)
class ProseLine:
    """Linia prozy (poza front matter i poza blokami kodu)."""
    number: int          # 1-based
    text: str
    section: int         # Section.index


@dataclass(frozen=True, slots=True)
class Document:
    path: str
    text: str
    sections: tuple[Section, ...]
    prose: tuple[ProseLine, ...] = field(default=(), repr=False)

    @property
    def fences(self) -> Iterator[Fence]:
        for section in self.sections:
            yield from section.fences

    def section(self, index: int) -> Section:
        return self.sections[index]


@dataclass(frozen=True, slots=True)
class ComparisonUnit:
    """Para Before/After przedstawiająca tę samą zmianę w przykładzie."""

    before: Fence
    after: Fence
    section: int

    def __post_init__(self) -> None:
        b, a = self.before.filename, self.after.filename
        if b is not None and a is not None and b != a:
            raise ValueError(
                f"Różne nazwy plików w parze Before/After: '{b}' vs '{a}'."
            )

    @property
    def filename(self) -> str | None:
        return self.before.filename or self.after.filename

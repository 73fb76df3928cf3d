"""
mdx_parser/headings.py — rozpoznawanie nagłówków i budowa drzewa sekcji.

Nagłówki ATX: od jednego do sześciu '#', spacja, tekst, opcjonalne
zamykające '#'. Linie wewnątrz bloków kodu nie są tu nigdy podawane,
o tym decyduje ekstraktor.
"""

from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass, field

from data_model.documents import Fence, Section

_ATX_RE = re.compile(r"^ {0,3}(#{1,6})(?:[ \t]+(.*?))?(?:[ \t]+#+)?[ \t]*$")

# Znaczniki inline usuwane z tekstu nagłówka przed slugify
_INLINE_MARKUP_RE = re.compile(r"[`*_~]|<[^>]+>|\{#[^}]*\}")
_LINK_RE = re.compile(r"\[([^\]]*)\]\([^)]*\)")


@dataclass(frozen=True, slots=True)
class Heading:
    level: int
    text: str


def match_heading(line: str) -> Heading | None:
    """Zwraca Heading dla linii nagłówka ATX albo None."""
    m = _ATX_RE.match(line)
    if not m:
        return None
    return Heading(level=len(m.group(1)), text=(m.group(2) or "").strip())


def slugify(text: str, max_len: int = 60) -> str:
    """Zamień tekst nagłówka na bezpieczny identyfikator ASCII."""
    text = _LINK_RE.sub(r"\1", text)
    text = _INLINE_MARKUP_RE.sub("", text)
    text = unicodedata.normalize("NFKD", text)
    text = text.encode("ascii", "ignore").decode("ascii")
    text = re.sub(r"[^\w\s-]", "", text).strip().lower()
    text = re.sub(r"[\s_]+", "-", text)
    text = re.sub(r"-{2,}", "-", text)
    return text[:max_len].rstrip("-") or "section"


@dataclass
class _OpenSection:
    index: int
    heading: str
    level: int
    line: int
    slug: str
    parent: str | None
    fences: list[Fence] = field(default_factory=list)

    def freeze(self) -> Section:
        return Section(
            index=self.index,
            heading=self.heading,
            level=self.level,
            line=self.line,
            slug=self.slug,
            parent=self.parent,
            fences=tuple(self.fences),
        )


class SectionBuilder:
    """
    Buduje sekcje w kolejności dokumentu.

    Sekcja 0 ("intro", level=0) istnieje zawsze. Rodzicem nowej sekcji jest
    najbliższa wcześniejsza sekcja o niższym poziomie (stos jak w drzewie
    spanów HTML).
    """

    def __init__(self) -> None:
        self._sections: list[_OpenSection] = [
            _OpenSection(index=0, heading="", level=0, line=1, slug="intro", parent=None)
        ]
        self._slug_seen: dict[str, int] = {"intro": 1}
        # stos: (poziom, indeks_sekcji)
        self._stack: list[tuple[int, int]] = []

    @property
    def current(self) -> _OpenSection:
        return self._sections[-1]

    def _make_slug(self, text: str) -> str:
        base = slugify(text) if text else "section"
        n = self._slug_seen.get(base, 0)
        self._slug_seen[base] = n + 1
        return base if n == 0 else f"{base}-{n}"

    def open(self, heading: Heading, line: int) -> _OpenSection:
        # Zdejmuj ze stosu sekcje na tym samym lub głębszym poziomie
        while self._stack and self._stack[-1][0] >= heading.level:
            self._stack.pop()
        parent = self._sections[self._stack[-1][1]].slug if self._stack else None
        section = _OpenSection(
            index=len(self._sections),
            heading=heading.text,
            level=heading.level,
            line=line,
            slug=self._make_slug(heading.text),
            parent=parent,
        )
        self._sections.append(section)
        self._stack.append((heading.level, section.index))
        return section

    def add_fence(self, fence: Fence) -> None:
        self.current.fences.append(fence)

    def build(self) -> tuple[Section, ...]:
        return tuple(s.freeze() for s in self._sections)

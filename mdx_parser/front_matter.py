"""
mdx_parser/front_matter.py — pomijanie bloku front matter.

Front matter to blok YAML na samym początku dokumentu, ograniczony liniami
'---'. Treści nie parsujemy, interesuje nas wyłącznie, ile linii pominąć.
Niezamknięty blok traktujemy jak zwykły tekst.
"""

from __future__ import annotations

_DELIMITER = "---"


def front_matter_length(lines: list[str]) -> int:
    """
    Zwraca liczbę początkowych linii należących do front matter
    (łącznie z obiema liniami '---'); 0 gdy front matter nie ma.
    """
    if not lines or lines[0].rstrip() != _DELIMITER:
        return 0
    for i in range(1, len(lines)):
        if lines[i].rstrip() == _DELIMITER:
            return i + 1
    return 0

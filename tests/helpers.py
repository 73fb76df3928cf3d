from __future__ import annotations

import textwrap

from mdx_parser.fences import Extraction, extract_document
from mdx_parser.languages import KNOWN_LANGUAGES


def doc(text: str, path: str = "docs/page.mdx", languages: frozenset[str] = KNOWN_LANGUAGES) -> Extraction:
    return extract_document(path, textwrap.dedent(text).lstrip("\n"), languages)


def fence(lang: str, body: str, info: str = "") -> str:
    head = f"```{lang} {info}".rstrip()
    return f"{head}\n{body}\n```"

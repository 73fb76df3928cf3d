"""
mdx_parser/languages.py — zbiór znanych tagów języka bloków kodu.

Tagi porównujemy po lower(). Aliasy (js/javascript, sh/bash/shell itd.)
są osobnymi, równoprawnymi identyfikatorami.
"""

from __future__ import annotations

from typing import Iterable

KNOWN_LANGUAGES: frozenset[str] = frozenset({
    # JavaScript / TypeScript
    "js", "jsx", "javascript", "mjs", "cjs",
    "ts", "tsx", "typescript", "mts",
    # Powłoka
    "bash", "sh", "shell", "zsh", "console", "powershell", "ps1", "cmd",
    # Dane i konfiguracja
    "json", "jsonc", "json5", "yaml", "yml", "toml", "ini", "env", "xml",
    "graphql", "gql", "sql", "prisma",
    # Web
    "html", "css", "scss", "sass", "less", "svg",
    # Dokumenty
    "md", "mdx", "markdown", "txt", "text", "plaintext", "diff",
    # Inne
    "python", "py", "go", "rust", "rs", "java", "ruby", "rb", "php",
    "docker", "dockerfile", "nginx", "http", "log", "mermaid",
})


def build_language_set(extra: Iterable[str] = ()) -> frozenset[str]:
    """Zwraca KNOWN_LANGUAGES poszerzony o dodatkowe tagi (np. z konfiguracji)."""
    cleaned = {e.strip().lower() for e in extra if e and e.strip()}
    return KNOWN_LANGUAGES | cleaned

"""
validator/allow_list.py — allow-lista znanych identyfikatorów API.

AllowList wczytuje plik i buduje niemutowalny słownik:
  _by_name: name -> AllowEntry

Formaty pliku:
  JSON  — {"name": "url", ...}
          [{"name": "...", "url": "..."}, ...]
          {"references": [{"name": "...", "url": "..."}, ...]}
  tekst — jedna pozycja na linię: "name url", "name = url" lub "name: url";
          puste linie i komentarze '#' pomijane; samo "name" = bez URL.

Każdy problem z plikiem kończy się AllowListLoadError.
"""

from __future__ import annotations

import json
import pathlib
import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Iterable, Iterator, Mapping

import jsonschema

from data_model.errors import AllowListLoadError

_NAME_RE = re.compile(r"^[A-Za-z_$][\w$]*(?:\.[A-Za-z_$][\w$]*)*$")

# "name url" | "name = url" | "name: url" | "name"
_LINE_RE = re.compile(
    r"^(?P<name>[A-Za-z_$][\w$.]*)(?:(?:\s*[=:]\s*|\s+)(?P<url>\S+))?\s*$"
)

# Komentarz na końcu linii musi być poprzedzony białym znakiem ('#' w URL to fragment)
_TRAILING_COMMENT_RE = re.compile(r"\s+#.*$")

_ENTRY_SCHEMA: dict[str, Any] = {
    "type": "object",
    "required": ["name"],
    "properties": {
        "name": {"type": "string", "pattern": _NAME_RE.pattern},
        "url": {"type": ["string", "null"]},
    },
    "additionalProperties": True,
}

ALLOW_LIST_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "oneOf": [
        {
            "type": "object",
            "required": ["references"],
            "properties": {
                "references": {"type": "array", "items": _ENTRY_SCHEMA},
            },
        },
        {"type": "array", "items": _ENTRY_SCHEMA},
        {
            "type": "object",
            "not": {"required": ["references"]},
            "propertyNames": {"pattern": _NAME_RE.pattern},
            "additionalProperties": {"type": ["string", "null"]},
        },
    ],
}


# ---------------------------------------------------------------------------
# AllowEntry
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class AllowEntry:
    """
    Pojedynczy wpis allow-listy.

    - name: identyfikator, np. "connection" albo "cookies.get"
    - url:  kanoniczny adres dokumentacji (None gdy nie podano)
    """

    name: str
    url: str | None


# ---------------------------------------------------------------------------
# AllowList
# ---------------------------------------------------------------------------

class AllowList:
    """
    Niemutowalny indeks allow-listy, współdzielony przez wszystkie
    dokumenty w przebiegu (tylko odczyt, bez blokad).
    """

    def __init__(self, entries: Iterable[AllowEntry], source: str = "<memory>") -> None:
        by_name: dict[str, AllowEntry] = {}
        for entry in entries:
            prev = by_name.get(entry.name)
            if prev is not None and prev.url != entry.url:
                raise AllowListLoadError(
                    source,
                    f"identyfikator '{entry.name}' ma dwa różne adresy: "
                    f"'{prev.url}' i '{entry.url}'",
                )
            by_name[entry.name] = entry
        self.source = source
        self._by_name: Mapping[str, AllowEntry] = MappingProxyType(by_name)

    def __len__(self) -> int:
        return len(self._by_name)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __iter__(self) -> Iterator[AllowEntry]:
        return iter(sorted(self._by_name.values(), key=lambda e: e.name))

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def lookup(self, name: str) -> AllowEntry | None:
        """
        Szuka wpisu dla pełnej nazwy albo jej najdłuższego prefiksu
        kropkowego ("cookies.get" → "cookies").
        """
        entry = self._by_name.get(name)
        if entry is not None:
            return entry
        parts = name.split(".")
        for n in range(len(parts) - 1, 0, -1):
            entry = self._by_name.get(".".join(parts[:n]))
            if entry is not None:
                return entry
        return None

    def is_known(self, name: str) -> bool:
        return self.lookup(name) is not None

    def canonical_url(self, name: str) -> str | None:
        entry = self._by_name.get(name)
        return entry.url if entry else None

    # ------------------------------------------------------------------
    # Konstruktory fabryczne
    # ------------------------------------------------------------------

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, str | None], source: str = "<memory>") -> "AllowList":
        return cls((AllowEntry(k, v) for k, v in mapping.items()), source)

    @classmethod
    def from_json(cls, data: Any, source: str = "<memory>") -> "AllowList":
        """Buduje allow-listę z już wczytanego JSON (po walidacji schematu)."""
        validator = jsonschema.Draft202012Validator(ALLOW_LIST_SCHEMA)
        errors = sorted(validator.iter_errors(data), key=lambda e: list(e.absolute_path))
        if errors:
            e = errors[0]
            where = "/" + "/".join(str(p) for p in e.absolute_path) if e.absolute_path else "/"
            raise AllowListLoadError(source, f"naruszenie schematu w {where}: {e.message}")

        if isinstance(data, dict) and "references" in data:
            items = data["references"]
        elif isinstance(data, list):
            items = data
        else:
            return cls.from_mapping(data, source)
        return cls((AllowEntry(i["name"], i.get("url")) for i in items), source)

    @classmethod
    def from_text(cls, text: str, source: str = "<memory>") -> "AllowList":
        """Parsuje format tekstowy (jedna pozycja na linię)."""
        entries: list[AllowEntry] = []
        for lineno, raw in enumerate(text.splitlines(), start=1):
            line = _TRAILING_COMMENT_RE.sub("", raw).strip()
            if not line or line.startswith("#"):
                continue
            m = _LINE_RE.match(line)
            if not m or not _NAME_RE.match(m.group("name")):
                raise AllowListLoadError(source, f"linia {lineno}: niepoprawny wpis '{raw.strip()}'")
            entries.append(AllowEntry(m.group("name"), m.group("url")))
        return cls(entries, source)

    @classmethod
    def from_file(cls, path: str | pathlib.Path) -> "AllowList":
        """Ładuje allow-listę z pliku (.json albo tekstowego)."""
        p = pathlib.Path(path)
        source = str(p)
        try:
            text = p.read_text(encoding="utf-8")
        except FileNotFoundError:
            raise AllowListLoadError(source, "plik nie istnieje") from None
        except UnicodeDecodeError as e:
            raise AllowListLoadError(source, f"niepoprawne UTF-8: {e}") from e
        except OSError as e:
            raise AllowListLoadError(source, f"nie można odczytać pliku: {e}") from e

        if p.suffix.lower() == ".json":
            try:
                data = json.loads(text)
            except json.JSONDecodeError as e:
                raise AllowListLoadError(source, f"błąd parsowania JSON: {e}") from e
            return cls.from_json(data, source)
        return cls.from_text(text, source)

"""
Konfiguracja mdxlint — zmienne środowiskowe (opcjonalnie z pliku .env).

Zmienne:
  MDXLINT_ALLOW_LIST        domyślna ścieżka allow-listy
  MDXLINT_WORKERS           liczba wątków (domyślnie min(8, liczba CPU))
  MDXLINT_FAIL_ON           próg kodu wyjścia: info | warning | error
  MDXLINT_EXTRA_LANGUAGES   dodatkowe tagi języka, rozdzielone przecinkami

Opcje linii poleceń mają pierwszeństwo przed zmiennymi.
"""

from __future__ import annotations

import os
import pathlib
from dataclasses import dataclass
from typing import Mapping

from dotenv import load_dotenv

from data_model.errors import ConfigError
from data_model.findings import Severity

ENV_ALLOW_LIST = "MDXLINT_ALLOW_LIST"
ENV_WORKERS    = "MDXLINT_WORKERS"
ENV_FAIL_ON    = "MDXLINT_FAIL_ON"
ENV_LANGUAGES  = "MDXLINT_EXTRA_LANGUAGES"


def default_workers() -> int:
    return max(1, min(8, os.cpu_count() or 1))


@dataclass(frozen=True, slots=True)
class Settings:
    allow_list: str | None
    workers: int
    fail_on: Severity
    extra_languages: tuple[str, ...]


def parse_workers(value: str) -> int:
    try:
        n = int(value)
    except ValueError:
        raise ConfigError(f"Liczba wątków musi być liczbą całkowitą, otrzymano '{value}'.") from None
    if n < 1:
        raise ConfigError(f"Liczba wątków musi być ≥ 1, otrzymano {n}.")
    return n


def parse_severity(value: str) -> Severity:
    try:
        return Severity(value.strip().lower())
    except ValueError:
        allowed = ", ".join(str(s) for s in Severity)
        raise ConfigError(f"Nieznany poziom '{value}' (dozwolone: {allowed}).") from None


def load_settings(
    env: Mapping[str, str] | None = None,
    dotenv_path: str | pathlib.Path | None = None,
) -> Settings:
    """
    Czyta ustawienia ze środowiska.

    Gdy env nie jest podane, najpierw ładowany jest plik .env z katalogu
    roboczego (bez nadpisywania zmiennych już ustawionych).
    """
    if env is None:
        load_dotenv(dotenv_path or pathlib.Path.cwd() / ".env", override=False)
        env = os.environ

    raw_workers = env.get(ENV_WORKERS)
    raw_fail_on = env.get(ENV_FAIL_ON)
    raw_langs   = env.get(ENV_LANGUAGES, "")

    return Settings(
        allow_list=env.get(ENV_ALLOW_LIST) or None,
        workers=parse_workers(raw_workers) if raw_workers else default_workers(),
        fail_on=parse_severity(raw_fail_on) if raw_fail_on else Severity.ERROR,
        extra_languages=tuple(
            lang.strip().lower() for lang in raw_langs.split(",") if lang.strip()
        ),
    )

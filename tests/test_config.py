from __future__ import annotations

import os
from pathlib import Path

import pytest

from data_model import ConfigError, Severity
from mdxlint.config import default_workers, load_settings, parse_severity, parse_workers


def test_defaults() -> None:
    settings = load_settings(env={})

    assert settings.allow_list is None
    assert settings.workers == default_workers()
    assert 1 <= settings.workers <= 8
    assert settings.fail_on == Severity.ERROR
    assert settings.extra_languages == ()


def test_values_from_env() -> None:
    settings = load_settings(env={
        "MDXLINT_ALLOW_LIST": "api.txt",
        "MDXLINT_WORKERS": "3",
        "MDXLINT_FAIL_ON": "Warning",
        "MDXLINT_EXTRA_LANGUAGES": " Prisma, graphql ,,",
    })

    assert settings.allow_list == "api.txt"
    assert settings.workers == 3
    assert settings.fail_on == Severity.WARNING
    assert settings.extra_languages == ("prisma", "graphql")


def test_dotenv_file_is_loaded(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    # load_dotenv zapisuje do os.environ; kopia nie przecieka do innych testów
    monkeypatch.setattr(os, "environ", dict(os.environ))
    (tmp_path / ".env").write_text("MDXLINT_WORKERS=2\nMDXLINT_FAIL_ON=info\n", encoding="utf-8")
    monkeypatch.setenv("MDXLINT_FAIL_ON", "warning")

    settings = load_settings()

    assert settings.workers == 2
    # zmienne środowiskowe mają pierwszeństwo przed .env
    assert settings.fail_on == Severity.WARNING


@pytest.mark.parametrize("value", ["0", "-1", "two"])
def test_invalid_workers(value: str) -> None:
    with pytest.raises(ConfigError):
        parse_workers(value)


def test_invalid_severity() -> None:
    with pytest.raises(ConfigError, match="dozwolone"):
        parse_severity("fatal")
    with pytest.raises(ConfigError):
        load_settings(env={"MDXLINT_FAIL_ON": "fatal"})

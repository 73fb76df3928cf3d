from __future__ import annotations

from pathlib import Path

import pytest

from validator.allow_list import AllowList

_ENV_VARS = (
    "MDXLINT_ALLOW_LIST",
    "MDXLINT_WORKERS",
    "MDXLINT_FAIL_ON",
    "MDXLINT_EXTRA_LANGUAGES",
)


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def allow_list() -> AllowList:
    return AllowList.from_mapping(
        {
            "connection": "https://nextjs.org/docs/app/api-reference/functions/connection",
            "cookies": "https://nextjs.org/docs/app/api-reference/functions/cookies",
            "Link": "https://nextjs.org/docs/app/api-reference/components/link",
        }
    )

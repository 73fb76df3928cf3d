from __future__ import annotations

import json
from pathlib import Path

import pytest

from data_model import AllowListLoadError
from validator.allow_list import AllowEntry, AllowList

TEXT = """\
# Next.js functions
connection https://nextjs.org/docs/app/api-reference/functions/connection
cookies = https://nextjs.org/docs/app/api-reference/functions/cookies
headers: https://nextjs.org/docs/app/api-reference/functions/headers
useRouter https://nextjs.org/docs/app/api-reference/functions/use-router#userouter   # hook

redirect
"""


def test_text_format() -> None:
    allow = AllowList.from_text(TEXT)

    assert len(allow) == 5
    assert [e.name for e in allow] == ["connection", "cookies", "headers", "redirect", "useRouter"]
    assert allow.canonical_url("headers") == "https://nextjs.org/docs/app/api-reference/functions/headers"
    assert allow.canonical_url("useRouter").endswith("use-router#userouter")
    assert allow.canonical_url("redirect") is None
    assert "redirect" in allow


def test_text_format_rejects_bad_line() -> None:
    with pytest.raises(AllowListLoadError) as exc:
        AllowList.from_text("connection\nthis is not an entry\n", source="api.txt")
    assert "linia 2" in exc.value.reason
    assert exc.value.path == "api.txt"


def test_prefix_lookup() -> None:
    allow = AllowList.from_mapping({"cookies": None, "cookies.set": "https://x/set"})

    assert allow.lookup("cookies.get") == AllowEntry("cookies", None)
    assert allow.lookup("cookies.set").url == "https://x/set"
    assert allow.lookup("headers") is None
    assert allow.is_known("cookies.get.value")


def test_conflicting_urls_are_rejected() -> None:
    with pytest.raises(AllowListLoadError):
        AllowList([AllowEntry("a", "https://x/a"), AllowEntry("a", "https://x/b")])


def test_duplicate_with_same_url_is_fine() -> None:
    allow = AllowList([AllowEntry("a", "https://x/a"), AllowEntry("a", "https://x/a")])
    assert len(allow) == 1


@pytest.mark.parametrize(
    "data",
    [
        {"connection": "https://x/connection", "cookies": None},
        [{"name": "connection", "url": "https://x/connection"}, {"name": "cookies"}],
        {"references": [{"name": "connection", "url": "https://x/connection"}, {"name": "cookies"}]},
    ],
)
def test_json_forms(data: object) -> None:
    allow = AllowList.from_json(data)
    assert allow.canonical_url("connection") == "https://x/connection"
    assert "cookies" in allow


@pytest.mark.parametrize(
    "data",
    [
        {"references": [{"url": "https://x"}]},
        [{"name": "not a name"}],
        {"bad name": "https://x"},
        "connection",
    ],
)
def test_json_schema_violations(data: object) -> None:
    with pytest.raises(AllowListLoadError) as exc:
        AllowList.from_json(data, source="api.json")
    assert "schematu" in exc.value.reason


def test_from_file(tmp_path: Path) -> None:
    txt = tmp_path / "allow.txt"
    txt.write_text(TEXT, encoding="utf-8")
    js = tmp_path / "allow.json"
    js.write_text(json.dumps({"connection": "https://x/connection"}), encoding="utf-8")

    assert len(AllowList.from_file(txt)) == 5
    allow = AllowList.from_file(js)
    assert allow.source == str(js)
    assert list(allow) == [AllowEntry("connection", "https://x/connection")]


def test_from_file_errors(tmp_path: Path) -> None:
    with pytest.raises(AllowListLoadError, match="nie istnieje"):
        AllowList.from_file(tmp_path / "missing.txt")

    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    with pytest.raises(AllowListLoadError, match="JSON"):
        AllowList.from_file(broken)

    latin = tmp_path / "latin.txt"
    latin.write_bytes("zażółć".encode("iso-8859-2"))
    with pytest.raises(AllowListLoadError, match="UTF-8"):
        AllowList.from_file(latin)

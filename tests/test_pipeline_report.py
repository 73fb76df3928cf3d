from __future__ import annotations

import json
from pathlib import Path

import pytest

from data_model import FindingCode, Severity
from validator import (
    AllowList,
    DocumentReadError,
    Source,
    discover,
    lint_document,
    lint_documents,
    read_sources,
    render_json,
    report_to_dict,
)

from helpers import fence

MIXED = f"""Intro mentions `useBar`.

# A

Before:

{fence("js", "x()")}

Then `useFoo` appears.
"""


def _write_docs(root: Path, count: int) -> None:
    for i in range(count):
        body = fence("js", f"const v{i} = connection()", 'filename="app/page.js"')
        text = f"# Page {i}\n\nBefore:\n\n{body}\n\nAfter:\n\n{body}\n\nSee `useThing{i}`.\n"
        path = root / f"section{i % 2}" / f"page{i}.mdx"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")


def test_findings_sorted_by_section_then_severity(allow_list: AllowList) -> None:
    report = lint_document(Source("docs/a.mdx", MIXED), allow_list)

    assert [(f.section, f.code, f.line) for f in report.findings] == [
        (0, FindingCode.UNKNOWN_REFERENCE, 1),
        (1, FindingCode.UNKNOWN_REFERENCE, 11),
        (1, FindingCode.DANGLING_COMPARISON, 7),
    ]
    assert report.counts() == {"info": 0, "warning": 1, "error": 2}
    assert report.sections == 2
    assert report.fences == 1


def test_lint_is_idempotent(allow_list: AllowList) -> None:
    source = Source("docs/a.mdx", MIXED)
    assert lint_document(source, allow_list) == lint_document(source, allow_list)


def test_parallel_run_matches_sequential(allow_list: AllowList, tmp_path: Path) -> None:
    _write_docs(tmp_path / "docs", 7)
    sources = read_sources(["docs"])
    seen: list[str] = []

    sequential = lint_documents(sources, allow_list, workers=1)
    parallel = lint_documents(sources, allow_list, workers=4, on_done=lambda r: seen.append(r.path))

    assert render_json(parallel) == render_json(sequential)
    assert sorted(seen) == [s.path for s in sorted(sources, key=lambda s: s.path)]
    paths = [d.path for d in parallel.documents]
    assert paths == sorted(paths)
    assert all(len(d.units) == 1 for d in parallel.documents)


def test_report_json_structure(allow_list: AllowList) -> None:
    report = lint_documents([Source("b.mdx", "# B\n"), Source("a.mdx", MIXED)], allow_list)
    payload = render_json(report)
    data = json.loads(payload)

    assert payload.endswith("\n")
    assert data == json.loads(json.dumps(report_to_dict(report)))
    assert data["version"] == 1
    assert data["summary"] == {"info": 0, "warning": 1, "error": 2}
    assert [d["path"] for d in data["documents"]] == ["a.mdx", "b.mdx"]
    assert data["documents"][1]["findings"] == []
    first = data["documents"][0]["findings"][0]
    assert first["code"] == "UnknownReferenceError"
    assert first["details"]["name"] == "useBar"


def test_exit_code_threshold(allow_list: AllowList) -> None:
    text = "# A\n\nBefore:\n\n" + fence("js", "x()") + "\n"
    report = lint_documents([Source("a.mdx", text)], allow_list)

    assert report.counts()["warning"] == 1
    assert report.exit_code() == 0
    assert report.exit_code(Severity.WARNING) == 1
    assert report.exit_code(Severity.INFO) == 1


def test_discover(tmp_path: Path) -> None:
    docs = tmp_path / "docs"
    (docs / "nested").mkdir(parents=True)
    for name in ("a.mdx", "b.md", "c.txt", "nested/d.mdx"):
        (docs / name).write_text("# x\n", encoding="utf-8")

    found = discover(["docs", "docs/c.txt", "docs/a.mdx"])

    assert [p.as_posix() for p in found] == [
        "docs/a.mdx",
        "docs/b.md",
        "docs/nested/d.mdx",
        "docs/c.txt",
    ]


def test_read_sources_errors(tmp_path: Path) -> None:
    with pytest.raises(DocumentReadError, match="nie istnieje"):
        read_sources(["missing.mdx"])

    (tmp_path / "bad.mdx").write_bytes(b"\xff\xfe# x\n")
    with pytest.raises(DocumentReadError, match="UTF-8"):
        read_sources(["bad.mdx"])


def test_unterminated_fence_adds_no_sections_or_references() -> None:
    allow = AllowList.from_mapping({"connection": None})
    text = "# Setup\n\n```bash\n# install deps\nnpm i\nexport const msg = `helloWorld`\n"

    report = lint_document(Source("docs/setup.mdx", text), allow)

    assert [(f.code, f.heading, f.line) for f in report.findings] == [
        (FindingCode.MALFORMED_FENCE, "Setup", 3)
    ]
    assert report.sections == 2

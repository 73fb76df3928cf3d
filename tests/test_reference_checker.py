from __future__ import annotations

import pytest

from data_model import FindingCode, ProseLine, Severity
from validator.allow_list import AllowList
from validator.reference_checker import (
    ReferenceChecker,
    api_name,
    extract_candidates,
    same_target,
)

from helpers import doc


def check(text: str, allow_list: AllowList):
    return ReferenceChecker(allow_list).check(doc(text).document)


def test_unknown_reference_is_error(allow_list: AllowList) -> None:
    text = "# Hooks\n\nUse `useOptimistic` together with `connection()`.\n"
    findings = check(text, allow_list)

    assert len(findings) == 1
    finding = findings[0]
    assert finding.code == FindingCode.UNKNOWN_REFERENCE
    assert finding.severity == Severity.ERROR
    assert (finding.line, finding.column) == (3, 5)
    assert finding.heading == "Hooks"
    assert dict(finding.details)["name"] == "useOptimistic"


def test_known_references_pass(allow_list: AllowList) -> None:
    text = "Call `connection()` before reading `cookies().get('token')`.\n"
    assert check(text, allow_list) == ()


def test_code_inside_fences_is_ignored(allow_list: AllowList) -> None:
    text = "# A\n\n```js\nconst x = useOptimistic()\n```\n"
    assert check(text, allow_list) == ()


def test_plain_words_and_paths_are_ignored(allow_list: AllowList) -> None:
    text = "Run `npm run dev` and open `app/page.js` or `next.config.js`, see `params`.\n"
    assert check(text, allow_list) == ()


def test_jsx_components(allow_list: AllowList) -> None:
    text = "Wrap it in `<Link>` and `<Image />`, not `<div>`.\n"
    findings = check(text, allow_list)
    assert [dict(f.details)["name"] for f in findings] == ["Image"]


def test_dotted_call_uses_prefix(allow_list: AllowList) -> None:
    text = "Use `cookies.get()` but not `router.push('/')`.\n"
    findings = check(text, allow_list)
    assert [dict(f.details)["name"] for f in findings] == ["router.push"]


def test_link_url_mismatch_is_warning(allow_list: AllowList) -> None:
    text = "See [`cookies()`](/docs/app/api-reference/functions/headers).\n"
    findings = check(text, allow_list)

    assert [(f.code, f.severity) for f in findings] == [
        (FindingCode.REFERENCE_URL_MISMATCH, Severity.WARNING)
    ]


def test_link_to_canonical_path_passes(allow_list: AllowList) -> None:
    text = (
        "See [`cookies()`](/docs/app/api-reference/functions/cookies/) and "
        "[`connection()`](https://nextjs.org/docs/app/api-reference/functions/connection#example).\n"
    )
    assert check(text, allow_list) == ()


def test_anchor_only_link_is_not_compared(allow_list: AllowList) -> None:
    assert check("See [`cookies()`](#usage).\n", allow_list) == ()


def test_link_with_plain_text_is_checked(allow_list: AllowList) -> None:
    text = "[useOptimistic](https://react.dev/reference/react/useOptimistic)\n"
    findings = check(text, allow_list)
    assert [f.code for f in findings] == [FindingCode.UNKNOWN_REFERENCE]


def test_code_span_in_link_counted_once() -> None:
    prose = ProseLine(1, "[`useFoo()`](/docs/foo)", 0)
    candidates = extract_candidates(prose)

    assert [(c.name, c.column, c.link_url) for c in candidates] == [("useFoo", 2, "/docs/foo")]


def test_image_links_are_skipped() -> None:
    prose = ProseLine(1, "![`useFoo()`](/img/foo.png)", 0)
    assert extract_candidates(prose) == []


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("connection()", "connection"),
        ("cookies().get('x')", "cookies"),
        ("useRouter", "useRouter"),
        ("<Link>", "Link"),
        ("<Image src={a} />", "Image"),
        ("</Suspense>", "Suspense"),
        ("@vercel/og", None),
        ("<div>", None),
        ("params", None),
        ("npm run dev", None),
        ("next.config.js", None),
        ("revalidatePath();", "revalidatePath"),
        ("if (x)", None),
        ("for (let i = 0; i < n; i++)", None),
        ("switch (action.type)", None),
        ("await (fetch)", None),
    ],
)
def test_api_name(raw: str, expected: str | None) -> None:
    assert api_name(raw) == expected


def test_keywords_in_code_spans_are_not_references(allow_list: AllowList) -> None:
    text = "Wrap it in `if (isReady)` or `switch (status)`, then call `revalidateTag()`.\n"
    findings = check(text, allow_list)
    assert [dict(f.details)["name"] for f in findings] == ["revalidateTag"]


def test_same_target() -> None:
    canonical = "https://nextjs.org/docs/app/api-reference/functions/cookies"
    assert same_target("/docs/app/api-reference/functions/cookies", canonical)
    assert same_target("https://NEXTJS.org/docs/app/api-reference/functions/cookies/?x=1", canonical)
    assert not same_target("https://example.com/docs/app/api-reference/functions/cookies", canonical)
    assert not same_target("/docs/app/api-reference/functions/headers", canonical)

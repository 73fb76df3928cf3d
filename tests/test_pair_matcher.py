from __future__ import annotations

import pytest

from data_model import ComparisonUnit, FindingCode, Severity
from validator.pair_matcher import fence_marker, match_pairs

from helpers import doc

MIGRATION = """# Migrating

Before:

```js filename="app/page.js"
const token = cookies().get('token')
```

After:

```js filename="app/page.js"
const token = (await cookies()).get('token')
```
"""


def test_before_after_pair_yields_one_unit() -> None:
    result = match_pairs(doc(MIGRATION).document)

    assert len(result.units) == 1
    assert result.findings == ()
    unit = result.units[0]
    assert unit.filename == "app/page.js"
    assert unit.before.start_line < unit.after.start_line
    assert unit.section == 1


def test_bold_markers() -> None:
    text = MIGRATION.replace("Before:", "**Before:**").replace("After:", "**After**:")
    result = match_pairs(doc(text).document)
    assert len(result.units) == 1
    assert result.findings == ()


def test_before_without_after_in_section_is_dangling() -> None:
    text = """# One

Before:

```js
a()
```

# Two

After:

```js
b()
```
"""
    result = match_pairs(doc(text).document)

    assert result.units == ()
    assert [(f.code, f.severity, f.heading) for f in result.findings] == [
        (FindingCode.DANGLING_COMPARISON, Severity.WARNING, "One"),
        (FindingCode.ORPHAN_AFTER, Severity.INFO, "Two"),
    ]


def test_second_before_leaves_first_dangling() -> None:
    text = """# Steps

Before:

```js
one()
```

Before:

```js
two()
```

After:

```js
three()
```
"""
    result = match_pairs(doc(text).document)

    assert len(result.units) == 1
    assert result.units[0].before.body == "two()"
    assert [f.code for f in result.findings] == [FindingCode.DANGLING_COMPARISON]
    assert result.findings[0].line == 5


def test_unmarked_fence_does_not_break_pending_before() -> None:
    text = """# Steps

Before:

```js
one()
```

For reference, the helper:

```js
helper()
```

After:

```js
two()
```
"""
    result = match_pairs(doc(text).document)

    assert [(u.before.body, u.after.body) for u in result.units] == [("one()", "two()")]
    assert result.findings == ()


def test_filename_mismatch_is_warning_without_unit() -> None:
    text = MIGRATION.replace('```js filename="app/page.js"\nconst token = (await', '```js filename="app/layout.js"\nconst token = (await')
    result = match_pairs(doc(text).document)

    assert result.units == ()
    assert [(f.code, f.severity) for f in result.findings] == [
        (FindingCode.PAIR_FILENAME_MISMATCH, Severity.WARNING)
    ]


def test_switcher_variants_pair_by_language() -> None:
    text = """# Switch

Before:

```tsx filename="app/page.tsx" switcher
export default function Page(): JSX.Element {}
```

```jsx filename="app/page.js" switcher
export default function Page() {}
```

After:

```jsx filename="app/page.js" switcher
export default async function Page() {}
```

```tsx filename="app/page.tsx" switcher
export default async function Page(): Promise<JSX.Element> {}
```
"""
    result = match_pairs(doc(text).document)

    assert result.findings == ()
    assert sorted((u.before.language, u.after.language) for u in result.units) == [
        ("jsx", "jsx"),
        ("tsx", "tsx"),
    ]
    assert {u.filename for u in result.units} == {"app/page.tsx", "app/page.js"}


def test_comparison_unit_rejects_different_filenames() -> None:
    fences = list(doc(MIGRATION.replace('app/page.js"\nconst token = (await', 'app/other.js"\nconst token = (await')).document.fences)
    with pytest.raises(ValueError):
        ComparisonUnit(before=fences[0], after=fences[1], section=1)


def test_fence_marker_uses_last_marker() -> None:
    fence = next(doc("After: it was fine. Before:\n\n```js\nx\n```\n").document.fences)
    assert fence_marker(fence) == "Before"

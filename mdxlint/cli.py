"""
mdxlint — narzędzie CLI do analizy dokumentacji MDX.

Użycie:
  mdxlint <komenda> [opcje]

Komendy:
  check        Analizuje dokumenty (bloki kodu, pary Before/After, referencje API).
  fences       Pokazuje sekcje i bloki kodu jednego dokumentu.
  pairs        Pokazuje pary Before:/After: jednego dokumentu.
  allow-list   Wczytuje i listuje allow-listę identyfikatorów API.
"""

from __future__ import annotations

import argparse
import sys

from mdxlint.commands import allow_list as cmd_allow_list
from mdxlint.commands import check as cmd_check
from mdxlint.commands import fences as cmd_fences
from mdxlint.commands import pairs as cmd_pairs

__version__ = "0.1.0"


def _force_utf8() -> None:
    # Windows: terminal może używać cp1252, a komunikaty zawierają polskie znaki.
    for stream in (sys.stdout, sys.stderr):
        encoding = (getattr(stream, "encoding", None) or "").lower()
        if encoding != "utf-8" and hasattr(stream, "reconfigure"):
            stream.reconfigure(encoding="utf-8", errors="replace")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mdxlint",
        description="mdxlint — analiza bloków kodu i referencji w dokumentacji MDX.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version", action="version", version=f"mdxlint {__version__}"
    )

    subparsers = parser.add_subparsers(
        title="komendy",
        metavar="<komenda>",
        dest="command",
    )
    subparsers.required = True

    cmd_check.add_parser(subparsers)
    cmd_fences.add_parser(subparsers)
    cmd_pairs.add_parser(subparsers)
    cmd_allow_list.add_parser(subparsers)

    return parser


def main(argv: list[str] | None = None) -> None:
    _force_utf8()
    parser = build_parser()
    args = parser.parse_args(argv)
    args.func(args)


if __name__ == "__main__":
    main()

from __future__ import annotations

import argparse
from typing import Sequence


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="offline-translator",
        description=(
            "Offline dictionary translator that replaces whole-word terms using a "
            "static term mapping, longest term first."
        ),
    )
    parser.add_argument(
        "text",
        nargs="*",
        help="Text to translate. Each argument is printed on its own line. Reads stdin when omitted.",
    )
    parser.add_argument(
        "--dictionary",
        help=(
            "Path to the term dictionary (JSON object or term=translation lines). "
            "Defaults to $OFFLINE_TRANSLATOR_DICTIONARY or ./translations.json."
        ),
    )
    parser.add_argument(
        "--log-file",
        help="Optional file where log messages are appended.",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Treat the input as a JSON document and translate all of its string values.",
    )
    parser.add_argument(
        "--translate-keys",
        action="store_true",
        help="With --json, translate object keys as well as values.",
    )
    parser.add_argument(
        "--show-terms",
        action="store_true",
        help="Only list the loaded terms in substitution order, then exit.",
    )
    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = build_parser()
    return parser.parse_args(argv)

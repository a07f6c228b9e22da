from __future__ import annotations

import asyncio
import json
import sys
from typing import Any, Optional, Sequence

from rich.console import Console
from rich.table import Table

from .cli import parse_args
from .config import AppConfig, build_config
from .logging_utils import RichLogger
from .substitution import ordered_terms
from .translator import OfflineTranslator


def build_terms_table(terms) -> Table:
    table = Table(title="Dictionary terms (substitution order)")
    table.add_column("Term", style="cyan")
    table.add_column("Translation", style="green")
    for term in ordered_terms(terms):
        table.add_row(term, terms[term])
    return table


def emit(text: str) -> None:
    # Translated text goes to stdout untouched; rich would expand tabs.
    sys.stdout.write(text + "\n")


async def run(config: AppConfig, texts: Sequence[str], console: Console, logger: RichLogger) -> None:
    translator = OfflineTranslator.from_config(config, logger=logger)

    if config.show_terms:
        terms = await translator.terms()
        if not terms:
            logger.log_panel("No dictionary terms available.", "WARN", "yellow")
            return
        console.print(build_terms_table(terms))
        return

    if config.json_input:
        document: Any = json.loads("\n".join(texts))
        translated = await translator.translate_record(document, translate_keys=config.translate_keys)
        emit(json.dumps(translated, ensure_ascii=False, indent=2))
        return

    for line in await translator.translate_many(list(texts)):
        emit(line)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    console = Console()
    logger = RichLogger()

    try:
        config = build_config(args)
        logger = RichLogger(log_file=config.log_file)
        texts = list(args.text)
        if not texts and not config.show_terms:
            texts = [sys.stdin.read().rstrip("\n")]
        asyncio.run(run(config, texts, console, logger))
    except json.JSONDecodeError as error:
        logger.log_panel(f"Input is not valid JSON: {error}", "ERROR", "red")
        return 1
    except (ValueError, OSError) as error:
        logger.log_exception(error)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

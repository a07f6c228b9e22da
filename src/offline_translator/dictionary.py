"""Loading of the persisted term dictionary.

The dictionary is a flat ``term -> translation`` mapping stored either as a
JSON object (``translations.json``) or as ``term=translation`` lines. It is
read once per :class:`DictionaryLoader` and then served from memory as a
read-only mapping.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from types import MappingProxyType
from typing import Callable, Dict, Mapping, Optional

from .logging_utils import RichLogger

JSON_FORMAT = "json"
LINES_FORMAT = "lines"

EMPTY_DICTIONARY: Mapping[str, str] = MappingProxyType({})


class DictionaryLoadError(ValueError):
    """Raised when the persisted dictionary is missing or malformed."""


def detect_format(path: Path) -> str:
    return JSON_FORMAT if path.suffix.lower() == ".json" else LINES_FORMAT


def _parse_json(text: str) -> Dict[str, str]:
    try:
        data = json.loads(text)
    except (ValueError, RecursionError) as exc:
        raise DictionaryLoadError(f"invalid JSON: {exc}") from exc

    if not isinstance(data, dict):
        raise DictionaryLoadError(f"expected a JSON object, got {type(data).__name__}")

    mapping: Dict[str, str] = {}
    for term, translation in data.items():
        if not isinstance(translation, str):
            raise DictionaryLoadError(
                f"value for {term!r} must be a string, got {type(translation).__name__}"
            )
        if term:
            mapping[term] = translation
    return mapping


def _parse_lines(text: str) -> Dict[str, str]:
    mapping: Dict[str, str] = {}
    for line in text.splitlines():
        if "=" not in line:
            continue
        term, translation = line.split("=", 1)
        term = term.strip()
        if term:
            mapping[term] = translation.strip()
    return mapping


def parse_dictionary(text: str, fmt: str = JSON_FORMAT) -> Dict[str, str]:
    """Parse dictionary source text in the given format."""

    if fmt == JSON_FORMAT:
        return _parse_json(text)
    if fmt == LINES_FORMAT:
        return _parse_lines(text)
    raise DictionaryLoadError(f"unknown dictionary format: {fmt}")


def read_dictionary(path: Path) -> Dict[str, str]:
    """Read and parse the dictionary stored at ``path``."""

    try:
        text = path.read_text(encoding="utf-8-sig")
    except FileNotFoundError as exc:
        raise DictionaryLoadError(f"dictionary file not found: {path}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise DictionaryLoadError(f"cannot read {path}: {exc}") from exc
    return parse_dictionary(text, detect_format(path))


class DictionaryLoader:
    """Lazily loads the dictionary once and memoizes it.

    Concurrent first callers share a single in-flight read. A failed read is
    logged and reported as an empty mapping but is not remembered, so the
    next call tries the source again.
    """

    def __init__(
        self,
        path: Optional[Path],
        logger: Optional[RichLogger] = None,
        reader: Callable[[Path], Mapping[str, str]] = read_dictionary,
    ) -> None:
        self.path = path
        self.logger = logger
        self.reader = reader
        self.attempts = 0
        self._cache: Optional[Mapping[str, str]] = None
        self._inflight: Optional["asyncio.Task[Mapping[str, str]]"] = None

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, str]) -> "DictionaryLoader":
        loader = cls(path=None)
        loader._cache = MappingProxyType(dict(mapping))
        return loader

    @property
    def loaded(self) -> bool:
        return self._cache is not None

    async def load(self) -> Mapping[str, str]:
        if self._cache is not None:
            return self._cache

        task = self._inflight
        if task is None:
            task = asyncio.ensure_future(self._read())
            self._inflight = task
        return await asyncio.shield(task)

    async def _read(self) -> Mapping[str, str]:
        self.attempts += 1
        try:
            if self.path is None:
                raise DictionaryLoadError("no dictionary path configured")
            mapping = await asyncio.to_thread(self.reader, self.path)
        except DictionaryLoadError as error:
            self._log(f"Failed to load translations: {error}", "ERROR", "red")
            return EMPTY_DICTIONARY
        finally:
            self._inflight = None

        self._cache = MappingProxyType(dict(mapping))
        self._log(f"Loaded {len(self._cache)} terms from {self.path}", "INFO", "cyan")
        return self._cache

    def _log(self, message: str, title: str, style: str) -> None:
        if self.logger is not None:
            self.logger.log_panel(message, title, style)

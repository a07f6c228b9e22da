from __future__ import annotations

import asyncio
from typing import Any, List, Mapping, Optional, Sequence

from .config import AppConfig
from .dictionary import DictionaryLoader
from .logging_utils import RichLogger
from .substitution import SubstitutionEngine


class OfflineTranslator:
    """Dictionary-backed text translation without any network access."""

    def __init__(self, loader: DictionaryLoader) -> None:
        self.loader = loader
        self._engine: Optional[SubstitutionEngine] = None

    @classmethod
    def from_config(cls, config: AppConfig, logger: Optional[RichLogger] = None) -> "OfflineTranslator":
        return cls(DictionaryLoader(config.dictionary_path, logger=logger))

    async def engine(self) -> SubstitutionEngine:
        mapping = await self.loader.load()
        if self._engine is not None and self._engine.mapping is mapping:
            return self._engine
        engine = SubstitutionEngine(mapping)
        # Only a cached mapping is stable; a failed load must be retried next time.
        if self.loader.loaded:
            self._engine = engine
        return engine

    async def terms(self) -> Mapping[str, str]:
        return await self.loader.load()

    async def translate(self, text: Any) -> Any:
        if not isinstance(text, str) or not text:
            return text
        engine = await self.engine()
        return engine.substitute(text)

    async def translate_many(self, texts: Sequence[Any]) -> List[Any]:
        return list(await asyncio.gather(*(self.translate(text) for text in texts)))

    async def translate_record(self, record: Any, translate_keys: bool = False) -> Any:
        """Translate every string inside a JSON-like structure.

        Numbers, booleans and ``None`` are kept as they are. Keys are only
        translated when ``translate_keys`` is set; when two keys translate to
        the same string the later one wins. The input is not modified.
        """

        engine = await self.engine()
        return _translate_value(record, engine, translate_keys)


def _translate_value(value: Any, engine: SubstitutionEngine, translate_keys: bool) -> Any:
    if isinstance(value, str):
        return engine.substitute(value)
    if isinstance(value, dict):
        return {
            (engine.substitute(key) if translate_keys else key): _translate_value(item, engine, translate_keys)
            for key, item in value.items()
        }
    if isinstance(value, (list, tuple)):
        return [_translate_value(item, engine, translate_keys) for item in value]
    return value


async def translate_text_offline(text: Any, loader: DictionaryLoader) -> Any:
    return await OfflineTranslator(loader).translate(text)

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

DEFAULT_DICTIONARY_NAME = "translations.json"
DICTIONARY_ENV = "OFFLINE_TRANSLATOR_DICTIONARY"
LOG_FILE_ENV = "OFFLINE_TRANSLATOR_LOG_FILE"


@dataclass(slots=True)
class AppConfig:
    """Container for user configurable runtime options."""

    dictionary_path: Path
    log_file: Optional[Path] = None
    translate_keys: bool = False
    json_input: bool = False
    show_terms: bool = False


def load_environment() -> None:
    """Load environment variables from .env files if present."""

    load_dotenv(override=False)


def default_dictionary_path() -> Path:
    return Path.cwd() / DEFAULT_DICTIONARY_NAME


def resolve_dictionary_path(value: Optional[str]) -> Path:
    if value is not None:
        if not value.strip():
            raise ValueError("--dictionary must not be empty")
        return Path(value).expanduser()
    env_value = os.getenv(DICTIONARY_ENV)
    if env_value:
        return Path(env_value).expanduser()
    return default_dictionary_path()


def build_config(args) -> AppConfig:
    """Create an :class:`AppConfig` instance from parsed CLI arguments."""

    load_environment()
    dictionary_path = resolve_dictionary_path(getattr(args, "dictionary", None))

    log_file: Optional[Path] = None
    log_value = getattr(args, "log_file", None) or os.getenv(LOG_FILE_ENV)
    if log_value:
        log_file = Path(log_value).expanduser()
        log_file.parent.mkdir(parents=True, exist_ok=True)

    return AppConfig(
        dictionary_path=dictionary_path,
        log_file=log_file,
        translate_keys=bool(getattr(args, "translate_keys", False)),
        json_input=bool(getattr(args, "json", False)),
        show_terms=bool(getattr(args, "show_terms", False)),
    )

import io
import json
from pathlib import Path

import pytest
from rich.console import Console

from offline_translator.logging_utils import RichLogger


@pytest.fixture
def write_dictionary(tmp_path):
    """Write a JSON dictionary file and return its path."""

    def _write(mapping, name="translations.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(mapping, ensure_ascii=False), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def quiet_logger(tmp_path):
    """Logger that renders into memory and appends to a log file under tmp_path."""
    console = Console(file=io.StringIO(), width=200)
    return RichLogger(log_file=tmp_path / "app.log", console=console)

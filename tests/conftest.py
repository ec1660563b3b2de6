from __future__ import annotations

import copy
from collections.abc import Iterator
from pathlib import Path

import pytest

from promptist.config.settings import settings
from promptist.store.repository import FileTemplateRepository


@pytest.fixture(autouse=True)
def isolate_settings(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> Iterator[None]:
    """Prevent tests from persisting settings to disk.

    Each test starts from empty settings with its data directory under
    ``tmp_path``.
    """
    original_data = copy.deepcopy(settings._data)

    def _noop_save() -> None:
        return None

    monkeypatch.setattr(settings, "_save", _noop_save)
    settings._data = {"data_directory": str(tmp_path / "data")}
    try:
        yield
    finally:
        settings._data = original_data


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    return tmp_path / "data"


@pytest.fixture
def repository(data_dir: Path) -> FileTemplateRepository:
    return FileTemplateRepository(data_dir)

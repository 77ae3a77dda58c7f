import logging
from pathlib import Path
from typing import Callable, Generator, TypeAlias

import pytest

import linediff.config

WriteFile: TypeAlias = Callable[[str, str], Path]


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(linediff.config, "GLOBAL_CONFIG", tmp_path / "no-global")
    monkeypatch.setattr(linediff.config, "SYSTEM_CONFIG", tmp_path / "no-system")


@pytest.fixture
def restore_logging() -> Generator[None, None, None]:
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


@pytest.fixture
def write_file(tmp_path: Path) -> WriteFile:
    def _write_file(name: str, contents: str) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(contents)
        return path

    return _write_file

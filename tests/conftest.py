"""Shared pytest fixtures for folder-mirror tests."""

import io
from pathlib import Path

import pytest
from dotenv import load_dotenv

from folder_mirror.config import Config
from folder_mirror.sync.reporter import ChangeReporter

load_dotenv()


def build_tree(root: Path, layout: dict) -> None:
    """Create files and directories under *root* from a nested dict.

    String values become file contents, dict values become directories.
    """
    root.mkdir(parents=True, exist_ok=True)
    for name, value in layout.items():
        target = root / name
        if isinstance(value, dict):
            build_tree(target, value)
        else:
            target.write_text(value)


def read_tree(root: Path) -> dict:
    """Inverse of ``build_tree``: snapshot a directory as a nested dict."""
    out: dict = {}
    for child in sorted(root.iterdir()):
        if child.is_dir():
            out[child.name] = read_tree(child)
        else:
            out[child.name] = child.read_text()
    return out


class FixedClock:
    """Deterministic timestamp source returning T0, T1, T2, ..."""

    def __init__(self) -> None:
        self.ticks = 0

    def __call__(self) -> str:
        value = f"T{self.ticks}"
        self.ticks += 1
        return value


@pytest.fixture
def dirs(tmp_path, monkeypatch):
    """Work inside tmp_path with empty ``source`` and ``replica`` dirs."""
    monkeypatch.chdir(tmp_path)
    source = tmp_path / "source"
    replica = tmp_path / "replica"
    source.mkdir()
    replica.mkdir()
    return source, replica


@pytest.fixture
def reporter():
    """A ChangeReporter that writes to an in-memory console."""
    return ChangeReporter(stream=io.StringIO(), clock=FixedClock())


@pytest.fixture
def mirror_config(dirs):
    """Config for ``source`` -> ``replica`` with the log under ``logs/``."""
    return Config(
        source="source",
        replica="replica",
        log_file="logs/sync.log",
        interval=1,
    )


@pytest.fixture
def make_tree():
    return build_tree


@pytest.fixture
def snapshot():
    return read_tree


@pytest.fixture
def clock():
    return FixedClock()

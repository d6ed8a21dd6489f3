"""
Shared pytest fixtures for the retrohost test suite.
"""

from pathlib import Path
from typing import Callable

import pytest

from retrohost.config import Settings
from retrohost.core.library import Library
from retrohost.core.systems import default_registry


@pytest.fixture
def rom_dir(tmp_path: Path) -> Path:
    path = tmp_path / "roms"
    path.mkdir()
    return path


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    path = tmp_path / "data"
    path.mkdir()
    return path


@pytest.fixture
def make_file() -> Callable[..., Path]:
    """
    Create a file (and its parents) below a root.

    Usage:
        make_file(rom_dir, "nes/Mario.nes", b"rom")
    """

    def _builder(root: Path, rel: str, content: bytes = b"\x00") -> Path:
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
        return path

    return _builder


@pytest.fixture
def registry():
    return default_registry()


@pytest.fixture
def library(rom_dir: Path, data_dir: Path, registry) -> Library:
    return Library(rom_dir, data_dir, registry)


@pytest.fixture
def settings(rom_dir: Path, data_dir: Path) -> Settings:
    return Settings(rom_dir=rom_dir, data_dir=data_dir, port=8080, host_addr="")

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest

from pycpf.environment import PluginEnvironment
from pycpf.properties import CpfProperties
from pycpf.repository import FileSystemContentAccessFactory, FileSystemReadAccess


class SolutionTree:
    """On-disk layout with the three CPF settings locations."""

    def __init__(self, root: Path, plugin: str = "myplugin") -> None:
        self.root = root
        self.bundled_dir = root / "bundled"
        self.repository_dir = root / "public" / plugin
        self.global_dir = root / "public" / "cpf"
        self.system_dir = root / "system" / plugin
        for directory in (self.bundled_dir, self.repository_dir, self.global_dir, self.system_dir):
            directory.mkdir(parents=True, exist_ok=True)

    def write_bundled(self, text: str) -> None:
        (self.bundled_dir / "config.properties").write_text(text, encoding="iso-8859-1")

    def write_global(self, text: str) -> None:
        (self.global_dir / "config.properties").write_text(text, encoding="iso-8859-1")

    def write_system(self, text: str) -> None:
        (self.system_dir / "config.properties").write_text(text, encoding="iso-8859-1")

    @property
    def factory(self) -> FileSystemContentAccessFactory:
        return FileSystemContentAccessFactory(self.repository_dir, self.system_dir)

    @property
    def bundled(self) -> FileSystemReadAccess:
        return FileSystemReadAccess(self.bundled_dir)

    def load(self) -> CpfProperties:
        return CpfProperties(self.factory, bundled=self.bundled)


@pytest.fixture
def tree(tmp_path: Path) -> SolutionTree:
    return SolutionTree(tmp_path)


@pytest.fixture(autouse=True)
def _reset_globals() -> Iterator[None]:
    PluginEnvironment.reset()
    CpfProperties.reset_instance()
    yield
    PluginEnvironment.reset()
    CpfProperties.reset_instance()

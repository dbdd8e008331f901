"""Read access to the storage locations CPF settings are loaded from.

A plugin sees its files through :class:`ReadAccess` objects handed out by a
:class:`ContentAccessFactory`.  The factory knows two roots:

* the plugin's *repository* folder, where user content lives and where the
  shared ``../cpf`` folder sits next to the plugin's own one
* the plugin's *system* folder, holding installation-level configuration

Bundled defaults live inside an importable package and are read through
:class:`PackageResourceReadAccess`.
"""

from __future__ import annotations

import importlib.resources
import logging
import os
from importlib.resources.abc import Traversable
from pathlib import Path
from typing import BinaryIO, Protocol

_logger = logging.getLogger(__name__)


class ReadAccess(Protocol):
    """Read-only view over files below some base location."""

    def file_exists(self, name: str) -> bool: ...

    def get_file_input_stream(self, name: str) -> BinaryIO: ...


class ContentAccessFactory(Protocol):
    """Hands out readers scoped to the plugin's repository or system folder."""

    def get_plugin_repository_reader(self, base_path: str | None = None) -> ReadAccess: ...

    def get_plugin_system_reader(self, base_path: str | None = None) -> ReadAccess: ...


def _join(root: Path, base_path: str | None) -> Path:
    if not base_path:
        return root
    return Path(os.path.normpath(root / base_path))


class FileSystemReadAccess:
    """:class:`ReadAccess` rooted at a directory on disk.

    The directory does not have to exist; every lookup then reports the file
    as missing.
    """

    def __init__(self, base_dir: str | os.PathLike[str]) -> None:
        self._base_dir = Path(base_dir)

    @property
    def base_dir(self) -> Path:
        return self._base_dir

    def _resolve(self, name: str) -> Path:
        return _join(self._base_dir, name)

    def file_exists(self, name: str) -> bool:
        return self._resolve(name).is_file()

    def get_file_input_stream(self, name: str) -> BinaryIO:
        path = self._resolve(name)
        _logger.debug("Opening %s", path)
        return path.open("rb")

    def __repr__(self) -> str:
        return f"FileSystemReadAccess({str(self._base_dir)!r})"


class PackageResourceReadAccess:
    """:class:`ReadAccess` over resources bundled in an importable package."""

    def __init__(self, package: str = "pycpf", base_path: str = "data") -> None:
        self._package = package
        self._base_path = base_path

    def _resource(self, name: str) -> Traversable:
        root = importlib.resources.files(self._package)
        if self._base_path:
            root = root.joinpath(self._base_path)
        return root.joinpath(name)

    def file_exists(self, name: str) -> bool:
        try:
            return self._resource(name).is_file()
        except ModuleNotFoundError:
            _logger.debug("Package %s is not importable", self._package)
            return False

    def get_file_input_stream(self, name: str) -> BinaryIO:
        resource = self._resource(name)
        if not resource.is_file():
            raise FileNotFoundError(f"{name} not found in package {self._package}")
        stream: BinaryIO = resource.open("rb")
        return stream

    def __repr__(self) -> str:
        return f"PackageResourceReadAccess({self._package!r}, {self._base_path!r})"


class FileSystemContentAccessFactory:
    """:class:`ContentAccessFactory` backed by two directories on disk."""

    def __init__(
        self,
        repository_dir: str | os.PathLike[str],
        system_dir: str | os.PathLike[str],
    ) -> None:
        self._repository_dir = Path(repository_dir)
        self._system_dir = Path(system_dir)

    def get_plugin_repository_reader(self, base_path: str | None = None) -> FileSystemReadAccess:
        return FileSystemReadAccess(_join(self._repository_dir, base_path))

    def get_plugin_system_reader(self, base_path: str | None = None) -> FileSystemReadAccess:
        return FileSystemReadAccess(_join(self._system_dir, base_path))

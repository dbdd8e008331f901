"""Process-wide plugin environment.

The environment tells framework code where the running plugin keeps its
files.  Install one with :meth:`PluginEnvironment.init` at plugin start-up;
otherwise the first lookup builds a default from ``CPF_*`` environment
variables.
"""

from __future__ import annotations

import logging
import threading
from typing import ClassVar

from pycpf._constants import REQUEST_TIMEOUT
from pycpf.config import CpfConfig
from pycpf.exceptions import CpfConfigError
from pycpf.repository import (
    ContentAccessFactory,
    FileSystemContentAccessFactory,
    PackageResourceReadAccess,
    ReadAccess,
)

_logger = logging.getLogger(__name__)


class PluginEnvironment:
    """Storage collaborators of the running plugin."""

    _current: ClassVar[PluginEnvironment | None] = None
    _lock: ClassVar[threading.Lock] = threading.Lock()

    def __init__(
        self,
        content_access: ContentAccessFactory,
        *,
        bundled: ReadAccess | None = None,
        config: CpfConfig | None = None,
    ) -> None:
        self.content_access = content_access
        self.bundled: ReadAccess = bundled if bundled is not None else PackageResourceReadAccess()
        self.config = config if config is not None else CpfConfig()

    @classmethod
    def from_config(cls, config: CpfConfig) -> PluginEnvironment:
        factory = FileSystemContentAccessFactory(
            config.plugin_repository_dir,
            config.plugin_system_dir,
        )
        return cls(factory, config=config)

    @classmethod
    def init(cls, env: PluginEnvironment) -> None:
        with cls._lock:
            cls._current = env
        _logger.debug("Plugin environment installed for %s", env.config.plugin_name)

    @classmethod
    def env(cls) -> PluginEnvironment:
        current = cls._current
        if current is not None:
            return current
        with cls._lock:
            if cls._current is None:
                try:
                    config = CpfConfig.from_env()
                except CpfConfigError:
                    _logger.error("Invalid CPF environment, using the default request timeout", exc_info=True)
                    config = CpfConfig.from_env(request_timeout=REQUEST_TIMEOUT)
                _logger.debug("No plugin environment installed, using %s", config.plugin_name)
                cls._current = cls.from_config(config)
            return cls._current

    @classmethod
    def repository(cls) -> ContentAccessFactory:
        return cls.env().content_access

    @classmethod
    def reset(cls) -> None:
        with cls._lock:
            cls._current = None

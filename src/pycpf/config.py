"""Client configuration for pycpf."""

from __future__ import annotations

import dataclasses
import os
from pathlib import Path
from typing import Any

from pycpf._constants import CDA_BASE_URL, REQUEST_TIMEOUT
from pycpf.exceptions import CpfConfigError


@dataclasses.dataclass(frozen=True)
class CpfConfig:
    """Plugin environment configuration.

    Parameters
    ----------
    plugin_name : str
        Name of the plugin using the framework.  Selects the plugin's own
        folders below the solution directory.
    solution_dir : str
        Root of the solution tree holding ``public/`` and ``system/``.
    repository_dir : str or None
        Plugin repository folder.  Defaults to
        ``<solution_dir>/public/<plugin_name>``.
    system_dir : str or None
        Plugin system folder.  Defaults to
        ``<solution_dir>/system/<plugin_name>``.
    cda_base_url : str
        Base URL of the CDA plugin API.
    username : str or None
        User for basic authentication against the CDA endpoint.
    password : str or None
        Password for basic authentication.
    request_timeout : float
        Total timeout in seconds for a single CDA request.
    """

    plugin_name: str = "cpf"
    solution_dir: str = "pentaho-solutions"
    repository_dir: str | None = None
    system_dir: str | None = None
    cda_base_url: str = CDA_BASE_URL
    username: str | None = None
    password: str | None = None
    request_timeout: float = REQUEST_TIMEOUT

    @property
    def plugin_repository_dir(self) -> Path:
        if self.repository_dir:
            return Path(self.repository_dir)
        return Path(self.solution_dir) / "public" / self.plugin_name

    @property
    def plugin_system_dir(self) -> Path:
        if self.system_dir:
            return Path(self.system_dir)
        return Path(self.solution_dir) / "system" / self.plugin_name

    @classmethod
    def from_env(cls, **overrides: Any) -> CpfConfig:
        """Create configuration from ``CPF_*`` environment variables.

        Explicit keyword arguments override environment values.

        Raises
        ------
        CpfConfigError
            If ``CPF_REQUEST_TIMEOUT`` is not a number.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "CPF_PLUGIN_NAME": "plugin_name",
            "CPF_SOLUTION_DIR": "solution_dir",
            "CPF_REPOSITORY_DIR": "repository_dir",
            "CPF_SYSTEM_DIR": "system_dir",
            "CPF_CDA_BASE_URL": "cda_base_url",
            "CPF_USERNAME": "username",
            "CPF_PASSWORD": "password",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        timeout_env = env.get("CPF_REQUEST_TIMEOUT")
        if timeout_env is not None and "request_timeout" not in overrides:
            try:
                config_kwargs["request_timeout"] = float(timeout_env)
            except ValueError as exc:
                raise CpfConfigError(f"CPF_REQUEST_TIMEOUT must be a number, got {timeout_env!r}") from exc

        config_kwargs.update(overrides)

        return cls(**config_kwargs)

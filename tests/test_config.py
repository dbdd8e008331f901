from __future__ import annotations

from pathlib import Path

import pytest

from pycpf.config import CpfConfig
from pycpf.environment import PluginEnvironment
from pycpf.exceptions import CpfConfigError
from pycpf.repository import FileSystemContentAccessFactory

_ENV_KEYS = (
    "CPF_PLUGIN_NAME",
    "CPF_SOLUTION_DIR",
    "CPF_REPOSITORY_DIR",
    "CPF_SYSTEM_DIR",
    "CPF_CDA_BASE_URL",
    "CPF_USERNAME",
    "CPF_PASSWORD",
    "CPF_REQUEST_TIMEOUT",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_default_plugin_dirs() -> None:
    config = CpfConfig(plugin_name="cde", solution_dir="/srv/solutions")
    assert config.plugin_repository_dir == Path("/srv/solutions/public/cde")
    assert config.plugin_system_dir == Path("/srv/solutions/system/cde")


def test_explicit_dirs_win() -> None:
    config = CpfConfig(repository_dir="/repo", system_dir="/sys")
    assert config.plugin_repository_dir == Path("/repo")
    assert config.plugin_system_dir == Path("/sys")


def test_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CPF_PLUGIN_NAME", "cde")
    monkeypatch.setenv("CPF_USERNAME", "admin")
    monkeypatch.setenv("CPF_REQUEST_TIMEOUT", "5")
    config = CpfConfig.from_env()
    assert config.plugin_name == "cde"
    assert config.username == "admin"
    assert config.request_timeout == 5.0


def test_from_env_overrides_take_precedence(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CPF_PLUGIN_NAME", "cde")
    monkeypatch.setenv("CPF_REQUEST_TIMEOUT", "not-a-number")
    config = CpfConfig.from_env(plugin_name="cdf", request_timeout=2.0)
    assert config.plugin_name == "cdf"
    assert config.request_timeout == 2.0


def test_from_env_invalid_timeout(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CPF_REQUEST_TIMEOUT", "soon")
    with pytest.raises(CpfConfigError):
        CpfConfig.from_env()


def test_plugin_environment_default_and_init(tmp_path: Path) -> None:
    default = PluginEnvironment.env()
    assert PluginEnvironment.env() is default
    assert default.config.plugin_name == "cpf"

    installed = PluginEnvironment.from_config(CpfConfig(solution_dir=str(tmp_path), plugin_name="x"))
    PluginEnvironment.init(installed)
    assert PluginEnvironment.env() is installed
    factory = PluginEnvironment.repository()
    assert isinstance(factory, FileSystemContentAccessFactory)
    assert factory.get_plugin_system_reader().base_dir == tmp_path / "system" / "x"

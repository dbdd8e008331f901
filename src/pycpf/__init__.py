"""pycpf - plugin framework settings and datasources."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pycpf")
except PackageNotFoundError:
    __version__ = "0+local"
from pycpf.client import CdaClient
from pycpf.config import CpfConfig
from pycpf.datasources import (
    CdaColumn,
    CdaDatasource,
    CdaQueryInfo,
    CdaQueryResult,
    Datasource,
    DatasourceFactory,
    DatasourceType,
    create_datasource,
)
from pycpf.environment import PluginEnvironment
from pycpf.exceptions import (
    CpfConfigError,
    CpfDatasourceError,
    CpfError,
    CpfPropertiesFormatError,
    CpfTransportError,
)
from pycpf.properties import CpfProperties
from pycpf.repository import (
    ContentAccessFactory,
    FileSystemContentAccessFactory,
    FileSystemReadAccess,
    PackageResourceReadAccess,
    ReadAccess,
)

__all__ = [
    "__version__",
    "CdaClient",
    "CdaColumn",
    "CdaDatasource",
    "CdaQueryInfo",
    "CdaQueryResult",
    "ContentAccessFactory",
    "CpfConfig",
    "CpfConfigError",
    "CpfDatasourceError",
    "CpfError",
    "CpfProperties",
    "CpfPropertiesFormatError",
    "CpfTransportError",
    "Datasource",
    "DatasourceFactory",
    "DatasourceType",
    "FileSystemContentAccessFactory",
    "FileSystemReadAccess",
    "PackageResourceReadAccess",
    "PluginEnvironment",
    "ReadAccess",
    "create_datasource",
]

"""Datasources plugins can query, and the factory that picks one by tag."""

from pycpf.datasources.base import Datasource
from pycpf.datasources.cda import CdaDatasource
from pycpf.datasources.factory import DatasourceFactory, DatasourceType, create_datasource
from pycpf.datasources.models import CdaColumn, CdaQueryInfo, CdaQueryResult

__all__ = [
    "CdaColumn",
    "CdaDatasource",
    "CdaQueryInfo",
    "CdaQueryResult",
    "Datasource",
    "DatasourceFactory",
    "DatasourceType",
    "create_datasource",
]

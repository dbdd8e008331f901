"""Datasource lookup by type tag."""

from __future__ import annotations

import enum
import logging

from pycpf.datasources.base import Datasource
from pycpf.datasources.cda import CdaDatasource

_logger = logging.getLogger(__name__)


class DatasourceType(enum.StrEnum):
    """Recognised datasource tags, in their canonical upper-case form."""

    CDA = "CDA"


_DATASOURCES: dict[DatasourceType, type[Datasource]] = {
    DatasourceType.CDA: CdaDatasource,
}


class DatasourceFactory:
    """Builds datasources from free-form type tags."""

    @staticmethod
    def create_datasource(type_: str | None) -> Datasource | None:
        """Return a new datasource for *type_*, or ``None`` if unrecognised.

        Tags compare case-insensitively. ``None`` is treated as unrecognised.
        """
        if type_ is None:
            return None
        try:
            kind = DatasourceType(type_.upper())
        except ValueError:
            _logger.debug("Unknown datasource type %r", type_)
            return None
        return _DATASOURCES[kind]()


create_datasource = DatasourceFactory.create_datasource

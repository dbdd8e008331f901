"""Datasource backed by the CDA plugin's ``doQuery`` endpoint."""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence

from pydantic import ValidationError

from pycpf._constants import CDA_ARRAY_SEPARATOR, CDA_DEFAULT_OUTPUT_TYPE, CDA_QUERY_ENDPOINT
from pycpf._transport import Transport
from pycpf.datasources.base import Datasource
from pycpf.datasources.models import CdaQueryResult
from pycpf.exceptions import CpfDatasourceError

_logger = logging.getLogger(__name__)

_PARAM_PREFIX = "param"


class CdaDatasource(Datasource):
    """Query against a CDA definition file.

    Setters return ``self`` so a query reads as one expression::

        ds = (
            CdaDatasource()
            .set_definition_file("/public/sales/sales.cda")
            .set_data_access_id("byYear")
            .set_parameter("region", ["EMEA", "APAC"])
        )
        result = await ds.query(transport)
    """

    def __init__(self) -> None:
        self._request: dict[str, str] = {"outputType": CDA_DEFAULT_OUTPUT_TYPE}

    def set_definition_file(self, path: str) -> CdaDatasource:
        self._request["path"] = path
        return self

    def set_data_access_id(self, data_access_id: str) -> CdaDatasource:
        self._request["dataAccessId"] = data_access_id
        return self

    def set_output_type(self, output_type: str) -> CdaDatasource:
        self._request["outputType"] = output_type
        return self

    def set_parameter(self, name: str, value: str | Sequence[str]) -> CdaDatasource:
        if isinstance(value, str):
            self._request[_PARAM_PREFIX + name] = value
        else:
            self._request[_PARAM_PREFIX + name] = CDA_ARRAY_SEPARATOR.join(value)
        return self

    def build_request(self) -> dict[str, str]:
        """Return a copy of the form fields sent to ``doQuery``."""
        return dict(self._request)

    async def execute(self, transport: Transport) -> str:
        """Run the query and return the response body unchanged.

        Raises
        ------
        CpfDatasourceError
            If the definition file or data access id is not set.
        CpfTransportError
            On HTTP failures.
        """
        missing = [key for key in ("path", "dataAccessId") if not self._request.get(key)]
        if missing:
            raise CpfDatasourceError(f"CDA query is missing {', '.join(missing)}")
        _logger.debug(
            "CDA doQuery %s#%s",
            self._request["path"],
            self._request["dataAccessId"],
        )
        return await transport.post_form(CDA_QUERY_ENDPOINT, self.build_request())

    async def query(self, transport: Transport) -> CdaQueryResult:
        """Run the query as JSON and parse the result.

        Raises
        ------
        CpfDatasourceError
            If the output type is not JSON or the body is not a CDA result.
        """
        if self._request.get("outputType", "").lower() != "json":
            raise CpfDatasourceError(f"Cannot parse outputType={self._request.get('outputType')!r} results")
        body = await self.execute(transport)
        try:
            return CdaQueryResult.model_validate(json.loads(body))
        except (json.JSONDecodeError, ValidationError) as exc:
            raise CpfDatasourceError(f"Invalid CDA result: {body[:200]}") from exc

    def __repr__(self) -> str:
        return f"CdaDatasource({self._request!r})"

"""Async client running datasources against the CDA plugin."""

from __future__ import annotations

from typing import Any

import aiohttp

from pycpf._transport import CdaTransport
from pycpf.config import CpfConfig
from pycpf.datasources.base import Datasource
from pycpf.datasources.cda import CdaDatasource
from pycpf.datasources.models import CdaQueryResult
from pycpf.exceptions import CpfError


class CdaClient:
    """Owns the HTTP session used to run datasources.

    Usage::

        async with CdaClient(config) as client:
            result = await client.query(datasource)
    """

    def __init__(
        self,
        config: CpfConfig,
        *,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self._config = config
        self._external_session = session is not None
        self._http_session = session
        self._transport: CdaTransport | None = None

    async def __aenter__(self) -> CdaClient:
        if self._http_session is None:
            self._http_session = aiohttp.ClientSession()
        self._transport = CdaTransport(self._config, self._http_session)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        self._transport = None

    def _require_transport(self) -> CdaTransport:
        if self._transport is None:
            raise CpfError("Client not initialized. Use 'async with CdaClient(...) as client:'")
        return self._transport

    async def execute(self, datasource: Datasource) -> str:
        """Run *datasource* and return the raw response body."""
        return await datasource.execute(self._require_transport())

    async def query(self, datasource: CdaDatasource) -> CdaQueryResult:
        """Run a CDA datasource and parse its JSON result."""
        return await datasource.query(self._require_transport())

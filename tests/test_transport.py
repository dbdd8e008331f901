"""Tests for the CDA HTTP transport and client, with a fake aiohttp session."""

from __future__ import annotations

import json
from typing import Any

import aiohttp
import pytest

from pycpf._transport import CdaTransport
from pycpf.client import CdaClient
from pycpf.config import CpfConfig
from pycpf.datasources import CdaDatasource
from pycpf.exceptions import CpfError, CpfTransportError


class _FakeResponse:
    def __init__(self, status: int, body: str) -> None:
        self.status = status
        self._body = body

    async def text(self) -> str:
        return self._body

    async def __aenter__(self) -> _FakeResponse:
        return self

    async def __aexit__(self, *exc: Any) -> None:
        return None


class _FakeSession:
    def __init__(self, response: _FakeResponse | None = None, error: Exception | None = None) -> None:
        self._response = response
        self._error = error
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.closed = False

    def post(self, url: str, **kwargs: Any) -> _FakeResponse:
        self.calls.append((url, kwargs))
        if self._error is not None:
            raise self._error
        assert self._response is not None
        return self._response

    async def close(self) -> None:
        self.closed = True


_CONFIG = CpfConfig(cda_base_url="http://bi.local/pentaho/plugin/cda/api/", username="admin", password="pw")


@pytest.mark.asyncio
async def test_post_form_success() -> None:
    session = _FakeSession(_FakeResponse(200, "ok"))
    transport = CdaTransport(_CONFIG, session)  # type: ignore[arg-type]

    assert await transport.post_form("doQuery", {"path": "/a.cda"}) == "ok"

    url, kwargs = session.calls[0]
    assert url == "http://bi.local/pentaho/plugin/cda/api/doQuery"
    assert kwargs["data"] == {"path": "/a.cda"}
    assert kwargs["auth"] == aiohttp.BasicAuth("admin", "pw")


@pytest.mark.asyncio
async def test_post_form_without_credentials() -> None:
    session = _FakeSession(_FakeResponse(200, "ok"))
    transport = CdaTransport(CpfConfig(), session)  # type: ignore[arg-type]
    await transport.post_form("doQuery", {})
    assert session.calls[0][1]["auth"] is None


@pytest.mark.asyncio
async def test_post_form_http_error() -> None:
    session = _FakeSession(_FakeResponse(500, "boom"))
    transport = CdaTransport(_CONFIG, session)  # type: ignore[arg-type]

    with pytest.raises(CpfTransportError) as exc_info:
        await transport.post_form("doQuery", {})
    assert exc_info.value.status_code == 500
    assert exc_info.value.endpoint == "doQuery"


@pytest.mark.asyncio
async def test_post_form_client_error() -> None:
    session = _FakeSession(error=aiohttp.ClientConnectionError("refused"))
    transport = CdaTransport(_CONFIG, session)  # type: ignore[arg-type]

    with pytest.raises(CpfTransportError, match="refused"):
        await transport.post_form("doQuery", {})


@pytest.mark.asyncio
async def test_client_runs_datasource_with_external_session() -> None:
    body = json.dumps(
        {
            "metadata": [{"colIndex": 0, "colType": "String", "colName": "Year"}],
            "resultset": [["2003"]],
        }
    )
    session = _FakeSession(_FakeResponse(200, body))
    ds = CdaDatasource().set_definition_file("/a.cda").set_data_access_id("q1")

    async with CdaClient(_CONFIG, session=session) as client:  # type: ignore[arg-type]
        result = await client.query(ds)
        raw = await client.execute(ds)

    assert result.rows_as_dicts() == [{"Year": "2003"}]
    assert raw == body
    assert not session.closed


@pytest.mark.asyncio
async def test_client_requires_context_manager() -> None:
    client = CdaClient(_CONFIG)
    with pytest.raises(CpfError, match="not initialized"):
        await client.execute(CdaDatasource())


@pytest.mark.asyncio
async def test_client_owns_and_closes_its_session(monkeypatch: pytest.MonkeyPatch) -> None:
    session = _FakeSession(_FakeResponse(200, "body"))
    monkeypatch.setattr("pycpf.client.aiohttp.ClientSession", lambda: session)
    ds = CdaDatasource().set_definition_file("/a.cda").set_data_access_id("q1")

    async with CdaClient(_CONFIG) as client:
        assert await client.execute(ds) == "body"
        assert not session.closed

    assert session.closed
    with pytest.raises(CpfError, match="not initialized"):
        await client.execute(ds)

"""HTTP transport for CDA plugin calls."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Protocol

import aiohttp

from pycpf._redact import redact_for_log
from pycpf.config import CpfConfig
from pycpf.exceptions import CpfTransportError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by datasources.

    Having a protocol here makes it easy to pass test doubles while keeping
    the production implementation (`CdaTransport`) concrete.
    """

    async def post_form(self, endpoint: str, data: Mapping[str, str]) -> str: ...


class CdaTransport:
    """Posts form-encoded requests to the CDA plugin API."""

    def __init__(self, config: CpfConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session
        self._auth: aiohttp.BasicAuth | None = None
        if config.username is not None:
            self._auth = aiohttp.BasicAuth(config.username, config.password or "")

    async def post_form(self, endpoint: str, data: Mapping[str, str]) -> str:
        url = f"{self._config.cda_base_url.rstrip('/')}/{endpoint.lstrip('/')}"
        timeout = aiohttp.ClientTimeout(total=self._config.request_timeout)

        _logger.debug("POST %s %s", url, redact_for_log(dict(data)))

        try:
            async with self._http.post(url, data=dict(data), auth=self._auth, timeout=timeout) as resp:
                text = await resp.text()
                if resp.status != 200:
                    raise CpfTransportError(
                        f"HTTP {resp.status} from {endpoint}: {text[:200]}",
                        status_code=resp.status,
                        endpoint=endpoint,
                    )
        except CpfTransportError:
            raise
        except (aiohttp.ClientError, TimeoutError) as exc:
            raise CpfTransportError(
                f"Request to {endpoint} failed: {exc}",
                endpoint=endpoint,
            ) from exc
        return text

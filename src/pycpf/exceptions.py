"""Custom exception hierarchy for pycpf."""

from __future__ import annotations


class CpfError(Exception):
    """Base exception for all pycpf errors."""


class CpfConfigError(CpfError):
    """Invalid or missing configuration."""


class CpfPropertiesFormatError(CpfConfigError):
    """Malformed ``.properties`` content (e.g. a broken ``\\uXXXX`` escape)."""

    def __init__(self, message: str, *, line: int | None = None) -> None:
        self.line = line
        super().__init__(message)


class CpfDatasourceError(CpfError):
    """Datasource request is incomplete or its response is unusable."""


class CpfTransportError(CpfError):
    """HTTP-level failure (network, non-200)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)

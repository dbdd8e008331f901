"""Common datasource interface."""

from __future__ import annotations

import abc
from collections.abc import Sequence

from pycpf._transport import Transport


class Datasource(abc.ABC):
    """A parameterised query that a plugin can run through a transport."""

    @abc.abstractmethod
    def set_parameter(self, name: str, value: str | Sequence[str]) -> Datasource:
        """Bind a query parameter and return ``self`` for chaining."""

    @abc.abstractmethod
    async def execute(self, transport: Transport) -> str:
        """Run the query and return the raw response body."""

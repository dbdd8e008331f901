"""Pydantic models for CDA ``doQuery`` JSON responses.

CDA answers with camelCase keys::

    {
      "metadata": [{"colIndex": 0, "colType": "String", "colName": "Year"}],
      "resultset": [["2003"], ["2004"]],
      "queryInfo": {"totalRows": "2"}
    }

``queryInfo`` is absent unless the query was paginated or CDA was asked for
row counts, and its numbers may arrive as strings.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CdaBaseModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )


class CdaColumn(CdaBaseModel):
    """Column description from the ``metadata`` block."""

    col_index: int
    col_type: str = "String"
    col_name: str


class CdaQueryInfo(CdaBaseModel):
    """Paging information from the ``queryInfo`` block."""

    total_rows: int | None = None
    page_start: int | None = None
    page_size: int | None = None


class CdaQueryResult(CdaBaseModel):
    """Parsed ``doQuery`` result."""

    metadata: list[CdaColumn] = Field(default_factory=list)
    resultset: list[list[Any]] = Field(default_factory=list)
    query_info: CdaQueryInfo | None = None

    @property
    def column_names(self) -> list[str]:
        return [column.col_name for column in sorted(self.metadata, key=lambda c: c.col_index)]

    def rows_as_dicts(self) -> list[dict[str, Any]]:
        """Return each row as a ``{column name: value}`` dict."""
        names = self.column_names
        return [dict(zip(names, row, strict=False)) for row in self.resultset]

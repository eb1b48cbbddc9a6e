"""Records describing stored SQL queries and their parameters."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class SqlQuery:
    """A stored SQL query, identified by its item key."""

    id: int
    name: str
    description: str | None
    sql_code: str
    item_key: str
    sign: str | None


@dataclass
class SqlQueryParam:
    """A parameter declared for a stored query.

    ``is_required`` is 1 for a mandatory parameter, as stored in the table.
    """

    id: int
    param_name: str
    param_type: str
    param_order: int
    is_required: int
    default_value: str | None
    description: str | None
    item_key: str
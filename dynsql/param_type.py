"""Parameter types understood by the engine and their accepted spellings."""

from __future__ import annotations

from enum import Enum


class SqlQueryParamType(Enum):
    """Kinds of value a query parameter can be bound as."""

    STRING = "VARCHAR"
    I32 = "INTEGER"
    F64 = "DOUBLE PRECISION"
    BOOL = "BOOLEAN"
    NAIVE_DATE = "DATE"
    NAIVE_DATETIME = "DATETIME"


_ALIASES: dict[str, SqlQueryParamType] = {
    "VARCHAR": SqlQueryParamType.STRING,
    "Varchar": SqlQueryParamType.STRING,
    "BIGINT": SqlQueryParamType.I32,
    "INTEGER": SqlQueryParamType.I32,
    "Integer": SqlQueryParamType.I32,
    "DOUBLE PRECISION": SqlQueryParamType.F64,
    "DOUBLE_PRECISION": SqlQueryParamType.F64,
    "BOOLEAN": SqlQueryParamType.BOOL,
    "Boolean": SqlQueryParamType.BOOL,
    "DATE": SqlQueryParamType.NAIVE_DATE,
    "Date": SqlQueryParamType.NAIVE_DATE,
    "DATETIME": SqlQueryParamType.NAIVE_DATETIME,
    "DateTime": SqlQueryParamType.NAIVE_DATETIME,
}


def parse_param_type(name: str) -> SqlQueryParamType:
    """Return the parameter type for a stored type name.

    Raises ValueError when the name is not one of the accepted spellings.
    """
    try:
        return _ALIASES[name]
    except KeyError:
        raise ValueError(f"Unknown SQL query parameter type: {name}") from None
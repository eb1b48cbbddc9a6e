"""Exceptions raised by the dynamic query engine."""

from __future__ import annotations


class SqlQueryEngineError(Exception):
    """Base class for every error raised by the engine."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SqlQueryEngineError):
            return NotImplemented
        return type(self) is type(other) and self.message == other.message

    def __hash__(self) -> int:
        return hash((type(self), self.message))


class GetSqlQueryError(SqlQueryEngineError):
    """Fetching a stored query from the database failed."""


class NoQueryFoundError(SqlQueryEngineError):
    """No stored query matches the requested item key."""


class GetSqlQueryParamError(SqlQueryEngineError):
    """Fetching the parameters of a stored query failed."""


class GetDynamicQueryError(SqlQueryEngineError):
    """Assembling a dynamic query failed."""


class ExecutionQueryError(SqlQueryEngineError):
    """Binding parameters or running a query failed."""


class CheckParamsError(SqlQueryEngineError):
    """Supplied parameters do not match what a query expects."""
"""A stored query together with its declared parameters, ready to run."""

from __future__ import annotations

import re
from contextlib import closing
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any

from .dynamic_query_data import SqlDynamicQueryData
from .errors import CheckParamsError, ExecutionQueryError
from .param_type import SqlQueryParamType, parse_param_type
from .query import SqlQuery, SqlQueryParam

_I32_MIN = -(2**31)
_I32_MAX = 2**31 - 1

_INT_RE = re.compile(r"[+-]?[0-9]+")
_FLOAT_RE = re.compile(
    r"[+-]?(?:inf|infinity|nan|(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:e[+-]?[0-9]+)?)",
    re.IGNORECASE,
)
_DATETIME_RE = re.compile(r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}")
_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}")

_TRUE_WORDS = frozenset({"true", "1", "yes", "on"})
_FALSE_WORDS = frozenset({"false", "0", "no", "off"})

_DATE_FORMAT = "%Y-%m-%d"
_DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def _parse_i32(value: str) -> int:
    if not _INT_RE.fullmatch(value):
        raise ValueError(value)
    number = int(value)
    if not _I32_MIN <= number <= _I32_MAX:
        raise ValueError(value)
    return number


def _parse_f64(value: str) -> float:
    if not _FLOAT_RE.fullmatch(value):
        raise ValueError(value)
    return float(value)


def validate_param_type(expected_type: str, value: str) -> None:
    """Check that a string value fits the named parameter type.

    Raises ValueError with a description of the mismatch; an unknown type
    name also raises ValueError.
    """
    param_type = parse_param_type(expected_type)

    if param_type is SqlQueryParamType.STRING:
        return
    if param_type is SqlQueryParamType.I32:
        try:
            _parse_i32(value)
        except ValueError:
            raise ValueError(f"'{value}' is not a valid integer") from None
        return
    if param_type is SqlQueryParamType.F64:
        try:
            _parse_f64(value)
        except ValueError:
            raise ValueError(f"'{value}' is not a valid float") from None
        return
    if param_type is SqlQueryParamType.BOOL:
        if value.lower() not in _TRUE_WORDS | _FALSE_WORDS:
            raise ValueError(
                f"'{value}' is not a valid boolean "
                "(expected: true/false, 1/0, yes/no, on/off)"
            )
        return
    if param_type is SqlQueryParamType.NAIVE_DATETIME:
        if not value:
            raise ValueError("DateTime cannot be empty")
        if not _DATETIME_RE.fullmatch(value):
            raise ValueError(
                f"'{value}' is not a valid datetime format "
                "(expected: YYYY-MM-DD, YYYY-MM-DD HH:MM:SS, or ISO 8601)"
            )
        return
    if param_type is SqlQueryParamType.NAIVE_DATE:
        if not value:
            raise ValueError("Date cannot be empty")
        if not _DATE_RE.fullmatch(value):
            raise ValueError(
                f"'{value}' is not a valid date format (expected: YYYY-MM-DD)"
            )


def _bound_value(param: SqlQueryParam, value: str) -> Any:
    """Convert a string value to the Python value bound for ``param``."""
    param_type = parse_param_type(param.param_type)
    name = param.param_name

    if param_type is SqlQueryParamType.STRING:
        return value
    if param_type is SqlQueryParamType.I32:
        try:
            return _parse_i32(value)
        except ValueError:
            raise ExecutionQueryError(f"Invalid integer value for '{name}'") from None
    if param_type is SqlQueryParamType.F64:
        try:
            return _parse_f64(value)
        except ValueError:
            raise ExecutionQueryError(f"Invalid float value for '{name}'") from None
    if param_type is SqlQueryParamType.BOOL:
        word = value.lower()
        if word in _TRUE_WORDS:
            return True
        if word in _FALSE_WORDS:
            return False
        raise ExecutionQueryError(f"Invalid boolean value for '{name}'")
    if param_type is SqlQueryParamType.NAIVE_DATE:
        try:
            return datetime.strptime(value, _DATE_FORMAT).date()
        except ValueError as exc:
            raise ExecutionQueryError(
                f"{exc} || Invalid datetime format for '{name}' : '{value}'. "
                "Expected format: 'YYYY-MM-DD'"
            ) from exc
    try:
        return datetime.strptime(value, _DATETIME_FORMAT)
    except ValueError as exc:
        raise ExecutionQueryError(
            f"{exc} || Invalid datetime format for '{name}' : '{value}'. "
            "Expected format: 'YYYY-MM-DD HH:MM:SS'"
        ) from exc


@dataclass
class SqlDynamicQuery:
    """A stored query and, if it takes any, its parameters in binding order."""

    query: SqlQuery
    params: list[SqlQueryParam] | None = None

    def check_query_params(self, data: SqlDynamicQueryData) -> None:
        """Check supplied values against the declared parameters.

        Raises CheckParamsError when a required parameter is missing, an
        undeclared one is given, or a value does not fit its type.
        """
        key = self.query.item_key
        if self.params is None:
            if data.params:
                raise CheckParamsError(
                    f"Query '{key}' expects no parameters, "
                    f"but {len(data.params)} parameters were provided"
                )
            return

        for param in self.params:
            if param.is_required == 1 and param.param_name not in data.params:
                raise CheckParamsError(
                    f"Required parameter '{param.param_name}' is missing "
                    f"for query '{key}'"
                )

        declared = {}
        for param in self.params:
            declared.setdefault(param.param_name, param)

        for name, value in data.params.items():
            param = declared.get(name)
            if param is None:
                raise CheckParamsError(
                    f"Unexpected parameter '{name}' provided for query '{key}'"
                )
            parse_param_type(param.param_type)
            try:
                validate_param_type(param.param_type, value)
            except ValueError as exc:
                raise CheckParamsError(
                    f"Parameter '{name}' validation failed for query '{key}': {exc}"
                ) from exc

    def execute(self, connection: Any, data: SqlDynamicQueryData) -> list[Any]:
        """Check and bind the parameters, run the query and return all rows.

        ``connection`` is a DB-API connection whose placeholder style matches
        the stored SQL.
        """
        self.check_query_params(data)

        values = []
        for param in self.params or ():
            value = data.get_param(param.param_name)
            if value is None:
                value = param.default_value
            if value is None:
                raise ExecutionQueryError(
                    f"Parameter '{param.param_name}' is missing "
                    "and has no default value"
                )
            values.append(_bound_value(param, value))

        try:
            with closing(connection.cursor()) as cursor:
                cursor.execute(self.query.sql_code, values)
                return list(cursor.fetchall())
        except Exception as exc:
            raise ExecutionQueryError(
                f"Error executing query '{self.query.item_key}': {exc}"
            ) from exc


__all__ = ["SqlDynamicQuery", "validate_param_type", "date", "datetime"]
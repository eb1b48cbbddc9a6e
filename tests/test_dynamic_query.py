import sqlite3
from datetime import date, datetime

import pytest

from dynsql.dynamic_query import SqlDynamicQuery, validate_param_type
from dynsql.dynamic_query_data import SqlDynamicQueryData
from dynsql.errors import CheckParamsError, ExecutionQueryError
from dynsql.query import SqlQuery, SqlQueryParam

KEY = "users_by_age"


class _RecordingCursor:
    def __init__(self, owner):
        self.owner = owner

    def execute(self, sql, params):
        if self.owner.failure is not None:
            raise self.owner.failure
        self.owner.calls.append((sql, list(params)))

    def fetchall(self):
        return list(self.owner.rows)

    def close(self):
        self.owner.closed += 1


class _RecordingConnection:
    def __init__(self, rows=(), failure=None):
        self.rows = rows
        self.failure = failure
        self.calls = []
        self.closed = 0

    def cursor(self):
        return _RecordingCursor(self)


def _query(sql="SELECT 1"):
    return SqlQuery(1, "users", None, sql, KEY, None)


def _param(name, param_type, order=1, required=1, default=None):
    return SqlQueryParam(1, name, param_type, order, required, default, None, KEY)


def _data(**params):
    return SqlDynamicQueryData(KEY, dict(params))


@pytest.mark.parametrize(
    "expected_type, value, fragment",
    [
        ("INTEGER", "abc", "is not a valid integer"),
        ("INTEGER", "2147483648", "is not a valid integer"),
        ("BIGINT", " 1", "is not a valid integer"),
        ("DOUBLE PRECISION", "1_0", "is not a valid float"),
        ("DOUBLE_PRECISION", ".", "is not a valid float"),
        ("BOOLEAN", "maybe", "is not a valid boolean"),
        ("DATETIME", "2023-12-25T10:30:00", "is not a valid datetime format"),
        ("DATE", "25/12/2023", "is not a valid date format"),
        ("Date", "2023-12-25\n", "is not a valid date format"),
        ("DATE", "", "Date cannot be empty"),
        ("DateTime", "", "DateTime cannot be empty"),
    ],
)
def test_validate_param_type_rejects(expected_type, value, fragment):
    with pytest.raises(ValueError, match=fragment):
        validate_param_type(expected_type, value)


def test_validate_param_type_unknown_type():
    with pytest.raises(ValueError, match="Unknown SQL query parameter type: TEXT"):
        validate_param_type("TEXT", "x")


def test_check_without_declared_params_rejects_values():
    query = SqlDynamicQuery(_query())
    with pytest.raises(CheckParamsError) as info:
        query.check_query_params(_data(age="3"))
    assert info.value.message == (
        f"Query '{KEY}' expects no parameters, but 1 parameters were provided"
    )


def test_check_missing_required():
    query = SqlDynamicQuery(_query(), [_param("age", "INTEGER")])
    with pytest.raises(CheckParamsError, match="Required parameter 'age' is missing"):
        query.check_query_params(_data())


def test_check_unexpected_param():
    query = SqlDynamicQuery(_query(), [_param("age", "INTEGER")])
    with pytest.raises(CheckParamsError, match="Unexpected parameter 'extra'"):
        query.check_query_params(_data(age="3", extra="x"))


def test_check_bad_value_message():
    query = SqlDynamicQuery(_query(), [_param("age", "INTEGER")])
    with pytest.raises(CheckParamsError) as info:
        query.check_query_params(_data(age="abc"))
    assert info.value.message == (
        f"Parameter 'age' validation failed for query '{KEY}': "
        "'abc' is not a valid integer"
    )


def test_check_unknown_type_is_not_a_check_error():
    query = SqlDynamicQuery(_query(), [_param("age", "TEXT")])
    with pytest.raises(ValueError) as info:
        query.check_query_params(_data(age="3"))
    assert not isinstance(info.value, CheckParamsError)


def test_execute_binds_converted_values_in_order():
    params = [
        _param("name", "VARCHAR", 1),
        _param("age", "INTEGER", 2),
        _param("score", "DOUBLE PRECISION", 3),
        _param("active", "BOOLEAN", 4),
        _param("born", "DATE", 5),
        _param("seen", "DATETIME", 6),
    ]
    connection = _RecordingConnection(rows=[("row",)])
    query = SqlDynamicQuery(_query("SELECT ?"), params)
    rows = query.execute(
        connection,
        _data(
            seen="2023-12-25 10:30:00",
            born="1990-01-02",
            active="YES",
            score="1.5",
            age="42",
            name="bob",
        ),
    )
    assert rows == [("row",)]
    assert connection.calls == [
        (
            "SELECT ?",
            ["bob", 42, 1.5, True, date(1990, 1, 2), datetime(2023, 12, 25, 10, 30, 0)],
        )
    ]
    assert connection.closed == 1


@pytest.mark.parametrize("word", ["OFF", "No", "0", "False"])
def test_execute_false_spellings(word):
    connection = _RecordingConnection()
    query = SqlDynamicQuery(_query(), [_param("flag", "Boolean")])
    query.execute(connection, _data(flag=word))
    assert connection.calls[0][1] == [False]


def test_execute_uses_default_for_missing_optional():
    connection = _RecordingConnection()
    query = SqlDynamicQuery(
        _query(), [_param("age", "Integer", required=0, default="7")]
    )
    query.execute(connection, _data())
    assert connection.calls[0][1] == [7]


def test_execute_missing_optional_without_default():
    connection = _RecordingConnection()
    query = SqlDynamicQuery(_query(), [_param("age", "INTEGER", required=0)])
    with pytest.raises(
        ExecutionQueryError, match="'age' is missing and has no default value"
    ):
        query.execute(connection, _data())
    assert connection.calls == []


def test_execute_invalid_default_integer():
    query = SqlDynamicQuery(
        _query(), [_param("age", "INTEGER", required=0, default="many")]
    )
    with pytest.raises(ExecutionQueryError, match="Invalid integer value for 'age'"):
        query.execute(_RecordingConnection(), _data())


def test_execute_impossible_date():
    query = SqlDynamicQuery(_query(), [_param("born", "DATE")])
    with pytest.raises(
        ExecutionQueryError, match="Invalid datetime format for 'born' : '2023-02-30'"
    ):
        query.execute(_RecordingConnection(), _data(born="2023-02-30"))


def test_execute_checks_before_running():
    connection = _RecordingConnection()
    query = SqlDynamicQuery(_query(), [_param("age", "INTEGER")])
    with pytest.raises(CheckParamsError):
        query.execute(connection, _data(age="1", other="2"))
    assert connection.calls == []


def test_execute_wraps_database_errors():
    connection = _RecordingConnection(failure=RuntimeError("boom"))
    query = SqlDynamicQuery(_query())
    with pytest.raises(ExecutionQueryError) as info:
        query.execute(connection, _data())
    assert info.value.message == f"Error executing query '{KEY}': boom"


def test_execute_against_sqlite():
    connection = sqlite3.connect(":memory:")
    connection.execute("CREATE TABLE people (name TEXT, age INTEGER)")
    connection.executemany(
        "INSERT INTO people VALUES (?, ?)", [("ann", 30), ("bob", 25), ("cy", 12)]
    )
    query = SqlDynamicQuery(
        _query("SELECT name FROM people WHERE age >= ? ORDER BY name"),
        [_param("min_age", "INTEGER")],
    )
    rows = query.execute(connection, _data(min_age="25"))
    assert rows == [("ann",), ("bob",)]
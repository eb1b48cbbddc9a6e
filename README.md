# dynsql

Keep SQL queries in a database table, describe their parameters in a second
table, and run them by key with string values that are checked and converted
before they reach the database.

dynsql has no dependencies of its own. It works with any DB-API 2.0
connection (`sqlite3`, a PostgreSQL or MySQL driver, ...) that you pass in.

## Tables

The query table must have the columns `id`, `name`, `description`,
`sql_code`, `item_key` and `sign`. A row is read into a
`dynsql.query.SqlQuery`.

The parameter table is read with the columns `id`, `param_name`,
`param_type`, `param_order`, `is_required`, `default_value`, `description`
and `item_key`, in that order, into `dynsql.query.SqlQueryParam`. A parameter
is mandatory when `is_required` is `1`. Parameters are joined to their query
on `item_key`.

## Parameter types

`dynsql.param_type.parse_param_type` turns a stored type name into a
`SqlQueryParamType`. Any other name raises `ValueError`.

| Type names                              | Member           | Accepted values                                        | Bound as            |
|-----------------------------------------|------------------|--------------------------------------------------------|---------------------|
| `VARCHAR`, `Varchar`                    | `STRING`         | any string                                             | `str`               |
| `BIGINT`, `INTEGER`, `Integer`          | `I32`            | optional sign and digits, within the 32-bit range      | `int`               |
| `DOUBLE PRECISION`, `DOUBLE_PRECISION`  | `F64`            | a decimal or exponent number, `inf`, `infinity`, `nan` | `float`             |
| `BOOLEAN`, `Boolean`                    | `BOOL`           | `true/false`, `1/0`, `yes/no`, `on/off`, any case      | `bool`              |
| `DATE`, `Date`                          | `NAIVE_DATE`     | `YYYY-MM-DD`                                           | `datetime.date`     |
| `DATETIME`, `DateTime`                  | `NAIVE_DATETIME` | `YYYY-MM-DD HH:MM:SS`                                  | `datetime.datetime` |

`dynsql.dynamic_query.validate_param_type(expected_type, value)` checks one
value against a type name and raises `ValueError` describing the mismatch.

## Usage

```python
import sqlite3

from dynsql.dynamic_query_data import SqlDynamicQueryData
from dynsql.manager import SqlQueryManager

connection = sqlite3.connect("app.db")

# The manager's own lookups use the driver's placeholder; "%s" is the default.
manager = SqlQueryManager(connection, "sql_queries", "sql_query_params", placeholder="?")

query = manager.get_sql_dynamic_query("orders_by_customer")

data = SqlDynamicQueryData("orders_by_customer")
data.add_param("customer_id", "42")
data.add_param("since", "2023-12-25")

rows = query.execute(connection, data)
```

`SqlQueryManager` offers:

- `get_sql_query_by_item_key(item_key)` – the `SqlQuery` for a key;
- `get_sql_query_params_by_item_key(item_key)` – its parameters sorted by
  `param_order`, or `None` when it has none;
- `get_sql_dynamic_query(item_key)` – both, as a
  `dynsql.dynamic_query.SqlDynamicQuery`.

Table names are put into the SQL text as given, so they must come from
trusted configuration.

`SqlDynamicQueryData` holds the item key and a `params` dict of string
values; `add_param` sets a value and `get_param` returns it or `None`.

### Checking and running

`SqlDynamicQuery.check_query_params(data)` raises `CheckParamsError` when:

- the query declares no parameters but some are supplied,
- a required parameter is missing,
- a supplied parameter is not declared,
- a value does not fit its declared type.

`SqlDynamicQuery.execute(connection, data)` checks the parameters, then, for
each declared parameter in order, takes the supplied value or else its
default, converts it to the type in the table above and passes the list to
`cursor.execute` together with the stored SQL. It returns all rows as the
driver's cursor gives them. The stored SQL must use the placeholder style of
the connection's driver.

## Errors

Failures raise subclasses of `dynsql.errors.SqlQueryEngineError`, which
carry a `message` and compare equal when type and message match:

- `GetSqlQueryError` – reading the query table failed
- `NoQueryFoundError` – no query exists for the given key
- `GetSqlQueryParamError` – reading the parameter table failed
- `CheckParamsError` – supplied parameters failed validation
- `ExecutionQueryError` – a parameter has neither value nor default, a value
  could not be converted, or running the query failed
- `GetDynamicQueryError` – available to callers; the package does not raise it

An unknown parameter type name raises `ValueError`.

## What it does not do

dynsql is a library only: it has no command-line tool. It does not create or
migrate the query and parameter tables, does not ship a database driver, and
does not map result rows to objects.

## Running the tests

```
pip install -e .[test]
pytest
```
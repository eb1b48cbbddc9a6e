"""Loading stored queries and their parameters from database tables."""

from __future__ import annotations

from contextlib import closing
from dataclasses import fields
from typing import Any

from .dynamic_query import SqlDynamicQuery
from .errors import GetSqlQueryError, GetSqlQueryParamError, NoQueryFoundError
from .query import SqlQuery, SqlQueryParam

_QUERY_FIELDS = tuple(f.name for f in fields(SqlQuery))


class SqlQueryManager:
    """Reads queries from one table and their parameters from another.

    The query table must have the columns id, name, description, sql_code,
    item_key and sign. ``placeholder`` is the parameter marker of the
    connection's driver.
    """

    def __init__(
        self,
        connection: Any,
        table_query: str,
        table_query_params: str,
        placeholder: str = "%s",
    ) -> None:
        self.connection = connection
        self.table_query = table_query
        self.table_query_params = table_query_params
        self.placeholder = placeholder

    def get_sql_query_by_item_key(self, item_key: str) -> SqlQuery:
        """Return the stored query for ``item_key``.

        Raises NoQueryFoundError when there is none and GetSqlQueryError when
        the lookup itself fails.
        """
        sql = f"SELECT * FROM {self.table_query} WHERE item_key = {self.placeholder}"
        try:
            with closing(self.connection.cursor()) as cursor:
                cursor.execute(sql, (item_key,))
                row = cursor.fetchone()
                if row is None:
                    query = None
                else:
                    columns = [column[0] for column in cursor.description]
                    record = dict(zip(columns, row))
                    query = SqlQuery(**{name: record[name] for name in _QUERY_FIELDS})
        except Exception as exc:
            raise GetSqlQueryError(
                f"get_query_by_item_key : Failed to fetch query on table "
                f"'{self.table_query}' with item_key {item_key} : {exc}"
            ) from exc

        if query is None:
            raise NoQueryFoundError(
                f"get_query_by_item_key : Failed to fetch query with item_key "
                f"'{item_key}': not found"
            )
        return query

    def get_sql_query_params_by_item_key(
        self, item_key: str
    ) -> list[SqlQueryParam] | None:
        """Return the parameters of a query sorted by their order, or None."""
        sql = (
            "SELECT qp.id, qp.param_name, qp.param_type, qp.param_order, "
            "qp.is_required, qp.default_value, qp.description, qp.item_key "
            f"FROM {self.table_query_params} qp "
            f"INNER JOIN {self.table_query} q ON qp.item_key = q.item_key "
            f"WHERE qp.item_key = {self.placeholder}"
        )
        try:
            with closing(self.connection.cursor()) as cursor:
                cursor.execute(sql, (item_key,))
                params = [SqlQueryParam(*row) for row in cursor.fetchall()]
        except Exception as exc:
            raise GetSqlQueryParamError(
                f"get_sql_query_params_by_item_key : Failed to fetch query "
                f"parameters on table '{self.table_query_params}' with item_key "
                f"'{item_key}': {exc}"
            ) from exc

        if not params:
            return None
        params.sort(key=lambda param: param.param_order)
        return params

    def get_sql_dynamic_query(self, item_key: str) -> SqlDynamicQuery:
        """Return the stored query for ``item_key`` together with its parameters."""
        query = self.get_sql_query_by_item_key(item_key)
        params = self.get_sql_query_params_by_item_key(item_key)
        return SqlDynamicQuery(query, params)
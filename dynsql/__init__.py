"""Stored SQL queries with declared, type-checked parameters, run through DB-API connections."""

__version__ = "0.1.0"

__all__ = ["dynamic_query", "dynamic_query_data", "errors", "manager", "param_type", "query"]
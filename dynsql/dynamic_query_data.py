"""Caller-supplied values for running a dynamic query."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class SqlDynamicQueryData:
    """The item key of a query and the string values of its parameters."""

    item_key: str
    params: dict[str, str] = field(default_factory=dict)

    def add_param(self, key: str, value: str) -> None:
        """Set a parameter, replacing any earlier value for the same name."""
        self.params[key] = value

    def get_param(self, key: str) -> str | None:
        """Return the value of a parameter, or None if it was not given."""
        return self.params.get(key)
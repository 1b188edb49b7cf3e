"""
db/query_builder.py
-------------------
Small builder for SELECT statements with optional filters.

Predicates are stored as (column, operator, value) triples and rendered
together with their bound parameters, so placeholders and values always
line up no matter which filters were supplied.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

_OPERATORS = frozenset({"=", "<>", "<", "<=", ">", ">=", "LIKE", "ILIKE", "BETWEEN"})


@dataclass
class Predicate:
    """A single `column operator value` condition."""
    column: str
    operator: str
    value: Any

    def render(self) -> tuple[str, list]:
        """Return the SQL fragment and the parameters it binds."""
        if self.operator == "BETWEEN":
            low, high = self.value
            return f"{self.column} BETWEEN %s AND %s", [low, high]
        return f"{self.column} {self.operator} %s", [self.value]


@dataclass
class SelectQuery:
    """
    Accumulates the parts of a SELECT and renders them in SQL order.

    Usage:
        query = SelectQuery("SELECT * FROM properties")
        query.where("city", "ILIKE", "%van%")
        query.order_by("cost_per_night").limit(10)
        sql, params = query.render()
    """
    base: str
    wheres: list[Predicate] = field(default_factory=list)
    group_by_columns: list[str] = field(default_factory=list)
    havings: list[Predicate] = field(default_factory=list)
    order_by_columns: list[str] = field(default_factory=list)
    limit_value: Optional[int] = None

    def where(self, column: str, operator: str, value: Any) -> "SelectQuery":
        self.wheres.append(_predicate(column, operator, value))
        return self

    def group_by(self, *columns: str) -> "SelectQuery":
        self.group_by_columns.extend(columns)
        return self

    def having(self, column: str, operator: str, value: Any) -> "SelectQuery":
        self.havings.append(_predicate(column, operator, value))
        return self

    def order_by(self, *columns: str) -> "SelectQuery":
        self.order_by_columns.extend(columns)
        return self

    def limit(self, value: int) -> "SelectQuery":
        self.limit_value = value
        return self

    def render(self) -> tuple[str, list]:
        """
        Render the statement and its parameter list.

        Returns:
            (sql, params) ready for cursor.execute().
        """
        parts = [self.base.strip()]
        params: list = []

        for keyword, predicates in (("WHERE", self.wheres), ("HAVING", self.havings)):
            if keyword == "HAVING" and self.group_by_columns:
                parts.append("GROUP BY " + ", ".join(self.group_by_columns))
            if not predicates:
                continue
            fragments = []
            for predicate in predicates:
                sql, values = predicate.render()
                fragments.append(sql)
                params.extend(values)
            parts.append(f"{keyword} " + " AND ".join(fragments))

        if self.order_by_columns:
            parts.append("ORDER BY " + ", ".join(self.order_by_columns))
        if self.limit_value is not None:
            parts.append("LIMIT %s")
            params.append(self.limit_value)

        return "\n".join(parts) + ";", params


def _predicate(column: str, operator: str, value: Any) -> Predicate:
    """Validate the operator and build a Predicate."""
    operator = operator.upper()
    if operator not in _OPERATORS:
        raise ValueError(f"Unsupported operator: {operator}")
    if operator == "BETWEEN" and (not isinstance(value, (tuple, list)) or len(value) != 2):
        raise ValueError("BETWEEN needs a (low, high) pair")
    return Predicate(column, operator, value)

"""
Built-in SQLAlchemy operators and the default registry.

Usage::

    from blogspec.persistence.operators import DEFAULT_SQLA_REGISTRY

    expr = DEFAULT_SQLA_REGISTRY.apply(ConditionOperator.EQ, BlogModel.url, "x")

SQLite ``LIKE`` folds ASCII case, so ``like``, ``contains``, ``startswith``
and ``endswith`` compile to ``GLOB``, ``instr`` and ``substr`` instead. They
match case exactly, as the in-memory operators do. Only the ``i``-prefixed
operators ignore case.
"""

from __future__ import annotations

import operator as op_module
from typing import TYPE_CHECKING, Any, cast

from sqlalchemy import and_, func

from ..specifications.operators import ConditionOperator
from .strategy import SQLAlchemyOperator, SQLAlchemyOperatorRegistry

if TYPE_CHECKING:
    from collections.abc import Callable

    from sqlalchemy.sql.elements import ColumnElement


class ColumnOperator(SQLAlchemyOperator):
    """An operator whose clause is a single expression over the column."""

    def __init__(
        self,
        name: ConditionOperator,
        build: Callable[[Any, Any], Any],
    ) -> None:
        self._name = name
        self._build = build

    @property
    def name(self) -> ConditionOperator:
        return self._name

    def apply(self, column: Any, value: Any) -> ColumnElement[bool]:
        return cast("ColumnElement[bool]", self._build(column, value))

    def __repr__(self) -> str:
        return f"ColumnOperator({self._name.value!r})"


class BetweenOperator(SQLAlchemyOperator):
    @property
    def name(self) -> ConditionOperator:
        return ConditionOperator.BETWEEN

    def apply(self, column: Any, value: Any) -> ColumnElement[bool]:
        if not isinstance(value, list | tuple) or len(value) != 2:
            raise ValueError(f"'between' expects a [low, high] pair, got {value!r}")
        low, high = value
        return cast("ColumnElement[bool]", column.between(low, high))


def _glob_pattern(pattern: str) -> str:
    """Translate a LIKE pattern (``%``, ``_``) into a GLOB pattern."""
    parts = []
    for char in pattern:
        if char == "%":
            parts.append("*")
        elif char == "_":
            parts.append("?")
        elif char in "*?[":
            parts.append(f"[{char}]")
        else:
            parts.append(char)
    return "".join(parts)


def _like(column: Any, value: Any) -> Any:
    return column.op("GLOB", is_comparison=True)(_glob_pattern(str(value)))


def _contains(column: Any, value: Any) -> Any:
    return func.instr(column, str(value)) > 0


def _startswith(column: Any, value: Any) -> Any:
    prefix = str(value)
    return func.substr(column, 1, len(prefix)) == prefix


def _endswith(column: Any, value: Any) -> Any:
    suffix = str(value)
    length = func.length(column)
    return and_(
        length >= len(suffix),
        func.substr(column, length - len(suffix) + 1) == suffix,
    )


def build_default_sqla_registry() -> SQLAlchemyOperatorRegistry:
    """Create a registry with all built-in SQLAlchemy operators."""
    registry = SQLAlchemyOperatorRegistry()
    registry.register_all(
        # Standard comparison
        ColumnOperator(ConditionOperator.EQ, op_module.eq),
        ColumnOperator(ConditionOperator.NE, op_module.ne),
        ColumnOperator(ConditionOperator.GT, op_module.gt),
        ColumnOperator(ConditionOperator.LT, op_module.lt),
        ColumnOperator(ConditionOperator.GE, op_module.ge),
        ColumnOperator(ConditionOperator.LE, op_module.le),
        # Set
        ColumnOperator(ConditionOperator.IN, lambda c, v: c.in_(list(v))),
        ColumnOperator(ConditionOperator.NOT_IN, lambda c, v: ~c.in_(list(v))),
        BetweenOperator(),
        # String
        ColumnOperator(ConditionOperator.LIKE, _like),
        ColumnOperator(ConditionOperator.ILIKE, lambda c, v: c.ilike(v)),
        ColumnOperator(ConditionOperator.CONTAINS, _contains),
        ColumnOperator(
            ConditionOperator.ICONTAINS, lambda c, v: c.icontains(v, autoescape=True)
        ),
        ColumnOperator(ConditionOperator.STARTSWITH, _startswith),
        ColumnOperator(ConditionOperator.ENDSWITH, _endswith),
        # Null
        ColumnOperator(ConditionOperator.IS_NULL, lambda c, _v: c.is_(None)),
        ColumnOperator(ConditionOperator.IS_NOT_NULL, lambda c, _v: c.is_not(None)),
    )
    return registry


DEFAULT_SQLA_REGISTRY: SQLAlchemyOperatorRegistry = build_default_sqla_registry()

__all__ = [
    "DEFAULT_SQLA_REGISTRY",
    "BetweenOperator",
    "ColumnOperator",
    "SQLAlchemyOperatorRegistry",
    "build_default_sqla_registry",
]

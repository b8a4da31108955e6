"""
SQLAlchemy operator compilation strategy.

Mirrors the in-memory evaluator: each :class:`ConditionOperator` maps to a
``SQLAlchemyOperator`` that turns ``(column, value)`` into a boolean clause.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from sqlalchemy import ColumnElement

    from ..specifications.operators import ConditionOperator


class SQLAlchemyOperator(ABC):
    """
    Strategy interface for compiling a condition operator
    into a SQLAlchemy ``ColumnElement[bool]``.
    """

    @property
    @abstractmethod
    def name(self) -> ConditionOperator:
        """The operator this strategy handles."""
        ...

    @abstractmethod
    def apply(self, column: Any, value: Any) -> ColumnElement[bool]: ...


class SQLAlchemyOperatorRegistry:
    """Registry of ``SQLAlchemyOperator`` instances keyed by operator."""

    def __init__(self) -> None:
        self._operators: dict[ConditionOperator, SQLAlchemyOperator] = {}

    def register(self, operator: SQLAlchemyOperator) -> None:
        self._operators[operator.name] = operator

    def register_all(self, *operators: SQLAlchemyOperator) -> None:
        for op in operators:
            self.register(op)

    def get(self, name: ConditionOperator) -> SQLAlchemyOperator | None:
        return self._operators.get(name)

    def has(self, name: ConditionOperator) -> bool:
        return name in self._operators

    @property
    def supported_operators(self) -> set[ConditionOperator]:
        return set(self._operators.keys())

    def apply(
        self,
        name: ConditionOperator,
        column: Any,
        value: Any,
    ) -> ColumnElement[bool]:
        """
        Look up the operator and apply.

        Raises:
            ValueError: If the operator is not registered.
        """
        op = self.get(name)
        if op is None:
            raise ValueError(f"Unsupported operator for SQLAlchemy: {name}")
        return op.apply(column, value)

"""
In-memory operator evaluation strategy.

Provides the MemoryOperator interface and a registry that maps
ConditionOperator → evaluation strategy.

New operators are added by subclassing MemoryOperator and
registering them via ``register()``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .operators import ConditionOperator


class MemoryOperator(ABC):
    """
    Strategy interface for in-memory operator evaluation.

    Each operator is an isolated class with a single ``evaluate`` method.
    """

    @property
    @abstractmethod
    def name(self) -> ConditionOperator:
        """The operator this strategy handles."""
        ...

    @abstractmethod
    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        """
        Evaluate the operator against concrete values.

        Args:
            field_value: The actual value resolved from the candidate object.
            condition_value: The value carried by the condition.

        Returns:
            True if the condition is satisfied.
        """
        ...


class MemoryOperatorRegistry:
    """
    Registry of MemoryOperator instances keyed by ConditionOperator.

    Usage::

        registry = MemoryOperatorRegistry()
        registry.register(EqualOperator())

        result = registry.evaluate(ConditionOperator.EQ, actual, expected)
    """

    def __init__(self) -> None:
        self._operators: dict[ConditionOperator, MemoryOperator] = {}

    def register(self, operator: MemoryOperator) -> None:
        """Register an operator strategy instance."""
        self._operators[operator.name] = operator

    def register_all(self, *operators: MemoryOperator) -> None:
        for op in operators:
            self.register(op)

    def get(self, name: ConditionOperator) -> MemoryOperator | None:
        return self._operators.get(name)

    def has(self, name: ConditionOperator) -> bool:
        return name in self._operators

    @property
    def supported_operators(self) -> set[ConditionOperator]:
        return set(self._operators.keys())

    def evaluate(
        self,
        name: ConditionOperator,
        field_value: Any,
        condition_value: Any,
    ) -> bool:
        """
        Look up the operator and evaluate.

        Raises:
            ValueError: If the operator is not registered.
        """
        op = self.get(name)
        if op is None:
            raise ValueError(f"Unsupported operator for in-memory evaluation: {name}")
        return op.evaluate(field_value, condition_value)

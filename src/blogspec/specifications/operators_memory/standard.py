"""Standard comparison operators: =, !=, >, <, >=, <=."""

from __future__ import annotations

from typing import Any

from ..evaluator import MemoryOperator
from ..operators import ConditionOperator


class EqualOperator(MemoryOperator):
    @property
    def name(self) -> ConditionOperator:
        return ConditionOperator.EQ

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        return bool(field_value == condition_value)


class NotEqualOperator(MemoryOperator):
    @property
    def name(self) -> ConditionOperator:
        return ConditionOperator.NE

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        return bool(field_value != condition_value)


class GreaterThanOperator(MemoryOperator):
    @property
    def name(self) -> ConditionOperator:
        return ConditionOperator.GT

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        if field_value is None:
            return False
        return bool(field_value > condition_value)


class LessThanOperator(MemoryOperator):
    @property
    def name(self) -> ConditionOperator:
        return ConditionOperator.LT

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        if field_value is None:
            return False
        return bool(field_value < condition_value)


class GreaterEqualOperator(MemoryOperator):
    @property
    def name(self) -> ConditionOperator:
        return ConditionOperator.GE

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        if field_value is None:
            return False
        return bool(field_value >= condition_value)


class LessEqualOperator(MemoryOperator):
    @property
    def name(self) -> ConditionOperator:
        return ConditionOperator.LE

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        if field_value is None:
            return False
        return bool(field_value <= condition_value)

"""Null check operators: is_null, is_not_null."""

from __future__ import annotations

from typing import Any

from ..evaluator import MemoryOperator
from ..operators import ConditionOperator


class IsNullOperator(MemoryOperator):
    @property
    def name(self) -> ConditionOperator:
        return ConditionOperator.IS_NULL

    def evaluate(self, field_value: Any, _condition_value: Any) -> bool:
        return field_value is None


class IsNotNullOperator(MemoryOperator):
    @property
    def name(self) -> ConditionOperator:
        return ConditionOperator.IS_NOT_NULL

    def evaluate(self, field_value: Any, _condition_value: Any) -> bool:
        return field_value is not None

"""String operators: like, ilike, contains, icontains, startswith, endswith."""

from __future__ import annotations

import re
from typing import Any

from ..evaluator import MemoryOperator
from ..operators import ConditionOperator


def _sql_pattern_to_regex(pattern: str) -> str:
    """Convert a SQL LIKE pattern (``%``, ``_``) to an anchored Python regex."""
    parts = []
    for char in pattern:
        if char == "%":
            parts.append(".*")
        elif char == "_":
            parts.append(".")
        else:
            parts.append(re.escape(char))
    return "^" + "".join(parts) + "$"


class LikeOperator(MemoryOperator):
    @property
    def name(self) -> ConditionOperator:
        return ConditionOperator.LIKE

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        if field_value is None:
            return False
        regex = _sql_pattern_to_regex(str(condition_value))
        return bool(re.match(regex, str(field_value), re.DOTALL))


class ILikeOperator(MemoryOperator):
    @property
    def name(self) -> ConditionOperator:
        return ConditionOperator.ILIKE

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        if field_value is None:
            return False
        regex = _sql_pattern_to_regex(str(condition_value))
        return bool(re.match(regex, str(field_value), re.IGNORECASE | re.DOTALL))


class ContainsOperator(MemoryOperator):
    @property
    def name(self) -> ConditionOperator:
        return ConditionOperator.CONTAINS

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        if field_value is None:
            return False
        return str(condition_value) in str(field_value)


class IContainsOperator(MemoryOperator):
    @property
    def name(self) -> ConditionOperator:
        return ConditionOperator.ICONTAINS

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        if field_value is None:
            return False
        return str(condition_value).lower() in str(field_value).lower()


class StartsWithOperator(MemoryOperator):
    @property
    def name(self) -> ConditionOperator:
        return ConditionOperator.STARTSWITH

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        if field_value is None:
            return False
        return str(field_value).startswith(str(condition_value))


class EndsWithOperator(MemoryOperator):
    @property
    def name(self) -> ConditionOperator:
        return ConditionOperator.ENDSWITH

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        if field_value is None:
            return False
        return str(field_value).endswith(str(condition_value))

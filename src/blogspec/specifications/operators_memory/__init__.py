"""
In-memory operator implementations.

Usage::

    from blogspec.specifications.operators_memory import build_default_registry

    registry = build_default_registry()
    result = registry.evaluate(ConditionOperator.EQ, actual, expected)
"""

from __future__ import annotations

from ..evaluator import MemoryOperatorRegistry
from .null import IsNotNullOperator, IsNullOperator
from .set import BetweenOperator, InOperator, NotInOperator
from .standard import (
    EqualOperator,
    GreaterEqualOperator,
    GreaterThanOperator,
    LessEqualOperator,
    LessThanOperator,
    NotEqualOperator,
)
from .string import (
    ContainsOperator,
    EndsWithOperator,
    IContainsOperator,
    ILikeOperator,
    LikeOperator,
    StartsWithOperator,
)


def build_default_registry() -> MemoryOperatorRegistry:
    """
    Create a registry with all built-in operators.

    Example:
        >>> registry = build_default_registry()
        >>> registry.evaluate(ConditionOperator.EQ, "active", "active")
        True
    """
    registry = MemoryOperatorRegistry()
    registry.register_all(
        # Standard comparison
        EqualOperator(),
        NotEqualOperator(),
        GreaterThanOperator(),
        LessThanOperator(),
        GreaterEqualOperator(),
        LessEqualOperator(),
        # Set
        InOperator(),
        NotInOperator(),
        BetweenOperator(),
        # String
        LikeOperator(),
        ILikeOperator(),
        ContainsOperator(),
        IContainsOperator(),
        StartsWithOperator(),
        EndsWithOperator(),
        # Null
        IsNullOperator(),
        IsNotNullOperator(),
    )
    return registry


DEFAULT_MEMORY_REGISTRY = build_default_registry()

__all__ = [
    "DEFAULT_MEMORY_REGISTRY",
    "MemoryOperatorRegistry",
    "build_default_registry",
]

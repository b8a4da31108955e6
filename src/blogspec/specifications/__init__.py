from .base import BaseSpecification, ISpecification
from .conditions import (
    AndCondition,
    AttributeCondition,
    Condition,
    NotCondition,
    OrCondition,
    condition_from_dict,
)
from .evaluator import MemoryOperator, MemoryOperatorRegistry
from .exceptions import (
    FieldNotFoundError,
    IncludeRequiredError,
    OperatorNotFoundError,
    RelationshipTraversalError,
    SpecificationError,
    SpecificationMisuseError,
    SpecificationValidationError,
)
from .guards import ensure_includes_cover_criteria
from .operators import ConditionOperator
from .operators_memory import DEFAULT_MEMORY_REGISTRY, build_default_registry

__all__ = [
    # Core types
    "ConditionOperator",
    "Condition",
    "AttributeCondition",
    "AndCondition",
    "OrCondition",
    "NotCondition",
    "condition_from_dict",
    "ISpecification",
    "BaseSpecification",
    "ensure_includes_cover_criteria",
    # Evaluator / strategy
    "MemoryOperator",
    "MemoryOperatorRegistry",
    "DEFAULT_MEMORY_REGISTRY",
    "build_default_registry",
    # Exceptions
    "SpecificationError",
    "SpecificationValidationError",
    "SpecificationMisuseError",
    "IncludeRequiredError",
    "OperatorNotFoundError",
    "FieldNotFoundError",
    "RelationshipTraversalError",
]

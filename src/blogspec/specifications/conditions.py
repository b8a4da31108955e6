"""
Condition AST: the filter half of a specification.

A condition is a small tree of :class:`AttributeCondition` leaves joined by
:class:`AndCondition`, :class:`OrCondition` and :class:`NotCondition`. The
same tree is evaluated in-process through a :class:`MemoryOperatorRegistry`
and serialised with ``to_dict()`` for the SQL compiler.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from .exceptions import OperatorNotFoundError, SpecificationValidationError
from .operators import ConditionOperator

if TYPE_CHECKING:
    from collections.abc import Iterator

    from .evaluator import MemoryOperatorRegistry

_LOGICAL_OPERATORS: frozenset[str] = frozenset(
    {ConditionOperator.AND, ConditionOperator.OR, ConditionOperator.NOT}
)
_LEAF_OPERATORS: list[str] = [
    m.value for m in ConditionOperator if m.value not in _LOGICAL_OPERATORS
]


class Condition(ABC):
    """Base class for condition nodes with logic operator support."""

    @abstractmethod
    def is_satisfied_by(self, candidate: Any) -> bool: ...

    @abstractmethod
    def to_dict(self) -> dict[str, Any]: ...

    @abstractmethod
    def attribute_paths(self) -> Iterator[str]:
        """Yield every attribute path referenced by this node."""

    def __and__(self, other: Condition) -> AndCondition:
        return AndCondition(self, other)

    def __or__(self, other: Condition) -> OrCondition:
        return OrCondition(self, other)

    def __invert__(self) -> NotCondition:
        return NotCondition(self)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.to_dict()!r})"


class AttributeCondition(Condition):
    """
    Compares a single (possibly dotted) attribute against a value.

    When the path passes through a collection (``posts.title``) the condition
    holds if it holds for any element, matching the ``EXISTS`` the SQL
    compiler emits for the same path.
    """

    def __init__(
        self,
        attr: str,
        op: ConditionOperator | str,
        val: Any = None,
        *,
        registry: MemoryOperatorRegistry | None = None,
    ) -> None:
        if not attr or not isinstance(attr, str):
            raise SpecificationValidationError(
                f"Condition attribute must be a non-empty string, got {attr!r}",
                path=str(attr),
            )
        if isinstance(op, str) and not isinstance(op, ConditionOperator):
            op = op.lower()
        if op not in _LEAF_OPERATORS:
            raise OperatorNotFoundError(str(op), _LEAF_OPERATORS)
        self.attr = attr
        self.op = ConditionOperator(op)
        self.val = val
        self._registry = registry

    @property
    def registry(self) -> MemoryOperatorRegistry:
        if self._registry is None:
            from .operators_memory import DEFAULT_MEMORY_REGISTRY

            return DEFAULT_MEMORY_REGISTRY
        return self._registry

    def is_satisfied_by(self, candidate: Any) -> bool:
        values, through_collection = _resolve_field(candidate, self.attr.split("."))
        if not through_collection:
            return self.registry.evaluate(self.op, values[0], self.val)
        return any(self.registry.evaluate(self.op, v, self.val) for v in values)

    def to_dict(self) -> dict[str, Any]:
        return {
            "op": self.op.value,
            "attr": self.attr,
            "val": self.val,
        }

    def attribute_paths(self) -> Iterator[str]:
        yield self.attr


class AndCondition(Condition):
    """Logical AND of child conditions."""

    def __init__(self, *conditions: Condition) -> None:
        self.conditions = conditions

    def is_satisfied_by(self, candidate: Any) -> bool:
        return all(c.is_satisfied_by(candidate) for c in self.conditions)

    def to_dict(self) -> dict[str, Any]:
        return {
            "op": ConditionOperator.AND.value,
            "conditions": [c.to_dict() for c in self.conditions],
        }

    def attribute_paths(self) -> Iterator[str]:
        for c in self.conditions:
            yield from c.attribute_paths()


class OrCondition(Condition):
    """Logical OR of child conditions."""

    def __init__(self, *conditions: Condition) -> None:
        self.conditions = conditions

    def is_satisfied_by(self, candidate: Any) -> bool:
        return any(c.is_satisfied_by(candidate) for c in self.conditions)

    def to_dict(self) -> dict[str, Any]:
        return {
            "op": ConditionOperator.OR.value,
            "conditions": [c.to_dict() for c in self.conditions],
        }

    def attribute_paths(self) -> Iterator[str]:
        for c in self.conditions:
            yield from c.attribute_paths()


class NotCondition(Condition):
    """Logical negation of a single condition."""

    def __init__(self, condition: Condition) -> None:
        self.condition = condition

    def is_satisfied_by(self, candidate: Any) -> bool:
        return not self.condition.is_satisfied_by(candidate)

    def to_dict(self) -> dict[str, Any]:
        return {
            "op": ConditionOperator.NOT.value,
            "conditions": [self.condition.to_dict()],
        }

    def attribute_paths(self) -> Iterator[str]:
        yield from self.condition.attribute_paths()


def _resolve_field(obj: Any, parts: list[str]) -> tuple[list[Any], bool]:
    """
    Resolve a dotted path on *obj*.

    Returns the resolved values and whether a collection was crossed on the
    way. Without a collection the list holds exactly one value.
    """
    values = [obj]
    through_collection = False
    for part in parts:
        next_values: list[Any] = []
        for value in values:
            if value is None:
                next_values.append(None)
                continue
            if isinstance(value, list | tuple):
                through_collection = True
                next_values.extend(_get(item, part) for item in value)
            else:
                next_values.append(_get(value, part))
        values = next_values
    return values, through_collection


def _get(obj: Any, name: str) -> Any:
    if obj is None:
        return None
    return obj.get(name) if isinstance(obj, dict) else getattr(obj, name, None)


def condition_from_dict(
    data: dict[str, Any],
    *,
    registry: MemoryOperatorRegistry | None = None,
    path: str = "<root>",
) -> Condition:
    """
    Rebuild a condition tree from its ``to_dict()`` form.

    Raises:
        SpecificationValidationError: If a node is malformed.
        OperatorNotFoundError: If a leaf names an unknown operator.
    """
    if not isinstance(data, dict):
        raise SpecificationValidationError(
            f"Expected a dict, got {type(data).__name__}", path=path
        )
    op_str = data.get("op")
    if not op_str or not isinstance(op_str, str):
        raise SpecificationValidationError("Missing or empty 'op' key", path=path)
    op_lower = op_str.lower()

    if op_lower in _LOGICAL_OPERATORS:
        children = data.get("conditions")
        if not isinstance(children, list) or not children:
            raise SpecificationValidationError(
                f"Logical operator '{op_lower}' requires a non-empty 'conditions' list",
                path=path,
            )
        built = [
            condition_from_dict(
                child, registry=registry, path=f"{path}.conditions[{idx}]"
            )
            for idx, child in enumerate(children)
        ]
        if op_lower == ConditionOperator.AND:
            return AndCondition(*built)
        if op_lower == ConditionOperator.OR:
            return OrCondition(*built)
        if len(built) != 1:
            raise SpecificationValidationError(
                "'not' takes exactly one condition", path=path
            )
        return NotCondition(built[0])

    attr = data.get("attr")
    if not attr or not isinstance(attr, str):
        raise SpecificationValidationError(
            f"Leaf condition missing 'attr': {data}", path=path
        )
    return AttributeCondition(attr, op_lower, data.get("val"), registry=registry)

"""Specification pattern primitives."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, Generic, Protocol, TypeVar, runtime_checkable

from .exceptions import SpecificationValidationError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .conditions import Condition

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)


@runtime_checkable
class ISpecification(Protocol[T_co]):
    """
    Protocol for the Specification pattern.

    A specification is a fetch plan: which rows match (``criteria``) and
    which relations to load with them (``includes``). It holds no store
    connection and is safe to share and compare.
    """

    @property
    def criteria(self) -> Condition: ...

    @property
    def includes(self) -> tuple[str, ...]: ...

    def is_satisfied_by(self, candidate: Any) -> bool:
        """
        Check the criteria against an already loaded object.
        Used primarily for in-memory filtering.
        """
        ...

    def to_dict(self) -> dict[str, Any]:
        """
        Return a dictionary representation of the specification.
        Useful for serializing criteria across process boundaries or to DB drivers.
        """
        ...


class BaseSpecification(Generic[T]):
    """
    Immutable criteria plus an ordered list of relation include paths.

    Subclasses build their fetch plan in ``__init__``: pass the criteria to
    ``super().__init__`` and call :meth:`_add_include` for every relation the
    caller will need. Nothing is appended after construction.

    Two specifications are equal when their criteria serialise to the same
    AST and they include the same set of paths, so a specification can key a
    dict or a mocked repository call.
    """

    def __init__(self, criteria: Condition, includes: Iterable[str] = ()) -> None:
        self._criteria = criteria
        self._includes: list[str] = []
        for path in includes:
            self._add_include(path)

    @property
    def criteria(self) -> Condition:
        return self._criteria

    @property
    def includes(self) -> tuple[str, ...]:
        return tuple(self._includes)

    def _add_include(self, path: str) -> None:
        """Append a dotted relation path (``posts`` or ``posts.author``)."""
        if not isinstance(path, str) or not path.strip():
            raise SpecificationValidationError(
                f"Include path must be a non-empty string, got {path!r}",
                path=str(path),
            )
        if any(not part for part in path.split(".")):
            raise SpecificationValidationError(
                f"Include path has an empty segment: {path!r}", path=path
            )
        self._includes.append(path)

    def is_satisfied_by(self, candidate: T) -> bool:
        return self._criteria.is_satisfied_by(candidate)

    def attribute_paths(self) -> list[str]:
        """Every attribute path the criteria reference, in first-seen order."""
        return list(dict.fromkeys(self._criteria.attribute_paths()))

    def to_dict(self) -> dict[str, Any]:
        return {
            "criteria": self._criteria.to_dict(),
            "includes": list(self._includes),
        }

    def _criteria_key(self) -> str:
        return json.dumps(self._criteria.to_dict(), sort_keys=True, default=str)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BaseSpecification):
            return NotImplemented
        return self._criteria_key() == other._criteria_key() and set(
            self._includes
        ) == set(other._includes)

    def __hash__(self) -> int:
        return hash((self._criteria_key(), frozenset(self._includes)))

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(criteria={self._criteria.to_dict()!r}, "
            f"includes={self.includes!r})"
        )

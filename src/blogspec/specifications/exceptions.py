"""
Specification exception hierarchy with fuzzy-match suggestions.

All exceptions inherit from ``SpecificationError`` and provide
``to_dict()`` for API-friendly error responses.
"""

from __future__ import annotations

from difflib import get_close_matches
from typing import Any

from ..primitives.exceptions import BlogSpecError


class SpecificationError(BlogSpecError):
    """Base exception for all specification errors."""

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.__class__.__name__,
            "message": str(self),
        }


class SpecificationValidationError(SpecificationError):
    """Specification structure validation failed."""

    def __init__(self, message: str, path: str | None = None) -> None:
        self.message = message
        self.path = path
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "VALIDATION_ERROR",
            "message": self.message,
            "path": self.path,
        }


class OperatorNotFoundError(SpecificationError):
    """
    Unknown operator specified.

    Provides fuzzy-matched suggestions for likely intended operators.
    """

    def __init__(self, operator: str, valid_operators: list[str]) -> None:
        self.operator = operator
        self.valid_operators = valid_operators
        self.suggestions = get_close_matches(operator, valid_operators, n=3, cutoff=0.6)

        message = f"Unknown operator: '{operator}'."
        if self.suggestions:
            message += f" Did you mean: {', '.join(self.suggestions)}?"
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "OPERATOR_NOT_FOUND",
            "operator": self.operator,
            "suggestions": self.suggestions,
            "valid_operators": sorted(self.valid_operators),
        }


class FieldNotFoundError(SpecificationError):
    """
    Invalid field or include path, with suggestions.

    Example error message::

        Invalid field 'post' on 'BlogModel'.
        Did you mean one of these?
          • posts

        Available fields: blog_id, posts, url
    """

    def __init__(
        self,
        invalid_field: str,
        model_name: str,
        available_fields: list[str],
        full_path: str | None = None,
        cutoff: float = 0.6,
    ) -> None:
        self.invalid_field = invalid_field
        self.model_name = model_name
        self.available_fields = available_fields
        self.full_path = full_path or invalid_field
        self.suggestions = get_close_matches(
            invalid_field, available_fields, n=5, cutoff=cutoff
        )
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        lines = [f"Invalid field '{self.invalid_field}' on '{self.model_name}'."]
        if self.suggestions:
            lines.append("Did you mean one of these?")
            for s in self.suggestions:
                lines.append(f"  • {s}")
        lines.append(f"Available fields: {', '.join(sorted(self.available_fields))}")
        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "FIELD_NOT_FOUND",
            "field": self.invalid_field,
            "model": self.model_name,
            "full_path": self.full_path,
            "suggestions": self.suggestions,
            "available_fields": sorted(self.available_fields),
        }


class RelationshipTraversalError(SpecificationValidationError):
    """
    Raised when a path steps through a field that is not a relationship.

    Happens when an include such as ``url.something`` is used but ``url``
    is a scalar column.
    """

    def __init__(
        self,
        field: str,
        model_name: str,
        full_path: str | None = None,
    ) -> None:
        self.field = field
        self.model_name = model_name
        self.full_path = full_path or field
        message = (
            f"Cannot traverse '{field}' on '{model_name}': "
            f"it is not a relationship. Full path: '{self.full_path}'"
        )
        super().__init__(message, path=full_path)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "RELATIONSHIP_TRAVERSAL_ERROR",
            "field": self.field,
            "model": self.model_name,
            "full_path": self.full_path,
        }


class SpecificationMisuseError(SpecificationError):
    """A specification is well-formed but cannot be executed as written."""


class IncludeRequiredError(SpecificationMisuseError):
    """
    The criteria reference a relation that the specification does not include.

    Raised before the query runs, rather than letting the store lazy-load
    the relation or filter on unloaded data.
    """

    def __init__(self, relation: str, attribute_path: str, includes: list[str]) -> None:
        self.relation = relation
        self.attribute_path = attribute_path
        self.includes = includes
        super().__init__(
            f"Criteria on '{attribute_path}' traverse relation '{relation}', "
            f"which is not included (includes: {includes or 'none'})"
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "INCLUDE_REQUIRED",
            "relation": self.relation,
            "attribute_path": self.attribute_path,
            "includes": self.includes,
        }

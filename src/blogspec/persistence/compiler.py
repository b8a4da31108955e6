"""
Compile a specification into SQLAlchemy constructs.

``build_sqla_filter`` walks the condition AST (``criteria.to_dict()``) and
delegates each leaf to a :class:`SQLAlchemyOperatorRegistry`. Dotted paths
through a relationship compile to ``EXISTS`` subqueries (``.any()`` for
collections, ``.has()`` for scalars).

``build_load_options`` turns include paths into chained ``selectinload``
options, validating each step against the mapper.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, NoReturn, cast

from sqlalchemy import ColumnElement, and_, not_, or_, true
from sqlalchemy import inspect as sa_inspect
from sqlalchemy.orm import selectinload

from ..specifications.exceptions import (
    FieldNotFoundError,
    RelationshipTraversalError,
    SpecificationValidationError,
)
from ..specifications.operators import ConditionOperator
from .operators import DEFAULT_SQLA_REGISTRY

if TYPE_CHECKING:
    from collections.abc import Iterable

    from sqlalchemy.orm import Mapper, RelationshipProperty
    from sqlalchemy.orm.strategy_options import _AbstractLoad

    from .strategy import SQLAlchemyOperatorRegistry

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def build_sqla_filter(
    model: type[Any],
    data: dict[str, Any],
    *,
    registry: SQLAlchemyOperatorRegistry | None = None,
) -> ColumnElement[bool]:
    """
    Build a SQLAlchemy filter expression from a condition dictionary.

    Args:
        model: The SQLAlchemy model class.
        data: Condition AST produced by ``condition.to_dict()``.
        registry: Optional custom operator registry. Falls back to
            ``DEFAULT_SQLA_REGISTRY``.

    Raises:
        FieldNotFoundError: A path names an attribute the model lacks.
        RelationshipTraversalError: A path steps through a plain column.
    """
    reg = registry or DEFAULT_SQLA_REGISTRY
    return _compile_node(model, data, reg)


def build_load_options(model: type[Any], includes: Iterable[str]) -> list[_AbstractLoad]:
    """
    One chained ``selectinload`` per include path.

    ``"posts"`` becomes ``selectinload(BlogModel.posts)``; a dotted path
    chains one ``selectinload`` per segment.
    """
    options: list[_AbstractLoad] = []
    for path in includes:
        loader: Any = None
        current = model
        for rel in _walk_relationships(model, path):
            attr = getattr(current, rel.key)
            loader = selectinload(attr) if loader is None else loader.selectinload(attr)
            current = rel.mapper.class_
        options.append(loader)
    return options


def is_relationship_path(model: type[Any], path: str) -> bool:
    """True when every segment of *path* is a relationship."""
    mapper: Mapper[Any] = sa_inspect(model)
    for part in path.split("."):
        rel = mapper.relationships.get(part)
        if rel is None:
            return False
        mapper = rel.mapper
    return True


def relationship_keys(model: type[Any]) -> list[str]:
    return list(sa_inspect(model).relationships.keys())


def primary_key_columns(model: type[Any]) -> list[Any]:
    return list(sa_inspect(model).primary_key)


# ---------------------------------------------------------------------------
# Internal compilation
# ---------------------------------------------------------------------------


def _walk_relationships(model: type[Any], path: str) -> list[RelationshipProperty[Any]]:
    mapper: Mapper[Any] = sa_inspect(model)
    steps: list[RelationshipProperty[Any]] = []
    for part in path.split("."):
        rel = mapper.relationships.get(part)
        if rel is None:
            _raise_unknown(mapper, part, path)
        steps.append(rel)
        mapper = rel.mapper
    return steps


def _raise_unknown(mapper: Mapper[Any], part: str, full_path: str) -> NoReturn:
    model_name = mapper.class_.__name__
    if part in mapper.column_attrs:
        raise RelationshipTraversalError(part, model_name, full_path)
    available = list(mapper.column_attrs.keys()) + list(mapper.relationships.keys())
    raise FieldNotFoundError(part, model_name, available, full_path)


def _compile_node(
    model: type[Any],
    data: dict[str, Any],
    registry: SQLAlchemyOperatorRegistry,
) -> ColumnElement[bool]:
    op_str = str(data.get("op", "")).lower()
    children = data.get("conditions", [])

    if op_str == ConditionOperator.AND:
        return and_(true(), *[_compile_node(model, c, registry) for c in children])
    if op_str == ConditionOperator.OR:
        if not children:
            return not_(true())
        return or_(*[_compile_node(model, c, registry) for c in children])
    if op_str == ConditionOperator.NOT:
        if len(children) != 1:
            raise SpecificationValidationError(
                "'not' takes exactly one condition", path=str(data)
            )
        return not_(_compile_node(model, children[0], registry))

    attr: str | None = data.get("attr")
    if not attr:
        raise SpecificationValidationError(f"Condition missing 'attr': {data}")
    return _compile_leaf(model, attr, ConditionOperator(op_str), data.get("val"), registry, attr)


def _compile_leaf(
    model: type[Any],
    attr: str,
    op: ConditionOperator,
    val: Any,
    registry: SQLAlchemyOperatorRegistry,
    full_path: str,
) -> ColumnElement[bool]:
    mapper: Mapper[Any] = sa_inspect(model)
    head, _, rest = attr.partition(".")

    # Relationship traversal (e.g. "posts.title")
    if rest:
        rel = mapper.relationships.get(head)
        if rel is None:
            _raise_unknown(mapper, head, full_path)
        inner = _compile_leaf(rel.mapper.class_, rest, op, val, registry, full_path)
        rel_attr = getattr(model, head)
        if rel.uselist:
            return cast("ColumnElement[bool]", rel_attr.any(inner))
        return cast("ColumnElement[bool]", rel_attr.has(inner))

    if head not in mapper.column_attrs:
        available = list(mapper.column_attrs.keys()) + list(mapper.relationships.keys())
        raise FieldNotFoundError(head, model.__name__, available, full_path)
    return registry.apply(op, getattr(model, head), val)

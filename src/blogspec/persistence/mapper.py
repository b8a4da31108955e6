"""
ModelMapper: maps between pydantic domain entities and SQLAlchemy models.

- **Column-only writes**: ``to_model`` copies the columns of the table and
  nothing else. Relations are written through their own repositories.
- **Loaded relations only**: ``from_model`` reads a relationship only when
  it is already loaded, so mapping never triggers a lazy load. An unloaded
  relation keeps the entity's default (an empty list for ``Blog.posts``).
- **Cycle detection**: tracks ``id(obj)`` so bidirectional relations cannot
  recurse forever.
"""

from __future__ import annotations

import logging
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ValidationError
from sqlalchemy import inspect as sa_inspect

from ..primitives.exceptions import RepositoryError

logger = logging.getLogger(__name__)

T_Entity = TypeVar("T_Entity", bound=BaseModel)


class ModelMapper(Generic[T_Entity]):
    """
    Bidirectional mapper between a pydantic entity and a SQLAlchemy model.

    Entity field names must match the model's attribute names
    (``blog_id``, ``url``, ``posts``).
    """

    def __init__(self, entity_cls: type[T_Entity], db_model_cls: type[Any]) -> None:
        self.entity_cls = entity_cls
        self.db_model_cls = db_model_cls
        mapper = sa_inspect(db_model_cls)
        self._columns: frozenset[str] = frozenset(mapper.column_attrs.keys())
        self._primary_keys: frozenset[str] = frozenset(
            mapper.get_property_by_column(col).key for col in mapper.primary_key
        )

    # ------------------------------------------------------------------
    # Domain → DB
    # ------------------------------------------------------------------

    def to_model(self, entity: T_Entity) -> Any:
        """
        Build a transient model from the entity's column fields.

        A ``None`` primary key is left out so the store assigns one.
        """
        data = entity.model_dump(include=set(self._columns))
        for key in self._primary_keys:
            if data.get(key) is None:
                data.pop(key, None)
        return self.db_model_cls(**data)

    # ------------------------------------------------------------------
    # DB → Domain
    # ------------------------------------------------------------------

    def from_model(self, model: Any) -> T_Entity:
        data = _model_to_dict(model, self.entity_cls, set())
        try:
            return self.entity_cls.model_validate(data)
        except ValidationError as exc:
            raise RepositoryError(
                f"Cannot map {type(model).__name__} to {self.entity_cls.__name__}: {exc}"
            ) from exc


def _model_to_dict(model: Any, entity_cls: type[BaseModel], seen: set[int]) -> dict[str, Any]:
    seen = seen | {id(model)}
    state = sa_inspect(model)
    mapper = state.mapper
    fields = entity_cls.model_fields

    data: dict[str, Any] = {
        key: getattr(model, key)
        for key in mapper.column_attrs.keys()
        if key in fields and key not in state.unloaded
    }

    for rel in mapper.relationships:
        if rel.key not in fields or rel.key in state.unloaded:
            continue
        target_cls = _related_entity_cls(entity_cls, rel.key)
        if target_cls is None:
            continue
        value = state.dict.get(rel.key)
        if rel.uselist:
            data[rel.key] = [
                _model_to_dict(child, target_cls, seen)
                for child in value or ()
                if id(child) not in seen
            ]
        elif value is not None and id(value) not in seen:
            data[rel.key] = _model_to_dict(value, target_cls, seen)
    return data


def _related_entity_cls(entity_cls: type[BaseModel], field: str) -> type[BaseModel] | None:
    """The pydantic class held by ``field`` (``list[Post]`` → ``Post``)."""
    annotation = entity_cls.model_fields[field].annotation
    candidates = [annotation, *getattr(annotation, "__args__", ())]
    for candidate in candidates:
        if isinstance(candidate, type) and issubclass(candidate, BaseModel):
            return candidate
    logger.debug("No entity type for relation %s.%s", entity_cls.__name__, field)
    return None

"""Checks that a specification's criteria only touch relations it includes."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .exceptions import IncludeRequiredError

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from .base import BaseSpecification


def relation_prefixes(attr_path: str, is_relation: Callable[[str], bool]) -> list[str]:
    """
    Return the dotted prefixes of *attr_path* that name relations.

    ``posts.title`` on a blog yields ``["posts"]``; ``url`` yields ``[]``.
    """
    parts = attr_path.split(".")
    return [
        prefix
        for prefix in (".".join(parts[:i]) for i in range(1, len(parts)))
        if is_relation(prefix)
    ]


def is_covered(relation: str, includes: Iterable[str]) -> bool:
    """``posts`` is covered by an include of ``posts`` or ``posts.anything``."""
    return any(inc == relation or inc.startswith(relation + ".") for inc in includes)


def ensure_includes_cover_criteria(
    spec: BaseSpecification[object],
    is_relation: Callable[[str], bool],
) -> None:
    """
    Raise :class:`IncludeRequiredError` for the first criteria path that
    crosses a relation the specification does not include.
    """
    includes = spec.includes
    for attr_path in spec.attribute_paths():
        for relation in relation_prefixes(attr_path, is_relation):
            if not is_covered(relation, includes):
                raise IncludeRequiredError(relation, attr_path, list(includes))

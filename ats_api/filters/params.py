"""Typed filter parameters and the predicates they compile to.

``FilterParam`` is a closed union; the compiler dispatches on the concrete
class with ``match`` rather than on runtime duck typing.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ats_api.models.enums import Filter


@dataclass(frozen=True)
class StringFilter:
    filter: Filter = Filter.EQUAL
    criterias: tuple[str, ...] = ()


@dataclass(frozen=True)
class NumberFilter:
    filter: Filter = Filter.EQUAL
    # Raw query-string values, coerced by the compiler
    criterias: tuple[str, ...] = ()


@dataclass(frozen=True)
class EnumFilter:
    filter: Filter = Filter.EQUAL
    criterias: tuple[str, ...] = ()
    choices: frozenset[str] = field(default_factory=frozenset)


@dataclass(frozen=True)
class SlugFilter:
    """Criterias are slugs of users that must exist."""

    filter: Filter = Filter.EQUAL
    criterias: tuple[str, ...] = ()


FilterParam = StringFilter | NumberFilter | EnumFilter | SlugFilter


class Op(str, Enum):
    IS_NULL = "IS NULL"
    IN = "IN"
    NOT_IN = "NOT IN"
    LT = "<"
    LTE = "<="
    GT = ">"
    GTE = ">="
    LIKE = "ILIKE"
    NOT_LIKE = "NOT ILIKE"


@dataclass(frozen=True)
class Predicate:
    """Backend-neutral constraint on a single column."""

    op: Op
    values: tuple[Any, ...] = ()

    @property
    def value(self) -> Any:
        return self.values[0] if self.values else None

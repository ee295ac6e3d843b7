"""Compile typed filter parameters into predicates and SQLAlchemy clauses."""

import math
from collections.abc import Mapping
from typing import Any

from sqlalchemy import ColumnElement

from ats_api.exceptions import InvalidCriteriaError
from ats_api.filters.params import (
    EnumFilter,
    FilterParam,
    NumberFilter,
    Op,
    Predicate,
    SlugFilter,
    StringFilter,
)
from ats_api.models.enums import Filter
from ats_api.utils.prune import remove_empty

_COMPARISONS = {
    Filter.LESS_THAN: Op.LT,
    Filter.LESS_THAN_OR_EQUAL: Op.LTE,
    Filter.MORE_THAN: Op.GT,
    Filter.MORE_THAN_OR_EQUAL: Op.GTE,
}

_LIKE_ESCAPE = "\\"


def parse_number(value: Any, field: str | None = None) -> int | float:
    """Parse a criteria as a number, preferring ``int`` when it is integral."""
    if isinstance(value, bool):
        raise InvalidCriteriaError(field, value)
    if isinstance(value, int | float):
        number = value
    else:
        text = str(value).strip()
        try:
            number = int(text)
        except ValueError:
            try:
                number = float(text)
            except ValueError:
                raise InvalidCriteriaError(field, value) from None
    if isinstance(number, float) and not math.isfinite(number):
        raise InvalidCriteriaError(field, value)
    return number


def _like_pattern(filter: Filter, criteria: str) -> str:
    escaped = (
        str(criteria)
        .replace(_LIKE_ESCAPE, _LIKE_ESCAPE * 2)
        .replace("%", f"{_LIKE_ESCAPE}%")
        .replace("_", f"{_LIKE_ESCAPE}_")
    )
    if filter is Filter.BEGINS_WITH:
        return f"{escaped}%"
    if filter is Filter.ENDS_WITH:
        return f"%{escaped}"
    return f"%{escaped}%"


def compile_filter(param: FilterParam | None, field: str | None = None) -> Predicate | None:
    """
    Translate one filter parameter into a predicate.

    Args:
        param: The validated filter, or None when the field was not supplied
        field: Field name, only used in error messages

    Returns:
        The predicate, or None when the field imposes no constraint

    Raises:
        InvalidCriteriaError: A numeric field received a non-numeric criteria
    """
    match param:
        case None:
            return None

        case NumberFilter(filter=Filter.IS_NULL):
            return Predicate(Op.IS_NULL)
        case NumberFilter(filter=Filter.NOT, criterias=criterias):
            return Predicate(Op.NOT_IN, tuple(parse_number(c, field) for c in criterias))
        case NumberFilter(filter=op, criterias=criterias) if op in _COMPARISONS:
            # Only the first criteria is meaningful for a comparison
            return Predicate(_COMPARISONS[op], (parse_number(criterias[0], field),))
        case NumberFilter(criterias=criterias):
            return Predicate(Op.IN, tuple(parse_number(c, field) for c in criterias))

        case StringFilter(filter=Filter.CONTAINS | Filter.BEGINS_WITH | Filter.ENDS_WITH as op):
            return Predicate(Op.LIKE, (_like_pattern(op, param.criterias[0]),))
        case StringFilter(filter=Filter.NOT_CONTAINS):
            return Predicate(Op.NOT_LIKE, (_like_pattern(Filter.CONTAINS, param.criterias[0]),))

        case StringFilter() | EnumFilter() | SlugFilter():
            if param.filter is Filter.IS_NULL:
                return Predicate(Op.IS_NULL)
            values = tuple(str(c) for c in param.criterias)
            if param.filter is Filter.NOT:
                return Predicate(Op.NOT_IN, values)
            return Predicate(Op.IN, values)

    raise TypeError(f"Unsupported filter parameter: {param!r}")


def compile_filters(params: Mapping[str, FilterParam | None]) -> dict[str, Predicate]:
    """Compile a bag of filter parameters, dropping the fields that were not supplied."""
    return remove_empty({name: compile_filter(param, name) for name, param in params.items()})


def apply_predicate(column: Any, predicate: Predicate) -> ColumnElement[bool]:
    """Build the SQLAlchemy clause for ``predicate`` on ``column``."""
    match predicate.op:
        case Op.IS_NULL:
            return column.is_(None)
        case Op.IN:
            return column.in_(predicate.values)
        case Op.NOT_IN:
            return column.not_in(predicate.values)
        case Op.LT:
            return column < predicate.value
        case Op.LTE:
            return column <= predicate.value
        case Op.GT:
            return column > predicate.value
        case Op.GTE:
            return column >= predicate.value
        case Op.LIKE:
            return column.ilike(predicate.value, escape=_LIKE_ESCAPE)
        case Op.NOT_LIKE:
            return column.not_ilike(predicate.value, escape=_LIKE_ESCAPE)
    raise ValueError(f"Unknown predicate operator: {predicate.op}")

"""Query models of the list endpoints.

Each list route declares a ``ListQuery`` subclass whose fields are filter
parameter models, an ``order`` model and the pagination bounds. Unknown keys
are rejected at every level. ``validate_query`` runs the model over a parsed
query string and reports every problem at once in a single 400
``ValidationError``.
"""

from collections.abc import Iterable, Mapping
from typing import Any, ClassVar, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic_core import PydanticCustomError

from ats_api.core.settings import get_settings
from ats_api.exceptions import InvalidCriteriaError, ValidationError
from ats_api.filters.compiler import parse_number
from ats_api.filters.params import EnumFilter, FilterParam, NumberFilter, SlugFilter, StringFilter
from ats_api.models.enums import BASE_FILTERS, NUMBER_FILTERS, STRING_FILTERS, Filter, Order


def _one_of(values: Iterable[Any]) -> str:
    return ", ".join(sorted(str(v) for v in values))


# Filters


class FilterParamModel(BaseModel):
    """``F[filter]=<operator>&F[criterias][]=<value>`` for a single field."""

    model_config = ConfigDict(extra="forbid")

    allowed_filters: ClassVar[frozenset[Filter]] = BASE_FILTERS

    filter: Filter = Filter.EQUAL
    criterias: list[str] | None = Field(None, validate_default=True)

    @field_validator("filter", mode="before")
    @classmethod
    def validate_filter(cls, v):
        try:
            tag = Filter(str(v).lower())
        except ValueError:
            tag = None
        if tag not in cls.allowed_filters:
            raise PydanticCustomError(
                "filter_choice",
                "must be one of the following values: {choices}",
                {"choices": _one_of(f.value for f in cls.allowed_filters)},
            )
        return tag

    @field_validator("criterias")
    @classmethod
    def validate_criterias(cls, v, info: ValidationInfo):
        tag = info.data.get("filter")
        if tag is None:
            # The operator is already invalid
            return v
        if tag is Filter.IS_NULL:
            return []
        if not v:
            raise PydanticCustomError("criterias_empty", "should not be empty")
        if len(set(v)) != len(v):
            raise PydanticCustomError("criterias_not_unique", "elements must be unique")
        cls.check_criterias(v)
        return v

    @classmethod
    def check_criterias(cls, criterias: list[str]) -> None:
        """Type-specific checks on a non-empty list of criterias."""

    def to_param(self) -> FilterParam:
        raise NotImplementedError


class StringFilterParam(FilterParamModel):
    allowed_filters = STRING_FILTERS

    def to_param(self) -> StringFilter:
        return StringFilter(filter=self.filter, criterias=tuple(self.criterias or ()))


class NumberFilterParam(FilterParamModel):
    allowed_filters = NUMBER_FILTERS

    @classmethod
    def check_criterias(cls, criterias: list[str]) -> None:
        try:
            for criteria in criterias:
                parse_number(criteria)
        except InvalidCriteriaError:
            raise PydanticCustomError(
                "criterias_not_numeric", "each value must be a number string"
            ) from None

    def to_param(self) -> NumberFilter:
        return NumberFilter(filter=self.filter, criterias=tuple(self.criterias or ()))


class EnumFilterParam(FilterParamModel):
    """Subclass and set ``choices`` for each enumerated column."""

    choices: ClassVar[frozenset[str]] = frozenset()

    @classmethod
    def check_criterias(cls, criterias: list[str]) -> None:
        if any(c not in cls.choices for c in criterias):
            raise PydanticCustomError(
                "criterias_not_in_choices",
                "each value must be one of the following values: {choices}",
                {"choices": _one_of(cls.choices)},
            )

    def to_param(self) -> EnumFilter:
        return EnumFilter(
            filter=self.filter,
            criterias=tuple(self.criterias or ()),
            choices=frozenset(self.choices),
        )


class SlugFilterParam(FilterParamModel):
    """Criterias are user slugs; their existence is checked by the list pipeline."""

    def to_param(self) -> SlugFilter:
        return SlugFilter(filter=self.filter, criterias=tuple(self.criterias or ()))


# Sorting and pagination


class SortParams(BaseModel):
    """``order[<field>]=ASC|DESC``; subclasses declare the sortable fields."""

    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="before")
    @classmethod
    def uppercase_directions(cls, data):
        if isinstance(data, dict):
            return {k: v.upper() if isinstance(v, str) else v for k, v in data.items()}
        return data


class ListQuery(BaseModel):
    """Base query of a list route: pagination plus the route's own fields."""

    model_config = ConfigDict(extra="forbid")

    page: int = Field(0, ge=0)
    perPage: int | None = Field(None, ge=1)
    order: SortParams | None = None

    @field_validator("perPage")
    @classmethod
    def validate_per_page(cls, v):
        maximum = get_settings().max_per_page
        if v is not None and v > maximum:
            raise PydanticCustomError(
                "less_than_equal", "Input should be less than or equal to {le}", {"le": maximum}
            )
        return v

    def filter_params(self) -> dict[str, FilterParam]:
        """Supplied filters, converted to their typed parameters."""
        params = {}
        for name in type(self).model_fields:
            value = getattr(self, name)
            if isinstance(value, FilterParamModel):
                params[name] = value.to_param()
        return params

    def sort_order(self) -> dict[str, Order]:
        if self.order is None:
            return {}
        return {field: d for field, d in self.order.model_dump().items() if d is not None}


Q = TypeVar("Q", bound=ListQuery)


# Error messages

_MESSAGES = {
    "extra_forbidden": "property {loc} should not exist",
    "missing": "{loc} should not be null or undefined",
    "model_type": "{loc} must be an object",
    "model_attributes_type": "{loc} must be an object",
    "dict_type": "{loc} must be an object",
    "list_type": "{loc} must be an array",
    "string_type": "{loc} must be a string",
    "int_type": "{loc} must be an integer number",
    "int_parsing": "{loc} must be an integer number",
    "int_from_float": "{loc} must be an integer number",
    "greater_than_equal": "{loc} must not be less than {ge}",
    "less_than_equal": "{loc} must not be greater than {le}",
    "enum": "{loc} must be one of the following values: {expected}",
    "filter_choice": "{loc} must be one of the following values: {choices}",
    "criterias_empty": "{loc} should not be empty",
    "criterias_not_unique": "All {loc}'s elements must be unique",
    "criterias_not_numeric": "each value in {loc} must be a number string",
    "criterias_not_in_choices": (
        "each value in {loc} must be one of the following values: {choices}"
    ),
}


def format_validation_errors(errors: Iterable[Mapping[str, Any]]) -> str:
    """Render pydantic errors as ``"<dotted.path> <reason>"`` joined by ", "."""
    messages = []
    for error in errors:
        loc = ".".join(str(part) for part in error.get("loc", ()))
        template = _MESSAGES.get(error["type"])
        if template is None:
            messages.append(f"{loc}: {error['msg']}" if loc else error["msg"])
        else:
            messages.append(template.format(loc=loc, **error.get("ctx", {})))
    return ", ".join(messages)


def validate_query(model: type[Q], raw: Mapping[str, Any]) -> Q:
    """
    Validate a parsed query string against a route's query model.

    Args:
        model: ``ListQuery`` subclass of the route
        raw: Output of ``parse_query_string``

    Returns:
        The validated query

    Raises:
        ValidationError: One or more fields are unknown or invalid
    """
    try:
        return model.model_validate(raw)
    except PydanticValidationError as exc:
        raise ValidationError(format_validation_errors(exc.errors())) from None

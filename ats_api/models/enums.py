"""Enumerations shared by entities, query validation and filter compilation."""

from enum import Enum


class Filter(str, Enum):
    """Operator tag of a query-string filter (``F[filter]=<value>``)."""

    IS_NULL = "isnull"
    NOT = "not"
    EQUAL = "equal"

    # Number specific
    LESS_THAN = "lessthan"
    LESS_THAN_OR_EQUAL = "lessthanorequal"
    MORE_THAN = "morethan"
    MORE_THAN_OR_EQUAL = "morethanorequal"

    # String specific
    CONTAINS = "contains"
    NOT_CONTAINS = "notcontains"
    BEGINS_WITH = "beginswith"
    ENDS_WITH = "endswith"


BASE_FILTERS = frozenset({Filter.IS_NULL, Filter.NOT, Filter.EQUAL})
NUMBER_FILTERS = BASE_FILTERS | {
    Filter.LESS_THAN,
    Filter.LESS_THAN_OR_EQUAL,
    Filter.MORE_THAN,
    Filter.MORE_THAN_OR_EQUAL,
}
STRING_FILTERS = BASE_FILTERS | {
    Filter.CONTAINS,
    Filter.NOT_CONTAINS,
    Filter.BEGINS_WITH,
    Filter.ENDS_WITH,
}


class Order(str, Enum):
    ASC = "ASC"
    DESC = "DESC"


class Contract(str, Enum):
    WORK_STUDY = "work_study"
    INTERNSHIP = "internship"
    PERMANENT = "permanent"
    FIXED = "fixed"


class ProcessStatus(str, Enum):
    """Status of a candidate's hiring process on an offer."""

    CANCELLED = "annulé"
    STRONGLY_APPROVED = "fortement approuvé"
    WAITING = "en attente"
    STRONGLY_REJECTED = "fortement refusé"
    REJECTED = "refusé"
    SELECTED = "selectionné"

from typing import Any, TypeVar

T = TypeVar("T", bound=dict)


def remove_empty(obj: T) -> T:
    """
    Recursively drop unset entries from a filter-options bag.

    Keys whose value is None are removed; plain nested dicts are pruned the
    same way and then dropped if nothing is left in them. Any other value
    (filter parameters, predicates, lists, strings) is kept as a leaf.

    Args:
        obj: Mapping built from optional query fields

    Returns:
        A new dict containing only the entries that constrain the query
    """
    pruned: dict[str, Any] = {}
    for key, value in obj.items():
        if value is None:
            continue
        if isinstance(value, dict):
            value = remove_empty(value)
            if not value:
                continue
        pruned[key] = value
    return pruned

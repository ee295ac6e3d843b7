"""Parse bracket-notation query strings into nested dicts.

``job[filter]=not&job[criterias][]=dev&job[criterias][]=ops&page=1`` becomes
``{"job": {"filter": "not", "criterias": ["dev", "ops"]}, "page": "1"}``.

Indexed arrays (``job[criterias][0]=dev``) are accepted as well; values are
kept in arrival order.
"""

import re
from typing import Any
from urllib.parse import parse_qsl

from ats_api.exceptions import ValidationError

_KEY_RE = re.compile(r"^(?P<base>[^\[\]]+)(?P<path>(?:\[[^\[\]]*\])*)$")
_SEGMENT_RE = re.compile(r"\[([^\[\]]*)\]")


def _split_key(key: str) -> list[str]:
    match = _KEY_RE.match(key)
    if match is None:
        return [key]
    return [match.group("base"), *_SEGMENT_RE.findall(match.group("path"))]


def _is_array_segment(segment: str) -> bool:
    return segment == "" or segment.isdigit()


def _malformed(key: str) -> ValidationError:
    return ValidationError(f"Malformed query parameter '{key}'")


def _assign(node: dict[str, Any], segments: list[str], value: str, raw_key: str) -> None:
    head, rest = segments[0], segments[1:]

    if not rest:
        current = node.get(head)
        if current is None:
            node[head] = value
        elif isinstance(current, list):
            current.append(value)
        elif isinstance(current, str):
            # Repeated plain key: a=1&a=2
            node[head] = [current, value]
        else:
            raise _malformed(raw_key)
        return

    if len(rest) == 1 and _is_array_segment(rest[0]):
        current = node.setdefault(head, [])
        if isinstance(current, str):
            current = node[head] = [current]
        if not isinstance(current, list):
            raise _malformed(raw_key)
        current.append(value)
        return

    if "" in rest[:-1]:
        # Arrays are only supported as the last segment
        raise _malformed(raw_key)

    child = node.setdefault(head, {})
    if not isinstance(child, dict):
        raise _malformed(raw_key)
    _assign(child, rest, value, raw_key)


def parse_query_string(query: str) -> dict[str, Any]:
    """Parse a raw query string (without the leading ``?``)."""
    result: dict[str, Any] = {}
    for key, value in parse_qsl(query, keep_blank_values=True):
        _assign(result, _split_key(key), value, key)
    return result

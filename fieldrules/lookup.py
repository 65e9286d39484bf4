"""
Dotted-path lookup into submitted data.

Submitted field names may address nested structures with dots
(``address.city``, ``items.0.sku``, ``items.*.sku``). An exact top-level
key always wins over descending into substructure, so a flat submission
``{"a.b": "x"}`` resolves ``a.b`` to ``"x"``.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Iterable


class _NotFound:
    """Sentinel for a path that resolves nowhere."""

    _instance: "_NotFound | None" = None

    def __new__(cls) -> "_NotFound":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NOT_FOUND"

    def __bool__(self) -> bool:
        return False


NOT_FOUND: Any = _NotFound()

WILDCARD = "*"


def has_dots(field: str) -> bool:
    return "." in field


def _is_sequence(node: Any) -> bool:
    return isinstance(node, Sequence) and not isinstance(node, (str, bytes, bytearray))


def _children(node: Any) -> Iterable[Any]:
    if isinstance(node, Mapping):
        return node.values()
    if _is_sequence(node):
        return node
    return ()


def _search(segments: list[str], node: Any) -> Any:
    if not segments:
        return node

    head, rest = segments[0], segments[1:]

    if head == WILDCARD:
        for child in _children(node):
            found = _search(rest, child)
            if found is not NOT_FOUND:
                return found
        return NOT_FOUND

    if isinstance(node, Mapping):
        if head in node:
            return _search(rest, node[head])
        if head.isdigit() and int(head) in node:
            return _search(rest, node[int(head)])
        return NOT_FOUND

    if _is_sequence(node):
        if head.isdigit():
            index = int(head)
            if index < len(node):
                return _search(rest, node[index])
            return NOT_FOUND
        # Named segment against a list: look inside each element.
        for child in node:
            found = _search(segments, child)
            if found is not NOT_FOUND:
                return found
        return NOT_FOUND

    return NOT_FOUND


def dot_search(path: str, data: Mapping[str, Any] | None) -> Any:
    """
    Resolve a dotted path against submitted data.

    Returns the value found (which may be None) or NOT_FOUND.
    """
    if data is None:
        return NOT_FOUND
    if isinstance(data, Mapping) and path in data:
        return data[path]

    trimmed = path.rstrip("* ").rstrip(".")
    if not trimmed:
        return NOT_FOUND

    segments = trimmed.split(".")
    if any(s == "" for s in segments):
        return NOT_FOUND
    return _search(segments, data)


def field_value(field: str, data: Mapping[str, Any] | None) -> Any:
    """Value of a field by exact key, falling back to dotted lookup."""
    if data is None:
        return NOT_FOUND
    if field in data:
        return data[field]
    if has_dots(field):
        return dot_search(field, data)
    return NOT_FOUND

"""Query string assembly for service endpoints.

Keys keep insertion order and comma separators stay literal, so
``Query().add("start", 0).add("limit", 25).add_list("expand", ["a", "b"])``
encodes to ``start=0&limit=25&expand=a,b``.
"""

from collections.abc import Iterable
from typing import Any
from urllib.parse import urlencode


def _render(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class Query:
    """Ordered collection of query parameters."""

    def __init__(self) -> None:
        self._pairs: list[tuple[str, str]] = []

    def add(self, key: str, value: Any) -> "Query":
        """Append a parameter unconditionally (pagination, flags)."""
        self._pairs.append((key, _render(value)))
        return self

    def add_optional(self, key: str, value: Any) -> "Query":
        """Append a parameter only when it carries a value."""
        if value is None or value == "":
            return self
        return self.add(key, value)

    def add_list(self, key: str, values: Iterable[Any] | None) -> "Query":
        """Append comma-joined values in the given order; skip when empty."""
        if not values:
            return self
        return self.add(key, ",".join(_render(value) for value in values))

    def encode(self) -> str:
        """Encode as a URL query string."""
        return urlencode(self._pairs, safe=",")

    def __bool__(self) -> bool:
        return bool(self._pairs)


def endpoint_with_query(path: str, query: Query) -> str:
    """Append the encoded query to a path, if there is one."""
    if not query:
        return path
    return f"{path}?{query.encode()}"

"""Base for REST requests: method, path and query parameters."""

from __future__ import annotations

import dataclasses
from enum import Enum
from typing import Any, ClassVar

from okxkit.fields import StringEnum, dump_str


class Method(StringEnum):
    """HTTP method of a request."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def _wire_value(value: Any, as_str: bool) -> Any:
    if isinstance(value, Enum):
        value = value.value
    return dump_str(value) if as_str else value


class Request:
    """A REST endpoint call.

    Subclasses are dataclasses whose fields are the request parameters.
    Field names are sent in camelCase. Fields left as ``None`` are omitted
    unless listed in ``KEEP_NONE``; fields listed in ``AS_STR`` are sent
    as strings.
    """

    METHOD: ClassVar[Method] = Method.GET
    PATH: ClassVar[str] = ""
    AUTH: ClassVar[bool] = False
    KEEP_NONE: ClassVar[frozenset[str]] = frozenset()
    AS_STR: ClassVar[frozenset[str]] = frozenset()

    def params(self) -> dict[str, Any]:
        """The request parameters as they go on the wire."""
        if not dataclasses.is_dataclass(self):
            return {}
        result: dict[str, Any] = {}
        for item in dataclasses.fields(self):
            value = getattr(self, item.name)
            key = _camel(item.name)
            if value is None:
                if item.name in self.KEEP_NONE:
                    result[key] = None
                continue
            result[key] = _wire_value(value, item.name in self.AS_STR)
        return result
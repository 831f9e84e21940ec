from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any, Protocol


@dataclass(frozen=True)
class RequestDescriptor:
    uri: str
    method: str = "GET"
    qs: Mapping[str, Any] = field(default_factory=dict)
    json: Any = None
    use_querystring: bool = False

    def with_uri_prefix(self, prefix: str) -> RequestDescriptor:
        return replace(self, uri=f"{prefix.rstrip('/')}{self.uri}")

    def with_query(self, qs: Mapping[str, Any]) -> RequestDescriptor:
        return replace(self, qs=dict(qs))


class RequestExecutor(Protocol):
    """Sends a request and returns ``(parsed_body, raw_response)``.

    Implementations raise on failure; whatever they raise reaches the caller
    of the IAM operation unchanged.
    """

    async def __call__(self, request: RequestDescriptor) -> tuple[Any, Any]: ...


def arrify(value: Any) -> list[Any]:
    """Return ``value`` as a list: ``None`` is empty, a scalar is wrapped."""
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def encode_query(qs: Mapping[str, Any], use_querystring: bool = False) -> list[tuple[str, str]]:
    """Flatten a query mapping into ordered ``(key, value)`` pairs.

    Sequence values are sent as repeated keys (``permissions=a&permissions=b``)
    when ``use_querystring`` is set, and as indexed keys (``permissions[0]=a``)
    otherwise.
    """
    pairs: list[tuple[str, str]] = []
    for key, value in qs.items():
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            for index, item in enumerate(value):
                if item is None:
                    continue
                name = key if use_querystring else f"{key}[{index}]"
                pairs.append((name, _format_value(item)))
            continue
        pairs.append((key, _format_value(value)))
    return pairs

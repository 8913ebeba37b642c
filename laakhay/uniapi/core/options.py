"""Per-call request options."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any


def _as_values(value: Any) -> list[str]:
    if isinstance(value, str | bytes) or not isinstance(value, Iterable):
        return [str(value)]
    return [str(v) for v in value]


@dataclass
class CallOptions:
    """Options applied to a single endpoint call.

    Attributes:
        path_extension: Values appended to the endpoint path as ``/value``
            segments, for APIs whose parameters are part of the path.
        query: Query parameters; each key maps to one or more values.
        body: Raw JSON body. When non-empty the ``Content-Type`` header is set
            to ``application/json`` before extra headers are applied.
        extra_headers: Headers set on the request, overriding defaults.

    Paginators rewrite ``query`` in place between pages, so an instance
    belongs to one in-flight call.
    """

    path_extension: list[Any] = field(default_factory=list)
    query: dict[str, list[str]] = field(default_factory=dict)
    body: bytes | None = None
    extra_headers: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.query = self.normalize_query(self.query)

    @staticmethod
    def normalize_query(query: Mapping[str, Any] | None) -> dict[str, list[str]]:
        """Return ``query`` with every value coerced to a list of strings."""
        if not query:
            return {}
        return {str(key): _as_values(value) for key, value in query.items()}

    def set_query(self, key: str, *values: Any) -> None:
        """Replace all values of ``key``."""
        self.query[key] = [str(v) for v in values]

    def copy(self) -> CallOptions:
        return CallOptions(
            path_extension=list(self.path_extension),
            query={k: list(v) for k, v in self.query.items()},
            body=self.body,
            extra_headers=dict(self.extra_headers),
        )

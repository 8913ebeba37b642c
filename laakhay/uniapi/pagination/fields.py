"""Structural field access over decoded responses.

Paginators are configured with field names rather than per-API code. This
module reads those fields and builds updated copies of pydantic models,
dataclasses and mappings alike, and checks configured names against a
response type's declared fields when an endpoint is created.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable, Mapping
from typing import Any, get_type_hints, is_typeddict

from pydantic import BaseModel

_MISSING = object()


def declared_fields(response_type: Any) -> set[str] | None:
    """Return the field names declared by ``response_type``.

    Returns ``None`` when the type carries no field metadata (plain ``dict``,
    ``Any``), in which case names cannot be checked up front.
    """
    if isinstance(response_type, type) and issubclass(response_type, BaseModel):
        return set(response_type.model_fields)
    if dataclasses.is_dataclass(response_type) and isinstance(response_type, type):
        return {f.name for f in dataclasses.fields(response_type)}
    if is_typeddict(response_type):
        return set(get_type_hints(response_type))
    return None


def validate_fields(response_type: Any, names: Iterable[str]) -> None:
    """Check that every name in ``names`` is a field of ``response_type``.

    Raises:
        ValueError: Listing the unknown names
    """
    known = declared_fields(response_type)
    if known is None:
        return
    unknown = sorted(set(names) - known)
    if unknown:
        raise ValueError(
            f"{response_type.__name__} has no field(s) {', '.join(map(repr, unknown))}"
        )


def get_value(obj: Any, name: str, default: Any = _MISSING) -> Any:
    """Read field ``name`` from an object or mapping.

    Raises:
        KeyError: If the field is absent and no default is given
    """
    if isinstance(obj, Mapping):
        value = obj.get(name, default)
    else:
        value = getattr(obj, name, default)
    if value is _MISSING:
        raise KeyError(name)
    return value


def replace_fields(obj: Any, updates: Mapping[str, Any]) -> Any:
    """Return a copy of ``obj`` with ``updates`` applied; ``obj`` is left untouched.

    Frozen pydantic models and frozen dataclasses are supported. Values are
    not re-validated.

    Raises:
        TypeError: If ``obj`` is not a model, dataclass instance or mapping
    """
    if isinstance(obj, BaseModel):
        return obj.model_copy(update=dict(updates))
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return dataclasses.replace(obj, **updates)
    if isinstance(obj, Mapping):
        return {**obj, **updates}
    raise TypeError(f"cannot replace fields on {type(obj).__name__}")


def get_int(obj: Any, name: str) -> int | None:
    """Return field ``name`` if it holds an ``int`` (``bool`` excluded)."""
    value = get_value(obj, name, None)
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return None


def get_items(obj: Any, name: str) -> list[Any] | tuple[Any, ...]:
    """Return the list or tuple stored in field ``name``; absent or ``None`` reads as empty."""
    value = get_value(obj, name, None)
    if value is None:
        return []
    if not isinstance(value, list | tuple):
        raise TypeError(f"field {name!r} is {type(value).__name__}, expected list or tuple")
    return value


def concat_items(target: Any, source: Any, name: str) -> list[Any] | tuple[Any, ...]:
    """Concatenate ``target.<name>`` and ``source.<name>``, target items first.

    The result is a tuple when either side holds a tuple, so tuple fields
    stay tuples even when the aggregate's field was empty.
    """
    head = get_items(target, name)
    tail = get_items(source, name)
    merged = [*head, *tail]
    return tuple(merged) if isinstance(head, tuple) or isinstance(tail, tuple) else merged

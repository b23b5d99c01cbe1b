"""Requested-type coercion for decoded values.

Stored values carry no type tag.  A reader asks for a type and gets the
decoded value validated against it, or ``None`` when it does not fit.
Validation is strict: ``"1"`` is not an ``int`` and ``1`` is not a ``str``.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any

from pydantic import TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError, to_json


@lru_cache(maxsize=256)
def _cached_adapter(as_type: Any) -> TypeAdapter[Any]:
    return TypeAdapter(as_type)


def _adapter(as_type: Any) -> TypeAdapter[Any]:
    try:
        return _cached_adapter(as_type)
    except TypeError:
        # unhashable type hint
        return TypeAdapter(as_type)


def coerce(raw: Any, as_type: Any) -> Any | None:
    """Return *raw* validated as *as_type*, or ``None`` if it does not fit.

    Python-mode strict validation runs first so exact values (``bytes``,
    ``int``, model instances) pass untouched.  JSON-mode strict validation
    is the fallback: it accepts what a text format legitimately turns a
    value into (a list for a tuple, a string for a datetime, a mapping for
    a model or dataclass).
    """
    adapter = _adapter(as_type)

    try:
        return adapter.validate_python(raw, strict=True)
    except ValidationError:
        pass

    try:
        return adapter.validate_json(to_json(raw), strict=True)
    except (ValidationError, PydanticSerializationError):
        return None

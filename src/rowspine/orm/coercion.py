"""
Type coercion between database values and declared field types.

Drivers hand back whatever their native type for a column is: SQLite
returns ``int`` for every integer column, ``"1"`` for some booleans,
PostgreSQL ``Decimal`` for numerics. A record field declares the type it
wants. ``coerce()`` bridges the two through a closed set of scalar kinds;
anything outside that set is rejected rather than guessed at.

Manifesto:
    - **Closed set:** every supported target is a ``ScalarKind`` member
    - **Exact match short-circuits:** ``type(value) is target`` returns the
      value untouched
    - **Text is the bridge:** everything else is rendered with ``str()`` and
      parsed into the target

Architecture:
    ::

        coerce(value, target)
          │
          ├── value is None ───────────────────→ None
          ├── widen(target): Optional / | None / Annotated → X
          ├── type(value) is X ────────────────→ value
          ├── scalar_kind(X) is None ──────────→ UnsupportedCoercionError
          └── parse(kind, str(value)) ─────────→ X | CoercionError

Examples:
    >>> coerce("true", bool)
    True
    >>> coerce("7", Int32)
    Int32(7)
    >>> coerce("", Char)
    Char('\\x00')
    >>> coerce(300, Int8)
    Traceback (most recent call last):
        ...
    rowspine.core.errors.CoercionError: Cannot convert '300' to Int8

Tags:
    coercion, types, conversion, orm, rowspine
"""

from __future__ import annotations

import struct
import types
from enum import Enum
from typing import Annotated, Any, ClassVar, Union, get_args, get_origin

from rowspine.core.errors import CoercionError, UnsupportedCoercionError

# =============================================================================
# SIZED SCALAR TYPES
# =============================================================================


class _SizedInt(int):
    """Integer restricted to a two's-complement bit width."""

    bits: ClassVar[int] = 64

    def __new__(cls, value: Any = 0) -> _SizedInt:
        number = int.__new__(cls, value)
        limit = 1 << (cls.bits - 1)
        if not -limit <= number < limit:
            raise OverflowError(f"{int(number)} out of range for {cls.__name__}")
        return number

    def __repr__(self) -> str:
        return f"{type(self).__name__}({int(self)})"

    def __str__(self) -> str:
        return int.__repr__(self)


class Int8(_SizedInt):
    bits = 8


class Int16(_SizedInt):
    bits = 16


class Int32(_SizedInt):
    bits = 32


class Int64(_SizedInt):
    bits = 64


class Float32(float):
    """Float rounded to IEEE 754 single precision."""

    def __new__(cls, value: Any = 0.0) -> Float32:
        rounded = struct.unpack("f", struct.pack("f", float(value)))[0]
        return super().__new__(cls, rounded)


class Float64(float):
    """Double precision float, kept distinct from plain ``float`` targets."""


class Char(str):
    """A single character. The empty string becomes the zero character."""

    def __new__(cls, value: str = "\0") -> Char:
        if len(value) > 1:
            raise ValueError(f"Char holds one character, got {len(value)}")
        return super().__new__(cls, value or "\0")

    def __repr__(self) -> str:
        return f"Char({str(self)!r})"


# =============================================================================
# SCALAR KINDS
# =============================================================================


class ScalarKind(str, Enum):
    """Closed set of coercion targets."""

    BOOL = "bool"
    INT8 = "int8"
    INT16 = "int16"
    INT32 = "int32"
    INT64 = "int64"
    INT = "int"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    FLOAT = "float"
    CHAR = "char"
    STR = "str"


_KINDS: dict[type, ScalarKind] = {
    bool: ScalarKind.BOOL,
    Int8: ScalarKind.INT8,
    Int16: ScalarKind.INT16,
    Int32: ScalarKind.INT32,
    Int64: ScalarKind.INT64,
    int: ScalarKind.INT,
    Float32: ScalarKind.FLOAT32,
    Float64: ScalarKind.FLOAT64,
    float: ScalarKind.FLOAT,
    Char: ScalarKind.CHAR,
    str: ScalarKind.STR,
}


def scalar_kind(target: Any) -> ScalarKind | None:
    """Kind of a (widened) target type, or None when unsupported."""
    try:
        return _KINDS.get(target)
    except TypeError:  # unhashable typing construct
        return None


def widen(target: Any) -> Any:
    """Unwrap ``Optional[X]``, ``X | None`` and ``Annotated[X, ...]`` to ``X``.

    Unions with more than one non-None member are returned as-is.
    """
    origin = get_origin(target)
    if origin is Annotated:
        return widen(get_args(target)[0])
    if origin is Union or origin is types.UnionType:
        members = [arg for arg in get_args(target) if arg is not type(None)]
        if len(members) == 1:
            return widen(members[0])
    return target


# =============================================================================
# COERCION
# =============================================================================


def coerce(value: Any, target: Any) -> Any:
    """Convert ``value`` into ``target``.

    Raises:
        UnsupportedCoercionError: ``target`` is not a supported scalar kind.
        CoercionError: The value's text cannot be parsed into ``target``.
    """
    if value is None:
        return None
    target = widen(target)
    if type(value) is target:
        return value

    kind = scalar_kind(target)
    if kind is None:
        raise UnsupportedCoercionError(
            f"Unsupported coercion target: {_type_name(target)}",
            value=value,
            target=target,
        )

    text = str(value)
    try:
        return _parse(kind, target, text)
    except (ValueError, OverflowError) as e:
        raise CoercionError(
            f"Cannot convert {text!r} to {_type_name(target)}",
            value=value,
            target=target,
            cause=e,
        ) from e


def _parse(kind: ScalarKind, target: type, text: str) -> Any:
    match kind:
        case ScalarKind.BOOL:
            return text.lower() == "true" or text == "1"
        case ScalarKind.INT8 | ScalarKind.INT16 | ScalarKind.INT32 | ScalarKind.INT64:
            return target(int(text, 10))
        case ScalarKind.INT:
            return int(text, 10)
        case ScalarKind.FLOAT32 | ScalarKind.FLOAT64:
            return target(float(text))
        case ScalarKind.FLOAT:
            return float(text)
        case ScalarKind.CHAR:
            return Char(text)
        case ScalarKind.STR:
            return text


def _type_name(target: Any) -> str:
    return getattr(target, "__name__", repr(target))


__all__ = [
    "Char",
    "Float32",
    "Float64",
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    "ScalarKind",
    "coerce",
    "scalar_kind",
    "widen",
]

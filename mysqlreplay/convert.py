"""Conversion of driver values into Python targets, and nullable wrappers."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Any

_INT_RE = re.compile(r"[+-]?[0-9]+")
_FLOAT_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_SPECIAL_FLOAT_RE = re.compile(r"[+-]?(?:inf|infinity|nan)", re.IGNORECASE)

_TRUE_WORDS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_WORDS = frozenset({"0", "f", "F", "FALSE", "false", "False"})


class ConversionError(ValueError):
    """Raised when a value cannot be stored into the requested target."""


def clone_bytes(b: bytes | bytearray | None) -> bytes | None:
    """Return an independent copy of ``b``, or None for None."""
    if b is None:
        return None
    return bytes(b)


def _format_float(f: float) -> str:
    """Shortest representation, using an exponent outside [1e-4, 1e6)."""
    if math.isnan(f):
        return "NaN"
    if math.isinf(f):
        return "+Inf" if f > 0 else "-Inf"
    if f == 0:
        return "-0" if math.copysign(1.0, f) < 0 else "0"
    sign, digit_tuple, exponent = Decimal(repr(f)).normalize().as_tuple()
    digits = "".join(map(str, digit_tuple))
    point = len(digits) + exponent
    exp = point - 1
    prefix = "-" if sign else ""
    if exp < -4 or exp >= 6:
        mantissa = digits[0] + ("." + digits[1:] if len(digits) > 1 else "")
        return f"{prefix}{mantissa}e{'-' if exp < 0 else '+'}{abs(exp):02d}"
    if point <= 0:
        body = "0." + "0" * (-point) + digits
    elif point >= len(digits):
        body = digits + "0" * (point - len(digits))
    else:
        body = digits[:point] + "." + digits[point:]
    return prefix + body


def _format_time(t: datetime) -> str:
    """Format ``t`` as RFC 3339 with trimmed fractional seconds.

    Naive datetimes are treated as UTC.
    """
    text = (
        f"{t.year:04d}-{t.month:02d}-{t.day:02d}"
        f"T{t.hour:02d}:{t.minute:02d}:{t.second:02d}"
    )
    if t.microsecond:
        text += "." + f"{t.microsecond:06d}".rstrip("0")
    offset = t.utcoffset()
    if offset is None or offset == timedelta(0):
        return text + "Z"
    total = int(offset.total_seconds())
    sign = "+" if total >= 0 else "-"
    total = abs(total)
    return f"{text}{sign}{total // 3600:02d}:{total % 3600 // 60:02d}"


def as_string(src: Any) -> str:
    """Render a driver value as text."""
    if isinstance(src, str):
        return src
    if isinstance(src, (bytes, bytearray)):
        return bytes(src).decode("utf-8", errors="surrogateescape")
    if isinstance(src, bool):
        return "true" if src else "false"
    if isinstance(src, int):
        return str(src)
    if isinstance(src, float):
        return _format_float(src)
    return str(src)


def as_bytes(src: Any) -> bytes | None:
    """Render a scalar value as bytes; None when it is not a scalar."""
    if isinstance(src, bool):
        return b"true" if src else b"false"
    if isinstance(src, int):
        return str(src).encode()
    if isinstance(src, float):
        return _format_float(src).encode()
    if isinstance(src, str):
        return src.encode("utf-8", errors="surrogateescape")
    return None


def _type_name(value: Any) -> str:
    return type(value).__name__


def _unsupported(src: Any, target: Any) -> ConversionError:
    target_name = target.__name__ if isinstance(target, type) else _type_name(target)
    return ConversionError(
        f"unsupported Scan, storing driver.Value type {_type_name(src)} "
        f"into type {target_name}"
    )


def _null_error(kind: str) -> ConversionError:
    return ConversionError(f"converting NULL to {kind} is unsupported")


def _parse_error(src: Any, text: str, kind: str, reason: str) -> ConversionError:
    return ConversionError(
        f'converting driver.Value type {_type_name(src)} ("{text}") to a {kind}: {reason}'
    )


def _to_str(src: Any) -> str:
    if isinstance(src, (str, bytes, bytearray, bool, int, float)):
        return as_string(src)
    if isinstance(src, datetime):
        return _format_time(src)
    if src is None:
        raise _null_error("string")
    raise _unsupported(src, str)


def _to_bytes(src: Any, target: type) -> bytes | bytearray | None:
    if src is None:
        return None
    if isinstance(src, (bytes, bytearray)):
        data = bytes(src)
    elif isinstance(src, datetime):
        data = _format_time(src).encode()
    else:
        data = as_bytes(src)
        if data is None:
            raise _unsupported(src, target)
    return bytearray(data) if target is bytearray else data


def _to_bool(src: Any) -> bool:
    if isinstance(src, bool):
        return src
    if isinstance(src, (str, bytes, bytearray)):
        text = as_string(src)
        if text in _TRUE_WORDS:
            return True
        if text in _FALSE_WORDS:
            return False
        raise ConversionError(f'sql/driver: couldn\'t convert "{text}" into type bool')
    if isinstance(src, int):
        if src == 1:
            return True
        if src == 0:
            return False
        raise ConversionError(f"sql/driver: couldn't convert {src} into type bool")
    raise ConversionError(
        f"sql/driver: couldn't convert {src!s} ({_type_name(src)}) into type bool"
    )


def _to_int(src: Any, bits: int) -> int:
    kind = f"int{bits}"
    if src is None:
        raise _null_error(kind)
    text = as_string(src)
    if not _INT_RE.fullmatch(text):
        raise _parse_error(src, text, kind, "invalid syntax")
    value = int(text)
    limit = 1 << (bits - 1)
    if not -limit <= value < limit:
        raise _parse_error(src, text, kind, "value out of range")
    return value


def _to_float(src: Any) -> float:
    if src is None:
        raise _null_error("float64")
    if isinstance(src, float):
        return src
    text = as_string(src)
    if _SPECIAL_FLOAT_RE.fullmatch(text):
        return float(text)
    if not _FLOAT_RE.fullmatch(text):
        raise _parse_error(src, text, "float64", "invalid syntax")
    value = float(text)
    if math.isinf(value):
        raise _parse_error(src, text, "float64", "value out of range")
    return value


def _to_datetime(src: Any) -> datetime:
    if isinstance(src, datetime):
        return src
    raise _unsupported(src, datetime)


def convert_assign(src: Any, target: Any) -> Any:
    """Convert driver value ``src`` for storage into ``target``.

    ``target`` is one of ``str``, ``bytes``, ``bytearray``, ``bool``, ``int``,
    ``float``, ``datetime`` or ``object``, in which case the converted value is
    returned; or an object with a ``scan`` method, which is handed ``src`` and
    returned. Raises ConversionError when the value would lose information.
    """
    if target is str:
        return _to_str(src)
    if target is bytes or target is bytearray:
        return _to_bytes(src, target)
    if target is bool:
        return _to_bool(src)
    if target is int:
        return _to_int(src, 64)
    if target is float:
        return _to_float(src)
    if target is datetime:
        return _to_datetime(src)
    if target is object:
        if isinstance(src, (bytes, bytearray)):
            return clone_bytes(src)
        return src
    if not isinstance(target, type) and callable(getattr(target, "scan", None)):
        target.scan(src)
        return target
    raise _unsupported(src, target)


@dataclass
class NullString:
    """A string that may be NULL."""

    string: str = ""
    valid: bool = False

    def scan(self, value: Any) -> None:
        """Load ``value``; None marks the string as NULL."""
        if value is None:
            self.string, self.valid = "", False
            return
        self.string = _to_str(value)
        self.valid = True

    def value(self) -> str | None:
        """Return the string, or None when NULL."""
        return self.string if self.valid else None


@dataclass
class NullInt64:
    """A 64-bit integer that may be NULL."""

    int64: int = 0
    valid: bool = False

    def scan(self, value: Any) -> None:
        """Load ``value``; None marks the integer as NULL."""
        if value is None:
            self.int64, self.valid = 0, False
            return
        self.int64 = _to_int(value, 64)
        self.valid = True

    def value(self) -> int | None:
        """Return the integer, or None when NULL."""
        return self.int64 if self.valid else None


@dataclass
class NullInt32:
    """A 32-bit integer that may be NULL."""

    int32: int = 0
    valid: bool = False

    def scan(self, value: Any) -> None:
        """Load ``value``; None marks the integer as NULL."""
        if value is None:
            self.int32, self.valid = 0, False
            return
        self.int32 = _to_int(value, 32)
        self.valid = True

    def value(self) -> int | None:
        """Return the integer, or None when NULL."""
        return self.int32 if self.valid else None


@dataclass
class NullFloat64:
    """A float that may be NULL."""

    float64: float = 0.0
    valid: bool = False

    def scan(self, value: Any) -> None:
        """Load ``value``; None marks the float as NULL."""
        if value is None:
            self.float64, self.valid = 0.0, False
            return
        self.float64 = _to_float(value)
        self.valid = True

    def value(self) -> float | None:
        """Return the float, or None when NULL."""
        return self.float64 if self.valid else None


@dataclass
class NullBool:
    """A boolean that may be NULL."""

    boolean: bool = False
    valid: bool = False

    def scan(self, value: Any) -> None:
        """Load ``value``; None marks the boolean as NULL."""
        if value is None:
            self.boolean, self.valid = False, False
            return
        self.boolean = _to_bool(value)
        self.valid = True

    def value(self) -> bool | None:
        """Return the boolean, or None when NULL."""
        return self.boolean if self.valid else None


@dataclass
class NullTime:
    """A timestamp that may be NULL."""

    time: datetime = datetime.min
    valid: bool = False

    def scan(self, value: Any) -> None:
        """Load ``value``; None marks the timestamp as NULL."""
        if value is None:
            self.time, self.valid = datetime.min, False
            return
        self.time = _to_datetime(value)
        self.valid = True

    def value(self) -> datetime | None:
        """Return the timestamp, or None when NULL."""
        return self.time if self.valid else None
"""A wrapper around a dynamically typed value with typed accessors."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Any, Callable

import numpy as np

_UNSUPPORTED = "未兼容类型，暂时无法转换"

_INT_RE = re.compile(r"[+-]?[0-9]+")
_UINT_RE = re.compile(r"[0-9]+")
_HEX_FLOAT_RE = re.compile(r"[+-]?0[xX].*")


class InvalidTypeError(TypeError):
    """Raised when a value does not have the requested type."""

    def __init__(self, want: str, got: Any) -> None:
        self.want = want
        self.got = got
        super().__init__(
            f"ekit: invalid type, want {want}, got {type(got).__name__} ({got!r})"
        )


def _parse_int(text: str, bits: int) -> int:
    if not _INT_RE.fullmatch(text):
        raise ValueError(f"parsing {text!r}: invalid syntax")
    number = int(text)
    low, high = -(1 << (bits - 1)), (1 << (bits - 1)) - 1
    if not low <= number <= high:
        raise ValueError(f"parsing {text!r}: value out of range")
    return number


def _parse_uint(text: str, bits: int) -> int:
    if not _UINT_RE.fullmatch(text):
        raise ValueError(f"parsing {text!r}: invalid syntax")
    number = int(text)
    if number >= 1 << bits:
        raise ValueError(f"parsing {text!r}: value out of range")
    return number


def _wrap_signed(number: int, bits: int) -> int:
    modulus = 1 << bits
    number &= modulus - 1
    return number - modulus if number >= modulus >> 1 else number


def _parse_float(text: str, bits: int) -> Any:
    if not text or not text.isascii() or text != text.strip() or "_" in text:
        raise ValueError(f"parsing {text!r}: invalid syntax")
    try:
        value = float.fromhex(text) if _HEX_FLOAT_RE.fullmatch(text) else float(text)
    except (ValueError, OverflowError) as exc:
        raise ValueError(f"parsing {text!r}: invalid syntax") from exc
    explicit_inf = text.lstrip("+-").lower().startswith("inf")
    if bits == 32:
        with np.errstate(over="ignore"):
            narrowed = np.float32(value)
        if math.isinf(narrowed) and not explicit_inf:
            raise ValueError(f"parsing {text!r}: value out of range")
        return narrowed
    if math.isinf(value) and not explicit_inf:
        raise ValueError(f"parsing {text!r}: value out of range")
    return value


def _format_float(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    return f"{value:.10f}"


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _instance_of(*types: type) -> Callable[[Any], bool]:
    return lambda value: isinstance(value, types)


@dataclass(frozen=True)
class AnyValue:
    """A value of any type, or the error that prevented obtaining it.

    The plain accessors (``int``, ``int8``...) require the exact type; the
    ``as_*`` accessors also accept a decimal string. Sized integer and
    ``float32`` types are numpy scalars; ``uint`` is a ``numpy.uint64``.
    """

    val: Any = None
    err: Exception | None = None

    def _get(self, want: str, check: Callable[[Any], bool]) -> Any:
        if self.err is not None:
            raise self.err
        if not check(self.val):
            raise InvalidTypeError(want, self.val)
        return self.val

    def _convert(
        self,
        want: str,
        check: Callable[[Any], bool],
        parse: Callable[[str], Any],
    ) -> Any:
        if self.err is not None:
            raise self.err
        if check(self.val):
            return self.val
        if isinstance(self.val, str):
            return parse(self.val)
        raise InvalidTypeError(want, self.val)

    @staticmethod
    def _or_default(getter: Callable[[], Any], default: Any) -> Any:
        try:
            return getter()
        except Exception:
            return default

    def int(self):
        """Return the value if it is an int."""
        return self._get("int", _is_int)

    def as_int(self):
        """Return the value as an int, parsing strings."""
        return self._convert("int", _is_int, lambda s: _parse_int(s, 64))

    def int_or_default(self, default):
        return self._or_default(self.int, default)

    def uint(self):
        """Return the value if it is an unsigned machine integer."""
        return self._get("uint", _instance_of(np.uint64))

    def as_uint(self):
        return self._convert(
            "uint", _instance_of(np.uint64), lambda s: np.uint64(_parse_uint(s, 64))
        )

    def uint_or_default(self, default):
        return self._or_default(self.uint, default)

    def int8(self):
        return self._get("int", _instance_of(np.int8))

    def as_int8(self):
        # Strings are parsed as 64-bit and then truncated to 8 bits.
        return self._convert(
            "int8",
            _instance_of(np.int8),
            lambda s: np.int8(_wrap_signed(_parse_int(s, 64), 8)),
        )

    def int8_or_default(self, default):
        return self._or_default(self.int8, default)

    def uint8(self):
        return self._get("uint8", _instance_of(np.uint8))

    def as_uint8(self):
        return self._convert(
            "uint8", _instance_of(np.uint8), lambda s: np.uint8(_parse_uint(s, 8))
        )

    def uint8_or_default(self, default):
        return self._or_default(self.uint8, default)

    def int16(self):
        return self._get("int16", _instance_of(np.int16))

    def as_int16(self):
        return self._convert(
            "int16", _instance_of(np.int16), lambda s: np.int16(_parse_int(s, 16))
        )

    def int16_or_default(self, default):
        return self._or_default(self.int16, default)

    def uint16(self):
        return self._get("uint16", _instance_of(np.uint16))

    def as_uint16(self):
        return self._convert(
            "uint16", _instance_of(np.uint16), lambda s: np.uint16(_parse_uint(s, 16))
        )

    def uint16_or_default(self, default):
        return self._or_default(self.uint16, default)

    def int32(self):
        return self._get("int32", _instance_of(np.int32))

    def as_int32(self):
        return self._convert(
            "int32", _instance_of(np.int32), lambda s: np.int32(_parse_int(s, 32))
        )

    def int32_or_default(self, default):
        return self._or_default(self.int32, default)

    def uint32(self):
        return self._get("uint32", _instance_of(np.uint32))

    def as_uint32(self):
        return self._convert(
            "uint32", _instance_of(np.uint32), lambda s: np.uint32(_parse_uint(s, 32))
        )

    def uint32_or_default(self, default):
        return self._or_default(self.uint32, default)

    def int64(self):
        return self._get("int64", _instance_of(np.int64))

    def as_int64(self):
        return self._convert(
            "int64", _instance_of(np.int64), lambda s: np.int64(_parse_int(s, 64))
        )

    def int64_or_default(self, default):
        return self._or_default(self.int64, default)

    def uint64(self):
        return self._get("uint64", _instance_of(np.uint64))

    def as_uint64(self):
        return self._convert(
            "uint64", _instance_of(np.uint64), lambda s: np.uint64(_parse_uint(s, 64))
        )

    def uint64_or_default(self, default):
        return self._or_default(self.uint64, default)

    def float32(self):
        return self._get("float32", _instance_of(np.float32))

    def as_float32(self):
        return self._convert(
            "float32", _instance_of(np.float32), lambda s: _parse_float(s, 32)
        )

    def float32_or_default(self, default):
        return self._or_default(self.float32, default)

    def float64(self):
        return self._get("float64", _instance_of(float))

    def as_float64(self):
        return self._convert(
            "float64", _instance_of(float), lambda s: _parse_float(s, 64)
        )

    def float64_or_default(self, default):
        return self._or_default(self.float64, default)

    def string(self):
        return self._get("string", _instance_of(str))

    def as_string(self):
        """Render strings, integers, floats and byte strings as text."""
        if self.err is not None:
            raise self.err
        value = self.val
        if isinstance(value, (bool, np.bool_)):
            raise TypeError(_UNSUPPORTED)
        if isinstance(value, str):
            return str(value)
        if isinstance(value, (np.unsignedinteger, np.signedinteger)) or _is_int(value):
            return str(int(value))
        if isinstance(value, np.float32):
            return _format_float(float(value))
        if isinstance(value, float):
            return _format_float(value)
        if isinstance(value, (bytes, bytearray, memoryview)):
            return bytes(value).decode("utf-8", "surrogateescape")
        if isinstance(value, np.ndarray) and value.dtype == np.uint8:
            return value.tobytes().decode("utf-8", "surrogateescape")
        if isinstance(value, (list, tuple, np.ndarray)):
            raise InvalidTypeError("[]byte", value)
        raise TypeError(_UNSUPPORTED)

    def string_or_default(self, default):
        return self._or_default(self.string, default)

    def bytes(self):
        return self._get("[]byte", _instance_of(bytes, bytearray))

    def as_bytes(self):
        return self._convert(
            "[]byte",
            _instance_of(bytes, bytearray),
            lambda s: s.encode("utf-8", "surrogateescape"),
        )

    def bytes_or_default(self, default):
        return self._or_default(self.bytes, default)

    def bool(self):
        return bool(self._get("bool", _instance_of(bool, np.bool_)))

    def bool_or_default(self, default):
        return self._or_default(self.bool, default)
"""Nullable values that treat the zero value as missing."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Generic, TypeVar

from .stringx import to_string

T = TypeVar("T")


@dataclass(frozen=True)
class Null(Generic[T]):
    """A value together with a flag telling whether it is present."""

    value: T
    valid: bool


def new_null_string(val: str) -> Null[str]:
    """Wrap text; the empty string is not valid."""
    return Null(val, val != "")


def new_null_int64(val: int) -> Null[int]:
    """Wrap an integer; zero is not valid."""
    return Null(val, val != 0)


def new_null_float64(val: float) -> Null[float]:
    """Wrap a float; zero is not valid."""
    return Null(val, val != 0)


def new_null_bool(val: bool) -> Null[bool]:
    """Wrap a boolean; False is not valid."""
    return Null(val, bool(val))


def _is_zero_time(val: datetime | None) -> bool:
    if val is None:
        return True
    naive = val.replace(tzinfo=None)
    offset = val.utcoffset()
    if offset:
        try:
            naive = naive - offset
        except OverflowError:
            return False
    return naive == datetime.min


def new_null_time(val: datetime | None) -> Null[datetime | None]:
    """Wrap a timestamp; the zero instant (year 1, UTC) or None is not valid."""
    return Null(val, not _is_zero_time(val))


def new_null_bytes(val: bytes | bytearray | memoryview) -> Null[str]:
    """Wrap bytes as text; an empty byte string is not valid."""
    return Null(to_string(val), len(val) > 0)
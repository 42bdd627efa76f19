"""Three-way comparison helpers."""

from __future__ import annotations

from typing import Any, Callable, TypeVar

T = TypeVar("T")

Comparator = Callable[[T, T], int]
"""A function returning -1 when src < dst, 0 when equal and 1 when src > dst."""


def compare_real_number(src: Any, dst: Any) -> int:
    """Compare two real numbers, returning -1, 0 or 1."""
    if src < dst:
        return -1
    if src == dst:
        return 0
    return 1
"""Conversions between text and its UTF-8 byte form."""

from __future__ import annotations


def to_bytes(val: str) -> bytes:
    """Encode text as UTF-8, keeping undecodable bytes intact."""
    return val.encode("utf-8", "surrogateescape")


def to_string(val: bytes | bytearray | memoryview) -> str:
    """Decode UTF-8 bytes to text, keeping invalid bytes recoverable."""
    return bytes(val).decode("utf-8", "surrogateescape")
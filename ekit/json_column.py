"""A column whose value is stored as a JSON document."""

from __future__ import annotations

import base64
import dataclasses
import json
from dataclasses import dataclass, field
from typing import Any, Callable, Generic, TypeVar

T = TypeVar("T")

_ESCAPES = str.maketrans(
    {
        "<": "\\u003c",
        ">": "\\u003e",
        "&": "\\u0026",
        "\u2028": "\\u2028",
        "\u2029": "\\u2029",
    }
)


def _map_key(key: Any) -> str:
    if isinstance(key, str):
        return key
    if isinstance(key, int) and not isinstance(key, bool):
        return str(key)
    raise TypeError(f"json: unsupported map key type {type(key).__name__}")


def _prepare(obj: Any) -> Any:
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return {f.name: _prepare(getattr(obj, f.name)) for f in dataclasses.fields(obj)}
    if isinstance(obj, dict):
        items = sorted(((_map_key(k), v) for k, v in obj.items()), key=lambda kv: kv[0])
        return {k: _prepare(v) for k, v in items}
    if isinstance(obj, (list, tuple)):
        return [_prepare(item) for item in obj]
    if isinstance(obj, (bytes, bytearray, memoryview)):
        return base64.b64encode(bytes(obj)).decode("ascii")
    return obj


def _encode_json(obj: Any) -> bytes:
    """Encode compactly with sorted map keys and HTML-safe escaping."""
    text = json.dumps(
        _prepare(obj), ensure_ascii=False, separators=(",", ":"), allow_nan=False
    )
    return text.translate(_ESCAPES).encode("utf-8", "surrogateescape")


@dataclass
class JsonColumn(Generic[T]):
    """A value stored as JSON; ``valid`` False means SQL NULL.

    ``decoder``, when given, turns the decoded JSON into the value type.
    """

    val: Any = None
    valid: bool = False
    decoder: Callable[[Any], T] | None = field(default=None, compare=False, repr=False)

    def value(self) -> bytes | None:
        """Return the JSON document, or None when the column is not valid."""
        if not self.valid:
            return None
        return _encode_json(self.val)

    def scan(self, src: Any) -> None:
        """Decode ``src`` (bytes, str or None) into ``val``."""
        if src is None:
            return
        if isinstance(src, (bytes, bytearray, memoryview)):
            obj = json.loads(bytes(src))
        elif isinstance(src, str):
            obj = json.loads(src)
        else:
            raise TypeError(f"ekit：JsonColumn.Scan 不支持 src 类型 {src}")
        self.val = self.decoder(obj) if self.decoder is not None else obj
        self.valid = True
"""A column whose value is stored encrypted with AES-GCM."""

from __future__ import annotations

import dataclasses
import json
import os
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

import numpy as np
from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from .json_column import _encode_json

T = TypeVar("T")

_NONCE_SIZE = 12
_KEY_SIZES = (16, 24, 32)

# Fixed-width big-endian encodings; every other kind goes through JSON.
_FIXED_WIDTH: dict[type, str] = {
    int: ">i8",
    float: ">f8",
    np.int8: ">i1",
    np.int16: ">i2",
    np.int32: ">i4",
    np.int64: ">i8",
    np.uint8: ">u1",
    np.uint16: ">u2",
    np.uint32: ">u4",
    np.uint64: ">u8",
    np.float32: ">f4",
    np.float64: ">f8",
}


@dataclass
class EncryptColumn(Generic[T]):
    """A value encrypted with AES-GCM under a 16, 24 or 32 byte key.

    ``kind`` is the value type and decides the encoding: text and bytes are
    stored as is, numbers as big-endian fixed-width binary (``int`` as 64-bit),
    anything else as JSON. It defaults to the type of ``val``.
    """

    val: Any = None
    valid: bool = False
    key: str | bytes = ""
    kind: type | None = None

    def __post_init__(self) -> None:
        if self.kind is None and self.val is not None:
            self.kind = type(self.val)

    def value(self) -> bytes:
        """Return nonce followed by the sealed, encoded value."""
        if not self.valid:
            raise ValueError("ekit EncryptColumn无效")
        if len(self._key_bytes()) not in _KEY_SIZES:
            raise ValueError("ekit EncryptColumn仅支持 16/24/32 byte 的key")
        return self._encrypt(self._serialize())

    def scan(self, src: Any) -> None:
        """Decrypt ``src`` (bytes or str) and decode it into ``val``."""
        if isinstance(src, (bytes, bytearray, memoryview)):
            data = bytes(src)
        elif isinstance(src, str):
            data = src.encode("utf-8", "surrogateescape")
        else:
            raise TypeError(f"ekit：EncryptColumn.Scan 不支持 src 类型 {src}")
        plain = self._decrypt(data)
        try:
            self.val = self._deserialize(plain)
        except Exception:
            self.valid = False
            raise
        self.valid = True

    def _key_bytes(self) -> bytes:
        if isinstance(self.key, str):
            return self.key.encode("utf-8")
        return bytes(self.key)

    def _kind(self) -> type:
        return self.kind if self.kind is not None else type(self.val)

    def _serialize(self) -> bytes:
        kind = self._kind()
        if kind is str:
            return self.val.encode("utf-8", "surrogateescape")
        if kind in (bytes, bytearray, memoryview):
            return bytes(self.val)
        code = _FIXED_WIDTH.get(kind)
        if code is not None:
            return np.asarray(self.val, dtype=np.dtype(code)).tobytes()
        return _encode_json(self.val)

    def _deserialize(self, data: bytes) -> Any:
        kind = self._kind()
        if kind is str:
            return data.decode("utf-8", "surrogateescape")
        if kind is bytearray:
            return bytearray(data)
        if kind in (bytes, memoryview):
            return data
        code = _FIXED_WIDTH.get(kind)
        if code is not None:
            dtype = np.dtype(code)
            if len(data) < dtype.itemsize:
                raise ValueError("ekit: EncryptColumn unexpected EOF")
            return kind(np.frombuffer(data, dtype=dtype, count=1)[0])
        obj = json.loads(data)
        if dataclasses.is_dataclass(kind) and isinstance(kind, type) and isinstance(obj, dict):
            names = {f.name for f in dataclasses.fields(kind) if f.init}
            return kind(**{k: v for k, v in obj.items() if k in names})
        return obj

    def _encrypt(self, data: bytes) -> bytes:
        aes = AESGCM(self._key_bytes())
        nonce = os.urandom(_NONCE_SIZE)
        return nonce + aes.encrypt(nonce, data, None)

    def _decrypt(self, data: bytes) -> bytes:
        aes = AESGCM(self._key_bytes())
        if len(data) < _NONCE_SIZE:
            raise ValueError("ekit: EncryptColumn ciphertext too short")
        nonce, sealed = data[:_NONCE_SIZE], data[_NONCE_SIZE:]
        try:
            return aes.decrypt(nonce, sealed, None)
        except InvalidTag as exc:
            raise ValueError("ekit: EncryptColumn message authentication failed") from exc
"""Distributable bundle: metadata plus opaque byte blobs.

The ``file`` blob is an encoded cartridge. On disk a bundle is canonical JSON
with byte fields base64-encoded, so the same bundle always has the same bytes.
"""
from __future__ import annotations

import base64
import binascii
import json
from dataclasses import asdict, dataclass, fields

CANONICAL_JSON_KW = {"sort_keys": True, "separators": (",", ":"), "ensure_ascii": False}

_BLOB_FIELDS = ("image", "screenshot", "file")


@dataclass(frozen=True)
class Bundle:
    name: str
    id: str
    version: str
    description: str
    image: bytes
    screenshot: bytes
    age_rating: int
    special_notes: str
    file: bytes

    def to_bytes(self) -> bytes:
        obj = asdict(self)
        for key in _BLOB_FIELDS:
            obj[key] = base64.b64encode(obj[key]).decode("ascii")
        return json.dumps(obj, **CANONICAL_JSON_KW).encode("utf-8")

    @classmethod
    def from_bytes(cls, data: bytes) -> "Bundle":
        """Parse canonical bundle bytes; raises ``ValueError`` on malformed input."""
        obj = json.loads(data.decode("utf-8"))
        if not isinstance(obj, dict):
            raise ValueError("bundle must be a JSON object")
        expected = {f.name for f in fields(cls)}
        if set(obj) != expected:
            raise ValueError(f"bundle fields {sorted(obj)} do not match {sorted(expected)}")
        for key in _BLOB_FIELDS:
            try:
                obj[key] = base64.b64decode(obj[key], validate=True)
            except (binascii.Error, TypeError) as e:
                raise ValueError(f"bundle field {key} is not base64: {e}") from e
        return cls(**obj)

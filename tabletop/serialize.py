"""Canonical JSON encoding, content digests, and seed derivation."""

from __future__ import annotations

import dataclasses
import hashlib
import json
from enum import Enum
from pathlib import Path
from typing import Any, Mapping

import numpy as np


def to_primitive(value: Any) -> Any:
    """Reduce `value` to dicts, lists, and JSON scalars.

    Dataclasses are walked field by field, so a class may call this on itself
    from its own `to_dict` without recursing forever.
    """
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, np.generic):
        return value.item()
    if isinstance(value, np.ndarray):
        return value.tolist()
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {item.name: to_primitive(getattr(value, item.name)) for item in dataclasses.fields(value)}
    if isinstance(value, Mapping):
        return {str(key): to_primitive(item) for key, item in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [to_primitive(item) for item in value]
    if isinstance(value, Path):
        return value.as_posix()
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        return to_primitive(to_dict())
    raise TypeError(f"Cannot encode {type(value).__name__} as JSON.")


def canonical_json(value: Any, *, indent: int | None = None) -> str:
    """Sorted-key ASCII JSON; compact unless `indent` is given."""
    return json.dumps(
        to_primitive(value),
        sort_keys=True,
        ensure_ascii=True,
        separators=(",", ":") if indent is None else None,
        indent=indent,
    )


def canonical_digest(value: Any) -> str:
    return hashlib.sha256(canonical_json(value).encode("utf-8")).hexdigest()


def derive_seed(*parts: Any) -> int:
    """Derive an unsigned 64-bit seed from labelled parts, e.g. `(seed, "refill", 3)`."""
    material = ":".join(str(part) for part in parts).encode("utf-8")
    return int.from_bytes(hashlib.sha256(material).digest()[:8], byteorder="big", signed=False)

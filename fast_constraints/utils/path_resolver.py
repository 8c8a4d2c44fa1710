from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from typing import Any

_TOKEN_RE = re.compile(r"([^.\[\]]+)|\[([^\]]*)\]")


def append_path(base: str, sub: str | int) -> str:
    """
    Append a sub-path to a property path.

    Supported syntax:
      - append_path("", "name")             -> "name"
      - append_path("address", "street")    -> "address.street"
      - append_path("tags", "[0]")          -> "tags[0]"
      - append_path("tags", 0)              -> "tags[0]"
      - append_path("address", "")          -> "address"
    """
    if isinstance(sub, int):
        sub = f"[{sub}]"
    if not sub:
        return base
    if not base:
        return sub
    if sub.startswith("["):
        return base + sub
    return f"{base}.{sub}"


def split_path(path: str) -> tuple[str, ...]:
    """
    Split a property path into its location parts.

    "address.street" -> ("address", "street"), "tags[0].name" -> ("tags", "0", "name").
    An empty path is the object itself and yields an empty tuple.
    """
    if not path:
        return tuple()
    return tuple(name or index for name, index in _TOKEN_RE.findall(path))


def read_path(data: Any, path: str) -> Any:
    """
    Read the value a property path points at.

    Mappings are read by key, sequences by index, anything else by attribute.
    Raises LookupError when any part of the path is missing.
    """
    current = data
    for part in split_path(path):
        if isinstance(current, Mapping):
            if part in current:
                current = current[part]
                continue
            raise LookupError(f"Key `{part}` not found while reading `{path}`.")
        if isinstance(current, Sequence) and not isinstance(current, (str, bytes)) and part.lstrip("-").isdigit():
            try:
                current = current[int(part)]
            except IndexError as exc:
                raise LookupError(f"Index `{part}` out of range while reading `{path}`.") from exc
            continue
        if hasattr(current, part):
            current = getattr(current, part)
            continue
        raise LookupError(f"Property `{part}` not found while reading `{path}`.")
    return current

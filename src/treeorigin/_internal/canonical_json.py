"""Centralized canonical JSON serialization.

Used for every JSON document treeorigin writes (configs, check reports) so
that the same config always produces the same bytes.
"""

import json
from typing import Any


def canonical_dumps(obj: Any, indent: int | None = None) -> str:
    """
    Canonical JSON serialization.

    Rules:
    - UTF-8 (no ASCII escaping)
    - Sorted keys
    - Stable separators when not indented
    - Lists must already be in a deterministic order

    Args:
        obj: Python object to serialize
        indent: Optional indentation for human-readable output

    Returns:
        Canonical JSON string
    """
    separators = (",", ":") if indent is None else (",", ": ")
    return json.dumps(
        obj,
        sort_keys=True,
        separators=separators,
        indent=indent,
        ensure_ascii=False
    )

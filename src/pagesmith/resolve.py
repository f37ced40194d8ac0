"""Value helpers: dot-path lookup, truthiness, and text conversion.

All three are total over JSON-like values. Missing data is never an error
during rendering; it degrades to empty output, which is what optional page
fields rely on.

Truthiness:
    Falsy: None, False, 0, 0.0, NaN, "", empty sequences.
    Everything else is truthy, including every mapping (even an empty one).
"""

from __future__ import annotations

import json
import math
from collections import ChainMap
from collections.abc import Mapping, Sequence
from typing import Any

from pagesmith._types import Context

# Names layered over the enclosing context inside {{#each}}.
THIS = "this"
INDEX = "@index"
FIRST = "@first"
LAST = "@last"

_LENGTH = "length"


def is_sequence(value: Any) -> bool:
    """True for ordered sequences that ``each`` can iterate (not strings)."""
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def _lookup(container: Any, key: str) -> Any:
    if isinstance(container, Mapping):
        return container.get(key)
    if isinstance(container, (str, Sequence)) and not isinstance(container, (bytes, bytearray)):
        if key == _LENGTH:
            return len(container)
        if key.isdigit():
            index = int(key)
            return container[index] if index < len(container) else None
    return None


def resolve_path(context: Context, path: str) -> Any:
    """Resolve a dot path against a context.

    Lookup stops at the first None value and yields "" from then on.

    Example:
        >>> resolve_path({"a": {"b": "x"}}, "a.b")
        'x'
        >>> resolve_path({"a": None}, "a.b.c")
        ''
        >>> resolve_path({"xs": [1, 2]}, "xs.length")
        2
    """
    value: Any = context
    for segment in path.split("."):
        if value is None:
            return ""
        value = _lookup(value, segment)
    return value


def is_truthy(value: Any) -> bool:
    if value is None or value is False:
        return False
    if isinstance(value, float) and math.isnan(value):
        return False
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, Mapping):
        return True
    if isinstance(value, (str, Sequence)):
        return len(value) > 0
    return True


def stringify(value: Any) -> str:
    """Convert a resolved value to the text written into the page."""
    if value is None:
        return ""
    if value is True:
        return "true"
    if value is False:
        return "false"
    if isinstance(value, str):
        return value
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer():
            return str(int(value))
        return repr(value)
    if isinstance(value, Mapping):
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False, default=str)
    if is_sequence(value):
        return ",".join(stringify(item) for item in value)
    return str(value)


def iteration_context(
    context: Context, item: Any, index: int, length: int
) -> ChainMap[str, Any]:
    """Layer the per-item bindings of ``{{#each}}`` over ``context``."""
    return ChainMap(
        {
            THIS: item,
            INDEX: index,
            FIRST: index == 0,
            LAST: index == length - 1,
        },
        context,  # type: ignore[arg-type]
    )

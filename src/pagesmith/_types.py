"""Shared types for pagesmith.

Tags are recognized by the lexer and described by small frozen records;
nothing here holds render state.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, TypeAlias

# JSON-like values flowing through a render context.
Value: TypeAlias = (
    None | bool | int | float | str | Sequence[Any] | Mapping[str, Any]
)
Context: TypeAlias = Mapping[str, Any]


class BlockKind(Enum):
    """Paired block constructs. The value is the keyword used in tags."""

    EACH = "each"
    IF = "if"
    UNLESS = "unless"

    @property
    def close_tag(self) -> str:
        return "{{/" + self.value + "}}"


class TagType(Enum):
    """Kinds of single tags the renderer dispatches on."""

    PARTIAL = "partial"
    BLOCK = "block"
    VARIABLE = "variable"


@dataclass(frozen=True, slots=True)
class Tag:
    """A recognized tag starting at ``start`` and spanning ``length`` chars.

    Attributes:
        type: What the tag does
        argument: Partial name or dot path
        start: Offset of the opening ``{{`` in the source
        length: Number of characters consumed by the tag itself
        block: Block kind for BLOCK tags, otherwise None
    """

    type: TagType
    argument: str
    start: int
    length: int
    block: BlockKind | None = None

    @property
    def end(self) -> int:
        return self.start + self.length

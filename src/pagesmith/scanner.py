"""Block scanning: find where a block ends and where an ``if`` splits.

Close tags are keyed by kind (``{{/each}}``, ``{{/if}}``, ``{{/unless}}``)
but the scanner does not pair them by kind. Any opener increments the
nesting depth and any closer decrements it, so blocks of different kinds
nest freely inside each other.

Leniency:
    An opener with no matching closer is not an error. The block body runs
    to the end of the available text and the remainder is empty, so a
    broken page still renders instead of aborting the whole build.
    ``BlockSpan.closed`` reports whether a closer was actually found.

Both passes are linear in the length of the text they scan.
"""

from __future__ import annotations

from dataclasses import dataclass

from pagesmith._types import BlockKind
from pagesmith.lexer import TAG_OPEN, match_close_tag, match_else, match_open_marker


@dataclass(frozen=True, slots=True)
class BlockSpan:
    """Offsets of a block body and of the text following its close tag.

    Attributes:
        source: The text the offsets refer to
        body_start: First character after the opening tag
        body_end: Offset of the matching close tag (or the scan limit)
        rest_start: First character after the close tag
        end: The scan limit
        closed: False when no matching close tag was found
    """

    source: str
    body_start: int
    body_end: int
    rest_start: int
    end: int
    closed: bool = True

    @property
    def body(self) -> str:
        return self.source[self.body_start : self.body_end]

    @property
    def rest(self) -> str:
        return self.source[self.rest_start : self.end]


def find_block_end(source: str, start: int, end: int | None = None) -> BlockSpan:
    """Find the close tag matching an opener that ends just before ``start``."""
    if end is None:
        end = len(source)
    depth = 1
    pos = source.find(TAG_OPEN, start, end)
    while pos != -1:
        opened = match_open_marker(source, pos, end)
        if opened is not None:
            depth += 1
            pos = source.find(TAG_OPEN, opened[1], end)
            continue
        closed = match_close_tag(source, pos, end)
        if closed is not None:
            depth -= 1
            if depth == 0:
                return BlockSpan(source, start, pos, closed[1], end)
            pos = source.find(TAG_OPEN, closed[1], end)
            continue
        pos = source.find(TAG_OPEN, pos + 2, end)
    return BlockSpan(source, start, end, end, end, closed=False)


def find_else(source: str, start: int, end: int) -> int | None:
    """Return the offset of the first depth-0 ``{{else}}`` in a block body."""
    depth = 0
    pos = source.find(TAG_OPEN, start, end)
    while pos != -1:
        opened = match_open_marker(source, pos, end)
        if opened is not None:
            depth += 1
            pos = source.find(TAG_OPEN, opened[1], end)
            continue
        closed = match_close_tag(source, pos, end)
        if closed is not None:
            depth -= 1
            pos = source.find(TAG_OPEN, closed[1], end)
            continue
        if depth == 0 and match_else(source, pos, end) is not None:
            return pos
        pos = source.find(TAG_OPEN, pos + 2, end)
    return None


def scan(content: str, kind: BlockKind | str) -> tuple[str, str]:
    """Split the text after a ``kind`` opener into ``(body, rest)``.

    Example:
        >>> scan("a{{#if y}}b{{/if}}c{{/each}}tail", "each")
        ('a{{#if y}}b{{/if}}c', 'tail')
    """
    # Closers are kind-agnostic, so the kind is only checked, not used.
    _ = BlockKind(kind)  # ValueError for anything that is not a block keyword
    span = find_block_end(content, 0)
    return span.body, span.rest


def split_else(body: str) -> tuple[str, str | None]:
    """Split an ``if`` body into its true branch and optional else branch.

    Example:
        >>> split_else("{{#if a}}x{{else}}y{{/if}}{{else}}z")
        ('{{#if a}}x{{else}}y{{/if}}', 'z')
    """
    pos = find_else(body, 0, len(body))
    if pos is None:
        return body, None
    return body[:pos], body[match_else(body, pos, len(body)) :]

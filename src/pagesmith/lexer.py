"""Tag recognition for pagesmith templates.

The grammar is small and fixed, so tags are recognized by prefix matching
at a cursor position instead of with regular expressions:

    {{> name}}              partial reference
    {{#each path}}          block openers (also ``if`` and ``unless``)
    {{/each}}               block closers
    {{else}}                else marker inside an ``if`` body
    {{path.to.value}}       variable

Paths are made of ASCII letters, digits, ``_``, ``.`` and ``@``.

Every function takes ``(source, pos, end)`` and never looks at characters
at or beyond ``end``, so callers can work on spans of a larger source
without slicing it.
"""

from __future__ import annotations

import string

from pagesmith._types import BlockKind, Tag, TagType

TAG_OPEN = "{{"
TAG_CLOSE = "}}"
ELSE_TAG = "{{else}}"

_PARTIAL_PREFIX = "{{>"
_BLOCK_PREFIX = "{{#"
_CLOSE_PREFIX = "{{/"

IDENT_CHARS: frozenset[str] = frozenset(string.ascii_letters + string.digits + "_")
# Dot paths, including the @-prefixed names bound inside {{#each}}.
PATH_CHARS: frozenset[str] = IDENT_CHARS | {".", "@"}

# Dispatch order for block openers; first match wins.
BLOCK_KINDS: tuple[BlockKind, ...] = (BlockKind.EACH, BlockKind.IF, BlockKind.UNLESS)


def _run(source: str, pos: int, end: int, chars: frozenset[str]) -> int:
    """Return the offset just past the run of ``chars`` starting at ``pos``."""
    while pos < end and source[pos] in chars:
        pos += 1
    return pos


def _skip_space(source: str, pos: int, end: int) -> int:
    while pos < end and source[pos].isspace():
        pos += 1
    return pos


def _closes_at(source: str, pos: int, end: int) -> bool:
    return source.startswith(TAG_CLOSE, pos, end)


def match_partial(source: str, pos: int, end: int) -> Tag | None:
    """Match ``{{> name}}``; whitespace around the name is optional."""
    if not source.startswith(_PARTIAL_PREFIX, pos, end):
        return None
    name_start = _skip_space(source, pos + 3, end)
    name_end = _run(source, name_start, end, IDENT_CHARS)
    if name_end == name_start:
        return None
    cursor = _skip_space(source, name_end, end)
    if not _closes_at(source, cursor, end):
        return None
    return Tag(
        TagType.PARTIAL,
        source[name_start:name_end],
        start=pos,
        length=cursor + 2 - pos,
    )


def match_block_open(source: str, pos: int, end: int, kind: BlockKind) -> Tag | None:
    """Match a complete ``{{#kind path}}`` opener."""
    keyword_end = pos + 3 + len(kind.value)
    if not source.startswith(_BLOCK_PREFIX + kind.value, pos, end):
        return None
    path_start = _skip_space(source, keyword_end, end)
    if path_start == keyword_end:
        return None
    path_end = _run(source, path_start, end, PATH_CHARS)
    if path_end == path_start or not _closes_at(source, path_end, end):
        return None
    return Tag(
        TagType.BLOCK,
        source[path_start:path_end],
        start=pos,
        length=path_end + 2 - pos,
        block=kind,
    )


def match_variable(source: str, pos: int, end: int) -> Tag | None:
    """Match ``{{path}}`` where path may contain ``.`` and ``@``."""
    if not source.startswith(TAG_OPEN, pos, end):
        return None
    path_end = _run(source, pos + 2, end, PATH_CHARS)
    if path_end == pos + 2 or not _closes_at(source, path_end, end):
        return None
    return Tag(
        TagType.VARIABLE,
        source[pos + 2 : path_end],
        start=pos,
        length=path_end + 2 - pos,
    )


def match_tag(source: str, pos: int, end: int | None = None) -> Tag | None:
    """Classify the tag at ``pos`` or return None when it is not one.

    Precedence: partial, each, if, unless, variable.
    """
    if end is None:
        end = len(source)
    tag = match_partial(source, pos, end)
    if tag is not None:
        return tag
    if source.startswith(_BLOCK_PREFIX, pos, end):
        for kind in BLOCK_KINDS:
            tag = match_block_open(source, pos, end, kind)
            if tag is not None:
                return tag
    return match_variable(source, pos, end)


def match_open_marker(source: str, pos: int, end: int) -> tuple[BlockKind, int] | None:
    """Match the start of any block opener: ``{{#kind`` plus one whitespace.

    Used for nesting depth, so the rest of the opener is not validated.
    Returns the kind and the offset just past the marker.
    """
    if not source.startswith(_BLOCK_PREFIX, pos, end):
        return None
    for kind in BLOCK_KINDS:
        keyword_end = pos + 3 + len(kind.value)
        if (
            source.startswith(kind.value, pos + 3, end)
            and keyword_end < end
            and source[keyword_end].isspace()
        ):
            return kind, keyword_end + 1
    return None


def match_close_tag(source: str, pos: int, end: int) -> tuple[BlockKind, int] | None:
    """Match ``{{/each}}``, ``{{/if}}`` or ``{{/unless}}``.

    Returns the kind and the offset just past the tag.
    """
    if not source.startswith(_CLOSE_PREFIX, pos, end):
        return None
    for kind in BLOCK_KINDS:
        tag = kind.close_tag
        if source.startswith(tag, pos, end):
            return kind, pos + len(tag)
    return None


def match_else(source: str, pos: int, end: int) -> int | None:
    """Return the offset past ``{{else}}`` at ``pos``, or None."""
    if source.startswith(ELSE_TAG, pos, end):
        return pos + len(ELSE_TAG)
    return None

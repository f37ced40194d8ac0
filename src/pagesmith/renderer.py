"""Recursive template renderer.

Walks a template left to right, copying literal text verbatim and
dispatching on each tag:

    {{> name}}          render partial ``name`` with the current context
    {{#each path}}      render the body once per element of a sequence
    {{#if path}}        render the true branch or the ``{{else}}`` branch
    {{#unless path}}    render the body when the value is falsy
    {{path}}            write the resolved value (nothing for None/missing)

Anything else starting with ``{{`` is written out literally.

Design:
    Templates are not parsed into a tree. Every call renders a span
    ``[start, end)`` of a source string and returns its output; block
    bodies are sub-spans of the same source, found by the block scanner.
    Output is built with list appends and joined once per span.

Purity:
    Rendering depends only on (template, context, partials). The context
    and the partial registry are never modified; ``each`` layers its
    bindings over the context with a ChainMap. Problems the renderer can
    recover from are collected as diagnostics instead of raised, so a broken
    page never takes the whole build down with it.

No output escaping is performed. Templates and data are written by the
site's own maintainers and the output is raw HTML.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from difflib import get_close_matches
from types import MappingProxyType

from pagesmith._types import BlockKind, Context, Tag, TagType
from pagesmith.environment.exceptions import Diagnostic, ErrorCode
from pagesmith.lexer import ELSE_TAG, TAG_OPEN, match_tag
from pagesmith.render_context import (
    DEFAULT_MAX_PARTIAL_DEPTH,
    ROOT_TEMPLATE_NAME,
    RenderContext,
)
from pagesmith.resolve import (
    is_sequence,
    is_truthy,
    iteration_context,
    resolve_path,
    stringify,
)
from pagesmith.scanner import BlockSpan, find_block_end, find_else

logger = logging.getLogger(__name__)

Partials = Mapping[str, str]

_NO_PARTIALS: Partials = MappingProxyType({})


@dataclass(frozen=True, slots=True)
class Rendered:
    """Rendered text plus the diagnostics collected while producing it."""

    text: str
    diagnostics: tuple[Diagnostic, ...] = ()

    def __str__(self) -> str:
        return self.text


def render(
    template: str,
    context: Context,
    partials: Partials | None = None,
    *,
    name: str | None = None,
    max_partial_depth: int = DEFAULT_MAX_PARTIAL_DEPTH,
) -> str:
    """Render ``template`` and return the text.

    Diagnostics are written to the ``pagesmith.renderer`` logger. Use
    `render_with_diagnostics` to handle them yourself.

    Example:
        >>> render("{{#each xs}}{{@index}}:{{this.n}} {{/each}}", {"xs": [{"n": 5}, {"n": 9}]})
        '0:5 1:9 '

    Raises:
        PartialRecursionError: If partials include each other too deeply
    """
    result = render_with_diagnostics(
        template, context, partials, name=name, max_partial_depth=max_partial_depth
    )
    log_diagnostics(result.diagnostics)
    return result.text


def render_with_diagnostics(
    template: str,
    context: Context,
    partials: Partials | None = None,
    *,
    name: str | None = None,
    max_partial_depth: int = DEFAULT_MAX_PARTIAL_DEPTH,
) -> Rendered:
    """Render ``template`` and return the text with its diagnostics.

    Args:
        template: Template source
        context: Data visible to the template
        partials: Partial name → partial source
        name: Template name used in diagnostics
        max_partial_depth: Deepest allowed partial inclusion

    Raises:
        PartialRecursionError: If partials include each other too deeply
    """
    state = RenderContext(
        template_name=name or ROOT_TEMPLATE_NAME,
        source=template,
        max_partial_depth=max_partial_depth,
    )
    if partials is None:
        partials = _NO_PARTIALS
    text = _render_span(template, 0, len(template), context, partials, state)
    return Rendered(text, tuple(state.diagnostics))


def log_diagnostics(diagnostics: tuple[Diagnostic, ...], log: logging.Logger = logger) -> None:
    """Write diagnostics to the build log.

    Missing partials are warnings; unclosed blocks are tolerated by design
    and only logged at debug level.
    """
    for diagnostic in diagnostics:
        level = logging.WARNING if diagnostic.code is ErrorCode.MISSING_PARTIAL else logging.DEBUG
        log.log(level, "%s", diagnostic.format())


def _render_span(
    source: str,
    start: int,
    end: int,
    context: Context,
    partials: Partials,
    state: RenderContext,
) -> str:
    buf: list[str] = []
    pos = start
    while pos < end:
        tag_pos = source.find(TAG_OPEN, pos, end)
        if tag_pos == -1:
            buf.append(source[pos:end])
            break
        buf.append(source[pos:tag_pos])

        tag = match_tag(source, tag_pos, end)
        if tag is None:
            buf.append(TAG_OPEN)
            pos = tag_pos + len(TAG_OPEN)
        elif tag.type is TagType.PARTIAL:
            buf.append(_render_partial(tag, context, partials, state))
            pos = tag.end
        elif tag.type is TagType.BLOCK:
            span = find_block_end(source, tag.end, end)
            if not span.closed:
                state.report(
                    ErrorCode.UNCLOSED_BLOCK,
                    f"Block '{tag.block.value} {tag.argument}' is never closed; "
                    "rendering it to the end of the template",
                    tag.start,
                    block=tag.block.value,
                )
            buf.append(_BLOCK_RENDERERS[tag.block](span, tag, context, partials, state))
            pos = span.rest_start
        else:
            buf.append(stringify(resolve_path(context, tag.argument)))
            pos = tag.end
    return "".join(buf)


def _render_partial(tag: Tag, context: Context, partials: Partials, state: RenderContext) -> str:
    name = tag.argument
    source = partials.get(name)
    if source is None:
        message = f"Partial '{name}' not found"
        matches = get_close_matches(name, list(partials), n=1, cutoff=0.6)
        if matches:
            message += f". Did you mean '{matches[0]}'?"
        state.report(ErrorCode.MISSING_PARTIAL, message, tag.start, partial=name)
        return ""
    child = state.child_context(name, source, tag.start)
    return _render_span(source, 0, len(source), context, partials, child)


def _render_each(
    span: BlockSpan, tag: Tag, context: Context, partials: Partials, state: RenderContext
) -> str:
    items = resolve_path(context, tag.argument)
    if not is_sequence(items):
        return ""
    length = len(items)
    return "".join(
        _render_span(
            span.source,
            span.body_start,
            span.body_end,
            iteration_context(context, item, index, length),
            partials,
            state,
        )
        for index, item in enumerate(items)
    )


def _render_if(
    span: BlockSpan, tag: Tag, context: Context, partials: Partials, state: RenderContext
) -> str:
    else_pos = find_else(span.source, span.body_start, span.body_end)
    if is_truthy(resolve_path(context, tag.argument)):
        branch_end = span.body_end if else_pos is None else else_pos
        return _render_span(span.source, span.body_start, branch_end, context, partials, state)
    if else_pos is None:
        return ""
    return _render_span(
        span.source, else_pos + len(ELSE_TAG), span.body_end, context, partials, state
    )


def _render_unless(
    span: BlockSpan, tag: Tag, context: Context, partials: Partials, state: RenderContext
) -> str:
    if is_truthy(resolve_path(context, tag.argument)):
        return ""
    return _render_span(span.source, span.body_start, span.body_end, context, partials, state)


_BLOCK_RENDERERS: dict[
    BlockKind, Callable[[BlockSpan, Tag, Context, Partials, RenderContext], str]
] = {
    BlockKind.EACH: _render_each,
    BlockKind.IF: _render_if,
    BlockKind.UNLESS: _render_unless,
}


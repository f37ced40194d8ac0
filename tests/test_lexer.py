"""Tests for tag recognition."""

from __future__ import annotations

import pytest

from pagesmith import BlockKind, TagType
from pagesmith.lexer import (
    match_close_tag,
    match_else,
    match_open_marker,
    match_tag,
)


class TestMatchTag:
    """Classification of the tag at a cursor position."""

    @pytest.mark.parametrize("source", ["{{> nav}}", "{{>nav}}", "{{>  nav  }}"])
    def test_partial(self, source: str) -> None:
        tag = match_tag(source, 0)
        assert tag is not None
        assert tag.type is TagType.PARTIAL
        assert tag.argument == "nav"
        assert tag.length == len(source)

    @pytest.mark.parametrize(
        ("source", "kind", "path"),
        [
            ("{{#each events}}", BlockKind.EACH, "events"),
            ("{{#if site.flags.beta}}", BlockKind.IF, "site.flags.beta"),
            ("{{#unless @last}}", BlockKind.UNLESS, "@last"),
            ("{{#each   items}}", BlockKind.EACH, "items"),
        ],
    )
    def test_block_openers(self, source: str, kind: BlockKind, path: str) -> None:
        tag = match_tag(source, 0)
        assert tag is not None
        assert tag.type is TagType.BLOCK
        assert tag.block is kind
        assert tag.argument == path
        assert tag.end == len(source)

    @pytest.mark.parametrize("source", ["{{title}}", "{{this.name}}", "{{@index}}", "{{a.0.b}}"])
    def test_variable(self, source: str) -> None:
        tag = match_tag(source, 0)
        assert tag is not None
        assert tag.type is TagType.VARIABLE
        assert tag.argument == source[2:-2]

    @pytest.mark.parametrize(
        "source",
        [
            "{{ title }}",  # no whitespace inside variables
            "{{#if x }}",  # nor before the closing braces of a block
            "{{#ifx y}}",  # keyword must be followed by whitespace
            "{{#each}}",
            "{{/if}}",
            "{{> }}",
            "{{}}",
            "{{title",
            "{{name-with-dash}}",
        ],
    )
    def test_not_a_tag(self, source: str) -> None:
        assert match_tag(source, 0) is None

    def test_offset_and_length(self) -> None:
        source = "<p>{{> nav}}</p>"
        tag = match_tag(source, 3)
        assert tag is not None
        assert (tag.start, tag.end) == (3, 12)

    def test_respects_end_bound(self) -> None:
        assert match_tag("{{name}}", 0, 7) is None
        assert match_tag("{{name}}", 0, 8) is not None

    def test_partial_takes_precedence(self) -> None:
        tag = match_tag("{{>x}}", 0)
        assert tag is not None and tag.type is TagType.PARTIAL


class TestMarkers:
    """Open/close/else markers used for nesting depth."""

    def test_open_marker(self) -> None:
        assert match_open_marker("{{#each xs}}", 0, 12) == (BlockKind.EACH, 8)
        assert match_open_marker("{{#unless\nx}}", 0, 13) == (BlockKind.UNLESS, 10)

    def test_open_marker_needs_whitespace(self) -> None:
        assert match_open_marker("{{#eachxs}}", 0, 11) is None
        assert match_open_marker("{{#if", 0, 5) is None

    @pytest.mark.parametrize("kind", list(BlockKind))
    def test_close_tag(self, kind: BlockKind) -> None:
        source = "{{/" + kind.value + "}}"
        assert match_close_tag(source, 0, len(source)) == (kind, len(source))

    def test_close_tag_unknown_kind(self) -> None:
        assert match_close_tag("{{/block}}", 0, 10) is None

    def test_else(self) -> None:
        assert match_else("a{{else}}b", 1, 10) == 9
        assert match_else("{{else }}", 0, 9) is None

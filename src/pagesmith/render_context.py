"""Per-render state, kept apart from the user's data context.

A RenderContext travels down the recursive renderer next to the data
context. It knows which template (or partial) is being rendered, which
partials are currently being included, and collects diagnostics. The data
context never sees any of this, so templates are free to use any key.

Each ``render()`` call creates its own RenderContext; nothing is shared
between renders, so independent pages can be rendered from any thread.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from pagesmith.environment.exceptions import (
    Diagnostic,
    ErrorCode,
    PartialRecursionError,
    build_source_snippet,
)

# Deep enough for any real partial hierarchy while catching a partial that
# includes itself long before Python's own recursion limit.
DEFAULT_MAX_PARTIAL_DEPTH = 50

ROOT_TEMPLATE_NAME = "<template>"


@dataclass
class RenderContext:
    """Bookkeeping for one render call.

    Attributes:
        template_name: Name of the template or partial being rendered
        source: Its full text (for line numbers in diagnostics)
        partial_stack: Chain of (template_name, line) that led here
        max_partial_depth: Deepest allowed partial inclusion
        diagnostics: Shared list of recoverable problems, in render order
    """

    template_name: str = ROOT_TEMPLATE_NAME
    source: str = ""
    partial_stack: list[tuple[str, int]] = field(default_factory=list)
    max_partial_depth: int = DEFAULT_MAX_PARTIAL_DEPTH
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def partial_depth(self) -> int:
        return len(self.partial_stack)

    def line_at(self, offset: int) -> int:
        """1-based line number of ``offset`` in the current source."""
        return self.source.count("\n", 0, offset) + 1

    def report(self, code: ErrorCode, message: str, offset: int, **detail: str) -> Diagnostic:
        """Record a diagnostic located at ``offset`` of the current source."""
        diagnostic = Diagnostic(
            code=code,
            message=message,
            template_name=self.template_name,
            lineno=self.line_at(offset),
            detail=tuple(sorted(detail.items())),
        )
        self.diagnostics.append(diagnostic)
        return diagnostic

    def child_context(self, partial_name: str, source: str, offset: int) -> RenderContext:
        """Create the context for a partial included at ``offset``.

        Shares the diagnostics list with the parent so everything ends up in
        one report.

        Raises:
            PartialRecursionError: If the inclusion would exceed max_partial_depth
        """
        lineno = self.line_at(offset)
        stack = [*self.partial_stack, (self.template_name, lineno)]
        if len(stack) > self.max_partial_depth:
            raise PartialRecursionError(
                partial_name,
                max_depth=self.max_partial_depth,
                template_name=self.template_name,
                lineno=lineno,
                source_snippet=build_source_snippet(self.source, lineno),
                partial_stack=stack,
            )
        return RenderContext(
            template_name=partial_name,
            source=source,
            partial_stack=stack,
            max_partial_depth=self.max_partial_depth,
            diagnostics=self.diagnostics,
        )

"""Exceptions and diagnostics for pagesmith.

Exception Hierarchy:
SiteError (base)
├── DataLoadError            # Data file unreadable or not valid JSON
├── TemplateNotFoundError    # Template or partial not found by a loader
├── SourceLoadError          # Template/partial directory or file unreadable
├── OutputError              # Output directory or file not writable
├── PartialRecursionError    # Partial inclusion nested too deeply
└── ConfigError              # Invalid configuration

These are fatal: the build stops and the CLI exits non-zero. Problems the
renderer can recover from (a missing partial, an unclosed block) are not
raised; they are recorded as `Diagnostic` records and returned with the
rendered text.

Example:
    ```
    PS-RUN-101: Partial 'footr' not found in index.html:12
       |
    >12 | {{> footr}}
       |
      Hint: Available partials: footer, head, nav
    ```

"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from pagesmith.environment import terminal

# ---------------------------------------------------------------------------
# Error codes
# ---------------------------------------------------------------------------


class ErrorCode(Enum):
    """Searchable codes for pagesmith errors and diagnostics.

    Format: PS-{CATEGORY}-{NUMBER}
    Categories: LOD (loading), OUT (output), RUN (rendering), CFG (config)

    Rendering codes numbered 1xx are recoverable diagnostics, never raised.
    """

    # Loading errors (PS-LOD-xxx)
    DATA_LOAD = "PS-LOD-001"
    TEMPLATE_NOT_FOUND = "PS-LOD-002"
    SOURCE_LOAD = "PS-LOD-003"

    # Output errors (PS-OUT-xxx)
    OUTPUT_WRITE = "PS-OUT-001"

    # Render errors (PS-RUN-xxx)
    PARTIAL_RECURSION = "PS-RUN-001"
    MISSING_PARTIAL = "PS-RUN-101"
    UNCLOSED_BLOCK = "PS-RUN-102"

    # Configuration errors (PS-CFG-xxx)
    INVALID_CONFIG = "PS-CFG-001"

    @property
    def category(self) -> str:
        """Error category (e.g., 'loading', 'render')."""
        prefix = self.value.split("-")[1]
        return {
            "LOD": "loading",
            "OUT": "output",
            "RUN": "render",
            "CFG": "config",
        }.get(prefix, "unknown")


# ---------------------------------------------------------------------------
# Source snippets
# ---------------------------------------------------------------------------


def format_partial_stack(stack: list[tuple[str, int]] | None) -> str:
    """Format the partial inclusion chain for error messages.

    Example:
        >>> print(format_partial_stack([("index.html", 4), ("nav", 2)]))
        Partial stack:
          • index.html:4
          • nav:2
    """
    if not stack:
        return ""

    lines = [terminal.dim_text("Partial stack:")]
    for template_name, line_num in stack:
        lines.append(f"  • {terminal.location(f'{template_name}:{line_num}')}")
    return "\n".join(lines)


@dataclass(frozen=True, slots=True)
class SourceSnippet:
    """Template source context around an error line.

    Attributes:
        lines: Tuple of (line_number, line_content) pairs around the error.
        error_line: The 1-based line number where the error occurred.
    """

    lines: tuple[tuple[int, str], ...]
    error_line: int

    def format(self) -> str:
        """Format snippet with line numbers, highlighting the error line."""
        parts: list[str] = [terminal.dim_text("   |")]
        for lineno, content in self.lines:
            is_error = lineno == self.error_line
            parts.append(terminal.format_source_line(lineno, content, is_error=is_error))
        parts.append(terminal.dim_text("   |"))
        return "\n".join(parts)


def build_source_snippet(
    source: str,
    error_line: int,
    *,
    context_lines: int = 2,
) -> SourceSnippet:
    """Build a SourceSnippet from template source.

    Args:
        source: Full template source text.
        error_line: 1-based line number of the error.
        context_lines: Number of lines to show before/after the error line.
    """
    all_lines = source.splitlines()
    start = max(0, error_line - 1 - context_lines)
    end = min(len(all_lines), error_line + context_lines)
    lines = tuple((i + 1, all_lines[i]) for i in range(start, end))
    return SourceSnippet(lines=lines, error_line=error_line)


# ---------------------------------------------------------------------------
# Diagnostics
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """A recoverable problem noticed while rendering.

    Attributes:
        code: Diagnostic code (one of the recoverable PS-RUN-1xx codes)
        message: Human-readable description
        template_name: Template or partial being rendered
        lineno: 1-based line of the offending tag
        detail: Extra (key, value) pairs, e.g. the missing partial name
    """

    code: ErrorCode
    message: str
    template_name: str
    lineno: int
    detail: tuple[tuple[str, str], ...] = ()

    @property
    def location(self) -> str:
        return f"{self.template_name}:{self.lineno}"

    def get(self, key: str, default: str | None = None) -> str | None:
        return dict(self.detail).get(key, default)

    def format(self) -> str:
        return f"{self.code.value}: {self.message} in {self.location}"


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class SiteError(Exception):
    """Base exception for all pagesmith errors.

        >>> try:
        ...     build_site(config)
        ... except SiteError as e:
        ...     print(e.format_compact())

    Attributes:
        code: ErrorCode for searchable error identification.
        message: Description without location decoration.
        path: File or directory involved, if any.
        hint: Optional actionable suggestion.
    """

    code: ErrorCode | None = None

    def __init__(self, message: str, *, path: str | None = None, hint: str | None = None):
        self.message = message
        self.path = path
        self.hint = hint
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.path:
            return f"{self.message} ({self.path})"
        return self.message

    def format_compact(self) -> str:
        """Format error as a structured, human-readable summary.

        Produces a clean diagnostic string for terminal display, without
        Python traceback noise.
        """
        parts = [terminal.format_error_header(self.code.value if self.code else None, str(self))]
        if self.hint:
            parts.append(f"  {terminal.hint('Hint:')} {self.hint}")
        return "\n".join(parts)


class DataLoadError(SiteError):
    """A data file could not be read or is not valid JSON."""

    code: ErrorCode | None = ErrorCode.DATA_LOAD


class TemplateNotFoundError(SiteError):
    """Template or partial not found by a loader.

    Example:
            >>> loader.get_source("abuot.html")
        TemplateNotFoundError: Template 'abuot.html' not found. Did you mean 'about.html'?
    """

    code: ErrorCode | None = ErrorCode.TEMPLATE_NOT_FOUND


class SourceLoadError(SiteError):
    """A template or partial directory or file could not be read."""

    code: ErrorCode | None = ErrorCode.SOURCE_LOAD


class OutputError(SiteError):
    """Rendered output or assets could not be written."""

    code: ErrorCode | None = ErrorCode.OUTPUT_WRITE


class ConfigError(SiteError):
    """Configuration file or values are invalid."""

    code: ErrorCode | None = ErrorCode.INVALID_CONFIG


class PartialRecursionError(SiteError):
    """Partial inclusion went deeper than the configured limit.

    Almost always a partial that includes itself, directly or through
    other partials:

    Output Format:
            ```
            PS-RUN-001: Maximum partial depth exceeded (50) when including 'nav'
              Location: nav:3
               |
            > 3 | {{> nav}}
               |

            Partial stack:
              • index.html:1
              • nav:3
              ...
              Hint: Check for circular partials: A → B → A
            ```
    """

    code: ErrorCode | None = ErrorCode.PARTIAL_RECURSION

    def __init__(
        self,
        partial_name: str,
        *,
        max_depth: int,
        template_name: str | None = None,
        lineno: int | None = None,
        source_snippet: SourceSnippet | None = None,
        partial_stack: list[tuple[str, int]] | None = None,
    ):
        self.partial_name = partial_name
        self.max_depth = max_depth
        self.template_name = template_name
        self.lineno = lineno
        self.source_snippet = source_snippet
        self.partial_stack = partial_stack or []
        super().__init__(
            f"Maximum partial depth exceeded ({max_depth}) when including '{partial_name}'",
            hint="Check for circular partials: A → B → A",
        )

    def format_compact(self) -> str:
        parts = [terminal.format_error_header(self.code.value if self.code else None, self.message)]
        loc = self.template_name or "<template>"
        if self.lineno:
            loc += f":{self.lineno}"
        parts.append(f"  Location: {terminal.location(loc)}")

        if self.source_snippet:
            parts.append(self.source_snippet.format())

        if self.partial_stack:
            parts.append("")
            parts.append(format_partial_stack(self.partial_stack))

        if self.hint:
            parts.append(f"  {terminal.hint('Hint:')} {self.hint}")
        return "\n".join(parts)

"""pagesmith — static HTML pages from JSON data and text templates.

A small template interpreter plus the build around it: JSON files become the
page context, HTML templates become pages, and shared partials are included
by name.

Quickstart:
    >>> from pagesmith import render
    >>> render("Hello, {{user.name}}!", {"user": {"name": "World"}})
    'Hello, World!'

Build a site:
    >>> from pagesmith import SiteConfig, build_site
    >>> report = build_site(SiteConfig(root="my-site"))
    >>> [page.name for page in report.pages]
    ['about', 'index', 'schedule']

Template syntax:
    {{path.to.value}}                   variable (dot path)
    {{#each items}}...{{/each}}         iteration; {{this.x}} {{@index}} {{@first}} {{@last}}
    {{#if flag}}...{{else}}...{{/if}}   conditional with optional else
    {{#unless flag}}...{{/unless}}      negated conditional
    {{> partialName}}                   partial inclusion with the current context

Architecture:
Template Source → Lexer (prefix matching) → Renderer ⇄ Block Scanner → str

There is no AST and no compile step. The renderer walks the source,
dispatches on each tag, and asks the block scanner where a block's body
ends; block bodies and partials are rendered by recursion.

Fail-open rendering:
Missing data renders as nothing. A missing partial renders as nothing and
is reported as a diagnostic. An unclosed block runs to the end of the
template. Only unreadable sources, unwritable output, and runaway partial
recursion stop a build.

Thread-Safety:
Rendering uses only call-local state. Contexts and the partial registry are
never modified, so pages can be rendered concurrently.
"""

from pagesmith._types import BlockKind, Tag, TagType
from pagesmith.environment import (
    ConfigError,
    DataLoadError,
    Diagnostic,
    DictLoader,
    Environment,
    ErrorCode,
    FileSystemLoader,
    OutputError,
    PartialRecursionError,
    SiteError,
    SourceLoadError,
    TemplateNotFoundError,
    load_data,
)
from pagesmith.config import SiteConfig
from pagesmith.renderer import Rendered, render, render_with_diagnostics
from pagesmith.resolve import is_truthy, resolve_path, stringify
from pagesmith.scanner import BlockSpan, find_block_end, scan, split_else
from pagesmith.site import BuildReport, PageResult, build_site, page_context
from pagesmith.template import Template

__version__ = "0.1.0"

__all__ = [
    "BlockKind",
    "BlockSpan",
    "BuildReport",
    "ConfigError",
    "DataLoadError",
    "Diagnostic",
    "DictLoader",
    "Environment",
    "ErrorCode",
    "FileSystemLoader",
    "OutputError",
    "PageResult",
    "PartialRecursionError",
    "Rendered",
    "SiteConfig",
    "SiteError",
    "SourceLoadError",
    "Tag",
    "TagType",
    "Template",
    "TemplateNotFoundError",
    "__version__",
    "build_site",
    "find_block_end",
    "is_truthy",
    "load_data",
    "page_context",
    "render",
    "render_with_diagnostics",
    "resolve_path",
    "scan",
    "split_else",
    "stringify",
]

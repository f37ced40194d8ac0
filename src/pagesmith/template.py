"""Template: template source bound to an Environment.

There is no compile step; a Template keeps its source text and interprets
it on every render, so the same Template can be rendered once per page with
a different context each time.
"""

from __future__ import annotations

from collections import ChainMap
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from pagesmith.renderer import Rendered, log_diagnostics, render_with_diagnostics

if TYPE_CHECKING:
    from pagesmith.environment.core import Environment


class Template:
    """A named template source.

    Example:
            >>> env = Environment(partials={"nav": "<nav>{{site.name}}</nav>"})
            >>> tmpl = env.from_string("{{> nav}}<h1>{{title}}</h1>")
            >>> tmpl.render({"site": {"name": "Club"}}, title="Home")
            '<nav>Club</nav><h1>Home</h1>'

    Attributes:
        name: Template name used in diagnostics
        source: Template text
        filename: Source file, when loaded from disk
    """

    __slots__ = ("_env", "filename", "name", "source")

    def __init__(
        self,
        env: Environment,
        source: str,
        name: str | None = None,
        filename: str | None = None,
    ):
        self._env = env
        self.source = source
        self.name = name
        self.filename = filename

    def __repr__(self) -> str:
        return f"<Template {self.name or '<string>'!r}>"

    def _context(self, context: Mapping[str, Any] | None, extra: dict[str, Any]) -> Mapping[str, Any]:
        maps: list[Mapping[str, Any]] = []
        if extra:
            maps.append(extra)
        if context is not None:
            maps.append(context)
        if self._env.globals:
            maps.append(self._env.globals)
        if len(maps) == 1:
            return maps[0]
        return ChainMap(*maps)  # type: ignore[arg-type]

    def render_with_diagnostics(
        self, context: Mapping[str, Any] | None = None, **kwargs: Any
    ) -> Rendered:
        """Render and return text plus diagnostics, without logging them.

        Keyword arguments take precedence over ``context``, which takes
        precedence over environment globals.
        """
        return render_with_diagnostics(
            self.source,
            self._context(context, kwargs),
            self._env.partials,
            name=self.name,
            max_partial_depth=self._env.max_partial_depth,
        )

    def render(self, context: Mapping[str, Any] | None = None, **kwargs: Any) -> str:
        """Render to a string, logging any diagnostics."""
        result = self.render_with_diagnostics(context, **kwargs)
        log_diagnostics(result.diagnostics)
        return result.text

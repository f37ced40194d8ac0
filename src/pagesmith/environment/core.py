"""Environment: the partial registry and template loading for a site.

The Environment is assembled once before any page is rendered. Its partial
registry is frozen (a read-only mapping) so every page sees exactly the same
partials, and renders never affect each other.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Protocol

from pagesmith.environment.exceptions import TemplateNotFoundError
from pagesmith.render_context import DEFAULT_MAX_PARTIAL_DEPTH
from pagesmith.template import Template


class Loader(Protocol):
    def get_source(self, name: str) -> tuple[str, str | None]: ...

    def list_templates(self) -> list[str]: ...

    def load_all(self) -> dict[str, str]: ...


class Environment:
    """Central configuration for rendering a set of pages.

    Attributes:
        loader: Loader for page templates (optional; ``from_string`` works without)
        partials: Read-only mapping of partial name → partial source
        globals: Values visible to every template, below the page context
        max_partial_depth: Deepest allowed partial inclusion

    Example:
            >>> env = Environment(
            ...     loader=FileSystemLoader("src/templates"),
            ...     partials=FileSystemLoader("src/partials"),
            ... )
            >>> env.get_template("index").render(data, page="index")
    """

    def __init__(
        self,
        loader: Loader | None = None,
        partials: Loader | Mapping[str, str] | None = None,
        globals: Mapping[str, Any] | None = None,
        max_partial_depth: int = DEFAULT_MAX_PARTIAL_DEPTH,
    ):
        if max_partial_depth < 1:
            raise ValueError("max_partial_depth must be at least 1")
        self.loader = loader
        if partials is None:
            registry: dict[str, str] = {}
        elif isinstance(partials, Mapping):
            registry = dict(partials)
        else:
            registry = partials.load_all()
        self._partials = MappingProxyType(registry)
        self.globals: Mapping[str, Any] = MappingProxyType(dict(globals or {}))
        self.max_partial_depth = max_partial_depth

    @property
    def partials(self) -> Mapping[str, str]:
        return self._partials

    def from_string(self, source: str, name: str | None = None) -> Template:
        """Wrap template source in a Template bound to this environment."""
        return Template(self, source, name=name)

    def get_template(self, name: str) -> Template:
        """Load a template by name through the configured loader.

        Raises:
            TemplateNotFoundError: If there is no loader or it has no such template
        """
        if self.loader is None:
            raise TemplateNotFoundError(
                f"Template '{name}' not found: no loader configured",
                hint="Pass loader=FileSystemLoader(...) or use from_string()",
            )
        source, filename = self.loader.get_source(name)
        return Template(self, source, name=name, filename=filename)

    def list_templates(self) -> list[str]:
        if self.loader is None:
            return []
        return self.loader.list_templates()

    def render(self, name: str, context: Mapping[str, Any] | None = None, **kwargs: Any) -> str:
        """Load and render a template in one call."""
        return self.get_template(name).render(context, **kwargs)

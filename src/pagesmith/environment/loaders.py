"""Source loaders for templates, partials, and page data.

Template loaders provide template text to the Environment and the site
builder. They implement:

- ``get_source(name)`` returning ``(source, filename)``
- ``list_templates()`` returning sorted template names
- ``load_all()`` returning ``{name: source}`` for every template

Built-in Loaders:
- `FileSystemLoader`: One directory of ``*.html`` files, named by stem
- `DictLoader`: In-memory dictionary (testing/embedded)

Page data comes from `load_data`, which reads every ``*.json`` file of a
directory into one mapping keyed by file stem.

Any failure to read sources is fatal for a build and raised as a
`SiteError` subclass; there is no meaningful partial result.
"""

from __future__ import annotations

import json
import logging
from difflib import get_close_matches
from pathlib import Path
from typing import Any

from pagesmith.environment.exceptions import (
    DataLoadError,
    SourceLoadError,
    TemplateNotFoundError,
)

logger = logging.getLogger(__name__)


def _not_found_message(name: str, available: list[str]) -> str:
    msg = f"Template '{name}' not found"
    matches = get_close_matches(name, available, n=1, cutoff=0.6)
    if matches:
        msg += f". Did you mean '{matches[0]}'?"
    elif available:
        msg += f". Available: {', '.join(available[:10])}"
        if len(available) > 10:
            msg += f" ... ({len(available)} total)"
    return msg


class FileSystemLoader:
    """Load templates from a single directory.

    Templates are the files directly inside ``path`` whose name ends with
    ``suffix``; a template's name is its file stem, so ``about.html`` is
    loaded as ``about``. Subdirectories are not searched.

    Example:
            >>> loader = FileSystemLoader("src/partials")
            >>> loader.list_templates()
        ['footer', 'head', 'nav']
            >>> source, filename = loader.get_source("nav")
            >>> filename
        'src/partials/nav.html'

    Raises:
        TemplateNotFoundError: If a named template does not exist
        SourceLoadError: If the directory or a file cannot be read
    """

    __slots__ = ("_encoding", "_path", "_suffix")

    def __init__(self, path: str | Path, suffix: str = ".html", encoding: str = "utf-8"):
        self._path = Path(path)
        self._suffix = suffix
        self._encoding = encoding

    @property
    def path(self) -> Path:
        return self._path

    def _file_for(self, name: str) -> Path:
        if name.endswith(self._suffix):
            return self._path / name
        return self._path / f"{name}{self._suffix}"

    def get_source(self, name: str) -> tuple[str, str]:
        """Load template source by name (stem or file name)."""
        path = self._file_for(name)
        if not path.is_file():
            raise TemplateNotFoundError(
                _not_found_message(name, self.list_templates()), path=str(self._path)
            )
        try:
            return path.read_text(self._encoding), str(path)
        except (OSError, UnicodeDecodeError) as e:
            raise SourceLoadError(f"Cannot read template '{name}': {e}", path=str(path)) from e

    def list_templates(self) -> list[str]:
        """List template names in the directory, sorted."""
        if not self._path.is_dir():
            raise SourceLoadError(
                "Template directory does not exist",
                path=str(self._path),
                hint="Check the directory settings in pagesmith.yaml",
            )
        try:
            return sorted(
                entry.name[: -len(self._suffix)]
                for entry in self._path.iterdir()
                if entry.is_file() and entry.name.endswith(self._suffix)
            )
        except OSError as e:
            raise SourceLoadError(f"Cannot list templates: {e}", path=str(self._path)) from e

    def load_all(self) -> dict[str, str]:
        """Read every template into a ``{name: source}`` mapping."""
        return {name: self.get_source(name)[0] for name in self.list_templates()}


class DictLoader:
    """Load templates from an in-memory dictionary.

    Maps template names to source strings. Useful for testing and for
    rendering generated templates.

    Note:
        Returns ``None`` as filename since templates are not file-backed.

    Example:
            >>> loader = DictLoader({"nav": "<nav>{{site.name}}</nav>"})
            >>> loader.get_source("nav")
        ('<nav>{{site.name}}</nav>', None)
    """

    __slots__ = ("_mapping",)

    def __init__(self, mapping: dict[str, str]):
        self._mapping = dict(mapping)

    def get_source(self, name: str) -> tuple[str, None]:
        if name not in self._mapping:
            raise TemplateNotFoundError(_not_found_message(name, self.list_templates()))
        return self._mapping[name], None

    def list_templates(self) -> list[str]:
        return sorted(self._mapping)

    def load_all(self) -> dict[str, str]:
        return dict(self._mapping)


def load_data(path: str | Path) -> dict[str, Any]:
    """Load every ``*.json`` file in ``path`` into one mapping.

    Each file becomes a top-level key named after its stem, so
    ``data/schedule.json`` is available to templates as ``schedule``.

    Raises:
        DataLoadError: If the directory or a file cannot be read or parsed
    """
    directory = Path(path)
    if not directory.is_dir():
        raise DataLoadError("Data directory does not exist", path=str(directory))

    data: dict[str, Any] = {}
    for file in sorted(directory.glob("*.json")):
        try:
            data[file.stem] = json.loads(file.read_text("utf-8"))
        except json.JSONDecodeError as e:
            raise DataLoadError(
                f"Invalid JSON at line {e.lineno}, column {e.colno}: {e.msg}",
                path=str(file),
            ) from e
        except (OSError, UnicodeDecodeError) as e:
            raise DataLoadError(f"Cannot read data file: {e}", path=str(file)) from e
        logger.debug("Loaded data file %s as '%s'", file, file.stem)
    return data

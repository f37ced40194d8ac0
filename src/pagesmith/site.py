"""Static site build: load sources, render every page, write the output.

Build steps:
1. Load page data (every ``*.json`` in the data directory)
2. Load partials once into a frozen registry
3. Render each template with the data plus ``page`` and ``page_<name>``
4. Write each page to the output directory under its template file name
5. Copy the assets tree into ``<output>/assets``

Rendering problems (a missing partial, an unclosed block) are logged and
reported but never stop the build. Unreadable sources and unwritable output
are fatal and raised as `SiteError` subclasses.
"""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pagesmith.config import SiteConfig
from pagesmith.environment import (
    Diagnostic,
    Environment,
    FileSystemLoader,
    OutputError,
    load_data,
)
from pagesmith.renderer import log_diagnostics

logger = logging.getLogger(__name__)

ASSETS_DIRNAME = "assets"


@dataclass(frozen=True, slots=True)
class PageResult:
    name: str
    output_path: Path
    diagnostics: tuple[Diagnostic, ...] = ()


@dataclass(frozen=True, slots=True)
class BuildReport:
    """Outcome of a successful build."""

    pages: tuple[PageResult, ...]
    output_dir: Path
    assets_copied: bool

    @property
    def diagnostics(self) -> tuple[Diagnostic, ...]:
        return tuple(d for page in self.pages for d in page.diagnostics)


def page_context(data: dict[str, Any], page_name: str) -> dict[str, Any]:
    """Context for one page: all data plus the page's name and flag.

    ``page_<name>`` lets shared partials branch on the page they are
    rendered into, e.g. ``{{#if page_about}}class="active"{{/if}}``.
    """
    return {**data, "page": page_name, f"page_{page_name}": True}


def create_environment(config: SiteConfig) -> Environment:
    """Environment with the site's templates and its partial registry."""
    return Environment(
        loader=FileSystemLoader(config.templates_path, config.template_suffix),
        partials=FileSystemLoader(config.partials_path, config.template_suffix),
        max_partial_depth=config.max_partial_depth,
    )


def _write_page(path: Path, text: str) -> None:
    try:
        path.write_text(text, encoding="utf-8")
    except OSError as e:
        raise OutputError(f"Cannot write page: {e}", path=str(path)) from e


def copy_assets(source: Path, destination: Path) -> bool:
    """Copy the assets tree unmodified. Returns False if there is none."""
    if not source.is_dir():
        logger.info("No assets directory at %s, skipping", source)
        return False
    try:
        shutil.copytree(source, destination, dirs_exist_ok=True)
    except (OSError, shutil.Error) as e:
        raise OutputError(f"Cannot copy assets: {e}", path=str(destination)) from e
    return True


def build_site(config: SiteConfig) -> BuildReport:
    """Build every page of the site described by ``config``.

    Raises:
        DataLoadError: If page data cannot be loaded
        SourceLoadError: If templates or partials cannot be read
        OutputError: If output cannot be written
        PartialRecursionError: If partials include each other too deeply
    """
    logger.info("Building site in %s", config.root)

    data = load_data(config.data_path)
    env = create_environment(config)
    names = env.list_templates()

    output_dir = config.output_path
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise OutputError(f"Cannot create output directory: {e}", path=str(output_dir)) from e

    pages: list[PageResult] = []
    for name in names:
        result = env.get_template(name).render_with_diagnostics(page_context(data, name))
        log_diagnostics(result.diagnostics, logger)

        out_path = output_dir / f"{name}{config.template_suffix}"
        _write_page(out_path, result.text)
        logger.info("Built: %s", out_path.name)
        pages.append(PageResult(name, out_path, result.diagnostics))

    assets_copied = copy_assets(config.assets_path, output_dir / ASSETS_DIRNAME)
    if assets_copied:
        logger.info("Copied: %s/", ASSETS_DIRNAME)

    logger.info("Done! %d pages built to %s", len(pages), output_dir)
    return BuildReport(tuple(pages), output_dir, assets_copied)

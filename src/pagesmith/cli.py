"""
Command-line interface for pagesmith.

    pagesmith build [ROOT]        build the whole site
    pagesmith render TEMPLATE     render one template to stdout
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import NoReturn

import click

from pagesmith import __version__
from pagesmith.config import SiteConfig
from pagesmith.environment import (
    Environment,
    FileSystemLoader,
    SiteError,
    SourceLoadError,
    load_data,
    terminal,
)
from pagesmith.renderer import log_diagnostics
from pagesmith.site import build_site, page_context

logger = logging.getLogger(__name__)


def _setup_logging(level: int) -> None:
    """Send log records to stderr so rendered output on stdout stays clean."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )


def _fail(error: SiteError) -> NoReturn:
    click.echo(error.format_compact(), err=True)
    sys.exit(1)


@click.group()
@click.version_option(__version__, prog_name="pagesmith")
@click.option("--no-color", is_flag=True, help="Disable colored output.")
def cli(no_color: bool) -> None:
    """Render static HTML pages from JSON data and templates."""
    if no_color:
        terminal.set_colors(False)


@cli.command()
@click.argument("root", type=click.Path(file_okay=False, path_type=Path), default=".")
@click.option(
    "--config",
    "config_file",
    type=click.Path(dir_okay=False, exists=True, path_type=Path),
    help="Config file (default: ROOT/pagesmith.yaml when present).",
)
@click.option("--output", "-o", type=click.Path(file_okay=False, path_type=Path), help="Output directory.")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def build(root: Path, config_file: Path | None, output: Path | None, verbose: bool) -> None:
    """Build every page of the site in ROOT."""
    try:
        if config_file is not None:
            config = SiteConfig.from_file(config_file, output_dir=output)
        else:
            config = SiteConfig.discover(root, output_dir=output)
        _setup_logging(logging.DEBUG if verbose else config.logging_level)
        logger.debug("Config: %s", config.to_dict())
        report = build_site(config)
    except SiteError as e:
        _fail(e)

    warnings = len(report.diagnostics)
    summary = f"Done! {len(report.pages)} pages built to {report.output_dir}"
    click.echo(terminal.success(summary))
    if warnings:
        click.echo(terminal.warning(f"{warnings} warning(s) during render"), err=True)


@cli.command()
@click.argument("template", type=click.Path(dir_okay=False, exists=True, path_type=Path))
@click.option("--data", "data_dir", type=click.Path(file_okay=False, path_type=Path), help="Directory of *.json data files.")
@click.option("--partials", "partials_dir", type=click.Path(file_okay=False, path_type=Path), help="Directory of partials.")
@click.option("--page", help="Page name for 'page' and 'page_<name>' (default: template stem).")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def render(
    template: Path,
    data_dir: Path | None,
    partials_dir: Path | None,
    page: str | None,
    verbose: bool,
) -> None:
    """Render TEMPLATE with page data and print the result."""
    _setup_logging(logging.DEBUG if verbose else logging.WARNING)
    suffix = template.suffix or ".html"
    try:
        data = load_data(data_dir) if data_dir is not None else {}
        partials = FileSystemLoader(partials_dir, suffix) if partials_dir is not None else None
        env = Environment(partials=partials)
        try:
            source = template.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise SourceLoadError(f"Cannot read template: {e}", path=str(template)) from e
        page_name = page or template.stem
        result = env.from_string(source, name=template.name).render_with_diagnostics(
            page_context(data, page_name)
        )
    except SiteError as e:
        _fail(e)

    log_diagnostics(result.diagnostics, logger)
    click.echo(result.text, nl=False)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()

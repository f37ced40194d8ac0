"""Pytest configuration and fixtures for pagesmith tests."""

import json
from pathlib import Path

import pytest

from pagesmith import DictLoader, Environment, SiteConfig


@pytest.fixture
def env():
    """Environment with a few partials and no template loader."""
    return Environment(
        partials={
            "header": "<h1>{{site.name}}</h1>",
            "row": "<li>{{@index}}={{this.name}}</li>",
            "nav": '<a{{#if page_about}} class="active"{{/if}}>About</a>',
        }
    )


@pytest.fixture
def env_with_loader():
    """Environment with in-memory page templates and partials."""
    return Environment(
        loader=DictLoader(
            {
                "index": "{{> header}}<p>{{intro}}</p>",
                "about": "{{> header}}{{#each people}}{{this}} {{/each}}",
            }
        ),
        partials={"header": "<h1>{{site.name}}</h1>"},
    )


def write_site(root: Path, files: dict[str, str | dict | list]) -> Path:
    """Write a site tree under root. Non-string values are dumped as JSON."""
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        if not isinstance(content, str):
            content = json.dumps(content)
        path.write_text(content, encoding="utf-8")
    return root


SAMPLE_SITE: dict[str, str | dict | list] = {
    "data/site.json": {"name": "Riverside Track Club", "year": 2026},
    "data/events.json": [
        {"title": "Spring Relays", "date": "2026-04-11", "featured": True},
        {"title": "Club Championship", "date": "2026-06-20", "featured": False},
    ],
    "src/templates/index.html": (
        "{{> head}}\n"
        "<main>\n"
        "{{#each events}}<article{{#if this.featured}} class=\"featured\"{{/if}}>"
        "{{@index}}. {{this.title}} ({{this.date}})</article>\n{{/each}}"
        "</main>\n"
    ),
    "src/templates/about.html": (
        "{{> head}}\n<main>About {{site.name}}, est. {{site.year}}</main>\n"
    ),
    "src/partials/head.html": (
        "<title>{{site.name}}</title>\n{{> nav}}"
    ),
    "src/partials/nav.html": (
        '<nav><a href="index.html"{{#if page_index}} class="active"{{/if}}>Home</a>'
        '<a href="about.html"{{#if page_about}} class="active"{{/if}}>About</a></nav>'
    ),
    "assets/css/style.css": "body { margin: 0; }\n",
    "assets/js/main.js": "document.body.classList.add('ready');\n",
}


@pytest.fixture
def site_root(tmp_path: Path) -> Path:
    """A small but complete site on disk."""
    return write_site(tmp_path / "site", SAMPLE_SITE)


@pytest.fixture
def site_config(site_root: Path) -> SiteConfig:
    return SiteConfig(root=site_root)

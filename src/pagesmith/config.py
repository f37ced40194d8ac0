"""Site configuration.

Settings come from, in increasing order of precedence:

1. Defaults below (a site laid out as ``data/``, ``src/templates/``,
   ``src/partials/``, ``assets/`` with output in ``docs/``)
2. ``PAGESMITH_LOG_LEVEL`` environment variable (log level only)
3. An optional ``pagesmith.yaml`` in the site root
4. Command-line options

Relative directories are resolved against the site root.
"""

from __future__ import annotations

import logging
import os
from dataclasses import asdict, dataclass, field, fields, replace
from pathlib import Path
from typing import Any

import yaml

from pagesmith.environment.exceptions import ConfigError
from pagesmith.render_context import DEFAULT_MAX_PARTIAL_DEPTH

CONFIG_FILENAME = "pagesmith.yaml"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_PATH_FIELDS = ("data_dir", "templates_dir", "partials_dir", "output_dir", "assets_dir")


@dataclass(frozen=True)
class SiteConfig:
    """Where a site's sources live and how to build it."""

    root: Path = field(default_factory=Path.cwd)
    data_dir: Path = Path("data")
    templates_dir: Path = Path("src/templates")
    partials_dir: Path = Path("src/partials")
    output_dir: Path = Path("docs")
    assets_dir: Path = Path("assets")
    template_suffix: str = ".html"
    max_partial_depth: int = DEFAULT_MAX_PARTIAL_DEPTH
    log_level: str = field(default_factory=lambda: os.getenv("PAGESMITH_LOG_LEVEL", "INFO"))

    def __post_init__(self) -> None:
        object.__setattr__(self, "root", Path(self.root))
        for name in _PATH_FIELDS:
            try:
                object.__setattr__(self, name, Path(getattr(self, name)))
            except TypeError as e:
                raise ConfigError(f"{name} must be a path, got {getattr(self, name)!r}") from e
        object.__setattr__(self, "log_level", str(self.log_level).upper())
        self._validate()

    def _validate(self) -> None:
        if self.log_level not in _LOG_LEVELS:
            raise ConfigError(
                f"Invalid log_level: {self.log_level!r}",
                hint=f"Use one of {', '.join(_LOG_LEVELS)}",
            )
        if (
            isinstance(self.max_partial_depth, bool)
            or not isinstance(self.max_partial_depth, int)
            or self.max_partial_depth < 1
        ):
            raise ConfigError(f"max_partial_depth must be a positive integer, got {self.max_partial_depth!r}")
        if not isinstance(self.template_suffix, str) or not self.template_suffix.startswith("."):
            raise ConfigError(f"template_suffix must start with '.', got {self.template_suffix!r}")

    def resolve(self, directory: Path) -> Path:
        """Resolve a configured directory against the site root."""
        return directory if directory.is_absolute() else self.root / directory

    @property
    def data_path(self) -> Path:
        return self.resolve(self.data_dir)

    @property
    def templates_path(self) -> Path:
        return self.resolve(self.templates_dir)

    @property
    def partials_path(self) -> Path:
        return self.resolve(self.partials_dir)

    @property
    def output_path(self) -> Path:
        return self.resolve(self.output_dir)

    @property
    def assets_path(self) -> Path:
        return self.resolve(self.assets_dir)

    @property
    def logging_level(self) -> int:
        return getattr(logging, self.log_level)

    @classmethod
    def from_file(cls, config_path: str | Path, **overrides: Any) -> SiteConfig:
        """Load configuration from a YAML file.

        The site root defaults to the file's directory. ``overrides`` (for
        example from the command line) win over values in the file; None
        values are ignored.

        Raises:
            ConfigError: If the file cannot be read, is not a mapping, or has
                unknown keys or invalid values
        """
        path = Path(config_path)
        try:
            with path.open(encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except OSError as e:
            raise ConfigError(f"Cannot read config file: {e}", path=str(path)) from e
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML: {e}", path=str(path)) from e

        if not isinstance(data, dict):
            raise ConfigError("Config file must contain a mapping", path=str(path))

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(
                f"Unknown config keys: {', '.join(unknown)}",
                path=str(path),
                hint=f"Known keys: {', '.join(sorted(known))}",
            )

        data["root"] = path.parent / data.get("root", ".")
        data.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**data)

    @classmethod
    def discover(cls, root: str | Path, **overrides: Any) -> SiteConfig:
        """Use ``root/pagesmith.yaml`` when present, defaults otherwise."""
        root = Path(root)
        config_file = root / CONFIG_FILENAME
        if config_file.is_file():
            return cls.from_file(config_file, **overrides)
        return cls(root=root, **{k: v for k, v in overrides.items() if v is not None})

    def with_overrides(self, **overrides: Any) -> SiteConfig:
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})

    def to_dict(self) -> dict[str, Any]:
        return {k: str(v) if isinstance(v, Path) else v for k, v in asdict(self).items()}

"""Environment, loaders, and errors for pagesmith."""

from pagesmith.environment.exceptions import (
    ConfigError,
    DataLoadError,
    Diagnostic,
    ErrorCode,
    OutputError,
    PartialRecursionError,
    SiteError,
    SourceLoadError,
    SourceSnippet,
    TemplateNotFoundError,
    build_source_snippet,
)
from pagesmith.environment.loaders import DictLoader, FileSystemLoader, load_data
from pagesmith.environment.core import Environment, Loader

__all__ = [
    "ConfigError",
    "DataLoadError",
    "Diagnostic",
    "DictLoader",
    "Environment",
    "ErrorCode",
    "FileSystemLoader",
    "Loader",
    "OutputError",
    "PartialRecursionError",
    "SiteError",
    "SourceLoadError",
    "SourceSnippet",
    "TemplateNotFoundError",
    "build_source_snippet",
    "load_data",
]

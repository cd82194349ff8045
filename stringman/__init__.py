"""stringman: named SQL templates with literal parameter binding."""

from stringman import base, config, core, exceptions, loader, typing, utils
from stringman.__metadata__ import __version__
from stringman.base import Stringman
from stringman.config import StringmanConfig, load_config_from_env
from stringman.core import (
    BindKind,
    Binding,
    BoundTemplate,
    NumericPlaceholderStrategy,
    PlaceholderStrategy,
    QmarkPlaceholderStrategy,
    RawTemplate,
    StatementRegistry,
    TemplateNormalizer,
    build,
    format_literal,
)
from stringman.exceptions import (
    DuplicateStatementError,
    ImproperConfigurationError,
    MalformedTemplateError,
    MissingParametersError,
    ParameterError,
    ParameterNotFoundError,
    StatementNotFoundError,
    StringmanError,
    TemplateFileNotFoundError,
    TemplateLoadingError,
    UnsupportedTypeError,
)
from stringman.loader import TemplateLoader
from stringman.typing import NullBool, NullFloat64, NullInt64, NullString

__all__ = (
    "BindKind",
    "Binding",
    "BoundTemplate",
    "DuplicateStatementError",
    "ImproperConfigurationError",
    "MalformedTemplateError",
    "MissingParametersError",
    "NullBool",
    "NullFloat64",
    "NullInt64",
    "NullString",
    "NumericPlaceholderStrategy",
    "ParameterError",
    "ParameterNotFoundError",
    "PlaceholderStrategy",
    "QmarkPlaceholderStrategy",
    "RawTemplate",
    "StatementNotFoundError",
    "StatementRegistry",
    "Stringman",
    "StringmanConfig",
    "StringmanError",
    "TemplateFileNotFoundError",
    "TemplateLoader",
    "TemplateLoadingError",
    "TemplateNormalizer",
    "UnsupportedTypeError",
    "__version__",
    "base",
    "build",
    "config",
    "core",
    "exceptions",
    "format_literal",
    "load_config_from_env",
    "loader",
    "typing",
    "utils",
)

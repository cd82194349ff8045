"""Template normalization and parameter binding."""

from stringman.core.binding import BindKind, Binding
from stringman.core.builder import build, resolve_parameters
from stringman.core.formatter import format_literal, is_supported_type
from stringman.core.normalizer import (
    NumericPlaceholderStrategy,
    PlaceholderStrategy,
    QmarkPlaceholderStrategy,
    TemplateNormalizer,
    get_placeholder_strategy,
    scan_template,
)
from stringman.core.registry import StatementRegistry, normalize_statement_id
from stringman.core.statement import MARKER, BoundTemplate, RawTemplate

__all__ = (
    "MARKER",
    "BindKind",
    "Binding",
    "BoundTemplate",
    "NumericPlaceholderStrategy",
    "PlaceholderStrategy",
    "QmarkPlaceholderStrategy",
    "RawTemplate",
    "StatementRegistry",
    "TemplateNormalizer",
    "build",
    "format_literal",
    "get_placeholder_strategy",
    "is_supported_type",
    "normalize_statement_id",
    "resolve_parameters",
    "scan_template",
)

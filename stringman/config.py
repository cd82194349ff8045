"""Configuration for the stringman manager.

Settings come from :class:`StringmanConfig` instances, usually built once at
startup either directly or from environment variables with
:func:`load_config_from_env`.

Environment Variables Supported:
- STRINGMAN_TEMPLATE_PATH: Directory (or file) holding template files
- STRINGMAN_FILESET: Glob pattern for template files inside the directory
- STRINGMAN_ENCODING: Text encoding of template files
- STRINGMAN_DEBUG: Log every registration (true/false)
- STRINGMAN_PLACEHOLDER_STYLE: ``qmark`` or ``numeric``
- STRINGMAN_FIELD_NAME_STYLE: ``camel`` or ``none``
"""

import codecs
import os
from dataclasses import dataclass, replace
from typing import Any, Optional

from stringman.core.normalizer import PLACEHOLDER_STRATEGIES
from stringman.utils.text import FIELD_NAME_CONVERTERS

__all__ = ("DEFAULT_FILESET", "StringmanConfig", "load_config_from_env")

DEFAULT_FILESET = "string*.xml"


@dataclass(frozen=True)
class StringmanConfig:
    """Manager configuration."""

    template_path: Optional[str] = None
    """Directory or file loaded at startup. Nothing is loaded when unset."""

    fileset: str = DEFAULT_FILESET
    """Glob pattern matched inside ``template_path`` when it is a directory."""

    encoding: str = "utf-8"
    """Encoding used to read template files."""

    debug: bool = False
    """Log each statement as it is registered."""

    placeholder_style: str = "qmark"
    """Marker style used for :attr:`BoundTemplate.parameterized_text`."""

    field_name_style: str = "camel"
    """Attribute-to-placeholder name convention for ``build_from_object``."""

    def replace(self, **kwargs: Any) -> "StringmanConfig":
        """Return a copy with the given fields changed."""
        return replace(self, **kwargs)

    def validate(self) -> "list[str]":
        """Validate configuration consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []
        if not self.fileset:
            errors.append("fileset must not be empty")
        try:
            codecs.lookup(self.encoding)
        except LookupError:
            errors.append(f"unknown encoding: {self.encoding}")
        if self.placeholder_style.lower() not in PLACEHOLDER_STRATEGIES:
            errors.append(
                f"placeholder_style must be one of {', '.join(sorted(PLACEHOLDER_STRATEGIES))}, "
                f"got {self.placeholder_style!r}"
            )
        if self.field_name_style not in FIELD_NAME_CONVERTERS:
            errors.append(
                f"field_name_style must be one of {', '.join(sorted(FIELD_NAME_CONVERTERS))}, "
                f"got {self.field_name_style!r}"
            )
        return errors


def load_config_from_env() -> StringmanConfig:
    """Load configuration from ``STRINGMAN_*`` environment variables.

    Returns:
        StringmanConfig loaded from environment variables
    """
    defaults = StringmanConfig()
    return StringmanConfig(
        template_path=os.getenv("STRINGMAN_TEMPLATE_PATH") or None,
        fileset=os.getenv("STRINGMAN_FILESET", defaults.fileset),
        encoding=os.getenv("STRINGMAN_ENCODING", defaults.encoding),
        debug=_env_bool("STRINGMAN_DEBUG", defaults.debug),
        placeholder_style=os.getenv("STRINGMAN_PLACEHOLDER_STYLE", defaults.placeholder_style),
        field_name_style=os.getenv("STRINGMAN_FIELD_NAME_STYLE", defaults.field_name_style),
    )


def _env_bool(key: str, default: bool) -> bool:
    """Get boolean value from environment variable."""
    value = os.getenv(key)
    if value is None:
        return default
    return value.lower() in ("true", "1", "yes", "on", "enabled")

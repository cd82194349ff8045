"""The stringman manager.

:class:`Stringman` owns the statement registry. It is populated once, either
from template files named by the configuration or from templates added
directly, and then serves builds by statement id.

Example:
    ```python
    manager = Stringman.from_path("queries")
    sql = manager.build("UpdateAlbum", {"Score": 10, "Id": 1})
    ```
"""

import dataclasses
import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any, Optional, Union

from stringman.config import StringmanConfig
from stringman.core.builder import build
from stringman.core.normalizer import TemplateNormalizer, get_placeholder_strategy
from stringman.core.registry import StatementRegistry
from stringman.core.statement import BoundTemplate, RawTemplate
from stringman.exceptions import ImproperConfigurationError, StringmanError, UnsupportedTypeError
from stringman.loader import TemplateLoader
from stringman.utils.logging import get_logger, log_event
from stringman.utils.text import convert_field_name

__all__ = ("Stringman",)

logger = get_logger("base")


def _public_attributes(obj: Any) -> "dict[str, Any]":
    """Public instance attributes of ``obj``, from ``__dict__`` and ``__slots__``.

    Raises:
        UnsupportedTypeError: If ``obj`` has neither.
    """
    attributes: dict[str, Any] = {}
    has_storage = hasattr(obj, "__dict__")
    for cls in reversed(type(obj).__mro__):
        slots = cls.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for name in slots:
            has_storage = True
            if not name.startswith("_") and hasattr(obj, name):
                attributes[name] = getattr(obj, name)
    if not has_storage:
        raise UnsupportedTypeError(type(obj).__qualname__)
    attributes.update((name, value) for name, value in getattr(obj, "__dict__", {}).items() if not name.startswith("_"))
    return attributes


class Stringman:
    """Registry of named SQL templates with build support.

    Registration (``load``, ``add_template``, ``register_templates``) is not
    thread-safe and is expected to finish before the manager is shared.
    After that, ``find`` and ``build`` may be called concurrently.

    Args:
        config: Manager configuration. Defaults to :class:`StringmanConfig`.

    Raises:
        ImproperConfigurationError: If the configuration does not validate.
    """

    __slots__ = ("config", "loader", "normalizer", "registry")

    def __init__(self, config: "Optional[StringmanConfig]" = None) -> None:
        self.config = config if config is not None else StringmanConfig()
        errors = self.config.validate()
        if errors:
            raise ImproperConfigurationError(detail="; ".join(errors))
        self.registry = StatementRegistry()
        self.normalizer = TemplateNormalizer(get_placeholder_strategy(self.config.placeholder_style))
        self.loader = TemplateLoader(encoding=self.config.encoding)

    @classmethod
    def from_config(cls, config: StringmanConfig) -> "Stringman":
        """Create a manager and load ``config.template_path`` when set."""
        manager = cls(config)
        if config.template_path:
            manager.load()
        return manager

    @classmethod
    def from_path(
        cls, path: Union[str, Path], fileset: "Optional[str]" = None, config: "Optional[StringmanConfig]" = None
    ) -> "Stringman":
        """Create a manager and load templates from ``path``."""
        config = config if config is not None else StringmanConfig()
        changes: dict[str, Any] = {"template_path": str(path)}
        if fileset is not None:
            changes["fileset"] = fileset
        return cls.from_config(config.replace(**changes))

    def load(self, path: "Union[str, Path, None]" = None, fileset: "Optional[str]" = None) -> int:
        """Load and register every template found at ``path``.

        Args:
            path: Directory or file. Defaults to ``config.template_path``.
            fileset: Glob pattern. Defaults to ``config.fileset``.

        Raises:
            ImproperConfigurationError: If no path is given or configured.
            TemplateFileNotFoundError: If the path does not exist.
            TemplateLoadingError: If a file cannot be read or parsed.
            MalformedTemplateError: If a template has invalid placeholders.
            DuplicateStatementError: If an id is registered twice.

        Returns:
            Number of templates registered.
        """
        path = path if path is not None else self.config.template_path
        if path is None:
            msg = "No template path given or configured"
            raise ImproperConfigurationError(msg)
        fileset = fileset if fileset is not None else self.config.fileset
        try:
            raw_templates = self.loader.load(path, fileset)
            count = self.register_templates(raw_templates)
        except StringmanError:
            logger.exception("Failed to load templates [path=%s, fileset=%s]", path, fileset)
            raise
        log_event(logger, logging.INFO, "templates registered", path=str(path), fileset=fileset, count=count)
        return count

    def register_templates(self, raw_templates: "Iterable[RawTemplate]") -> int:
        """Normalize and register raw templates in order.

        Returns:
            Number of templates registered.
        """
        count = 0
        for raw in raw_templates:
            self.add_template(raw.id, raw.text)
            count += 1
        return count

    def add_template(self, statement_id: str, text: str) -> BoundTemplate:
        """Normalize and register one template.

        Raises:
            MalformedTemplateError: If the template has invalid placeholders.
            DuplicateStatementError: If the id is already registered.

        Returns:
            The registered bound template.
        """
        if self.config.debug:
            logger.debug("register statement : id=[%s], queryLen=%d", statement_id, len(text))
        template = self.normalizer.normalize(statement_id, text)
        self.registry.register(template)
        if self.config.debug:
            logger.debug("register statement (after build) : %r", template)
        return template

    def find(self, statement_id: str) -> BoundTemplate:
        """Look up a template by id, ignoring case.

        Raises:
            StatementNotFoundError: If no template has that id.
        """
        return self.registry.find(statement_id)

    def has_template(self, statement_id: str) -> bool:
        return statement_id in self.registry

    def list_templates(self) -> "list[str]":
        """Sorted statement ids, as stored (upper case)."""
        return self.registry.ids()

    def build(self, statement_id: str, parameters: "Optional[Mapping[str, Any]]" = None, **kwargs: Any) -> str:
        """Build the SQL text of a registered template.

        Args:
            statement_id: Statement id, matched ignoring case.
            parameters: Values keyed by placeholder name.
            **kwargs: Further values, overriding ``parameters``.

        Raises:
            StatementNotFoundError: If no template has that id.
            MissingParametersError: If no parameters are given for a template with bindings.
            ParameterNotFoundError: If a binding has no value.
            UnsupportedTypeError: If a value cannot be formatted.

        Returns:
            The SQL text.
        """
        template = self.find(statement_id)
        if kwargs:
            parameters = {**(parameters or {}), **kwargs}
        return build(template, parameters)

    def build_from_object(self, statement_id: str, obj: Any) -> str:
        """Build a template using the fields of ``obj`` as parameters.

        Mappings are used as-is. Dataclass fields and public instance
        attributes (``__dict__`` or ``__slots__``) are renamed with
        ``config.field_name_style`` first, so ``track_id`` fills ``{TrackId}``
        under the default ``camel`` style.

        Raises:
            UnsupportedTypeError: If ``obj`` carries no instance attributes.
        """
        if isinstance(obj, Mapping):
            return self.build(statement_id, obj)
        if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
            fields = {field.name: getattr(obj, field.name) for field in dataclasses.fields(obj)}
        else:
            fields = _public_attributes(obj)
        style = self.config.field_name_style
        return self.build(statement_id, {convert_field_name(name, style): value for name, value in fields.items()})

    def close(self) -> None:
        """Release resources. The manager holds none; kept for context-manager use."""

    def __enter__(self) -> "Stringman":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __repr__(self) -> str:
        return (
            f"Stringman(path={self.config.template_path!r}, fileset={self.config.fileset!r}, "
            f"keys=[{', '.join(self.registry.ids())}])"
        )

"""Expansion of bound templates into final SQL text."""

from collections.abc import Mapping
from typing import Any, Optional

from stringman.core.formatter import format_literal
from stringman.core.statement import BoundTemplate
from stringman.exceptions import MissingParametersError, ParameterNotFoundError

__all__ = ("build", "resolve_parameters")


def resolve_parameters(template: BoundTemplate, parameters: "Mapping[str, Any]") -> "list[Any]":
    """Look up the value of every binding, in declared order.

    Args:
        template: The bound template.
        parameters: Values keyed by placeholder name.

    Raises:
        ParameterNotFoundError: For the first binding without a value.

    Returns:
        One value per binding.
    """
    values = []
    for binding in template.bindings:
        # Membership first: mappings with __missing__ must not invent values.
        if binding.name not in parameters:
            raise ParameterNotFoundError(binding.name)
        values.append(parameters[binding.name])
    return values


def build(template: BoundTemplate, parameters: "Optional[Mapping[str, Any]]" = None) -> str:
    """Substitute parameters into a bound template.

    Every binding is resolved and formatted before any text is assembled, so
    a failure never yields partial output.

    Args:
        template: The bound template.
        parameters: Values keyed by placeholder name (case-sensitive).

    Raises:
        MissingParametersError: If parameters are empty but the template has bindings.
        ParameterNotFoundError: If a binding has no value.
        UnsupportedTypeError: If a value cannot be formatted as a literal.

    Returns:
        The SQL text.
    """
    if not parameters:
        if template.has_bindings:
            raise MissingParametersError(template.id)
        return template.text

    literals = [format_literal(value) for value in resolve_parameters(template, parameters)]

    segments = template.segments
    parts = [segments[0]]
    for literal, segment in zip(literals, segments[1:]):
        parts.append(literal)
        parts.append(segment)
    return "".join(parts)

"""SQL literal formatting for build parameters.

Values are rendered as the text a SQL statement would use to express them
inline. Nothing is escaped: embedded quotes in text values are emitted as-is
and callers are responsible for the content of the values they pass.

Formatting rules:

====================================  ===============================
Value                                 Literal
====================================  ===============================
``str``                               ``'text'``
``bytes``/``bytearray``/``memoryview`` ``'text'`` (UTF-8 decoded)
``datetime``/``date``                 ``'YYYY-MM-DD HH:MM:SS'``
``int``                               ``1234``
``float``                             ``16.720000``
``bool``                              ``true`` / ``false``
``None``                              ``null``
``NullString``                        ``'text'`` or ``null``
``NullInt64``                         ``'1234'`` or ``null``
``NullBool``                          ``'true'``/``'false'`` or ``null``
``NullFloat64``                       ``'16.720000'`` or ``null``
====================================  ===============================

Nullable integers are quoted while bare integers are not; statements written
against this behavior rely on it.
"""

import datetime
from typing import Any, Callable

from stringman.exceptions import UnsupportedTypeError
from stringman.typing import NullBool, NullFloat64, NullInt64, NullString, NullValue
from stringman.utils.dispatch import TypeDispatcher

__all__ = ("NULL_LITERAL", "format_literal", "is_supported_type")

NULL_LITERAL = "null"

LiteralFormatter = Callable[[Any], str]


def _quote(text: str) -> str:
    return f"'{text}'"


def _format_datetime(value: datetime.datetime) -> str:
    return (
        f"{value.year:04d}-{value.month:02d}-{value.day:02d} "
        f"{value.hour:02d}:{value.minute:02d}:{value.second:02d}"
    )


def _format_float(value: float) -> str:
    return f"{value:f}"


def _format_bytes(value: "bytes | bytearray | memoryview") -> str:
    # Undecodable bytes map to lone surrogates and survive a surrogateescape re-encode.
    return _quote(bytes(value).decode("utf-8", errors="surrogateescape"))


def _format_date(value: datetime.date) -> str:
    return _quote(_format_datetime(datetime.datetime(value.year, value.month, value.day)))


def _format_bool(value: bool) -> str:
    return "true" if value else "false"


def _nullable(render: LiteralFormatter) -> LiteralFormatter:
    def _format(value: NullValue[Any]) -> str:
        if not value.valid:
            return NULL_LITERAL
        return render(value.value)

    return _format


_FORMATTERS: TypeDispatcher[LiteralFormatter] = TypeDispatcher()
_FORMATTERS.register(str, _quote)
_FORMATTERS.register(bytes, _format_bytes)
_FORMATTERS.register(bytearray, _format_bytes)
_FORMATTERS.register(memoryview, _format_bytes)
_FORMATTERS.register(datetime.datetime, lambda value: _quote(_format_datetime(value)))
_FORMATTERS.register(datetime.date, _format_date)
_FORMATTERS.register(bool, _format_bool)
_FORMATTERS.register(int, lambda value: f"{value:d}")
_FORMATTERS.register(float, _format_float)
_FORMATTERS.register(type(None), lambda _: NULL_LITERAL)
_FORMATTERS.register(NullString, _nullable(_quote))
_FORMATTERS.register(NullInt64, _nullable(lambda value: _quote(f"{value:d}")))
_FORMATTERS.register(NullBool, _nullable(lambda value: _quote(_format_bool(value))))
_FORMATTERS.register(NullFloat64, _nullable(lambda value: _quote(_format_float(value))))


def is_supported_type(value: Any) -> bool:
    """Check whether a value has a literal formatting rule."""
    return _FORMATTERS.get(value) is not None


def format_literal(value: Any) -> str:
    """Render a value as a SQL literal.

    Args:
        value: The parameter value.

    Raises:
        UnsupportedTypeError: If the value's type has no formatting rule.

    Returns:
        The literal text.
    """
    formatter = _FORMATTERS.get(value)
    if formatter is None:
        raise UnsupportedTypeError(type(value).__qualname__)
    return formatter(value)

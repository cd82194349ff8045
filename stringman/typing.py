"""Public type aliases and nullable value wrappers.

The nullable wrappers mirror the ``Null*`` column types of database drivers:
each holds either a value or nothing. They are formatted differently from the
bare values they wrap (see :mod:`stringman.core.formatter`).
"""

from collections.abc import Mapping
from typing import Any, Generic, Optional, TypeVar

from mypy_extensions import mypyc_attr
from typing_extensions import TypeAlias

__all__ = (
    "BuildParameters",
    "NullBool",
    "NullFloat64",
    "NullInt64",
    "NullString",
    "NullValue",
)

T = TypeVar("T")

BuildParameters: TypeAlias = "Optional[Mapping[str, Any]]"
"""Type alias for the parameters accepted by a build.

Keys are placeholder names, matched case-sensitively.
"""


@mypyc_attr(allow_interpreted_subclasses=True)
class NullValue(Generic[T]):
    """A value that may be absent.

    Args:
        value: The wrapped value, or ``None`` for SQL ``null``.
    """

    __slots__ = ("_value",)

    def __init__(self, value: Optional[T] = None) -> None:
        self._value = value

    @property
    def value(self) -> Optional[T]:
        return self._value

    @property
    def valid(self) -> bool:
        """Whether a value is present."""
        return self._value is not None

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return False
        return self._value == other._value  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._value))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._value!r})"


class NullString(NullValue[str]):
    """Nullable text."""

    __slots__ = ()


class NullInt64(NullValue[int]):
    """Nullable integer."""

    __slots__ = ()


class NullBool(NullValue[bool]):
    """Nullable boolean."""

    __slots__ = ()


class NullFloat64(NullValue[float]):
    """Nullable float."""

    __slots__ = ()

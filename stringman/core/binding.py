"""Placeholder bindings recorded during template normalization."""

from enum import Enum

from mypy_extensions import mypyc_attr

__all__ = ("BindKind", "Binding")


class BindKind(str, Enum):
    """How a binding's value is expanded into the statement."""

    SCALAR = "scalar"
    REPEATED = "repeated"
    """Reserved for array expansion; the normalizer never produces it."""

    def __str__(self) -> str:
        return self.value


@mypyc_attr(allow_interpreted_subclasses=False)
class Binding:
    """One ``{name}`` occurrence in a template.

    Args:
        name: Placeholder name exactly as written between the delimiters.
        position: 0-based rank among all bindings of the template.
        kind: Expansion kind.
    """

    __slots__ = ("_kind", "_name", "_position")

    def __init__(self, name: str, position: int, kind: BindKind = BindKind.SCALAR) -> None:
        self._name = name
        self._position = position
        self._kind = kind

    @property
    def name(self) -> str:
        return self._name

    @property
    def position(self) -> int:
        return self._position

    @property
    def kind(self) -> BindKind:
        return self._kind

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Binding):
            return False
        return self._name == other._name and self._position == other._position and self._kind == other._kind

    def __hash__(self) -> int:
        return hash((self._name, self._position, self._kind))

    def __repr__(self) -> str:
        return f"Binding(name={self._name!r}, position={self._position!r}, kind={self._kind!s})"

"""Bound template entity produced by normalization."""

from collections.abc import Sequence
from typing import Final

from mypy_extensions import mypyc_attr

from stringman.core.binding import Binding

__all__ = ("MARKER", "BoundTemplate", "RawTemplate")

MARKER: Final = "\x00"
"""Character shown in place of each placeholder by :attr:`BoundTemplate.internal_text`."""


class RawTemplate:
    """Template id and body as read from a source, before normalization."""

    __slots__ = ("id", "source", "text")

    def __init__(self, id: str, text: str, source: "str | None" = None) -> None:  # noqa: A002
        self.id = id
        self.text = text
        self.source = source

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RawTemplate):
            return False
        return self.id == other.id and self.text == other.text and self.source == other.source

    def __repr__(self) -> str:
        return f"RawTemplate(id={self.id!r}, text_len={len(self.text)}, source={self.source!r})"


@mypyc_attr(allow_interpreted_subclasses=False)
class BoundTemplate:
    """Normalized, reusable form of a template.

    The literal text between placeholders is kept as ``segments``; the hole
    between ``segments[k]`` and ``segments[k + 1]`` belongs to ``bindings[k]``.
    Holes are structural, so template content can never be mistaken for one.

    Instances are immutable and safe to share between threads.

    Args:
        id: Statement id as declared.
        text: Trimmed template text.
        segments: Literal runs, one more than there are bindings.
        bindings: Bindings in declared order.
        parameterized_text: Template with each hole rendered by a placeholder strategy.
    """

    __slots__ = ("_bindings", "_id", "_parameterized_text", "_segments", "_text")

    def __init__(
        self,
        id: str,  # noqa: A002
        text: str,
        segments: "Sequence[str]",
        bindings: "Sequence[Binding]",
        parameterized_text: "str | None" = None,
    ) -> None:
        if len(segments) != len(bindings) + 1:
            msg = f"expected {len(bindings) + 1} segments for {len(bindings)} bindings, got {len(segments)}"
            raise ValueError(msg)
        self._id = id
        self._text = text
        self._segments = tuple(segments)
        self._bindings = tuple(bindings)
        self._parameterized_text = parameterized_text if parameterized_text is not None else text

    @property
    def id(self) -> str:
        return self._id

    @property
    def text(self) -> str:
        return self._text

    @property
    def segments(self) -> "tuple[str, ...]":
        return self._segments

    @property
    def bindings(self) -> "tuple[Binding, ...]":
        return self._bindings

    @property
    def parameterized_text(self) -> str:
        """Template text with driver-style placeholders (``?`` by default)."""
        return self._parameterized_text

    @property
    def internal_text(self) -> str:
        """Template text with :data:`MARKER` in place of every placeholder."""
        return MARKER.join(self._segments)

    @property
    def binding_names(self) -> "tuple[str, ...]":
        return tuple(binding.name for binding in self._bindings)

    @property
    def has_bindings(self) -> bool:
        return bool(self._bindings)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BoundTemplate):
            return False
        return self._id == other._id and self._segments == other._segments and self._bindings == other._bindings

    def __hash__(self) -> int:
        return hash((self._id, self._segments, self._bindings))

    def __repr__(self) -> str:
        return f"BoundTemplate(id={self._id!r}, text_len={len(self._text)}, bindings={len(self._bindings)})"

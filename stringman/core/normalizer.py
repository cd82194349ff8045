"""Placeholder scanning and template normalization.

A template is plain text containing ``{name}`` placeholders. Normalization
trims the text, records one :class:`~stringman.core.binding.Binding` per
placeholder occurrence in left-to-right order, and splits the text into the
literal runs between placeholders. The result is a
:class:`~stringman.core.statement.BoundTemplate` that can be built many times
without scanning again.

Example:
    ```python
    normalizer = TemplateNormalizer()
    template = normalizer.normalize(
        "UpdateAlbum", "UPDATE album SET score={Score} WHERE id={Id}"
    )
    template.binding_names  # ("Score", "Id")
    template.parameterized_text  # "UPDATE album SET score=? WHERE id=?"
    ```
"""

import itertools
from abc import ABC, abstractmethod
from collections.abc import Iterator, Sequence
from typing import Final, Optional

from stringman.core.binding import BindKind, Binding
from stringman.core.statement import BoundTemplate
from stringman.exceptions import MalformedTemplateError

__all__ = (
    "DELIM_START",
    "DELIM_STOP",
    "MIN_TEMPLATE_LENGTH",
    "PLACEHOLDER_STRATEGIES",
    "NumericPlaceholderStrategy",
    "PlaceholderStrategy",
    "QmarkPlaceholderStrategy",
    "TemplateNormalizer",
    "TemplateScan",
    "get_placeholder_strategy",
    "scan_template",
)

DELIM_START: Final = "{"
DELIM_STOP: Final = "}"
TRIM_CHARACTERS: Final = " \r\n\t"
MIN_TEMPLATE_LENGTH: Final = 3


class PlaceholderStrategy(ABC):
    """Renders the holes of a normalized template as driver-style markers."""

    __slots__ = ()

    @abstractmethod
    def markers(self) -> "Iterator[str]":
        """Return a fresh marker sequence; one marker is drawn per hole."""

    def render(self, segments: "Sequence[str]") -> str:
        """Join literal segments with markers drawn from a new sequence.

        Args:
            segments: Literal runs of a normalized template.

        Returns:
            The parameterized text.
        """
        markers = self.markers()
        parts = [segments[0]]
        for segment in segments[1:]:
            parts.append(next(markers))
            parts.append(segment)
        return "".join(parts)


class QmarkPlaceholderStrategy(PlaceholderStrategy):
    """``?`` for every hole."""

    __slots__ = ()

    def markers(self) -> "Iterator[str]":
        return itertools.repeat("?")


class NumericPlaceholderStrategy(PlaceholderStrategy):
    """Numbered markers such as ``$1, $2`` or ``:1, :2``."""

    __slots__ = ("prefix", "start")

    def __init__(self, prefix: str = "$", start: int = 1) -> None:
        self.prefix = prefix
        self.start = start

    def markers(self) -> "Iterator[str]":
        return (f"{self.prefix}{index}" for index in itertools.count(self.start))


PLACEHOLDER_STRATEGIES: Final = {"qmark": QmarkPlaceholderStrategy, "numeric": NumericPlaceholderStrategy}


def get_placeholder_strategy(style: str) -> PlaceholderStrategy:
    """Create the placeholder strategy registered under ``style``.

    Raises:
        ValueError: If the style is unknown.
    """
    try:
        return PLACEHOLDER_STRATEGIES[style.lower()]()
    except KeyError:
        msg = f"Unknown placeholder style: {style!r}. Expected one of: {', '.join(sorted(PLACEHOLDER_STRATEGIES))}"
        raise ValueError(msg) from None


class TemplateScan:
    """Result of scanning one template."""

    __slots__ = ("bindings", "segments", "text")

    def __init__(self, text: str, segments: "tuple[str, ...]", bindings: "tuple[Binding, ...]") -> None:
        self.text = text
        self.segments = segments
        self.bindings = bindings


class _ScanContext:
    """Cursor and accumulators for a single scan."""

    __slots__ = ("bindings", "cursor", "run_start", "segments", "text")

    def __init__(self, text: str) -> None:
        self.text = text
        self.cursor = 0
        self.run_start = 0
        self.segments: list[str] = []
        self.bindings: list[Binding] = []

    def scan(self) -> TemplateScan:
        text = self.text
        length = len(text)
        while True:
            start = text.find(DELIM_START, self.cursor)
            if start < 0:
                break
            if start >= length - 2:
                msg = "incomplete placeholder"
                raise MalformedTemplateError(msg, template=text)
            stop = text.find(DELIM_STOP, start + 1)
            if stop < 0:
                msg = "unterminated placeholder"
                raise MalformedTemplateError(msg, template=text)
            if stop == start + 1:
                msg = "empty placeholder"
                raise MalformedTemplateError(msg, template=text)
            name = text[start + 1 : stop]
            if DELIM_START in name:
                msg = f"nested or invalid placeholder {DELIM_START}{name}{DELIM_STOP}"
                raise MalformedTemplateError(msg, template=text)
            self._hole(start, stop + 1, name)

        self.segments.append(text[self.run_start :])
        return TemplateScan(text, tuple(self.segments), tuple(self.bindings))

    def _hole(self, start: int, end: int, name: str) -> None:
        self.segments.append(self.text[self.run_start : start])
        self.bindings.append(Binding(name, len(self.bindings), BindKind.SCALAR))
        self.run_start = self.cursor = end


def scan_template(raw_text: str) -> TemplateScan:
    """Scan a raw template for placeholders.

    Args:
        raw_text: Template text; surrounding whitespace is ignored.

    Raises:
        MalformedTemplateError: If the trimmed text is shorter than three
            characters or a placeholder is incomplete, unterminated, empty
            or nested.

    Returns:
        The trimmed text with its segments and bindings.
    """
    text = raw_text.strip(TRIM_CHARACTERS)
    if len(text) < MIN_TEMPLATE_LENGTH:
        msg = "invalid query"
        raise MalformedTemplateError(msg, template=text)
    return _ScanContext(text).scan()


class TemplateNormalizer:
    """Turns raw templates into :class:`BoundTemplate` objects.

    Holds no scan state between calls, so one instance may normalize
    templates from several threads.

    Args:
        strategy: Placeholder strategy used for
            :attr:`BoundTemplate.parameterized_text`. Defaults to ``?`` markers.
    """

    __slots__ = ("strategy",)

    def __init__(self, strategy: "Optional[PlaceholderStrategy]" = None) -> None:
        self.strategy = strategy if strategy is not None else QmarkPlaceholderStrategy()

    def normalize(self, statement_id: str, raw_text: str) -> BoundTemplate:
        """Normalize one template.

        Args:
            statement_id: Id the template is registered under.
            raw_text: Template body.

        Returns:
            The bound template.
        """
        scan = scan_template(raw_text)
        return BoundTemplate(
            statement_id,
            scan.text,
            scan.segments,
            scan.bindings,
            parameterized_text=self.strategy.render(scan.segments),
        )

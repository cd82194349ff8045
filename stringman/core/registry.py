"""Case-insensitive store of bound templates."""

import logging
from collections.abc import Iterator

from stringman.core.statement import BoundTemplate
from stringman.exceptions import DuplicateStatementError, StatementNotFoundError
from stringman.utils.logging import get_logger, log_event

__all__ = ("StatementRegistry", "normalize_statement_id")

logger = get_logger("core.registry")


def normalize_statement_id(statement_id: str) -> str:
    """Fold a statement id to its storage key."""
    return statement_id.upper()


class StatementRegistry:
    """Mapping from case-folded statement id to :class:`BoundTemplate`.

    The registry is populated during initialization and read afterwards.
    Lookups take no lock: ``find`` may be called from many threads at once
    as long as no ``register`` call runs at the same time.
    """

    __slots__ = ("_statements",)

    def __init__(self) -> None:
        self._statements: dict[str, BoundTemplate] = {}

    def register(self, template: BoundTemplate) -> None:
        """Store a template under its id.

        Args:
            template: The bound template.

        Raises:
            DuplicateStatementError: If the folded id is already present. The
                registry is left unchanged.
        """
        key = normalize_statement_id(template.id)
        if key in self._statements:
            raise DuplicateStatementError(key)
        self._statements[key] = template
        log_event(logger, logging.DEBUG, "statement registered", statement_id=key, bindings=len(template.bindings))

    def find(self, statement_id: str) -> BoundTemplate:
        """Look up a template by id, ignoring case.

        Raises:
            StatementNotFoundError: If no template has that id.
        """
        try:
            return self._statements[normalize_statement_id(statement_id)]
        except KeyError:
            raise StatementNotFoundError(statement_id) from None

    def ids(self) -> "list[str]":
        """Sorted storage keys."""
        return sorted(self._statements)

    def __contains__(self, statement_id: object) -> bool:
        return isinstance(statement_id, str) and normalize_statement_id(statement_id) in self._statements

    def __len__(self) -> int:
        return len(self._statements)

    def __iter__(self) -> "Iterator[BoundTemplate]":
        return iter(self._statements.values())

    def __repr__(self) -> str:
        return f"StatementRegistry(keys=[{', '.join(self._statements)}])"

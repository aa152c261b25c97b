"""Exact cover solving over arbitrary row and column objects."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Sequence
from contextlib import contextmanager
from typing import Any, Generic, TypeVar

from dlxcover.links import DancingLinkArray

R = TypeVar("R")
C = TypeVar("C")


class DuplicateEntryError(ValueError):
    """Raised when the same (row, column) pair is given more than once."""


def _position(items: list[Any], value: Any) -> int:
    """Return the index of ``value`` in ``items``, appending it if absent."""
    for idx, item in enumerate(items):
        if item == value:
            return idx
    items.append(value)
    return len(items) - 1


class ExactCoverSolver(Generic[R]):
    """Solves exact cover problems whose rows are arbitrary objects.

    Rows only need to support equality.  Rows can be pre-selected with
    :meth:`set_state` (or the :meth:`assuming` context manager) and the
    selections undone in reverse order with :meth:`recover`.
    """

    def __init__(self, array: DancingLinkArray, rows: Sequence[R]) -> None:
        self._array = array
        self._rows: tuple[R, ...] = tuple(rows)
        self._removed: list[int] = []
        self._entries = array.row_entries()

    @classmethod
    def from_predicate(
        cls,
        rows: Iterable[R],
        cols: Iterable[C],
        predicate: Callable[[R, C], bool],
    ) -> ExactCoverSolver[R]:
        """Build a solver where row ``r`` covers column ``c`` iff ``predicate(r, c)``."""
        return cls.from_predicate_optional(rows, cols, (), predicate)

    @classmethod
    def from_predicate_optional(
        cls,
        rows: Iterable[R],
        strict_cols: Iterable[C],
        opt_cols: Iterable[C],
        predicate: Callable[[R, C], bool],
    ) -> ExactCoverSolver[R]:
        """Like :meth:`from_predicate`, with optional columns covered at most once."""
        row_list = list(rows)
        strict = list(strict_cols)
        optional = list(opt_cols)
        cols = strict + optional
        entries = [
            (r_idx, c_idx)
            for r_idx, row in enumerate(row_list)
            for c_idx, col in enumerate(cols)
            if predicate(row, col)
        ]
        array = DancingLinkArray.from_sorted_entries(
            entries, len(row_list), len(strict), len(optional)
        )
        return cls(array, row_list)

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[R, Any]]) -> ExactCoverSolver[R]:
        """Build a solver from ``(row, column)`` pairs, one per matrix entry.

        Rows and columns are numbered in order of first appearance.  Raises
        :class:`DuplicateEntryError` if a pair occurs twice.
        """
        unique_rows: list[R] = []
        unique_cols: list[Any] = []
        entries = [
            (_position(unique_rows, row), _position(unique_cols, col))
            for row, col in pairs
        ]
        entries.sort()
        for prev, cur in zip(entries, entries[1:]):
            if prev == cur:
                raise DuplicateEntryError(
                    f"entry ({unique_rows[cur[0]]!r}, {unique_cols[cur[1]]!r}) given twice"
                )
        array = DancingLinkArray.from_sorted_entries(
            entries, len(unique_rows), len(unique_cols), 0
        )
        return cls(array, unique_rows)

    def solve_one(self) -> list[R] | None:
        """Return the rows of one solution, or ``None`` if there is none."""
        indices = self._array.solve_one()
        if indices is None:
            return None
        return [self._rows[idx] for idx in indices]

    def solve_many(self) -> list[list[R]]:
        """Return the rows of every solution."""
        return [[self._rows[idx] for idx in sol] for sol in self._array.solve_many()]

    def _find(self, row: R) -> int:
        for idx, candidate in enumerate(self._rows):
            if candidate == row:
                return idx
        raise ValueError(f"tried to select a non-existent row {row!r}")

    def _select(self, row: R) -> None:
        idx = self._find(row)
        if idx in self._removed:
            raise ValueError(f"row {row!r} is already selected")
        self._array.remove_row(self._entries[idx])
        self._removed.append(idx)

    def set_state(self, rows: Iterable[R]) -> None:
        """Select each of ``rows``, removing them and everything they clash with."""
        for row in rows:
            self._select(row)

    def recover(self, n: int) -> None:
        """Undo the last ``n`` row selections."""
        if n < 0:
            raise ValueError("cannot recover a negative number of changes")
        if n > len(self._removed):
            raise ValueError(
                f"tried to recover {n} changes, only {len(self._removed)} were made"
            )
        for _ in range(n):
            idx = self._removed.pop()
            self._array.insert_row(self._entries[idx])

    @contextmanager
    def assuming(self, rows: Iterable[R]) -> Iterator[ExactCoverSolver[R]]:
        """Select ``rows`` for the duration of the ``with`` block."""
        applied = 0
        try:
            for row in rows:
                self._select(row)
                applied += 1
            yield self
        finally:
            self.recover(applied)

    def solve_one_with(self, rows: Iterable[R]) -> list[R] | None:
        """Solve with ``rows`` pre-selected; they are not part of the result."""
        with self.assuming(rows):
            return self.solve_one()

    def solve_many_with(self, rows: Iterable[R]) -> list[list[R]]:
        """Find every solution with ``rows`` pre-selected."""
        with self.assuming(rows):
            return self.solve_many()
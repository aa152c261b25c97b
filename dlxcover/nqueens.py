"""The N-queens puzzle as an exact cover problem with optional diagonals."""

from __future__ import annotations

import sys
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from enum import Enum

from dlxcover.solver import ExactCoverSolver

DEFAULT_SIZE = 69


class ConstraintKind(Enum):
    """Kinds of N-queens constraint."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"
    DIAGONAL_NE = "diagonal_ne"
    DIAGONAL_NW = "diagonal_nw"


@dataclass(frozen=True)
class QueenConstraint:
    """One column of the cover matrix.

    Rows and columns are strict.  For north-east diagonals the central
    diagonal from the bottom left is 0; for north-west diagonals the central
    diagonal from the bottom right is 0.  Diagonals are optional.
    """

    kind: ConstraintKind
    index: int


@dataclass(frozen=True)
class QueenChoice:
    """Placing a queen at row ``r``, column ``c``."""

    r: int
    c: int

    def diag_ne(self) -> int:
        """Index of the north-east diagonal through this square."""
        return self.c - self.r

    def diag_nw(self, n: int) -> int:
        """Index of the north-west diagonal through this square."""
        return self.r - (n - 1 - self.c)

    def satisfies(self, constraint: QueenConstraint, n: int) -> bool:
        """Whether this placement covers ``constraint`` on an ``n`` board."""
        kind, index = constraint.kind, constraint.index
        if kind is ConstraintKind.HORIZONTAL:
            return index == self.r
        if kind is ConstraintKind.VERTICAL:
            return index == self.c
        if kind is ConstraintKind.DIAGONAL_NE:
            return index == self.diag_ne()
        return index == self.diag_nw(n)


@dataclass
class QueenBoard:
    """An ``n`` by ``n`` board of queens."""

    n: int
    cells: list[bool] = field(default_factory=list)

    @classmethod
    def empty(cls, n: int) -> QueenBoard:
        """A board with no queens."""
        return cls(n, [False] * (n * n))

    @classmethod
    def from_choices(cls, n: int, choices: Iterable[QueenChoice]) -> QueenBoard:
        """A board with a queen on every chosen square."""
        board = cls.empty(n)
        for choice in choices:
            board.place_queen(choice.r, choice.c)
        return board

    def _index(self, r: int, c: int) -> int:
        if not (0 <= r < self.n and 0 <= c < self.n):
            raise IndexError(f"square ({r}, {c}) is off the board")
        return r * self.n + c

    def has_queen(self, r: int, c: int) -> bool:
        """Whether a queen stands on ``(r, c)``."""
        return self.cells[self._index(r, c)]

    def place_queen(self, r: int, c: int) -> None:
        """Put a queen on ``(r, c)``, which must be empty."""
        idx = self._index(r, c)
        if self.cells[idx]:
            raise ValueError(f"square ({r}, {c}) already holds a queen")
        self.cells[idx] = True

    def render(self) -> str:
        """Text picture of the board: ``*`` for a queen, ``.`` otherwise."""
        return "".join(
            "".join("* " if self.has_queen(r, c) else ". " for c in range(self.n)) + "\n"
            for r in range(self.n)
        )


def strict_constraints(n: int) -> list[QueenConstraint]:
    """One constraint per row and per column."""
    return [QueenConstraint(ConstraintKind.HORIZONTAL, i) for i in range(n)] + [
        QueenConstraint(ConstraintKind.VERTICAL, i) for i in range(n)
    ]


def optional_constraints(n: int) -> list[QueenConstraint]:
    """The ``2n - 1`` diagonals in each direction."""
    if n <= 0:
        raise ValueError("board size must be positive")
    span = range(-(n - 1), n)
    return [QueenConstraint(ConstraintKind.DIAGONAL_NE, d) for d in span] + [
        QueenConstraint(ConstraintKind.DIAGONAL_NW, d) for d in span
    ]


def all_choices(n: int) -> list[QueenChoice]:
    """Every square of the board, row-major."""
    return [QueenChoice(r, c) for r in range(n) for c in range(n)]


def solve(n: int) -> QueenBoard | None:
    """Place ``n`` non-attacking queens, or return ``None`` if impossible."""
    solver = ExactCoverSolver.from_predicate_optional(
        all_choices(n),
        strict_constraints(n),
        optional_constraints(n),
        lambda choice, constraint: choice.satisfies(constraint, n),
    )
    solution = solver.solve_one()
    if solution is None:
        return None
    return QueenBoard.from_choices(n, solution)


def main(argv: Sequence[str] | None = None) -> int:
    """Solve the N-queens puzzle and print the board."""
    args = list(sys.argv[1:] if argv is None else argv)
    n = int(args[0]) if args else DEFAULT_SIZE
    board = solve(n)
    if board is None:
        print("No solution")
    else:
        print("Solution")
        print(board.render(), end="")
    return 0
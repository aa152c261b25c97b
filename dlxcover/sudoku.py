"""Sudoku solving as an exact cover problem, with a command-line front end."""

from __future__ import annotations

import sys
import time
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from dlxcover.solver import ExactCoverSolver

SIZE = 9
CELLS = SIZE * SIZE

SAMPLE_BOARD = (
    "   1 2    6     7   8   9  4       3 5   7   2   8   1  9   8 5 7     6    3 4   "
)
SAMPLE_EXTRA_BOARD = (
    "2...7..3.3......6......198.1.4.6....................9...5...6.....754.2...3.8..7."
)
HARDEST = (
    "800000000003600000070090200050007000000045700000100030001000068008500010090000400"
)


class BoardFormatError(ValueError):
    """Raised when text cannot be read as a sudoku board."""


class ArgumentError(ValueError):
    """Raised when the command line cannot be understood."""


@dataclass(frozen=True)
class Choice:
    """Writing ``val`` into the cell at ``row``, ``col`` (all 1-indexed)."""

    row: int
    col: int
    val: int


class ConstraintKind(Enum):
    """Kinds of sudoku constraint."""

    ROW = "row"
    COLUMN = "column"
    BOX = "box"
    POSITION = "position"
    EXTRA_BOX = "extra_box"


@dataclass(frozen=True)
class Constraint:
    """One column of the cover matrix.

    For ``POSITION`` the two numbers are a row and a column; for every other
    kind they are a unit number and a value.
    """

    kind: ConstraintKind
    first: int
    second: int


def all_choices() -> list[Choice]:
    """Every (row, column, value) triple, row-major."""
    digits = range(1, SIZE + 1)
    return [Choice(r, c, v) for r in digits for c in digits for v in digits]


def all_constraints() -> list[Constraint]:
    """The row, column, box and position constraints of a standard sudoku."""
    digits = range(1, SIZE + 1)
    kinds = (
        ConstraintKind.ROW,
        ConstraintKind.COLUMN,
        ConstraintKind.BOX,
        ConstraintKind.POSITION,
    )
    return [Constraint(kind, i, j) for i in digits for j in digits for kind in kinds]


def all_constraints_extra() -> list[Constraint]:
    """The standard constraints followed by those of the four extra boxes."""
    extras = [
        Constraint(ConstraintKind.EXTRA_BOX, box, val)
        for box in range(1, 5)
        for val in range(1, SIZE + 1)
    ]
    return all_constraints() + extras


def box_number(row: int, col: int) -> int:
    """The 1-indexed 3x3 box holding the 1-indexed cell."""
    return ((row - 1) // 3) * 3 + (col - 1) // 3 + 1


def extra_box_number(row: int, col: int) -> int | None:
    """The extra box (1 to 4) holding the cell, or ``None`` if outside them."""
    top = 2 <= row <= 4
    bottom = 6 <= row <= 8
    left = 2 <= col <= 4
    right = 6 <= col <= 8
    if top and left:
        return 1
    if top and right:
        return 2
    if bottom and left:
        return 3
    if bottom and right:
        return 4
    return None


def satisfies(choice: Choice, constraint: Constraint) -> bool:
    """Whether ``choice`` covers a standard ``constraint``."""
    kind, first, second = constraint.kind, constraint.first, constraint.second
    if kind is ConstraintKind.ROW:
        return choice.row == first and choice.val == second
    if kind is ConstraintKind.COLUMN:
        return choice.col == first and choice.val == second
    if kind is ConstraintKind.BOX:
        return choice.val == second and box_number(choice.row, choice.col) == first
    if kind is ConstraintKind.POSITION:
        return choice.row == first and choice.col == second
    raise ValueError(f"{kind.name} is not a standard sudoku constraint")


def satisfies_extra(choice: Choice, constraint: Constraint) -> bool:
    """Whether ``choice`` covers ``constraint``, extra boxes included."""
    if constraint.kind is ConstraintKind.EXTRA_BOX:
        return (
            choice.val == constraint.second
            and extra_box_number(choice.row, choice.col) == constraint.first
        )
    return satisfies(choice, constraint)


@dataclass
class SudokuBoard:
    """A 9x9 board; each cell holds a digit 1-9 or ``None`` when empty."""

    cells: list[int | None] = field(default_factory=lambda: [None] * CELLS)

    def __post_init__(self) -> None:
        if len(self.cells) != CELLS:
            raise BoardFormatError(f"a board needs {CELLS} cells, got {len(self.cells)}")

    @classmethod
    def from_string(cls, text: str, empty: str = "0") -> SudokuBoard:
        """Read 81 characters, ``empty`` for a blank cell and ``1``-``9`` otherwise."""
        if len(text) != CELLS:
            raise BoardFormatError(
                f"a board needs {CELLS} characters, got {len(text)}"
            )
        cells: list[int | None] = []
        for ch in text:
            if ch == empty:
                cells.append(None)
            elif ch in "123456789":
                cells.append(int(ch))
            else:
                raise BoardFormatError(f"unexpected character {ch!r} in board")
        return cls(cells)

    def cell(self, row: int, col: int) -> int | None:
        """The value at the 1-indexed cell ``row``, ``col``."""
        if not (1 <= row <= SIZE and 1 <= col <= SIZE):
            raise IndexError(f"cell ({row}, {col}) is off the board")
        return self.cells[(row - 1) * SIZE + col - 1]

    def render(self, empty: str = " ") -> str:
        """The board as nine lines of space-separated characters."""
        lines = []
        for r in range(1, SIZE + 1):
            line = "".join(
                f"{empty if (v := self.cell(r, c)) is None else v} "
                for c in range(1, SIZE + 1)
            )
            lines.append(line + "\n")
        return "".join(lines)

    def make_move(self, choice: Choice) -> None:
        """Write ``choice`` into the board; a value of 0 clears the cell."""
        self.cells[(choice.row - 1) * SIZE + choice.col - 1] = choice.val or None

    def make_moves(self, choices: Iterable[Choice]) -> None:
        """Apply every choice in turn."""
        for choice in choices:
            self.make_move(choice)

    def to_raw(self, empty: str = "0") -> str:
        """The board as one line of 81 characters."""
        return "".join(empty if v is None else str(v) for v in self.cells)

    def current_choices(self) -> list[Choice]:
        """The choices already made on this board, row-major."""
        return [
            Choice(idx // SIZE + 1, idx % SIZE + 1, v)
            for idx, v in enumerate(self.cells)
            if v is not None
        ]


def _standard_solver() -> ExactCoverSolver[Choice]:
    return ExactCoverSolver.from_predicate(all_choices(), all_constraints(), satisfies)


def _solved(board: SudokuBoard, moves: Iterable[Choice]) -> SudokuBoard:
    result = SudokuBoard(list(board.cells))
    result.make_moves(moves)
    return result


def open_sudokus(path: str | Path, skip_first: bool = False) -> list[SudokuBoard]:
    """Read one board per line, ``0`` marking blanks."""
    lines = Path(path).read_text(encoding="utf-8").splitlines()
    if skip_first:
        lines = lines[1:]
    boards = []
    for line in lines:
        try:
            boards.append(SudokuBoard.from_string(line, "0"))
        except BoardFormatError as exc:
            raise BoardFormatError(
                f"Failed to create a board from the line {line}"
            ) from exc
    return boards


def write_sudokus(
    boards: Sequence[SudokuBoard], solutions: Sequence[SudokuBoard], path: str | Path
) -> None:
    """Write the solution count, then one ``board,solution`` line per pair."""
    parts = [f"{len(solutions)}\n"]
    for board, solution in zip(boards, solutions):
        parts.append(f"{board.to_raw('0')},{solution.to_raw('0')}\n")
    Path(path).write_bytes("".join(parts).encode("ascii"))


@dataclass(frozen=True)
class FileSolveJob:
    """Solve every board in ``input_path`` and write them to ``output_path``."""

    input_path: Path
    output_path: Path
    ignore_first: bool = False


@dataclass(frozen=True)
class Arguments:
    """Parsed command line: a file job or a board string, and whether to time it."""

    job: FileSolveJob | str
    time: bool = False


def parse_args(argv: Sequence[str] | None = None) -> Arguments:
    """Parse ``[-fti...] INPUT [OUTPUT]`` or ``[-t...] BOARD``.

    ``-f`` reads boards from a file (output defaults to ``INPUT-sols.txt``),
    ``-t`` times the run and ``-i`` skips the first line of the file.
    """
    tokens = list(sys.argv[1:] if argv is None else argv)
    use_file = timed = ignore_first = False
    input_idx = 0
    for token in tokens:
        if not token.startswith("-"):
            break
        if len(token) == 1:
            raise ArgumentError("Empty flag passed!")
        input_idx += 1
        use_file = use_file or "f" in token
        timed = timed or "t" in token
        ignore_first = ignore_first or "i" in token

    if use_file:
        if input_idx >= len(tokens):
            raise ArgumentError("No input file given with the -f flag!")
        input_str = tokens[input_idx]
        if input_idx + 1 < len(tokens):
            output_str = tokens[input_idx + 1]
        else:
            output_str = input_str + "-sols.txt"
        job = FileSolveJob(Path(input_str), Path(output_str), ignore_first)
        return Arguments(job, timed)

    if not tokens:
        raise ArgumentError("Expected a board as the first parameter!")
    if ignore_first:
        raise ArgumentError("Can't use -i without -f!")
    if input_idx >= len(tokens):
        raise ArgumentError("Expected a board as the first parameter!")
    return Arguments(tokens[input_idx], timed)


def solve_board(text: str, time_it: bool = False) -> None:
    """Solve the board written in ``text`` and print it before and after."""
    try:
        board = SudokuBoard.from_string(text, "0")
    except BoardFormatError:
        print(f"Can't make a board from {text}")
        return
    solver = _standard_solver()
    start = time.perf_counter()
    moves = solver.solve_one_with(board.current_choices())
    elapsed = time.perf_counter() - start
    if moves is None:
        print("Found no solution!")
        return
    print(board.render(" "), end="")
    print(_solved(board, moves).render(" "), end="")
    if time_it:
        print(f"That took {elapsed * 1000.0} ms")


def solve_file(job: FileSolveJob, time_it: bool = False) -> None:
    """Solve every board of ``job``'s input file and write the results."""
    try:
        boards = open_sudokus(job.input_path, job.ignore_first)
    except BoardFormatError as exc:
        print(exc)
        return

    solver = _standard_solver()
    given = [board.current_choices() for board in boards]
    solutions: list[SudokuBoard] = []
    start = time.perf_counter()
    for board, choices in zip(boards, given):
        moves = solver.solve_one_with(choices)
        if moves is None:
            print("Could not solve board: ")
            print(board.render(" "), end="")
            return
        solutions.append(_solved(board, moves))
    elapsed = time.perf_counter() - start

    write_sudokus(boards, solutions, job.output_path)
    if time_it:
        per_board = elapsed * 1e6 / len(boards) if boards else float("nan")
        print(f"That took {elapsed * 1000.0} ms, which is {per_board} us per sudoku")


def main(argv: Sequence[str] | None = None) -> int:
    """Run the sudoku command line."""
    try:
        args = parse_args(argv)
    except ArgumentError as exc:
        print(exc)
        return 0
    if isinstance(args.job, FileSolveJob):
        solve_file(args.job, args.time)
    else:
        solve_board(args.job, args.time)
    return 0
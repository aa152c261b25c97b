# dlxcover

A dancing-links exact cover solver, with support for optional columns
(constraints that may be satisfied at most once), plus two puzzle solvers
built on it: N-Queens and Sudoku.

## Installation

```
pip install .
```

For the test suite:

```
pip install .[test]
pytest
```

## Library use

Build a solver from your rows, your columns and a predicate that says
whether a row covers a column:

```python
from dlxcover.solver import ExactCoverSolver

rows = ["A", "B", "C"]
cols = [1, 2, 3]
covers = {"A": {1, 2}, "B": {3}, "C": {1}}

solver = ExactCoverSolver.from_predicate(rows, cols, lambda r, c: c in covers[r])
print(solver.solve_one())   # ['B', 'A']
print(solver.solve_many())  # [['B', 'A']]
```

`solve_one()` returns a list of rows, or `None` when there is no exact
cover; `solve_many()` returns a list of every solution.

Other ways to build a solver:

- `ExactCoverSolver.from_predicate_optional(rows, strict_cols, opt_cols, predicate)`:
  strict columns must be covered exactly once, optional columns at most once.
- `ExactCoverSolver.from_pairs(pairs)`: built from `(row, column)` pairs,
  one per matrix entry; raises `DuplicateEntryError` (a `ValueError`) if a
  pair occurs twice.

Every column must be covered by at least one row and every row must cover
at least one column; otherwise construction raises `ValueError`.

Rows can be fixed in advance, for instance the givens of a puzzle. Fixed
rows are not included in the returned solutions:

```python
solver.solve_one_with(["A"])      # solve with row "A" already chosen
solver.solve_many_with(["B"])

with solver.assuming(["A"]):      # fix rows for the duration of the block
    solver.solve_one()
```

`set_state(rows)` and `recover(n)` give the same control by hand; the last
`n` selections are undone, most recent first. Selecting a row that does not
exist or is already selected, or recovering more selections than were made,
raises `ValueError`.

The underlying structure, `dlxcover.links.DancingLinkArray`, works on row
and column indices directly: build it with
`DancingLinkArray.from_sorted_entries(entries, num_rows, num_strict_cols, num_opt_cols)`
from unique `(row, col)` pairs sorted row-major.

### Puzzle modules

- `dlxcover.nqueens`: `solve(n)` returns a `QueenBoard` with `n`
  non-attacking queens, or `None`; `QueenBoard.render()` draws it with `*`
  for a queen and `.` for an empty square. Rows and columns are strict
  constraints, diagonals optional ones.
- `dlxcover.sudoku`: `SudokuBoard.from_string(text, empty="0")` reads 81
  characters, raising `BoardFormatError` on bad input; `all_choices()`,
  `all_constraints()` and `satisfies()` describe a standard sudoku as an
  exact cover problem. `all_constraints_extra()` and `satisfies_extra()`
  add four extra 3x3 boxes (rows and columns 2-4 and 6-8) for that variant.

## Command-line tools

### N-Queens

```
dlx-nqueens 8
```

Prints `Solution` followed by a board with one placement of N
non-attacking queens, or `No solution` if none exists. Without an argument
the board size is 69.

### Sudoku

Solve a single board given as 81 characters, `0` for an empty cell:

```
dlx-sudoku 800000000003600000070090200050007000000045700000100030001000068008500010090000400
```

The puzzle and its solution are printed one after the other, empty cells
shown as spaces.

Solve every board in a file, one board per line:

```
dlx-sudoku -f puzzles.txt solutions.txt
```

Flags (given before the other arguments, and may be combined as in `-ft`):

- `-f` read boards from a file; the output file defaults to
  `<input>-sols.txt`. The output starts with the number of boards, then one
  line per board: the puzzle, a comma, and its solution.
- `-i` skip the first line of the input file (only with `-f`).
- `-t` report how long solving took.

If a board cannot be read or has no solution, a message is printed and
nothing is written.

## Limits

The `dlx-sudoku` command solves standard sudoku only; the extra-box
variant is available through the library functions above but has no
command-line option.
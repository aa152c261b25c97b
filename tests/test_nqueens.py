import itertools

import pytest

from dlxcover.nqueens import (
    ConstraintKind,
    QueenBoard,
    QueenChoice,
    QueenConstraint,
    all_choices,
    main,
    optional_constraints,
    solve,
    strict_constraints,
)
from dlxcover.solver import ExactCoverSolver


def queens(board):
    return [(r, c) for r in range(board.n) for c in range(board.n) if board.has_queen(r, c)]


def non_attacking(positions):
    for (r1, c1), (r2, c2) in itertools.combinations(positions, 2):
        if r1 == r2 or c1 == c2 or abs(r1 - r2) == abs(c1 - c2):
            return False
    return True


def all_solutions(n):
    solver = ExactCoverSolver.from_predicate_optional(
        all_choices(n),
        strict_constraints(n),
        optional_constraints(n),
        lambda ch, cst: ch.satisfies(cst, n),
    )
    return solver.solve_many()


@pytest.mark.parametrize("n", [1, 4, 5, 6, 8])
def test_solve_gives_valid_board(n):
    board = solve(n)
    positions = queens(board)
    assert len(positions) == n
    assert non_attacking(positions)


@pytest.mark.parametrize("n", [2, 3])
def test_solve_impossible(n):
    assert solve(n) is None


def test_four_queens_count():
    assert len(all_solutions(4)) == 2


def test_eight_queens_count():
    sols = all_solutions(8)
    assert len(sols) == 92
    assert all(non_attacking([(ch.r, ch.c) for ch in s]) for s in sols)


def test_strict_constraints_layout():
    cs = strict_constraints(3)
    assert cs[:3] == [QueenConstraint(ConstraintKind.HORIZONTAL, i) for i in range(3)]
    assert cs[3:] == [QueenConstraint(ConstraintKind.VERTICAL, i) for i in range(3)]


def test_optional_constraints_span():
    n = 5
    cs = optional_constraints(n)
    assert len(cs) == 2 * (2 * n - 1)
    ne = [c.index for c in cs if c.kind is ConstraintKind.DIAGONAL_NE]
    assert ne == list(range(-(n - 1), n))


def test_optional_constraints_rejects_zero():
    with pytest.raises(ValueError):
        optional_constraints(0)


def test_all_choices_row_major():
    choices = all_choices(3)
    assert len(choices) == 9
    assert [(ch.r, ch.c) for ch in choices] == sorted((ch.r, ch.c) for ch in choices)


@pytest.mark.parametrize("n", [1, 4, 7])
def test_each_square_on_one_diagonal_each_way(n):
    diags = optional_constraints(n)
    for ch in all_choices(n):
        matched = [d.kind for d in diags if ch.satisfies(d, n)]
        assert sorted(k.value for k in matched) == ["diagonal_ne", "diagonal_nw"]


def test_diagonals_share_squares_consistently():
    n = 6
    for a, b in itertools.combinations(all_choices(n), 2):
        same_ne = a.diag_ne() == b.diag_ne()
        same_nw = a.diag_nw(n) == b.diag_nw(n)
        on_diag = abs(a.r - b.r) == abs(a.c - b.c)
        assert (same_ne or same_nw) == on_diag


def test_central_diagonals_are_zero():
    n = 5
    assert QueenChoice(0, 0).diag_ne() == 0
    assert QueenChoice(0, n - 1).diag_nw(n) == 0


def test_row_and_column_satisfaction():
    ch = QueenChoice(2, 3)
    assert ch.satisfies(QueenConstraint(ConstraintKind.HORIZONTAL, 2), 5)
    assert not ch.satisfies(QueenConstraint(ConstraintKind.HORIZONTAL, 3), 5)
    assert ch.satisfies(QueenConstraint(ConstraintKind.VERTICAL, 3), 5)
    assert not ch.satisfies(QueenConstraint(ConstraintKind.VERTICAL, 2), 5)


def test_empty_board_render():
    assert QueenBoard.empty(2).render() == ". . \n. . \n"


def test_from_choices_render():
    board = QueenBoard.from_choices(2, [QueenChoice(0, 1)])
    assert board.render() == ". * \n. . \n"
    assert board.has_queen(0, 1)
    assert not board.has_queen(1, 1)


def test_place_queen_twice_raises():
    board = QueenBoard.empty(3)
    board.place_queen(1, 1)
    with pytest.raises(ValueError):
        board.place_queen(1, 1)


def test_off_board_raises():
    with pytest.raises(IndexError):
        QueenBoard.empty(3).has_queen(0, 3)


def test_main_prints_solution(capsys):
    assert main(["4"]) == 0
    out = capsys.readouterr().out
    lines = out.splitlines()
    assert lines[0] == "Solution"
    assert len(lines) == 5
    assert out.count("*") == 4


def test_main_prints_no_solution(capsys):
    main(["3"])
    assert capsys.readouterr().out == "No solution\n"
import pytest

from dlxcover.solver import DuplicateEntryError, ExactCoverSolver

KNUTH = {
    "A": {3, 5, 6},
    "B": {1, 4, 7},
    "C": {2, 3, 6},
    "D": {1, 4},
    "E": {2, 7},
    "F": {4, 5, 7},
}
COLUMNS = list(range(1, 8))


def knuth_solver():
    return ExactCoverSolver.from_predicate(
        list(KNUTH), COLUMNS, lambda row, col: col in KNUTH[row]
    )


def knuth_pairs():
    return [(row, col) for row, cols in KNUTH.items() for col in sorted(cols)]


def is_exact_cover(rows, sets, universe):
    covered = [c for r in rows for c in sets[r]]
    return sorted(covered) == sorted(universe)


def test_solve_one_knuth_example():
    sol = knuth_solver().solve_one()
    assert sorted(sol) == ["A", "D", "E"]
    assert is_exact_cover(sol, KNUTH, COLUMNS)


def test_solve_many_knuth_example_is_unique():
    sols = knuth_solver().solve_many()
    assert [sorted(s) for s in sols] == [["A", "D", "E"]]


def test_from_pairs_matches_predicate():
    sol = ExactCoverSolver.from_pairs(knuth_pairs()).solve_one()
    assert sorted(sol) == ["A", "D", "E"]


def test_from_pairs_order_independent():
    pairs = list(reversed(knuth_pairs()))
    sols = ExactCoverSolver.from_pairs(pairs).solve_many()
    assert [sorted(s) for s in sols] == [["A", "D", "E"]]


def test_from_pairs_duplicate_raises():
    with pytest.raises(DuplicateEntryError):
        ExactCoverSolver.from_pairs([("a", 1), ("b", 2), ("a", 1)])


def test_duplicate_error_is_value_error():
    with pytest.raises(ValueError):
        ExactCoverSolver.from_pairs([("x", "y"), ("x", "y")])


def test_empty_problem():
    solver = ExactCoverSolver.from_pairs([])
    assert solver.solve_one() == []
    assert solver.solve_many() == [[]]


def test_no_solution():
    solver = ExactCoverSolver.from_pairs([("a", 1), ("a", 2), ("b", 2), ("b", 3)])
    assert solver.solve_one() is None
    assert solver.solve_many() == []


def test_multiple_solutions():
    sets = {"a": {1}, "b": {2}, "c": {1, 2}}
    solver = ExactCoverSolver.from_predicate(
        list(sets), [1, 2], lambda r, c: c in sets[r]
    )
    sols = {frozenset(s) for s in solver.solve_many()}
    assert sols == {frozenset({"a", "b"}), frozenset({"c"})}


def test_optional_column_need_not_be_covered():
    sets = {"r1": {"s"}, "r2": {"s", "o"}}
    solver = ExactCoverSolver.from_predicate_optional(
        list(sets), ["s"], ["o"], lambda r, c: c in sets[r]
    )
    sols = sorted(sorted(s) for s in solver.solve_many())
    assert sols == [["r1"], ["r2"]]


def test_optional_column_covered_at_most_once():
    sets = {"r1": {"s1", "o"}, "r2": {"s2", "o"}, "r3": {"s2"}}
    solver = ExactCoverSolver.from_predicate_optional(
        list(sets), ["s1", "s2"], ["o"], lambda r, c: c in sets[r]
    )
    sols = [sorted(s) for s in solver.solve_many()]
    assert sols == [["r1", "r3"]]


def test_set_state_and_recover():
    solver = knuth_solver()
    solver.set_state(["B"])
    assert solver.solve_one() is None
    solver.recover(1)
    assert sorted(solver.solve_one()) == ["A", "D", "E"]


def test_solve_one_with_excludes_preset_rows():
    solver = knuth_solver()
    assert sorted(solver.solve_one_with(["A"])) == ["D", "E"]
    assert sorted(solver.solve_one()) == ["A", "D", "E"]


def test_solve_many_with_restores_state():
    solver = knuth_solver()
    assert solver.solve_many_with(["B"]) == []
    assert [sorted(s) for s in solver.solve_many()] == [["A", "D", "E"]]


def test_set_state_unknown_row_raises():
    with pytest.raises(ValueError):
        knuth_solver().set_state(["Z"])


def test_set_state_twice_raises():
    solver = knuth_solver()
    solver.set_state(["A"])
    with pytest.raises(ValueError):
        solver.set_state(["A"])


def test_recover_too_many_raises():
    solver = knuth_solver()
    solver.set_state(["A"])
    with pytest.raises(ValueError):
        solver.recover(2)


def test_assuming_restores_after_exception():
    solver = knuth_solver()
    with pytest.raises(RuntimeError):
        with solver.assuming(["B"]):
            assert solver.solve_one() is None
            raise RuntimeError("boom")
    assert sorted(solver.solve_one()) == ["A", "D", "E"]


def test_assuming_restores_after_bad_row():
    solver = knuth_solver()
    with pytest.raises(ValueError):
        with solver.assuming(["B", "Z"]):
            pass
    assert sorted(solver.solve_one()) == ["A", "D", "E"]


def test_all_solutions_are_exact_covers():
    sets = {
        "p": {1, 2},
        "q": {3, 4},
        "r": {1, 3},
        "s": {2, 4},
        "t": {1},
        "u": {2},
        "v": {3},
        "w": {4},
    }
    universe = [1, 2, 3, 4]
    solver = ExactCoverSolver.from_predicate(
        list(sets), universe, lambda r, c: c in sets[r]
    )
    sols = solver.solve_many()
    assert sols
    assert all(is_exact_cover(s, sets, universe) for s in sols)
    assert len({frozenset(s) for s in sols}) == len(sols)
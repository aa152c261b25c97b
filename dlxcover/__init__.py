"""Exact cover solving with dancing links, with N-Queens and Sudoku solvers."""

__version__ = "0.1.0"
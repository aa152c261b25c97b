"""A dancing-links array for exact cover with strict and optional columns."""

from __future__ import annotations

from collections.abc import Iterable


class DancingLinkArray:
    """Toroidal doubly linked node array used by Algorithm X.

    Node 0 is the root header, nodes ``1..num_cols`` are column headers and the
    remaining nodes are the entries of the matrix.  Only the root and the
    strict headers are linked horizontally; optional headers stay outside the
    header ring, so they never have to be covered but may be covered at most
    once.
    """

    __slots__ = (
        "_up",
        "_down",
        "_left",
        "_right",
        "_row",
        "_col",
        "_sizes",
        "_num_headers",
        "_first_optional",
    )

    def __init__(
        self,
        entries: Iterable[tuple[int, int]],
        num_rows: int,
        num_strict_cols: int,
        num_opt_cols: int,
    ) -> None:
        cells = [(int(r), int(c)) for r, c in entries]
        num_cols = num_strict_cols + num_opt_cols
        _check_entries(cells, num_rows, num_cols)

        num_headers = num_cols + 1
        total = num_headers + len(cells)

        # Headers point at themselves until linked; the root has column 0.
        self._up = list(range(total))
        self._down = list(range(total))
        self._left = list(range(total))
        self._right = list(range(total))
        self._row = [-1] * num_headers + [r for r, _ in cells]
        self._col = [0] + list(range(num_cols)) + [c for _, c in cells]
        self._num_headers = num_headers
        self._first_optional = num_strict_cols + 1

        ring = num_strict_cols + 1
        for h in range(ring):
            self._right[h] = (h + 1) % ring
            self._left[(h + 1) % ring] = h

        by_row: list[list[int]] = [[] for _ in range(num_rows)]
        by_col: list[list[int]] = [[] for _ in range(num_cols)]
        for idx in range(num_headers, total):
            by_row[self._row[idx]].append(idx)
            by_col[self._col[idx]].append(idx)

        for r, members in enumerate(by_row):
            if not members:
                raise ValueError(f"row {r} has no entries")
            for a, b in zip(members, members[1:] + members[:1]):
                self._right[a] = b
                self._left[b] = a

        for c, members in enumerate(by_col):
            if not members:
                raise ValueError(f"column {c} has no entries")
            chain = [c + 1, *members]
            for a, b in zip(chain, chain[1:] + chain[:1]):
                self._down[a] = b
                self._up[b] = a

        self._sizes = [len(members) for members in by_col]

    @classmethod
    def from_sorted_entries(
        cls,
        entries: Iterable[tuple[int, int]],
        num_rows: int,
        num_strict_cols: int,
        num_opt_cols: int,
    ) -> DancingLinkArray:
        """Build the array from unique ``(row, col)`` pairs sorted row-major.

        Columns ``0..num_strict_cols`` are strict, the following
        ``num_opt_cols`` columns are optional.  Every row and every column
        must hold at least one entry.
        """
        return cls(entries, num_rows, num_strict_cols, num_opt_cols)

    @property
    def num_rows(self) -> int:
        """Number of rows in the matrix."""
        if len(self._row) == self._num_headers:
            return 0
        return self._row[-1] + 1

    def _cover(self, c: int) -> None:
        up, down, left, right = self._up, self._down, self._left, self._right
        col, sizes = self._col, self._sizes
        if c < self._first_optional:
            right[left[c]] = right[c]
            left[right[c]] = left[c]
        i = down[c]
        while i != c:
            j = right[i]
            while j != i:
                down[up[j]] = down[j]
                up[down[j]] = up[j]
                sizes[col[j]] -= 1
                j = right[j]
            i = down[i]

    def _uncover(self, c: int) -> None:
        up, down, left, right = self._up, self._down, self._left, self._right
        col, sizes = self._col, self._sizes
        i = down[c]
        while i != c:
            j = right[i]
            while j != i:
                down[up[j]] = j
                up[down[j]] = j
                sizes[col[j]] += 1
                j = right[j]
            i = down[i]
        if c < self._first_optional:
            right[left[c]] = c
            left[right[c]] = c

    def remove_row(self, node: int) -> None:
        """Select the row holding ``node`` by covering each of its columns."""
        last = self._left[node]
        current = node
        while True:
            self._cover(self._col[current] + 1)
            if current == last:
                break
            current = self._right[current]

    def insert_row(self, node: int) -> None:
        """Undo :meth:`remove_row`; rows must be restored in reverse order."""
        start = self._left[node]
        current = start
        while True:
            self._uncover(self._col[current] + 1)
            current = self._left[current]
            if current == start:
                break

    def _lowest_strict_header(self) -> int | None:
        right, sizes = self._right, self._sizes
        h = right[0]
        if h == 0:
            return None
        best, best_count = h, sizes[h - 1]
        h = right[h]
        while h != 0:
            count = sizes[h - 1]
            if count < best_count:
                best, best_count = h, count
            h = right[h]
        return best

    def solve_one(self) -> list[int] | None:
        """Return the row indices of one exact cover, or ``None``.

        The rows come out with the last one chosen first.
        """
        header = self._lowest_strict_header()
        if header is None:
            return []
        v = self._down[header]
        while v != header:
            self.remove_row(v)
            sub = self.solve_one()
            self.insert_row(v)
            if sub is not None:
                sub.append(self._row[v])
                return sub
            v = self._down[v]
        return None

    def solve_many(self) -> list[list[int]]:
        """Return the row indices of every exact cover."""
        header = self._lowest_strict_header()
        if header is None:
            return [[]]
        solutions: list[list[int]] = []
        v = self._down[header]
        while v != header:
            row = self._row[v]
            self.remove_row(v)
            subs = self.solve_many()
            self.insert_row(v)
            for sub in subs:
                sub.append(row)
                solutions.append(sub)
            v = self._down[v]
        return solutions

    def row_entries(self) -> list[int]:
        """Return one node index per row, indexed by row.

        These stay valid while rows are removed and inserted.
        """
        result: list[int] = []
        for idx in range(self._num_headers, len(self._row)):
            if self._row[idx] == len(result):
                result.append(idx)
        return result


def _check_entries(cells: list[tuple[int, int]], num_rows: int, num_cols: int) -> None:
    for r, c in cells:
        if not 0 <= r < num_rows:
            raise ValueError(f"row index {r} out of range")
        if not 0 <= c < num_cols:
            raise ValueError(f"column index {c} out of range")
    for prev, cur in zip(cells, cells[1:]):
        if cur == prev:
            raise ValueError(f"duplicate entry {cur}")
        if cur < prev:
            raise ValueError("entries are not sorted row-major")
"""
Board geometry for N×N tic-tac-toe.

Cells are numbered row-major, row 0 at the top. For n = 3:

    0 1 2
    3 4 5
    6 7 8

Every line of the board owns one presence counter. Counter indices:

    0 .. n-1      rows
    n .. 2n-1     columns
    2n            main diagonal (row == col)
    2n+1          anti-diagonal (row + col == n - 1)
"""

from __future__ import annotations
from functools import lru_cache


def num_lines(n: int) -> int:
    """Number of winnable lines (and presence counters) on an n×n board."""
    return 2 * n + 2


def main_diagonal(n: int) -> int:
    """Counter index of the main diagonal."""
    return 2 * n


def anti_diagonal(n: int) -> int:
    """Counter index of the anti-diagonal."""
    return 2 * n + 1


def cell_to_rowcol(cell: int, n: int) -> tuple[int, int]:
    """Convert cell index to (row, col)."""
    return cell // n, cell % n


def rowcol_to_cell(row: int, col: int, n: int) -> int:
    """Convert (row, col) to cell index."""
    return row * n + col


def is_valid_cell(cell: int, n: int) -> bool:
    """Check if a cell index is on the board."""
    return 0 <= cell < n * n


@lru_cache(maxsize=64)
def _lines_table(n: int) -> tuple[tuple[int, ...], ...]:
    """Precompute the counters touched by every cell of an n×n board."""
    table = []
    for cell in range(n * n):
        row, col = cell_to_rowcol(cell, n)
        lines = [row, n + col]
        if row == col:
            lines.append(main_diagonal(n))
        if row + col == n - 1:
            lines.append(anti_diagonal(n))
        table.append(tuple(lines))
    return tuple(table)


def lines_through(cell: int, n: int) -> tuple[int, ...]:
    """
    Counter indices of every line passing through a cell.

    Two for ordinary cells, three on one diagonal, four where both
    diagonals cross (the centre of an odd board, or the only cell when n = 1).
    """
    return _lines_table(n)[cell]


def line_cells(line: int, n: int) -> list[int]:
    """Cells making up the line behind a counter index."""
    if line < n:
        return [rowcol_to_cell(line, col, n) for col in range(n)]
    if line < 2 * n:
        return [rowcol_to_cell(row, line - n, n) for row in range(n)]
    if line == main_diagonal(n):
        return [rowcol_to_cell(i, i, n) for i in range(n)]
    if line == anti_diagonal(n):
        return [rowcol_to_cell(i, n - 1 - i, n) for i in range(n)]
    raise ValueError(f"No line {line} on a {n}x{n} board")


def line_name(line: int, n: int) -> str:
    """Human-readable name of a line (rows and columns are 1-based)."""
    if line < n:
        return f"row {line + 1}"
    if line < 2 * n:
        return f"column {line - n + 1}"
    if line == main_diagonal(n):
        return "main diagonal"
    if line == anti_diagonal(n):
        return "anti-diagonal"
    raise ValueError(f"No line {line} on a {n}x{n} board")

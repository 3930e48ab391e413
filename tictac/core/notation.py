"""
Cell names and move lists for N×N tic-tac-toe.

Cells are named by column letter and 1-based row, row 1 at the top:

    a1 b1 c1
    a2 b2 c2
    a3 b3 c3

Boards wider than 26 columns have no letter for every column, so their
cells are written as plain indices. A plain index is accepted on any board.

Move lists read like chess notation, FIRST's move opening each pair:

    1. b2 a1 2. c3 a3 3. a2
"""

from __future__ import annotations
import re
from typing import Iterable

from .board import BoardEngine, Move, Outcome
from .lines import cell_to_rowcol, rowcol_to_cell

MAX_LETTER_COLUMNS = 26

_NAME_PATTERN = re.compile(r'^([a-z])(\d+)$')


def uses_letters(n: int) -> bool:
    """Whether cells on an n×n board get letter-number names."""
    return n <= MAX_LETTER_COLUMNS


def cell_to_name(cell: int, n: int) -> str:
    """Convert cell index to its name (e.g., 'b2'), or the index on wide boards."""
    if not uses_letters(n):
        return str(cell)
    row, col = cell_to_rowcol(cell, n)
    return chr(ord('a') + col) + str(row + 1)


def name_to_cell(text: str, n: int) -> int:
    """
    Parse a cell name or plain index.

    Raises:
        ValueError: if the text is not a cell name or index, or names a
            column/row outside an n×n board.
    """
    s = text.strip().lower()
    if s.lstrip('-').isdigit():
        return int(s)

    match = _NAME_PATTERN.match(s)
    if not match:
        raise ValueError(f"Invalid cell: {text!r}. Use a name like 'b2' or an index")

    col = ord(match.group(1)) - ord('a')
    row = int(match.group(2)) - 1
    if not (0 <= row < n and 0 <= col < n):
        raise ValueError(f"Cell {text!r} is not on a {n}x{n} board")
    return rowcol_to_cell(row, col, n)


def format_history(moves: Iterable[Move], n: int) -> str:
    """Format moves as '1. b2 a1 2. c3'."""
    parts = []
    for i, move in enumerate(moves):
        name = cell_to_name(move.cell, n)
        if i % 2 == 0:
            parts.append(f"{i // 2 + 1}. {name}")
        else:
            parts.append(name)
    return ' '.join(parts)


def status_text(engine: BoardEngine) -> str:
    """One-line game status: 'Next: player 1', 'Player 2 won!' or 'Draw!'."""
    outcome = engine.current_outcome()
    if outcome is Outcome.DRAW:
        return "Draw!"
    if outcome.winner is not None:
        return f"Player {outcome.winner.number} won!"
    return f"Next: player {engine.current_player.number}"

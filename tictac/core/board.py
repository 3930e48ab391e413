"""
Board state and win/draw detection for N×N tic-tac-toe.

A player wins by filling an entire row, column or long diagonal. Instead of
rescanning the board after each move, the engine keeps one signed presence
counter per line: a FIRST mark adds +1, a SECOND mark adds -1. A line is
complete when its counter reaches +n or -n, so a move costs O(1) to record
and O(n) to check.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional
import logging

import numpy as np

from .lines import (
    num_lines, lines_through, line_cells, line_name, is_valid_cell
)

logger = logging.getLogger(__name__)


class Player(Enum):
    """The two players. The value is the player's counter delta."""
    FIRST = 1
    SECOND = -1

    def opponent(self) -> Player:
        return Player.SECOND if self is Player.FIRST else Player.FIRST

    @property
    def number(self) -> int:
        """1-based display number."""
        return 1 if self is Player.FIRST else 2

    @property
    def symbol(self) -> str:
        return 'X' if self is Player.FIRST else 'O'


class Outcome(Enum):
    """Game outcome, derived from the board after every placement."""
    IN_PROGRESS = 'in_progress'
    FIRST_WON = 'first_won'
    SECOND_WON = 'second_won'
    DRAW = 'draw'

    @classmethod
    def won(cls, player: Player) -> Outcome:
        return cls.FIRST_WON if player is Player.FIRST else cls.SECOND_WON

    @property
    def winner(self) -> Optional[Player]:
        if self is Outcome.FIRST_WON:
            return Player.FIRST
        if self is Outcome.SECOND_WON:
            return Player.SECOND
        return None

    @property
    def is_terminal(self) -> bool:
        return self is not Outcome.IN_PROGRESS


class MoveResult(Enum):
    """Result of apply_move / undo_last_move. Rejections leave state untouched."""
    ACCEPTED = 'accepted'
    GAME_OVER = 'game_over'
    OUT_OF_RANGE = 'out_of_range'
    CELL_OCCUPIED = 'cell_occupied'
    NO_MOVES = 'no_moves'

    @property
    def accepted(self) -> bool:
        return self is MoveResult.ACCEPTED

    @property
    def message(self) -> str:
        return _RESULT_MESSAGES[self]


_RESULT_MESSAGES = {
    MoveResult.ACCEPTED: "Move accepted",
    MoveResult.GAME_OVER: "The game is already over",
    MoveResult.OUT_OF_RANGE: "That cell is not on the board",
    MoveResult.CELL_OCCUPIED: "That cell is already taken",
    MoveResult.NO_MOVES: "Nothing to undo",
}


@dataclass(frozen=True)
class Move:
    """An accepted placement."""
    player: Player
    cell: int


class BoardEngine:
    """
    Single source of truth for an N×N tic-tac-toe game.

    Attributes:
        size: Side length n of the board
        history: Accepted moves, oldest first
        current_player: Player to move next (the winner, once the game is won)
        outcome: IN_PROGRESS until a line is completed or the board fills up

    The engine is not thread-safe; callers serialize all calls.
    """

    def __init__(self, n: int = 3) -> None:
        self.reset(n)

    def reset(self, n: int) -> None:
        """Start a fresh game on an n×n board. FIRST moves first."""
        if isinstance(n, bool) or not isinstance(n, (int, np.integer)) or n < 1:
            raise ValueError(f"Board size must be a positive integer, got {n!r}")

        # Allocate before touching state so a failed reset keeps the old game
        size = int(n)
        cells = np.zeros(size * size, dtype=np.int8)
        counters = np.zeros(num_lines(size), dtype=np.int32)

        self._n = size
        self._cells = cells
        self._counters = counters
        self._history: list[Move] = []
        self._current_player = Player.FIRST
        self._outcome = Outcome.IN_PROGRESS
        logger.debug("Reset to a %dx%d board", self._n, self._n)

    def replay(self) -> None:
        """Restart on the same board size."""
        self.reset(self._n)

    # --- queries ---

    @property
    def size(self) -> int:
        return self._n

    @property
    def num_cells(self) -> int:
        return self._n * self._n

    @property
    def history(self) -> tuple[Move, ...]:
        return tuple(self._history)

    @property
    def move_count(self) -> int:
        return len(self._history)

    @property
    def counters(self) -> tuple[int, ...]:
        """Snapshot of the line presence counters."""
        return tuple(int(v) for v in self._counters)

    @property
    def current_player(self) -> Player:
        return self._current_player

    @property
    def outcome(self) -> Outcome:
        return self._outcome

    def current_outcome(self) -> Outcome:
        return self._outcome

    def cell_state(self, cell: int) -> Optional[Player]:
        """Occupant of a cell, or None if empty."""
        if not is_valid_cell(cell, self._n):
            raise IndexError(f"Cell {cell} is not on a {self._n}x{self._n} board")
        mark = int(self._cells[cell])
        return Player(mark) if mark else None

    def legal_moves(self) -> list[int]:
        """Empty cells, in ascending order. Empty once the game is decided."""
        if self._outcome.is_terminal:
            return []
        return [int(c) for c in np.flatnonzero(self._cells == 0)]

    def winning_line(self) -> Optional[list[int]]:
        """Cells of the first complete line in scan order, if any."""
        line = self._first_complete_line()
        if line is None:
            return None
        return line_cells(line, self._n)

    def to_array(self) -> np.ndarray:
        """Board as an (n, n) int8 array: +1 FIRST, -1 SECOND, 0 empty."""
        return self._cells.reshape(self._n, self._n).copy()

    # --- moves ---

    def apply_move(self, cell: int) -> MoveResult:
        """
        Place the current player's mark on a cell.

        Rejections, checked in order: GAME_OVER, OUT_OF_RANGE, CELL_OCCUPIED.
        """
        if self._outcome.is_terminal:
            return self._reject(MoveResult.GAME_OVER, cell)
        if not is_valid_cell(cell, self._n):
            return self._reject(MoveResult.OUT_OF_RANGE, cell)
        if self._cells[cell] != 0:
            return self._reject(MoveResult.CELL_OCCUPIED, cell)

        player = self._current_player
        self._cells[cell] = player.value
        self._history.append(Move(player, int(cell)))
        self._update_presence(cell, player.value)
        logger.debug("Player %d took cell %d", player.number, cell)

        self._outcome = self._check_outcome()
        if self._outcome.is_terminal:
            logger.info("Game over after %d moves: %s", len(self._history), self._outcome.value)
        else:
            self._current_player = player.opponent()

        return MoveResult.ACCEPTED

    def undo_last_move(self) -> MoveResult:
        """Take back the most recent move. Always leaves the game IN_PROGRESS."""
        if not self._history:
            logger.debug("Undo rejected: no moves")
            return MoveResult.NO_MOVES

        move = self._history.pop()
        self._cells[move.cell] = 0
        self._update_presence(move.cell, -move.player.value)
        self._current_player = move.player
        self._outcome = Outcome.IN_PROGRESS
        logger.debug("Undid player %d at cell %d", move.player.number, move.cell)
        return MoveResult.ACCEPTED

    def _reject(self, result: MoveResult, cell: int) -> MoveResult:
        logger.debug("Move at %s rejected: %s", cell, result.value)
        return result

    def _update_presence(self, cell: int, delta: int) -> None:
        for line in lines_through(cell, self._n):
            self._counters[line] += delta

    def _first_complete_line(self) -> Optional[int]:
        complete = np.flatnonzero(np.abs(self._counters) == self._n)
        if complete.size == 0:
            return None
        return int(complete[0])

    def _check_outcome(self) -> Outcome:
        """Scan counters in row, column, main, anti order; first complete line wins."""
        line = self._first_complete_line()
        if line is not None:
            winner = Player.FIRST if self._counters[line] > 0 else Player.SECOND
            logger.debug("Player %d completed %s", winner.number, line_name(line, self._n))
            return Outcome.won(winner)
        if len(self._history) == self.num_cells:
            return Outcome.DRAW
        return Outcome.IN_PROGRESS

    # --- copying / comparison ---

    def copy(self) -> BoardEngine:
        """Independent copy with its own arrays and history."""
        clone = BoardEngine.__new__(BoardEngine)
        clone._n = self._n
        clone._cells = self._cells.copy()
        clone._counters = self._counters.copy()
        clone._history = list(self._history)
        clone._current_player = self._current_player
        clone._outcome = self._outcome
        return clone

    def __hash__(self) -> int:
        return hash((self._n, self._cells.tobytes(), tuple(self._history),
                     self._current_player, self._outcome))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BoardEngine):
            return False
        return (
            self._n == other._n and
            np.array_equal(self._cells, other._cells) and
            np.array_equal(self._counters, other._counters) and
            self._history == other._history and
            self._current_player == other._current_player and
            self._outcome == other._outcome
        )

    def __repr__(self) -> str:
        """Pretty print the board."""
        lines = []
        for row in range(self._n):
            marks = []
            for col in range(self._n):
                occupant = self.cell_state(row * self._n + col)
                marks.append(occupant.symbol if occupant else '.')
            lines.append(' '.join(marks))

        if self._outcome.is_terminal:
            lines.append(f"\nOutcome: {self._outcome.value} after {len(self._history)} moves")
        else:
            lines.append(f"\nPlayer {self._current_player.number} to move (move {len(self._history) + 1})")
        return '\n'.join(lines)

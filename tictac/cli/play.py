#!/usr/bin/env python3
"""
Terminal-based N×N tic-tac-toe client.

Two players take turns at one keyboard. Cells are entered by name
('b2') or index ('4'); undo, replay and board size changes are commands.
"""

from __future__ import annotations
import argparse
import logging
import os
from dataclasses import dataclass, field

from tictac.core.board import BoardEngine, MoveResult
from tictac.core.notation import (
    cell_to_name, name_to_cell, format_history, status_text, uses_letters
)

logger = logging.getLogger(__name__)

DEFAULT_BOARD_SIZE = 3
MAX_BOARD_SIZE = 50  # larger boards no longer fit a terminal
BOARD_SIZE_ENV = 'TICTAC_BOARD_SIZE'

# ANSI color codes
GREEN = '\033[92m'
RED = '\033[91m'
RESET = '\033[0m'

HELP_TEXT = """Commands:
  b2 / 4      place your mark on a cell (name or index)
  u, undo     take back the last move
  r, replay   start over on the same board
  s N, size N start over on an N x N board
  m, moves    list the empty cells
  h, history  show the moves so far
  ?, help     show this help
  q, quit     leave the game"""


def _default_board_size() -> int:
    value = os.environ.get(BOARD_SIZE_ENV)
    if not value:
        return DEFAULT_BOARD_SIZE
    try:
        return parse_board_size(value)
    except ValueError:
        logger.warning("Ignoring %s=%r, using %d", BOARD_SIZE_ENV, value, DEFAULT_BOARD_SIZE)
        return DEFAULT_BOARD_SIZE


@dataclass
class PlayConfig:
    """Configuration for a terminal session."""
    board_size: int = field(default_factory=_default_board_size)
    color: bool = True  # ANSI highlighting of the winning line and errors


def parse_board_size(text: str) -> int:
    """Validate a board size before it reaches the engine."""
    try:
        n = int(text)
    except ValueError:
        raise ValueError(f"Board size must be a number, got {text!r}") from None
    if n < 1:
        raise ValueError(f"Board size must be at least 1, got {n}")
    if n > MAX_BOARD_SIZE:
        raise ValueError(f"Board size must be at most {MAX_BOARD_SIZE}, got {n}")
    return n


def board_size_arg(text: str) -> int:
    """argparse type for --size."""
    try:
        return parse_board_size(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from None


def parse_user_input(engine: BoardEngine, input_str: str) -> tuple[str, int | None]:
    """
    Parse user input into an (action, value) pair.

    Actions: 'move' (value = cell index), 'size' (value = board size),
    and 'undo', 'replay', 'moves', 'history', 'help', 'quit' (value = None).

    Raises:
        ValueError: for anything that is neither a command nor a cell.
    """
    input_str = input_str.strip().lower()
    if not input_str:
        raise ValueError("Enter a cell or a command ('?' for help)")

    if input_str in ['q', 'quit', 'exit']:
        return 'quit', None
    if input_str in ['?', 'help']:
        return 'help', None
    if input_str in ['m', 'moves']:
        return 'moves', None
    if input_str in ['h', 'history']:
        return 'history', None
    if input_str in ['u', 'undo']:
        return 'undo', None
    if input_str in ['r', 'replay']:
        return 'replay', None

    words = input_str.split()
    if words[0] in ['s', 'size']:
        if len(words) != 2:
            raise ValueError("Usage: size N")
        return 'size', parse_board_size(words[1])

    return 'move', name_to_cell(input_str, engine.size)


def print_board(engine: BoardEngine, color: bool = True) -> None:
    """Print the board, highlighting the winning line.

    Symbols:
        X = player 1
        O = player 2
        . = empty
    """
    n = engine.size
    highlight = set(engine.winning_line() or [])

    if uses_letters(n):
        header = "    " + " ".join(chr(ord('a') + col) for col in range(n))
    else:
        header = None
    width = len(str(n))

    print()
    if header:
        print(" " * (width - 1) + header)
    for row in range(n):
        line = f"{row + 1:>{width}} |"
        for col in range(n):
            cell = row * n + col
            occupant = engine.cell_state(cell)
            sym = occupant.symbol if occupant else '.'
            if color and cell in highlight:
                line += f" {GREEN}{sym}{RESET}"
            else:
                line += f" {sym}"
        print(line)
    print()


def show_legal_moves(engine: BoardEngine) -> None:
    """Display all empty cells."""
    moves = engine.legal_moves()
    if not moves:
        print("No legal moves!")
        return
    print("Empty cells:", ", ".join(cell_to_name(c, engine.size) for c in moves))


def report_rejection(result: MoveResult, color: bool = True) -> None:
    if color:
        print(f"{RED}{result.message}.{RESET}")
    else:
        print(f"{result.message}.")


def play(config: PlayConfig) -> None:
    """Run an interactive game until the players quit."""
    engine = BoardEngine(config.board_size)

    print(f"\n=== TicTacToe {engine.size}x{engine.size} ===")
    print("Fill a row, column or diagonal to win. '?' for help.")

    show_board = True
    while True:
        if show_board:
            print_board(engine, config.color)
            print(status_text(engine))
        show_board = False

        try:
            user_input = input("> ")
        except EOFError:
            return

        try:
            action, value = parse_user_input(engine, user_input)
        except ValueError as e:
            print(e)
            continue

        if action == 'quit':
            print("Thanks for playing!")
            return
        elif action == 'help':
            print(HELP_TEXT)
        elif action == 'moves':
            show_legal_moves(engine)
        elif action == 'history':
            print(format_history(engine.history, engine.size) or "No moves yet.")
        elif action == 'undo':
            result = engine.undo_last_move()
            if result.accepted:
                print("Move undone.")
                show_board = True
            else:
                report_rejection(result, config.color)
        elif action == 'replay':
            engine.replay()
            show_board = True
        elif action == 'size':
            engine.reset(value)
            print(f"\n=== TicTacToe {engine.size}x{engine.size} ===")
            show_board = True
        elif action == 'move':
            player = engine.current_player
            result = engine.apply_move(value)
            if result.accepted:
                print(f"Player {player.number} played: {cell_to_name(value, engine.size)}")
                show_board = True
            else:
                report_rejection(result, config.color)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description='N x N TicTacToe Terminal Client')
    parser.add_argument('--size', type=board_size_arg, default=None,
                        help=f'Board size N (default: ${BOARD_SIZE_ENV} or {DEFAULT_BOARD_SIZE})')
    parser.add_argument('--no-color', action='store_true', help='Disable ANSI colors')
    parser.add_argument('-v', '--verbose', action='store_true', help='Log engine activity')

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s %(name)s %(levelname)s: %(message)s',
    )

    config = PlayConfig(color=not args.no_color)
    if args.size is not None:
        config.board_size = args.size

    play(config)


if __name__ == '__main__':
    main()

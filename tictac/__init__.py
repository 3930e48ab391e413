"""N×N tic-tac-toe rules engine."""

from .core import BoardEngine, Player, Outcome, MoveResult, Move

__version__ = "0.1.0"

"""Core game logic: board geometry, engine state, and notation."""

from .lines import *
from .board import BoardEngine, Player, Outcome, MoveResult, Move
from .notation import cell_to_name, name_to_cell, format_history, status_text

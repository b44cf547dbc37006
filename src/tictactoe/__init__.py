"""Tic-tac-toe engine with a perfect-play minimax opponent and a web UI."""

from .ai import NO_MOVE_AVAILABLE, MinimaxAI
from .board import Board, Cell, IllegalMove, InvalidPosition, Move
from .game import TicTacToeGame
from .outcome import WINNING_LINES, Outcome, Status, evaluate

__all__ = [
    "NO_MOVE_AVAILABLE",
    "WINNING_LINES",
    "Board",
    "Cell",
    "IllegalMove",
    "InvalidPosition",
    "MinimaxAI",
    "Move",
    "Outcome",
    "Status",
    "TicTacToeGame",
    "evaluate",
]

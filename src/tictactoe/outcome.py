"""Win and draw detection."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from .board import Board, Cell

# Rows, then columns, then diagonals. The first complete line wins.
WINNING_LINES: Tuple[Tuple[int, int, int], ...] = (
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    (0, 4, 8),
    (2, 4, 6),
)


class Status(str, Enum):
    IN_PROGRESS = "in_progress"
    WIN = "win"
    DRAW = "draw"


@dataclass(frozen=True)
class Outcome:
    status: Status
    winner: Optional[Cell] = None
    line: Optional[Tuple[int, int, int]] = field(default=None, compare=False)

    @classmethod
    def win(cls, mark: Cell, line: Optional[Tuple[int, int, int]] = None) -> "Outcome":
        return cls(Status.WIN, mark, line)

    @property
    def is_terminal(self) -> bool:
        return self.status is not Status.IN_PROGRESS


IN_PROGRESS = Outcome(Status.IN_PROGRESS)
DRAW = Outcome(Status.DRAW)


def winning_line(board: Board) -> Optional[Tuple[int, int, int]]:
    cells = board.cells
    for a, b, c in WINNING_LINES:
        v = cells[a]
        if v is not Cell.EMPTY and v == cells[b] == cells[c]:
            return (a, b, c)
    return None


def evaluate(board: Board) -> Outcome:
    """Classify ``board`` as a win for one mark, a draw, or still in progress."""

    line = winning_line(board)
    if line is not None:
        return Outcome.win(board.cells[line[0]], line)
    if board.is_full():
        return DRAW
    return IN_PROGRESS

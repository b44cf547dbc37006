"""Exhaustive minimax opponent for 3x3 tic-tac-toe."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Optional

from .board import Board, Cell, Move
from .outcome import Status, evaluate

logger = logging.getLogger(__name__)

# Returned by ``best_move`` when the board has no empty cell.
NO_MOVE_AVAILABLE = None


@dataclass
class SearchStats:
    nodes: int = 0
    max_depth: int = 0


@dataclass
class MinimaxAI:
    """Perfect-play opponent searching the whole game tree.

    The AI is the maximizing player: its wins score +1, its losses -1 and
    draws 0. Scores do not depend on depth, so among equally good moves the
    first one in row-major order is chosen.

    Search places trial marks directly on the board it is given and clears
    each one before moving on; the board is unchanged once a call returns.
    """

    player: Cell = Cell.O
    stats: SearchStats = field(default_factory=SearchStats, repr=False)

    def __post_init__(self) -> None:
        self.player = Cell(self.player)
        if self.player is Cell.EMPTY:
            raise ValueError("The AI must play X or O")

    # ---- public API ----

    def best_move(self, board: Board) -> Optional[Move]:
        """Return the best move for ``self.player``, or ``None`` on a full board."""

        self.stats = SearchStats()
        best_score: Optional[int] = None
        best_index: Optional[int] = None

        for index in board.empty_positions():
            board.place(index, self.player)
            try:
                value = self._score(board, False, 1)
            finally:
                board.clear(index)
            # Strictly greater: the first move found keeps ties.
            if best_score is None or value > best_score:
                best_score, best_index = value, index

        if best_index is None:
            return NO_MOVE_AVAILABLE

        logger.debug(
            "minimax chose cell %d (score %d) after %d nodes, depth %d",
            best_index,
            best_score,
            self.stats.nodes,
            self.stats.max_depth,
        )
        return Move.from_index(best_index)

    def move_scores(self, board: Board) -> Dict[int, int]:
        """Backed-up score of every empty cell, keyed by flat index."""

        self.stats = SearchStats()
        scores: Dict[int, int] = {}
        for index in board.empty_positions():
            board.place(index, self.player)
            try:
                scores[index] = self._score(board, False, 1)
            finally:
                board.clear(index)
        return scores

    def score(self, board: Board, maximizing: bool) -> int:
        """Minimax value of ``board`` with the maximizing side to move if ``maximizing``."""

        self.stats = SearchStats()
        return self._score(board, maximizing, 0)

    # ---- core search ----

    def _score(self, board: Board, maximizing: bool, depth: int) -> int:
        self.stats.nodes += 1
        if depth > self.stats.max_depth:
            self.stats.max_depth = depth

        outcome = evaluate(board)
        if outcome.status is Status.WIN:
            return 1 if outcome.winner is self.player else -1
        if outcome.status is Status.DRAW:
            return 0

        mark = self.player if maximizing else self.player.opponent
        best = -2 if maximizing else 2
        for index in board.empty_positions():
            board.place(index, mark)
            try:
                value = self._score(board, not maximizing, depth + 1)
            finally:
                board.clear(index)
            if maximizing:
                best = max(best, value)
            else:
                best = min(best, value)
        return best

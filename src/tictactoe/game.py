"""A round-by-round tic-tac-toe match between a human and the computer."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .ai import MinimaxAI
from .board import Board, Cell, IllegalMove, Move, Position, to_index
from .outcome import Outcome, Status, evaluate

logger = logging.getLogger(__name__)


@dataclass
class Scoreboard:
    human: int = 0
    computer: int = 0
    draws: int = 0

    def as_dict(self) -> Dict[str, int]:
        return {"human": self.human, "computer": self.computer, "draws": self.draws}


@dataclass
class TicTacToeGame:
    board: Board = field(default_factory=Board)
    human: Cell = Cell.X
    computer: Cell = Cell.O
    current_player: Cell = Cell.X
    player_name: str = "Player"
    move_log: List[Dict[str, object]] = field(default_factory=list)
    score: Scoreboard = field(default_factory=Scoreboard)

    # ---- API used by the web layer ----

    @property
    def outcome(self) -> Outcome:
        return evaluate(self.board)

    @property
    def finished(self) -> bool:
        return self.outcome.is_terminal

    def available_moves(self) -> List[Move]:
        if self.finished:
            return []
        return [Move.from_index(i) for i in self.board.empty_positions()]

    def play_move(self, pos: Position) -> Outcome:
        """Apply a move for the side to play and return the resulting outcome."""

        index = to_index(pos)
        if self.finished:
            raise IllegalMove("Game already finished")
        if not self.board.is_empty(index):
            raise IllegalMove("Cell already occupied")

        player = self.current_player
        self.board.place(index, player)
        move = Move.from_index(index)
        self.move_log.append(
            {"player": player.value, "row": move.row, "col": move.col, "index": index}
        )

        outcome = self.outcome
        if outcome.is_terminal:
            self._record(outcome)
        else:
            self.current_player = player.opponent
        return outcome

    def play_ai_move(self, ai: MinimaxAI) -> Optional[Move]:
        """Let ``ai`` move if it is its turn; returns the move played, if any."""

        if self.finished or self.current_player is not ai.player:
            return None
        move = ai.best_move(self.board)
        if move is not None:
            self.play_move(move)
        return move

    def reset(self) -> None:
        """Start a new round. The scoreboard carries over."""

        self.board.reset()
        self.current_player = Cell.X
        self.move_log.clear()

    # ---- helpers ----

    def _record(self, outcome: Outcome) -> None:
        if outcome.status is Status.DRAW:
            self.score.draws += 1
        elif outcome.winner is self.human:
            self.score.human += 1
        else:
            self.score.computer += 1
        logger.info(
            "round over: %s%s",
            outcome.status.value,
            f" ({outcome.winner.value})" if outcome.winner else "",
        )

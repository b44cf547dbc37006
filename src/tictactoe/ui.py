"""FastAPI-powered web UI for playing tic-tac-toe in the browser."""

from __future__ import annotations

import logging
import random
import threading
import time
import uuid
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from fastapi import BackgroundTasks, FastAPI, HTTPException
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .ai import MinimaxAI
from .board import Cell
from .game import TicTacToeGame

logger = logging.getLogger(__name__)


@dataclass
class GameSession:
    """Container for an active game and its computer opponent."""

    game: TicTacToeGame
    ai: MinimaxAI
    ai_pending: bool = False
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)


SESSIONS: Dict[str, GameSession] = {}
app = FastAPI(
    title="Tic-Tac-Toe",
    description="Tic-tac-toe against a perfect-play computer opponent",
)

AI_THINK_DELAY: Tuple[float, float] = (0.3, 0.8)
MAX_NAME_LENGTH = 32


class NewGameRequest(BaseModel):
    """Request payload for starting a new game."""

    model_config = ConfigDict(populate_by_name=True)

    player_name: str = Field(default="Player", alias="playerName")

    @field_validator("player_name")
    @classmethod
    def normalise_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            return "Player"
        return value[:MAX_NAME_LENGTH]


class MoveRequest(BaseModel):
    """Request payload for submitting a move on an existing game."""

    model_config = ConfigDict(populate_by_name=True)

    cell_index: int = Field(alias="cellIndex", ge=0, le=8)


def _create_session(player_name: str) -> Tuple[str, GameSession]:
    """Create a new game session and register it for later access."""

    game = TicTacToeGame(player_name=player_name)
    session = GameSession(game=game, ai=MinimaxAI(player=game.computer))
    session_id = uuid.uuid4().hex
    SESSIONS[session_id] = session
    logger.info("created game %s for %s", session_id, player_name)
    return session_id, session


def _get_session(game_id: str) -> GameSession:
    try:
        return SESSIONS[game_id]
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Game not found") from exc


def _run_ai_turn(game_id: str) -> None:
    session = SESSIONS.get(game_id)
    if not session:
        return

    time.sleep(max(0.0, random.uniform(*AI_THINK_DELAY)))

    with session.lock:
        try:
            move = session.game.play_ai_move(session.ai)
            if move is not None:
                logger.info("game %s: computer played cell %d", game_id, move.index)
        finally:
            session.ai_pending = False


def _serialize_session(game_id: str, session: GameSession) -> Dict[str, object]:
    with session.lock:
        game = session.game
        outcome = game.outcome
        state: Dict[str, object] = {
            "id": game_id,
            "playerName": game.player_name,
            "currentPlayer": game.current_player.value,
            "cells": [c.value if c is not Cell.EMPTY else "" for c in game.board.cells],
            "status": outcome.status.value,
            "winner": outcome.winner.value if outcome.winner else None,
            "winningLine": list(outcome.line) if outcome.line else None,
            "availableMoves": [move.index for move in game.available_moves()],
            "moveLog": list(game.move_log),
            "aiPending": session.ai_pending,
            "score": game.score.as_dict(),
        }
        if game.move_log:
            state["lastMove"] = game.move_log[-1]
        return state


def _apply_player_move(
    game_id: str,
    session: GameSession,
    cell_index: int,
    background_tasks: Optional[BackgroundTasks] = None,
) -> None:
    should_schedule_ai = False
    with session.lock:
        game = session.game
        if session.ai_pending:
            raise HTTPException(status_code=400, detail="Computer is completing its move")
        if game.current_player is not game.human and not game.finished:
            raise HTTPException(status_code=400, detail="It is not your turn")

        try:
            outcome = game.play_move(cell_index)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc

        logger.info("game %s: player played cell %d", game_id, cell_index)

        should_schedule_ai = (
            not outcome.is_terminal and game.current_player is session.ai.player
        )
        if should_schedule_ai:
            session.ai_pending = True

    if should_schedule_ai and background_tasks is not None:
        background_tasks.add_task(_run_ai_turn, game_id)


@app.post("/api/game")
def create_game(request: Optional[NewGameRequest] = None) -> Dict[str, object]:
    player_name = request.player_name if request else "Player"
    game_id, session = _create_session(player_name)
    return _serialize_session(game_id, session)


@app.get("/api/game/{game_id}")
def get_game(game_id: str) -> Dict[str, object]:
    session = _get_session(game_id)
    return _serialize_session(game_id, session)


@app.post("/api/game/{game_id}/move")
def make_move(
    game_id: str, request: MoveRequest, background_tasks: BackgroundTasks
) -> Dict[str, object]:
    session = _get_session(game_id)
    _apply_player_move(game_id, session, request.cell_index, background_tasks)
    return _serialize_session(game_id, session)


@app.post("/api/game/{game_id}/reset")
def reset_game(game_id: str) -> Dict[str, object]:
    session = _get_session(game_id)
    with session.lock:
        if session.ai_pending:
            raise HTTPException(status_code=400, detail="Computer is completing its move")
        session.game.reset()
    logger.info("game %s: new round", game_id)
    return _serialize_session(game_id, session)


@app.get("/", response_class=HTMLResponse)
def index() -> str:
    return HTML_PAGE


HTML_PAGE = """<!DOCTYPE html>
<html lang=\"en\">
  <head>
    <meta charset=\"utf-8\" />
    <meta name=\"viewport\" content=\"width=device-width, initial-scale=1\" />
    <title>Tic-Tac-Toe</title>
    <link rel=\"preconnect\" href=\"https://fonts.googleapis.com\" />
    <link rel=\"preconnect\" href=\"https://fonts.gstatic.com\" crossorigin />
    <link
      href=\"https://fonts.googleapis.com/css2?family=Poppins:wght@400;500;600;700&display=swap\"
      rel=\"stylesheet\"
    />
    <style>
      :root {
        color-scheme: light;
        font-family: 'Poppins', system-ui, -apple-system, BlinkMacSystemFont, \"Segoe UI\", sans-serif;
      }
      * {
        box-sizing: border-box;
      }
      body {
        margin: 0;
        background: radial-gradient(circle at top, #f2f5ff, #dbe0ff 40%, #cfd8ff 70%);
        min-height: 100vh;
        display: flex;
        justify-content: center;
        padding: 2rem 1rem 3rem;
        color: #13203a;
      }
      main {
        background: rgba(255, 255, 255, 0.92);
        border-radius: 18px;
        box-shadow: 0 20px 40px rgba(34, 47, 79, 0.16);
        padding: clamp(1.5rem, 4vw, 2.5rem);
        width: min(480px, 100%);
        text-align: center;
      }
      h1 {
        margin: 0 0 0.5rem;
        letter-spacing: 0.06em;
        color: #0c1a33;
      }
      .scores {
        display: flex;
        justify-content: space-around;
        margin: 1rem 0;
        font-weight: 500;
      }
      .board {
        display: grid;
        grid-template-columns: repeat(3, 1fr);
        gap: 0.5rem;
        margin: 1rem auto;
        width: min(320px, 100%);
      }
      .board.thinking {
        opacity: 0.75;
      }
      .cell {
        aspect-ratio: 1;
        border: none;
        border-radius: 12px;
        background: #eef1ff;
        font-size: 2.6rem;
        font-weight: 700;
        cursor: pointer;
        transition: transform 0.15s ease, background 0.2s ease;
      }
      .cell:hover:enabled {
        transform: scale(1.04);
        background: #e0e6ff;
      }
      .cell.x {
        color: #2f5bea;
      }
      .cell.o {
        color: #e2445c;
      }
      .cell.win {
        background: #ffe8a3;
      }
      #status {
        min-height: 1.5rem;
        font-weight: 600;
      }
      #message {
        min-height: 1.2rem;
        color: #c0392b;
      }
      button.action {
        border: none;
        border-radius: 999px;
        padding: 0.6rem 1.4rem;
        margin: 0 0.25rem;
        background: #2f5bea;
        color: white;
        font-weight: 600;
        cursor: pointer;
      }
    </style>
  </head>
  <body>
    <main>
      <h1>Tic-Tac-Toe</h1>
      <p>You are X. The computer never loses.</p>
      <div class=\"scores\">
        <span id=\"score-human\">You: 0</span>
        <span id=\"score-draws\">Draws: 0</span>
        <span id=\"score-computer\">Computer: 0</span>
      </div>
      <div id=\"status\"></div>
      <div class=\"board\" id=\"board\"></div>
      <div id=\"message\"></div>
      <button class=\"action\" id=\"reset-btn\">New round</button>
      <button class=\"action\" id=\"new-btn\">New game</button>
    </main>
    <script>
      const boardEl = document.getElementById('board');
      const statusEl = document.getElementById('status');
      const messageEl = document.getElementById('message');
      let gameId = null;
      let gameState = null;
      let pollHandle = null;
      let isRequestPending = false;

      for (let i = 0; i < 9; i++) {
        const cell = document.createElement('button');
        cell.className = 'cell';
        cell.addEventListener('click', () => sendMove(i));
        boardEl.appendChild(cell);
      }

      function render() {
        if (!gameState) return;
        const line = gameState.winningLine || [];
        const open = new Set(gameState.availableMoves);
        Array.from(boardEl.children).forEach((cell, i) => {
          const mark = gameState.cells[i];
          cell.textContent = mark;
          cell.classList.toggle('x', mark === 'X');
          cell.classList.toggle('o', mark === 'O');
          cell.classList.toggle('win', line.includes(i));
          cell.disabled = gameState.aiPending || !open.has(i);
        });
        boardEl.classList.toggle('thinking', gameState.aiPending);
        const score = gameState.score;
        document.getElementById('score-human').textContent = `${gameState.playerName}: ${score.human}`;
        document.getElementById('score-draws').textContent = `Draws: ${score.draws}`;
        document.getElementById('score-computer').textContent = `Computer: ${score.computer}`;
        if (gameState.status === 'win') {
          statusEl.textContent = gameState.winner === 'X' ? `${gameState.playerName} wins!` : 'The computer wins!';
        } else if (gameState.status === 'draw') {
          statusEl.textContent = "It's a draw!";
        } else if (gameState.aiPending) {
          statusEl.textContent = 'Computer is thinking…';
        } else {
          statusEl.textContent = `${gameState.playerName}, your move`;
        }
      }

      function setState(data) {
        gameId = data.id;
        gameState = data;
        render();
        if (gameState.aiPending && !pollHandle) {
          pollHandle = setTimeout(poll, 250);
        }
      }

      async function poll() {
        pollHandle = null;
        if (!gameId) return;
        try {
          const response = await fetch(`/api/game/${gameId}`);
          if (response.ok) {
            setState(await response.json());
          }
        } catch (error) {
          console.error('Polling failed', error);
        }
      }

      async function request(url, body) {
        if (isRequestPending) return;
        isRequestPending = true;
        messageEl.textContent = '';
        try {
          const response = await fetch(url, {
            method: 'POST',
            headers: { 'Content-Type': 'application/json' },
            body: JSON.stringify(body || {}),
          });
          const payload = await response.json().catch(() => ({}));
          if (!response.ok) {
            messageEl.textContent = payload?.detail || 'Request failed';
            return;
          }
          setState(payload);
        } catch (error) {
          messageEl.textContent = 'Network error. Please try again.';
        } finally {
          isRequestPending = false;
        }
      }

      function sendMove(cellIndex) {
        if (!gameId || !gameState || gameState.status !== 'in_progress') return;
        request(`/api/game/${gameId}/move`, { cellIndex });
      }

      function startGame() {
        const playerName = window.prompt('What is your name?', 'Player') || 'Player';
        request('/api/game', { playerName });
      }

      document.getElementById('reset-btn').addEventListener('click', () => {
        if (gameId) request(`/api/game/${gameId}/reset`);
      });
      document.getElementById('new-btn').addEventListener('click', startGame);
      startGame();
    </script>
  </body>
</html>
"""

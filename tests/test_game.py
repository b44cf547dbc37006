"""Unit tests for the human-versus-computer game session."""

import pytest

from tictactoe.ai import MinimaxAI
from tictactoe.board import Cell, IllegalMove, InvalidPosition, Move
from tictactoe.game import TicTacToeGame
from tictactoe.outcome import Status


def test_x_moves_first_and_turns_alternate():
    game = TicTacToeGame()
    assert game.current_player is Cell.X
    assert len(game.available_moves()) == 9

    game.play_move(4)
    assert game.board[4] is Cell.X
    assert game.current_player is Cell.O
    assert game.move_log == [{"player": "X", "row": 1, "col": 1, "index": 4}]


def test_occupied_cell_is_illegal():
    game = TicTacToeGame()
    game.play_move((0, 0))
    with pytest.raises(IllegalMove):
        game.play_move(0)
    assert game.current_player is Cell.O


def test_invalid_position_is_rejected():
    game = TicTacToeGame()
    with pytest.raises(InvalidPosition):
        game.play_move(9)


def test_win_ends_round_and_updates_score():
    game = TicTacToeGame()
    for index in (0, 3, 1, 4):
        game.play_move(index)
    outcome = game.play_move(2)

    assert outcome.status is Status.WIN
    assert outcome.winner is Cell.X
    assert game.finished
    assert game.available_moves() == []
    assert game.score.as_dict() == {"human": 1, "computer": 0, "draws": 0}
    with pytest.raises(IllegalMove):
        game.play_move(8)


def test_draw_is_counted():
    game = TicTacToeGame()
    for index in (0, 1, 2, 4, 3, 5, 7, 6):
        game.play_move(index)
    outcome = game.play_move(8)
    assert outcome.status is Status.DRAW
    assert game.score.draws == 1


def test_ai_replies_only_on_its_turn():
    game = TicTacToeGame()
    ai = MinimaxAI(player=game.computer)

    assert game.play_ai_move(ai) is None
    game.play_move(4)
    move = game.play_ai_move(ai)

    assert isinstance(move, Move)
    assert game.board[move] is Cell.O
    assert game.current_player is Cell.X


def test_reset_keeps_scoreboard():
    game = TicTacToeGame()
    for index in (0, 3, 1, 4, 2):
        game.play_move(index)
    game.reset()

    assert not game.finished
    assert game.current_player is Cell.X
    assert game.move_log == []
    assert all(game.board.is_empty(i) for i in range(9))
    assert game.score.human == 1


def test_full_game_against_ai_never_lost():
    game = TicTacToeGame()
    ai = MinimaxAI(player=game.computer)
    while not game.finished:
        game.play_move(game.available_moves()[-1])
        game.play_ai_move(ai)
    assert game.outcome.winner is not Cell.X
    assert game.score.human == 0

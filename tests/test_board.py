"""Unit tests for the board model."""

import pytest

from tictactoe.board import Board, Cell, InvalidPosition, Move, to_index


def test_new_board_is_empty():
    board = Board()
    assert len(board.cells) == 9
    assert all(board.is_empty(i) for i in range(9))
    assert not board.is_full()


def test_place_and_clear_by_index_and_coordinates():
    board = Board()
    board.place(4, Cell.X)
    board.place((0, 2), Cell.O)
    board.place(Move(2, 0), Cell.X)

    assert board[4] is Cell.X
    assert board[2] is Cell.O
    assert board[(2, 0)] is Cell.X
    assert board.empty_positions() == [0, 1, 3, 5, 7, 8]

    board.clear((1, 1))
    assert board.is_empty(4)


def test_place_does_not_refuse_occupied_cells():
    board = Board()
    board.place(0, Cell.X)
    board.place(0, Cell.O)
    assert board[0] is Cell.O


def test_place_rejects_empty_mark():
    board = Board()
    with pytest.raises(ValueError):
        board.place(0, Cell.EMPTY)


@pytest.mark.parametrize("pos", [-1, 9, (3, 0), (0, 3), (-1, 1), (1,), True, "4", 1.0])
def test_out_of_range_positions_are_rejected(pos):
    board = Board()
    with pytest.raises(InvalidPosition):
        board.is_empty(pos)
    with pytest.raises(InvalidPosition):
        board.place(pos, Cell.X)
    with pytest.raises(InvalidPosition):
        board.clear(pos)
    assert board == Board()


def test_is_full():
    board = Board.from_string("XOX/XOO/OXX")
    assert board.is_full()
    board.clear(8)
    assert not board.is_full()


def test_from_string_and_str():
    board = Board.from_string("OO_/XX_/___")
    assert board.cells[:5] == [Cell.O, Cell.O, Cell.EMPTY, Cell.X, Cell.X]
    assert str(board).splitlines()[0] == "O | O |  "

    with pytest.raises(ValueError):
        Board.from_string("XO")


def test_board_size_is_fixed():
    with pytest.raises(ValueError):
        Board(cells=[Cell.EMPTY] * 8)


def test_copy_and_reset():
    board = Board.from_string("X________")
    clone = board.copy()
    board.reset()
    assert board == Board()
    assert clone[0] is Cell.X


def test_move_index_mapping():
    assert Move(1, 2).index == 5
    assert Move.from_index(7) == Move(2, 1)
    assert to_index(Move(2, 2)) == 8
    with pytest.raises(InvalidPosition):
        Move.from_index(9)

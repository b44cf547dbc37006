"""Board model for a 3x3 tic-tac-toe grid."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Tuple, Union

SIZE = 3
CELL_COUNT = SIZE * SIZE


class Cell(str, Enum):
    EMPTY = " "
    X = "X"
    O = "O"

    @property
    def opponent(self) -> "Cell":
        if self is Cell.X:
            return Cell.O
        if self is Cell.O:
            return Cell.X
        raise ValueError("An empty cell has no opponent")


MARKS: Tuple[Cell, Cell] = (Cell.X, Cell.O)


class InvalidPosition(ValueError):
    """Raised when a coordinate falls outside the 3x3 grid."""


class IllegalMove(ValueError):
    """Raised when a move is not allowed in the current position."""


@dataclass(frozen=True)
class Move:
    row: int
    col: int

    @classmethod
    def from_index(cls, index: int) -> "Move":
        return cls(*divmod(to_index(index), SIZE))

    @property
    def index(self) -> int:
        return self.row * SIZE + self.col


Position = Union[int, Tuple[int, int], Move]


def to_index(pos: Position) -> int:
    """Normalise a flat index, ``(row, col)`` pair or :class:`Move` to 0..8."""

    if isinstance(pos, Move):
        pos = (pos.row, pos.col)
    if isinstance(pos, tuple):
        if len(pos) != 2 or not all(_is_int(p) for p in pos):
            raise InvalidPosition(f"Invalid position {pos!r}")
        row, col = pos
        if not (0 <= row < SIZE and 0 <= col < SIZE):
            raise InvalidPosition(f"Position {pos!r} is outside the board")
        return row * SIZE + col
    if not _is_int(pos):
        raise InvalidPosition(f"Invalid position {pos!r}")
    if not 0 <= pos < CELL_COUNT:
        raise InvalidPosition(f"Position {pos!r} is outside the board")
    return pos


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass
class Board:
    cells: List[Cell] = field(default_factory=lambda: [Cell.EMPTY] * CELL_COUNT)

    def __post_init__(self) -> None:
        if len(self.cells) != CELL_COUNT:
            raise ValueError(f"A board holds exactly {CELL_COUNT} cells")
        self.cells = [Cell(c) for c in self.cells]

    @classmethod
    def from_string(cls, layout: str) -> "Board":
        """Build a board from a row-major layout such as ``"OO_/XX_/___"``.

        ``X`` and ``O`` are marks; ``_``, ``.``, ``-`` and spaces are empty.
        Slashes and newlines are ignored.
        """

        cells: List[Cell] = []
        for char in layout:
            if char in "/\n":
                continue
            upper = char.upper()
            if upper in ("X", "O"):
                cells.append(Cell(upper))
            elif char in "_.- ":
                cells.append(Cell.EMPTY)
            else:
                raise ValueError(f"Unexpected board character {char!r}")
        if len(cells) != CELL_COUNT:
            raise ValueError(
                f"Board layout must describe {CELL_COUNT} cells, got {len(cells)}"
            )
        return cls(cells=cells)

    # ---- queries ----

    def __getitem__(self, pos: Position) -> Cell:
        return self.cells[to_index(pos)]

    def is_empty(self, pos: Position) -> bool:
        return self.cells[to_index(pos)] is Cell.EMPTY

    def is_full(self) -> bool:
        return all(c is not Cell.EMPTY for c in self.cells)

    def empty_positions(self) -> List[int]:
        return [i for i, c in enumerate(self.cells) if c is Cell.EMPTY]

    # ---- mutation ----

    def place(self, pos: Position, mark: Cell) -> None:
        # Occupancy is checked by the caller, not here.
        index = to_index(pos)
        if mark not in MARKS:
            raise ValueError(f"Cannot place {mark!r}; expected X or O")
        self.cells[index] = mark if isinstance(mark, Cell) else Cell(mark)

    def clear(self, pos: Position) -> None:
        self.cells[to_index(pos)] = Cell.EMPTY

    def reset(self) -> None:
        for i in range(CELL_COUNT):
            self.cells[i] = Cell.EMPTY

    def copy(self) -> "Board":
        return Board(cells=self.cells.copy())

    def __str__(self) -> str:
        rows = [
            " | ".join(c.value for c in self.cells[r * SIZE : (r + 1) * SIZE])
            for r in range(SIZE)
        ]
        return "\n---------\n".join(rows)

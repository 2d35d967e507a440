"""Tetromino pieces, their shapes and their movement on a board."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from enum import IntEnum
from typing import TYPE_CHECKING, Callable, Protocol

from .point import Point

if TYPE_CHECKING:
    from .board import Board

GAME_WIDTH = 12
GAME_HEIGHT = 18
EMPTY_CELL = " "
FILLED_CELL = "*"
PIECE_SIZE = 4
NUMBER_OF_PIECE_TYPES = 7

# Percentage chance (out of 100) that a new piece is a bomb.
BOMB_CHANCE = 5


class PieceType(IntEnum):
    """The seven tetromino shapes plus the bomb."""

    I = 0  # noqa: E741
    J = 1
    L = 2
    O = 3  # noqa: E741
    S = 4
    T = 5
    Z = 6
    B = 7


class _RandomSource(Protocol):
    def randrange(self, stop: int) -> int: ...


# Cell offsets from the spawn origin, in the order the cells are stored.
_SHAPES: dict[PieceType, tuple[tuple[int, int], ...]] = {
    PieceType.I: ((0, 0), (1, 0), (2, 0), (3, 0)),
    PieceType.J: ((0, 0), (0, 1), (1, 1), (2, 1)),
    PieceType.L: ((2, 0), (0, 1), (1, 1), (2, 1)),
    PieceType.O: ((0, 0), (1, 0), (0, 1), (1, 1)),
    PieceType.S: ((0, 1), (1, 1), (1, 0), (2, 0)),
    PieceType.T: ((0, 1), (1, 1), (2, 1), (1, 0)),
    PieceType.Z: ((0, 0), (1, 0), (1, 1), (2, 1)),
    PieceType.B: ((0, 0), (0, 0), (0, 0), (0, 0)),
}

_SPAWN_X = GAME_WIDTH // 2 - 1
_SPAWN_Y = 0


def choose_piece_type(rng: _RandomSource | None = None) -> PieceType:
    """Pick a piece type: a bomb with a small chance, otherwise a tetromino."""
    number = (rng or random).randrange(100)
    if number < BOMB_CHANCE:
        return PieceType.B
    return PieceType(number % NUMBER_OF_PIECE_TYPES)


def _default_cells() -> list[Point]:
    return [Point() for _ in range(PIECE_SIZE)]


@dataclass
class Piece:
    """A falling piece made of ``PIECE_SIZE`` cells."""

    piece_type: PieceType = PieceType.I
    cells: list[Point] = field(default_factory=_default_cells)

    def build(self, rng: _RandomSource | None = None) -> None:
        """Turn this piece into a freshly spawned piece of a random type."""
        self.piece_type = choose_piece_type(rng)
        self.cells = [
            Point(_SPAWN_X + dx, _SPAWN_Y + dy) for dx, dy in _SHAPES[self.piece_type]
        ]

    def move_left(self, board: Board) -> bool:
        """Move one column left unless a wall or filled cell is in the way."""
        blocked = any(
            cell.x == 0 or board.is_filled(cell.x - 1, cell.y + 1) for cell in self.cells
        )
        if blocked:
            return False
        self.cells = [cell.shifted(-1, 0) for cell in self.cells]
        return True

    def move_right(self, board: Board) -> bool:
        """Move one column right unless a wall or filled cell is in the way."""
        blocked = any(
            cell.x == GAME_WIDTH - 1 or board.is_filled(cell.x + 1, cell.y + 1)
            for cell in self.cells
        )
        if blocked:
            return False
        self.cells = [cell.shifted(1, 0) for cell in self.cells]
        return True

    def rotate_clockwise(self, board: Board) -> bool:
        """Rotate a quarter turn around the second cell if there is room."""
        return self._rotate(
            board,
            lambda c, p: Point(c.y - p.y + c.x, p.x - c.x + c.y),
        )

    def rotate_counterclockwise(self, board: Board) -> bool:
        """Rotate a quarter turn around the second cell if there is room."""
        return self._rotate(
            board,
            lambda c, p: Point(-(p.y - c.y) + c.x, (p.x - c.x) + c.y),
        )

    def fall(self, rows: int = 1) -> None:
        """Move the piece down by ``rows`` rows."""
        self.cells = [cell.shifted(0, rows) for cell in self.cells]

    def _rotate(self, board: Board, turn: Callable[[Point, Point], Point]) -> bool:
        if self.piece_type in (PieceType.O, PieceType.B):
            return False
        center = self.cells[1]
        rotated = [turn(center, cell) for cell in self.cells]
        for cell in rotated:
            if not (0 <= cell.x < GAME_WIDTH and 0 <= cell.y < GAME_HEIGHT):
                return False
            if board.is_filled(cell.x + 1, cell.y + 1):
                return False
        self.cells = rotated
        return True
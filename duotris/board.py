"""A player's playing field."""

from __future__ import annotations

from collections.abc import Iterator

from .piece import (
    EMPTY_CELL,
    FILLED_CELL,
    GAME_HEIGHT,
    GAME_WIDTH,
    Piece,
    PieceType,
)
from .point import Point

BOMB_RADIUS = 4


class Board:
    """A ``GAME_WIDTH`` by ``GAME_HEIGHT`` grid of filled and empty cells."""

    def __init__(self) -> None:
        self.grid: list[list[bool]] = []
        self.reset()

    def reset(self) -> None:
        """Empty every cell."""
        self.grid = [[False] * GAME_WIDTH for _ in range(GAME_HEIGHT)]

    def is_filled(self, x: int, y: int) -> bool:
        """Whether the cell at ``(x, y)`` is filled; cells off the board are not."""
        if 0 <= x < GAME_WIDTH and 0 <= y < GAME_HEIGHT:
            return self.grid[y][x]
        return False

    def is_row_full(self, row: int) -> bool:
        """Whether every cell of ``row`` is filled."""
        if not 0 <= row < GAME_HEIGHT:
            raise IndexError(f"row {row} is outside the board")
        return all(self.grid[row])

    def shift_rows_down(self, start_row: int) -> None:
        """Remove ``start_row``, move every row above it down, empty the top row."""
        if not 0 <= start_row < GAME_HEIGHT:
            raise IndexError(f"row {start_row} is outside the board")
        del self.grid[start_row]
        self.grid.insert(0, [False] * GAME_WIDTH)

    def clear_rows(self, piece: Piece) -> int:
        """Remove full rows touched by ``piece``; return how many were removed."""
        rows = [cell.y for cell in piece.cells]
        cleared = 0
        while True:
            full = next((row for row in rows if self.is_row_full(row)), None)
            if full is None:
                return cleared
            self.shift_rows_down(full)
            cleared += 1

    def insert_piece(self, piece: Piece) -> None:
        """Settle ``piece`` on the board; a bomb above the floor explodes instead."""
        origin = piece.cells[0]
        if piece.piece_type == PieceType.B and origin.y < GAME_HEIGHT - 1:
            self._explode(origin)
            return
        for cell in piece.cells:
            self.grid[cell.y][cell.x] = True

    def filled_cells(self) -> Iterator[Point]:
        """Yield the filled cells, row by row from the top."""
        for y, row in enumerate(self.grid):
            for x, filled in enumerate(row):
                if filled:
                    yield Point(x, y)

    def __str__(self) -> str:
        return "\n".join(
            "".join(FILLED_CELL if filled else EMPTY_CELL for filled in row)
            for row in self.grid
        )

    def _explode(self, center: Point) -> None:
        start_x = max(0, center.x - BOMB_RADIUS)
        start_y = max(0, center.y - BOMB_RADIUS)
        end_x = min(GAME_WIDTH - 1, center.x + BOMB_RADIUS)
        end_y = min(GAME_HEIGHT - 1, center.y + BOMB_RADIUS)
        for y in range(start_y, end_y + 1):
            for x in range(start_x, end_x + 1):
                self.grid[y][x] = False
        self._apply_gravity()

    def _apply_gravity(self) -> None:
        for x in range(GAME_WIDTH):
            count = sum(1 for row in self.grid if row[x])
            for y in range(GAME_HEIGHT):
                self.grid[y][x] = y >= GAME_HEIGHT - count
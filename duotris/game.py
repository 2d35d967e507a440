"""The two-player game: menu, game loop and command-line entry point."""

from __future__ import annotations

import argparse
import random
import time
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Iterable

from .board import Board
from .piece import GAME_HEIGHT, GAME_WIDTH, Piece
from .terminal import Terminal

P2_X = 24
PIECE_X = 1
ESCAPE = "\x1b"
HORIZON_BORDER = "-"
VERTICAL_BORDER = "|"
TICK_SECONDS = 0.4

INSTRUCTIONS = """
Keys:

\t\t\tLeft Player            Right Player
LEFT                     a or A                 j or J
RIGHT                    d or D                 l or L
ROTATE clockwise         s or S                 k or K
ROTATE counterclockwise  w or W                 i or I (uppercase i)
DROP                     x or X                 m or M
"""


class _Menu(IntEnum):
    START = 1
    CONTINUE = 2
    INSTRUCTIONS = 8
    EXIT = 9


class _Action(Enum):
    LEFT = "left"
    RIGHT = "right"
    CLOCKWISE = "clockwise"
    COUNTERCLOCKWISE = "counterclockwise"
    DROP = "drop"


_P1_KEYS = {
    "a": _Action.LEFT,
    "d": _Action.RIGHT,
    "s": _Action.CLOCKWISE,
    "w": _Action.COUNTERCLOCKWISE,
    "x": _Action.DROP,
}
_P2_KEYS = {
    "j": _Action.LEFT,
    "l": _Action.RIGHT,
    "k": _Action.CLOCKWISE,
    "i": _Action.COUNTERCLOCKWISE,
    "m": _Action.DROP,
}


def _action(keymap: dict[str, _Action], key: str) -> _Action | None:
    return keymap.get(key.lower()) if key else None


class Outcome(Enum):
    """How a round stands after a move."""

    NONE = "none"
    PLAYER1 = "player1"
    PLAYER2 = "player2"
    TIE = "tie"


@dataclass
class Player:
    """One player's board and falling piece; ``offset`` is the board's screen column."""

    board: Board = field(default_factory=Board)
    piece: Piece = field(default_factory=Piece)
    is_piece_hit: bool = True
    offset: int = 0

    def reset(self) -> None:
        """Empty this player's board."""
        self.board.reset()


def split_keys(keys: Iterable[str]) -> tuple[str, str]:
    """Pick each player's key from the keys pressed during one tick.

    Player 1 takes the first of its keys or Escape; once it has a key the
    remaining presses are ignored. Before that, player 2 takes the last of
    its keys. A missing key is the empty string.
    """
    key1 = key2 = ""
    for key in keys:
        if key1:
            continue
        if key == ESCAPE or _action(_P1_KEYS, key) is not None:
            key1 = key
        elif _action(_P2_KEYS, key) is not None:
            key2 = key
    return key1, key2


class Game:
    """Two boards side by side, played from one keyboard."""

    def __init__(
        self,
        terminal: Terminal | None = None,
        rng: random.Random | None = None,
        tick: float = TICK_SECONDS,
    ) -> None:
        self.terminal = terminal if terminal is not None else Terminal()
        self.rng = rng if rng is not None else random.Random()
        self.tick = tick
        self.p1 = Player(offset=0)
        self.p2 = Player(offset=P2_X)
        self.winner = False

    def run(self) -> None:
        """Show the menu and play until the player chooses to exit."""
        with self.terminal:
            game_finished = True
            choice = None
            while choice is not _Menu.EXIT:
                choice = self._menu(game_finished)
                if choice is _Menu.START:
                    self.start_new_game()
                    game_finished = self.process()
                elif choice is _Menu.CONTINUE:
                    game_finished = self.process()
                elif choice is _Menu.INSTRUCTIONS:
                    self._show_instructions()
            self.terminal.clear()

    def start_new_game(self) -> None:
        """Empty both boards and spawn a new piece for each player."""
        self.terminal.clear()
        self.winner = False
        for player in (self.p1, self.p2):
            player.reset()
            player.is_piece_hit = True
            player.piece.build(self.rng)
        self._draw_borders()

    def process(self) -> bool:
        """Play until someone wins (True) or Escape pauses the game (False)."""
        key1 = key2 = ""
        while not self.winner and ESCAPE not in (key1, key2):
            for player in (self.p1, self.p2):
                player.is_piece_hit = self.check_hit(player)
                if player.is_piece_hit:
                    self._draw_piece(player, True)
                    self._perform_hit(player)
            key1, key2 = self._move_pieces()
            outcome = self.check_winner()
            if outcome is not Outcome.NONE:
                self._announce(outcome)
                self.winner = True
        return self.winner

    def check_hit(self, player: Player) -> bool:
        """Whether the player's piece rests on the floor or on a filled cell."""
        return any(
            cell.y >= GAME_HEIGHT - 1 or player.board.is_filled(cell.x, cell.y + 1)
            for cell in player.piece.cells
        )

    def check_winner(self) -> Outcome:
        """A player loses when a piece rests on filled cells within the top two rows."""
        p1_lost = self._topped_out(self.p1)
        p2_lost = self._topped_out(self.p2)
        if p1_lost and p2_lost:
            return Outcome.TIE
        if p2_lost:
            return Outcome.PLAYER1
        if p1_lost:
            return Outcome.PLAYER2
        return Outcome.NONE

    def perform_move(self, key1: str, key2: str) -> None:
        """Apply each player's key, then move every piece that was not dropped down a row."""
        for player, keymap, key in (
            (self.p1, _P1_KEYS, key1),
            (self.p2, _P2_KEYS, key2),
        ):
            action = _action(keymap, key)
            if action is _Action.DROP:
                self.drop(player)
                continue
            if action is _Action.LEFT:
                player.piece.move_left(player.board)
            elif action is _Action.RIGHT:
                player.piece.move_right(player.board)
            elif action is _Action.CLOCKWISE:
                player.piece.rotate_clockwise(player.board)
            elif action is _Action.COUNTERCLOCKWISE:
                player.piece.rotate_counterclockwise(player.board)
            if not self.check_hit(player):
                player.piece.fall()

    def drop(self, player: Player) -> None:
        """Move the player's piece straight down until it hits something."""
        while not self.check_hit(player):
            player.piece.fall()
        player.is_piece_hit = True

    @staticmethod
    def _topped_out(player: Player) -> bool:
        return any(
            cell.y <= 1 and player.board.is_filled(cell.x, cell.y + 1)
            for cell in player.piece.cells
        )

    def _perform_hit(self, player: Player) -> None:
        player.board.insert_piece(player.piece)
        player.board.clear_rows(player.piece)
        player.piece.build(self.rng)

    def _move_pieces(self) -> tuple[str, str]:
        self._draw_borders()
        self._draw_boards()
        for player in (self.p1, self.p2):
            self._draw_piece(player, True)
        key1, key2 = self._read_moves()
        for player in (self.p1, self.p2):
            self._draw_piece(player, False)
        self.perform_move(key1, key2)
        return key1, key2

    def _read_moves(self) -> tuple[str, str]:
        if self.tick > 0:
            time.sleep(self.tick)
        pressed = []
        while self.terminal.key_available():
            pressed.append(self.terminal.read_key())
        return split_keys(pressed)

    def _announce(self, outcome: Outcome) -> None:
        messages = {
            Outcome.TIE: "The result is a tie!",
            Outcome.PLAYER1: "Player 1 won!",
            Outcome.PLAYER2: "Player 2 won!",
        }
        self.terminal.clear()
        self.terminal.write(messages[outcome])
        self.terminal.write("\n\nPress any key to continue...")
        self._wait_for_key()
        self.terminal.clear()

    def _wait_for_key(self) -> None:
        try:
            self.terminal.read_key()
        except EOFError:
            pass

    def _menu(self, game_finished: bool) -> _Menu:
        term = self.terminal
        term.clear()
        if game_finished:
            term.write("Welcome to the TETRIS game!\n\n")
        term.write("(1) Start a new game\n")
        if not game_finished:
            term.write("(2) Continue a paused game\n")
        term.write("(8) Present instructions and keys\n")
        term.write("(9) EXIT\n")

        allowed = {str(int(item)): item for item in _Menu}
        if game_finished:
            del allowed[str(int(_Menu.CONTINUE))]
        choice = None
        while choice is None:
            choice = allowed.get(term.read_key())

        term.clear()
        self._draw_borders()
        self._draw_boards()
        return choice

    def _show_instructions(self) -> None:
        self.terminal.clear()
        self.terminal.write(INSTRUCTIONS + "\n")
        self.terminal.write("\n\nPress any key to go back to menu")
        self._wait_for_key()

    def _draw_borders(self) -> None:
        term = self.terminal
        for left in (0, P2_X):
            for col in range(left, left + GAME_WIDTH + 1):
                term.goto(col, GAME_HEIGHT)
                term.write(HORIZON_BORDER)
            for row in range(GAME_HEIGHT + 1):
                term.goto(left, row)
                term.write(VERTICAL_BORDER)
                term.goto(left + GAME_WIDTH + 1, row)
                term.write(VERTICAL_BORDER)

    def _draw_boards(self) -> None:
        for player in (self.p1, self.p2):
            for y, row in enumerate(player.board.grid):
                for x, filled in enumerate(row):
                    self.terminal.draw_point(x + player.offset + PIECE_X, y, filled)

    def _draw_piece(self, player: Player, filled: bool) -> None:
        for cell in player.piece.cells:
            self.terminal.draw_point(cell.x + player.offset + PIECE_X, cell.y, filled)


def main(argv: list[str] | None = None) -> int:
    """Start the game on the current terminal."""
    parser = argparse.ArgumentParser(prog="duotris", description="Two-player falling blocks.")
    parser.add_argument("--seed", type=int, default=None, help="seed for the piece sequence")
    args = parser.parse_args(argv)
    game = Game(rng=random.Random(args.seed))
    try:
        game.run()
    except (KeyboardInterrupt, EOFError):
        pass
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
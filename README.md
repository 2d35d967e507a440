# duotris

duotris is a falling-block puzzle game for two players who share one
keyboard. Each player has a 12 × 18 board, and the two boards sit side by
side in the terminal. Pieces fall one row every 0.4 seconds. When a piece
lands, every full row that it touches is cleared. About one piece in twenty
is a bomb. When a bomb lands above the floor, it empties every cell within
four cells of it. The blocks in each column then drop to the bottom.

A player loses when a piece comes to rest on filled cells in the top two rows
of their board. If both players top out on the same tick, the game is a tie.

## Installing

```
pip install .
```

## Playing

```
duotris
duotris --seed 42
```

`--seed` fixes the order in which pieces are chosen.

The menu offers these choices:

- `1` starts a new game.
- `2` continues a paused game. This choice appears only while a game is paused.
- `8` shows the keys.
- `9` quits.

Press `Esc` during play to pause and return to the menu.

| Action                  | Left player | Right player |
|-------------------------|-------------|--------------|
| Left                    | `a` / `A`   | `j` / `J`    |
| Right                   | `d` / `D`   | `l` / `L`    |
| Rotate clockwise        | `s` / `S`   | `k` / `K`    |
| Rotate counterclockwise | `w` / `W`   | `i` / `I`    |
| Drop                    | `x` / `X`   | `m` / `M`    |

Each player gets at most one key per tick. Once the left player has pressed a
key, or `Esc` has been pressed, any other keys pressed in that tick are
ignored.

The screen is drawn with ANSI escape sequences. On POSIX systems, keys are
read from a terminal in cbreak mode. On Windows, they are read through
`msvcrt`.

## Using the game logic from code

The modules `duotris.point`, `duotris.piece` and `duotris.board` do not use
the terminal, so you can call them directly:

```python
import random

from duotris.board import Board
from duotris.piece import Piece

board = Board()
piece = Piece()
piece.build(random.Random(1))
piece.move_left(board)
piece.fall(5)
board.insert_piece(piece)
board.clear_rows(piece)
print(list(board.filled_cells()))
print(board)
```

- `Piece.build(rng)` turns the piece into a new piece of a random type.
  `choose_piece_type(rng)` only picks the type.
- `Piece.move_left`, `Piece.move_right`, `Piece.rotate_clockwise` and
  `Piece.rotate_counterclockwise` return whether the piece moved.
- `Board.clear_rows(piece)` returns the number of rows it removed.

`duotris.game.Game` accepts its own `Terminal`, random source and tick
length. `Terminal(output=..., keys=[...])` writes to any text stream and
plays a script of key presses, which lets you drive a game without a real
terminal.

## What it does not do

There is no scoring, no level or speed progression and no saved state. A
paused game is kept only while the program is running.

## Running the tests

```
pip install .[test]
pytest
```
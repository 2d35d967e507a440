import io

import pytest

from duotris.game import ESCAPE, Game, Outcome, Player, main, split_keys
from duotris.piece import GAME_HEIGHT, Piece, PieceType
from duotris.point import Point
from duotris.terminal import Terminal


class FixedRng:
    """Always yields the same number, so every piece is an O."""

    def randrange(self, stop):
        return 10


def make_game(keys=()):
    out = io.StringIO()
    game = Game(terminal=Terminal(output=out, keys=keys), rng=FixedRng(), tick=0)
    return game, out


def o_piece(x, y):
    return Piece(
        PieceType.O,
        [Point(x, y), Point(x + 1, y), Point(x, y + 1), Point(x + 1, y + 1)],
    )


def i_piece(x, y):
    return Piece(PieceType.I, [Point(x + i, y) for i in range(4)])


@pytest.mark.parametrize(
    "keys, expected",
    [
        (["a"], ("a", "")),
        (["D"], ("D", "")),
        (["j"], ("", "j")),
        (["a", "j"], ("a", "")),
        (["j", "l"], ("", "l")),
        (["j", "a"], ("a", "j")),
        ([ESCAPE], (ESCAPE, "")),
        (["z", "9"], ("", "")),
        ([], ("", "")),
    ],
)
def test_split_keys(keys, expected):
    assert split_keys(keys) == expected


def test_player_reset_empties_board():
    player = Player()
    player.board.grid[5][3] = True
    player.reset()
    assert list(player.board.filled_cells()) == []


def test_check_hit_on_floor_and_on_cells():
    game, _ = make_game()
    game.p1.piece = i_piece(2, GAME_HEIGHT - 1)
    assert game.check_hit(game.p1) is True
    game.p1.piece = i_piece(2, 5)
    assert game.check_hit(game.p1) is False
    game.p1.board.grid[6][3] = True
    assert game.check_hit(game.p1) is True


def test_drop_lands_on_floor():
    game, _ = make_game()
    game.p1.piece = i_piece(2, 0)
    game.p1.is_piece_hit = False
    game.drop(game.p1)
    assert all(cell.y == GAME_HEIGHT - 1 for cell in game.p1.piece.cells)
    assert game.p1.is_piece_hit is True


def test_check_winner_outcomes():
    game, _ = make_game()
    game.p1.piece = o_piece(5, 0)
    game.p2.piece = o_piece(5, 5)
    assert game.check_winner() is Outcome.NONE
    game.p1.board.grid[2][5] = True
    assert game.check_winner() is Outcome.PLAYER2
    game.p2.piece = o_piece(5, 0)
    game.p2.board.grid[2][6] = True
    assert game.check_winner() is Outcome.TIE
    game.p1.board.reset()
    assert game.check_winner() is Outcome.PLAYER1


def test_perform_move_left_then_fall():
    game, _ = make_game()
    game.p1.piece = i_piece(4, 5)
    game.p2.piece = i_piece(4, 5)
    game.perform_move("a", "l")
    assert game.p1.piece.cells == [Point(3 + i, 6) for i in range(4)]
    assert game.p2.piece.cells == [Point(5 + i, 6) for i in range(4)]


def test_perform_move_drop_does_not_fall_further():
    game, _ = make_game()
    game.p1.piece = i_piece(4, 5)
    game.p2.piece = i_piece(4, 5)
    game.perform_move("X", "")
    assert all(cell.y == GAME_HEIGHT - 1 for cell in game.p1.piece.cells)
    assert game.p2.piece.cells == [Point(4 + i, 6) for i in range(4)]


def test_start_new_game_resets_state():
    game, _ = make_game()
    game.p1.board.grid[3][3] = True
    game.winner = True
    game.start_new_game()
    assert game.winner is False
    assert list(game.p1.board.filled_cells()) == []
    assert game.p1.piece.piece_type is PieceType.O
    assert game.p2.piece.piece_type is PieceType.O


def test_process_escape_pauses():
    game, _ = make_game([ESCAPE])
    game.start_new_game()
    assert game.process() is False


def test_process_reports_winner():
    game, out = make_game([])
    game.start_new_game()
    for x in range(len(game.p1.board.grid[2])):
        game.p1.board.grid[2][x] = True
    assert game.process() is True
    assert "Player 2 won!" in out.getvalue()


def test_run_start_pause_and_exit():
    game, out = make_game(["1", ESCAPE, None, "9"])
    game.run()
    text = out.getvalue()
    assert "Welcome to the TETRIS game!" in text
    assert "Continue a paused game" in text


def test_run_ignores_continue_when_no_game():
    game, out = make_game(["2", "9"])
    game.run()
    assert "Continue a paused game" not in out.getvalue()


def test_run_shows_instructions():
    game, out = make_game(["8", "q", "9"])
    game.run()
    assert "ROTATE counterclockwise" in out.getvalue()


def test_run_without_keys_raises_eof():
    game, _ = make_game([])
    with pytest.raises(EOFError):
        game.run()


def test_main_help_exits_cleanly():
    with pytest.raises(SystemExit) as info:
        main(["--help"])
    assert info.value.code == 0
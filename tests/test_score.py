import pytest

from termgalaga.score import POINTS_PER_BUG, Scoreboard


@pytest.fixture
def board(tmp_path):
    return Scoreboard(path=tmp_path / "highscore.txt")


def test_new_board_starts_at_zero(board):
    assert (board.current, board.highest) == (0, 0)


def test_add_accumulates_points(board):
    board.add(POINTS_PER_BUG)
    board.add(POINTS_PER_BUG)
    assert board.current == 2 * POINTS_PER_BUG


def test_reset_clears_current_only(board):
    board.add(40)
    board.check()
    board.reset()
    assert board.current == 0
    assert board.highest == 40


def test_check_raises_highest_when_beaten(board):
    board.add(30)
    assert board.check() is True
    assert board.highest == 30


def test_check_keeps_highest_when_not_beaten(board):
    board.highest = 50
    board.add(20)
    assert board.check() is False
    assert board.highest == 50


def test_save_writes_number_and_newline(board):
    board.highest = 70
    board.save()
    assert board.path.read_text() == "70\n"


def test_save_then_load_round_trip(tmp_path):
    path = tmp_path / "hs.txt"
    first = Scoreboard(path=path)
    first.add(120)
    first.check()
    first.save()
    second = Scoreboard(path=path)
    assert second.load_highest() == 120
    assert second.highest == 120


def test_load_skips_leading_whitespace(board):
    board.path.write_text("   \n  -5 trailing")
    assert board.load_highest() == -5


def test_load_with_garbage_keeps_previous_value(board):
    board.highest = 33
    board.path.write_text("not a number")
    assert board.load_highest() == 33


def test_load_missing_file_raises(board):
    with pytest.raises(FileNotFoundError):
        board.load_highest()
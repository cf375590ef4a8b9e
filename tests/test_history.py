import pytest

from tictactoe_timetravel.game_basics import EMPTY_BOARD, O, X
from tictactoe_timetravel.history import (
    GameHistory,
    InvalidMove,
    InvalidStep,
    MoveEntry,
    Status,
    move_label,
)


def play(*cells: int) -> GameHistory:
    h = GameHistory()
    for c in cells:
        h.apply_move(c)
    return h


def test_new_history_starts_empty():
    h = GameHistory()
    view = h.current_view()
    assert len(h) == 1
    assert h.step == 0
    assert view.board == EMPTY_BOARD
    assert view.status == Status.next_to_move(X)
    assert view.moves == (MoveEntry(0, "Go to game start"),)


def test_first_move_marks_x_and_passes_turn():
    h = GameHistory()
    view = h.apply_move(0)
    assert view.board == (X, 0, 0, 0, 0, 0, 0, 0, 0)
    assert view.status == Status.next_to_move(O)
    assert view.status.text == "Next player: O"
    assert [m.label for m in view.moves] == ["Go to game start", "Go to move #1"]


def test_top_row_win_and_moves_after_are_ignored():
    h = play(0, 4, 1, 5, 2)
    view = h.current_view()
    assert view.status == Status.winner(X)
    assert view.status.text == "Winner: X"
    assert view.status.is_over
    after = h.apply_move(3)
    assert after == view
    assert len(h) == 6


def test_occupied_cell_is_ignored():
    h = play(4)
    before = h.current_view()
    assert h.apply_move(4) == before
    assert h.current_view() == before
    assert len(h) == 2


def test_rewind_then_branch_discards_future():
    h = play(0, 1, 3)
    original_step2 = h.snapshots[2]
    view = h.rewind_to(1)
    assert view.board == (X, 0, 0, 0, 0, 0, 0, 0, 0)
    assert view.status == Status.next_to_move(O)
    # rewinding never drops history
    assert len(h) == 4

    view = h.apply_move(2)
    assert view.board == (X, 0, O, 0, 0, 0, 0, 0, 0)
    assert len(h) == 3
    assert h.step == 2
    assert h.snapshots[2] != original_step2


def test_rewind_to_step_two_restores_x_to_move():
    h = play(0, 1, 3)
    view = h.rewind_to(2)
    assert view.board == (X, O, 0, 0, 0, 0, 0, 0, 0)
    assert view.status == Status.next_to_move(X)


def test_rewind_forward_again_without_moving():
    h = play(0, 1, 3)
    h.rewind_to(0)
    view = h.rewind_to(3)
    assert view.board == (X, O, 0, X, 0, 0, 0, 0, 0)
    assert len(view.moves) == 4


def test_rewind_out_of_a_win_reopens_play():
    h = play(0, 4, 1, 5, 2)
    h.rewind_to(4)
    view = h.apply_move(3)
    assert view.status == Status.next_to_move(O)
    assert h.snapshots[-1][3] == X
    assert len(h) == 6


def test_full_board_without_line_is_draw():
    # X O X / X O O / O X X
    h = play(0, 1, 2, 4, 3, 5, 7, 6, 8)
    view = h.current_view()
    assert view.board == (X, O, X, X, O, O, O, X, X)
    assert view.status == Status.draw()
    assert view.status.text == "Draw"
    assert h.apply_move(0) == view


@pytest.mark.parametrize("step", [-1, 2, 10])
def test_rewind_out_of_range_raises(step):
    h = play(0)
    with pytest.raises(InvalidStep):
        h.rewind_to(step)
    assert h.step == 1


@pytest.mark.parametrize("cell", [-1, 9, "4", 1.0, True])
def test_apply_move_rejects_bad_cell_index(cell):
    h = GameHistory()
    with pytest.raises(InvalidMove):
        h.apply_move(cell)
    assert len(h) == 1


def test_player_to_move_follows_step_parity():
    h = play(0, 1, 2, 3)
    assert [h.player_to_move(s) for s in range(5)] == [X, O, X, O, X]
    h.rewind_to(3)
    assert h.player_to_move() == O


def test_move_labels():
    assert move_label(0) == "Go to game start"
    assert move_label(7) == "Go to move #7"


def test_snapshots_are_immutable_tuples():
    h = play(0, 4)
    snaps = h.snapshots
    assert all(isinstance(s, tuple) for s in snaps)
    with pytest.raises(TypeError):
        snaps[1][0] = O  # type: ignore[index]

"""
Tests for tic_tac_two.games.engine

Rule checks for placement, relocation, window slides, turn completion
and win detection.
"""

import numpy as np
import pytest

from tic_tac_two.core.errors import BlockedMove, InvalidMove, NoReserve
from tic_tac_two.core.types import Direction, Mark, PIECES_PER_PLAYER
from tic_tac_two.games import engine
from tic_tac_two.games.engine import (
    GameEngine,
    apply_placement,
    apply_relocation,
    can_slide_window,
    check_winner,
    complete_turn,
    is_cell_playable,
    move_window,
    new_game,
    state_string,
    valid_placements,
    valid_relocations,
)
from tic_tac_two.games.game_state import GameState, Reserve
from tic_tac_two.games.window import active_window, window_cells


def _piece_totals_hold(state: GameState) -> bool:
    return all(
        state.pieces_on_board(m) + state.reserve[m] == PIECES_PER_PLAYER
        and 0 <= state.reserve[m] <= PIECES_PER_PLAYER
        for m in (Mark.X, Mark.O)
    )


class TestNewGame:

    def test_fresh_defaults(self):
        s = new_game()
        assert not s.board.any()
        assert s.turn_count == 0
        assert s.current_player is Mark.X
        assert s.reserve == Reserve(4, 4)
        assert s.window_offset == 0

    def test_games_are_independent(self):
        a, b = new_game(), new_game()
        apply_placement(a, 12)
        assert b.board[12] == Mark.EMPTY


class TestIsCellPlayable:

    def test_empty_live_cell(self, fresh_state: GameState):
        assert is_cell_playable(fresh_state, 12)

    def test_outside_window(self, fresh_state: GameState):
        assert not is_cell_playable(fresh_state, 0)

    def test_occupied(self, fresh_state: GameState):
        fresh_state.board[12] = Mark.O
        assert not is_cell_playable(fresh_state, 12)

    @pytest.mark.parametrize("index", [-1, 25, 100])
    def test_off_grid(self, fresh_state: GameState, index):
        assert not is_cell_playable(fresh_state, index)


class TestPlacement:
    """Reserve -> board placement."""

    def test_scenario_centre_placement(self, fresh_state: GameState):
        """X placed at the window centre: reserve drops, no winner."""
        apply_placement(fresh_state, 12)
        assert fresh_state.board[12] == Mark.X
        assert fresh_state.reserve[Mark.X] == 3
        assert fresh_state.reserve[Mark.O] == 4
        assert check_winner(fresh_state) is None

    def test_does_not_toggle_turn(self, fresh_state: GameState):
        apply_placement(fresh_state, 12)
        assert fresh_state.current_player is Mark.X
        assert fresh_state.turn_count == 0

    def test_only_one_cell_changes(self, fresh_state: GameState):
        before = fresh_state.board.copy()
        apply_placement(fresh_state, 7)
        complete_turn(fresh_state)
        changed = np.flatnonzero(before != fresh_state.board)
        assert changed.tolist() == [7]
        assert fresh_state.current_player is Mark.O

    def test_occupied_raises(self, fresh_state: GameState):
        apply_placement(fresh_state, 12)
        complete_turn(fresh_state)
        before = fresh_state.copy()
        with pytest.raises(InvalidMove):
            apply_placement(fresh_state, 12)
        assert fresh_state == before

    def test_outside_window_raises(self, fresh_state: GameState):
        before = fresh_state.copy()
        with pytest.raises(InvalidMove):
            apply_placement(fresh_state, 24)
        assert fresh_state == before

    def test_no_reserve_raises(self, fresh_state: GameState):
        fresh_state.reserve[Mark.X] = 0
        before = fresh_state.copy()
        with pytest.raises(NoReserve):
            apply_placement(fresh_state, 12)
        assert fresh_state == before

    def test_no_reserve_checked_before_cell(self, fresh_state: GameState):
        """An empty reserve is reported even when the cell is also bad."""
        fresh_state.reserve[Mark.X] = 0
        with pytest.raises(NoReserve):
            apply_placement(fresh_state, 0)


class TestRelocation:
    """Board -> board relocation."""

    def test_moves_piece(self, fresh_state: GameState):
        apply_placement(fresh_state, 6)
        apply_relocation(fresh_state, 6, 18)
        assert fresh_state.board[6] == Mark.EMPTY
        assert fresh_state.board[18] == Mark.X
        assert fresh_state.reserve[Mark.X] == 3

    def test_wrong_owner_raises(self, fresh_state: GameState):
        fresh_state.board[6] = Mark.O
        fresh_state.reserve[Mark.O] = 3
        before = fresh_state.copy()
        with pytest.raises(InvalidMove):
            apply_relocation(fresh_state, 6, 12)
        assert fresh_state == before

    def test_empty_source_raises(self, fresh_state: GameState):
        with pytest.raises(InvalidMove):
            apply_relocation(fresh_state, 6, 12)

    def test_occupied_destination_raises(self, fresh_state: GameState):
        fresh_state.board[[6, 12]] = Mark.X
        fresh_state.reserve[Mark.X] = 2
        before = fresh_state.copy()
        with pytest.raises(InvalidMove):
            apply_relocation(fresh_state, 6, 12)
        assert fresh_state == before

    def test_same_cell_raises(self, fresh_state: GameState):
        apply_placement(fresh_state, 6)
        with pytest.raises(InvalidMove):
            apply_relocation(fresh_state, 6, 6)

    def test_destination_outside_window_raises(self, fresh_state: GameState):
        apply_placement(fresh_state, 6)
        before = fresh_state.copy()
        with pytest.raises(InvalidMove):
            apply_relocation(fresh_state, 6, 0)
        assert fresh_state == before

    def test_stranded_piece_can_move_back_in(self, mid_game_state: GameState):
        """A piece left outside the window by a slide may be relocated into it."""
        assert 18 not in active_window(mid_game_state.window_offset)
        apply_relocation(mid_game_state, 18, 1)
        assert mid_game_state.board[18] == Mark.EMPTY
        assert mid_game_state.board[1] == Mark.X
        assert _piece_totals_hold(mid_game_state)


class TestMoveWindow:
    """Window slide tests."""

    def test_up_from_top_edge_blocked(self, fresh_state: GameState):
        """Window already touching the top edge cannot go up."""
        fresh_state.window_offset = -5
        before = fresh_state.copy()
        with pytest.raises(BlockedMove):
            move_window(fresh_state, Direction.UP)
        assert fresh_state == before

    def test_up_from_centre_allowed(self, fresh_state: GameState):
        move_window(fresh_state, "up")
        assert fresh_state.window_offset == -5

    def test_right_until_edge(self, fresh_state: GameState):
        """Sliding right stops once the window reaches grid column 4."""
        move_window(fresh_state, Direction.RIGHT)
        assert active_window(fresh_state.window_offset).max() % 5 == 4
        before = fresh_state.copy()
        with pytest.raises(BlockedMove):
            move_window(fresh_state, Direction.RIGHT)
        assert fresh_state == before

    @pytest.mark.parametrize("direction, delta", [
        ("up", -5), ("down", 5), ("left", -1), ("right", 1),
        ("upLeft", -6), ("upRight", -4), ("downLeft", 4), ("downRight", 6),
    ])
    def test_offsets_from_centre(self, fresh_state: GameState, direction, delta):
        move_window(fresh_state, direction)
        assert fresh_state.window_offset == delta

    def test_board_untouched(self, mid_game_state: GameState):
        before = mid_game_state.board.copy()
        move_window(mid_game_state, Direction.DOWN_RIGHT)
        assert np.array_equal(before, mid_game_state.board)

    def test_does_not_toggle_turn(self, fresh_state: GameState):
        move_window(fresh_state, Direction.DOWN)
        assert fresh_state.current_player is Mark.X
        assert fresh_state.turn_count == 0

    def test_unknown_direction(self, fresh_state: GameState):
        with pytest.raises(ValueError):
            move_window(fresh_state, "sideways")
        assert fresh_state.window_offset == 0

    def test_threshold_enforced_on_request(self, fresh_state: GameState):
        fresh_state.turn_count = 3
        with pytest.raises(BlockedMove):
            move_window(fresh_state, Direction.UP, enforce_threshold=True)
        fresh_state.turn_count = 4
        move_window(fresh_state, Direction.UP, enforce_threshold=True)
        assert fresh_state.window_offset == -5

    def test_can_slide_window(self, fresh_state: GameState):
        assert not can_slide_window(fresh_state)
        fresh_state.turn_count = 4
        assert can_slide_window(fresh_state)
        assert can_slide_window(new_game(), threshold=0)


class TestCompleteTurn:

    def test_toggles_and_counts(self, fresh_state: GameState):
        complete_turn(fresh_state)
        assert fresh_state.current_player is Mark.O
        assert fresh_state.turn_count == 1
        complete_turn(fresh_state)
        assert fresh_state.current_player is Mark.X
        assert fresh_state.turn_count == 2


class TestCheckWinner:
    """Win detection within the active window."""

    @pytest.mark.parametrize("line", [
        [6, 7, 8], [11, 12, 13], [16, 17, 18],   # rows
        [6, 11, 16], [7, 12, 17], [8, 13, 18],   # cols
        [6, 12, 18], [8, 12, 16],                # diagonals
    ])
    def test_all_window_lines(self, fresh_state: GameState, line):
        fresh_state.board[line] = Mark.O
        assert check_winner(fresh_state) is Mark.O

    def test_empty_window(self, fresh_state: GameState):
        assert check_winner(fresh_state) is None

    def test_mixed_line(self, fresh_state: GameState):
        fresh_state.board[[6, 7]] = Mark.X
        fresh_state.board[8] = Mark.O
        assert check_winner(fresh_state) is None

    def test_line_outside_window_ignored(self, fresh_state: GameState):
        fresh_state.board[[0, 1, 2]] = Mark.X
        assert check_winner(fresh_state) is None

    def test_line_counts_once_window_covers_it(self, fresh_state: GameState):
        fresh_state.board[[0, 1, 2]] = Mark.X
        move_window(fresh_state, Direction.UP_LEFT)
        assert check_winner(fresh_state) is Mark.X

    def test_anti_diagonal_of_shifted_window(self, fresh_state: GameState):
        """Lines are read from the window's local 3x3 layout."""
        fresh_state.window_offset = 6
        fresh_state.board[[14, 18, 22]] = Mark.X
        assert np.fliplr(window_cells(fresh_state.board, 6)).diagonal().tolist() == [1, 1, 1]
        assert check_winner(fresh_state) is Mark.X

    def test_window_row_straddling_grid_rows_not_a_line(self, fresh_state: GameState):
        """Cells 8, 9, 10 are consecutive indices but not a window row."""
        fresh_state.board[[8, 9, 10]] = Mark.X
        fresh_state.window_offset = 1
        assert check_winner(fresh_state) is None

    def test_scenario_top_row_win(self, fresh_state: GameState):
        """X fills 6, 7, 8 while O plays elsewhere in the window."""
        for x_cell, o_cell in [(6, 16), (7, 17)]:
            apply_placement(fresh_state, x_cell)
            complete_turn(fresh_state)
            apply_placement(fresh_state, o_cell)
            complete_turn(fresh_state)
        apply_placement(fresh_state, 11)
        complete_turn(fresh_state)
        apply_placement(fresh_state, 13)
        complete_turn(fresh_state)
        assert check_winner(fresh_state) is None
        apply_relocation(fresh_state, 11, 8)
        complete_turn(fresh_state)
        assert check_winner(fresh_state) is Mark.X
        assert _piece_totals_hold(fresh_state)

    def test_fixed_line_order(self, fresh_state: GameState):
        """Rows are checked before columns."""
        fresh_state.board[[6, 7, 8]] = Mark.O
        fresh_state.board[[11, 16]] = Mark.X
        fresh_state.board[[13, 18]] = Mark.X
        fresh_state.board[12] = Mark.X
        # O has the top row, X has the middle row and a diagonal (8 is O)
        assert check_winner(fresh_state) is Mark.O


class TestEnumeration:

    def test_valid_placements_fresh(self, fresh_state: GameState):
        assert valid_placements(fresh_state) == active_window(0).tolist()

    def test_valid_placements_empty_reserve(self, fresh_state: GameState):
        fresh_state.reserve[Mark.X] = 0
        assert valid_placements(fresh_state) == []

    def test_valid_relocations(self, mid_game_state: GameState):
        pairs = valid_relocations(mid_game_state)
        sources = {a for a, _ in pairs}
        targets = {b for _, b in pairs}
        assert sources == {0, 12, 18}
        assert targets == {1, 2, 5, 7, 10, 11}


class TestPieceConservation:
    """Pieces are never created or destroyed."""

    def test_random_playout(self):
        rng = np.random.default_rng(7)
        state = new_game()
        for _ in range(60):
            options = [("place", p) for p in valid_placements(state)]
            options += [("relocate", p) for p in valid_relocations(state)]
            if can_slide_window(state):
                options += [("slide", d) for d in Direction]
            kind, arg = options[rng.integers(len(options))]
            if kind == "place":
                apply_placement(state, arg)
            elif kind == "relocate":
                apply_relocation(state, *arg)
            else:
                try:
                    move_window(state, arg)
                except BlockedMove:
                    pass
            complete_turn(state)
            assert _piece_totals_hold(state)
            assert len(set(active_window(state.window_offset).tolist())) == 9


class TestStateString:

    def test_marks_window_and_pieces(self, mid_game_state: GameState):
        text = state_string(mid_game_state)
        assert "[X]" in text
        assert " O " in text
        assert "reserve X=1 O=2" in text
        assert len(text.splitlines()) == 12


class TestGameEngineFacade:

    def test_delegates(self):
        eng = GameEngine(slide_threshold=0)
        state = eng.new_game()
        eng.apply_placement(state, 12)
        eng.complete_turn(state)
        assert eng.can_slide_window(state)
        eng.move_window(state, "down", enforce_threshold=True)
        assert state.window_offset == 5
        assert eng.check_winner(state) is None

    def test_threshold_respected(self):
        eng = GameEngine()
        state = eng.new_game()
        with pytest.raises(BlockedMove):
            eng.move_window(state, "down", enforce_threshold=True)

    def test_module_exposes_rules(self):
        assert engine.GameEngine.apply_placement is apply_placement

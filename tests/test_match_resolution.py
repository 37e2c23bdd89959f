import pytest

from slingo.components.board import Board
from slingo.components.spin_outcome import SpinOutcome
from slingo.systems.match_resolution import resolve_outcomes
from tests.helpers import FIXED_ROWS, miss_row, spin_row


@pytest.fixture
def board():
    return Board.from_rows(FIXED_ROWS)


def test_number_marks_its_cell_once(board):
    outcomes = spin_row(c0=SpinOutcome.of_number(11))
    first = resolve_outcomes(outcomes, board, set())
    assert first.marks == [(2, 0)]
    assert first.matched

    again = resolve_outcomes(outcomes, board, {(2, 0)})
    assert again.marks == []
    assert not again.matched


def test_misses_mark_nothing(board):
    resolution = resolve_outcomes(miss_row(), board, set())
    assert resolution.marks == []
    assert resolution.pending_wild_columns == []
    assert resolution.pending_super_wild is False


def test_marks_ordered_by_column(board):
    outcomes = [SpinOutcome.of_number(n) for n in (1, 17, 33, 49, 61)]
    resolution = resolve_outcomes(outcomes, board, set())
    assert resolution.marks == [(4, 0), (1, 1), (2, 2), (3, 3), (0, 4)]


def test_number_only_matches_its_own_column(board):
    # 16 is on the board in column 1, but column 0 cannot match it.
    outcomes = spin_row(c0=SpinOutcome.of_number(16))
    assert resolve_outcomes(outcomes, board, set()).marks == []


def test_blocker_only_suppresses_its_column(board):
    outcomes = spin_row(c0=SpinOutcome.blocker(), c1=SpinOutcome.of_number(18))
    resolution = resolve_outcomes(outcomes, board, set())
    assert resolution.blocker_columns == [0]
    assert resolution.marks == [(2, 1)]


def test_wilds_become_pending_requests(board):
    outcomes = spin_row(c1=SpinOutcome.wild(), c3=SpinOutcome.wild(), c4=SpinOutcome.super_wild())
    resolution = resolve_outcomes(outcomes, board, set())
    assert resolution.marks == []
    assert resolution.pending_wild_columns == [1, 3]
    assert resolution.pending_super_wild is True


def test_bonus_column_reported(board):
    resolution = resolve_outcomes(spin_row(c2=SpinOutcome.bonus()), board, set())
    assert resolution.bonus_columns == [2]
    assert resolution.marks == []


def test_wrong_outcome_count_is_rejected(board):
    with pytest.raises(ValueError):
        resolve_outcomes(miss_row()[:4], board, set())

from slingo.components.board import Board
from slingo.components.card_state import CardState
from slingo.components.game_session import GameSession, SessionPhase
from slingo.components.pending_selection import PendingSelection
from slingo.components.session_flags import SessionFlags
from slingo.components.spin_outcome import SpinOutcome
from slingo.events.bus import (
    EVENT_CELL_CLICK,
    EVENT_FULL_HOUSE,
    EVENT_GAME_OVER,
    EVENT_GAME_STARTED,
    EVENT_NEW_GAME_REQUEST,
    EVENT_OUTCOMES_REVEALED,
    EVENT_PENDING_SELECTION,
    EVENT_SCORE_CHANGED,
    EVENT_SESSION_PHASE_CHANGED,
    EVENT_SELECTION_RESOLVED,
    EVENT_SPIN_REQUEST,
    EVENT_TARGET_FORCED,
)
from slingo.systems.board_ops import line_cells
from slingo.utils.singletons import get_card_state, get_flags, get_pending, get_session
from tests.helpers import build_session, miss_row, spin_row


def _rows_missing_last_column(*rows):
    return [(r, c) for r in rows for c in range(4)]


def test_new_game_state():
    world, _, _ = build_session(counter=7)
    session = get_session(world)
    assert session.game_counter == 7
    assert session.target_slingo_count == 7
    assert session.spins_remaining == 8
    assert session.score == 0
    assert session.game_active
    assert session.phase == SessionPhase.ACTIVE
    assert session.status_message == "New game started! Spin to begin."


def test_spin_marks_and_scores():
    world, bus, system = build_session(spins=[spin_row(c0=SpinOutcome.of_number(11))])
    resolution = system.spin()
    session = get_session(world)
    assert resolution is not None and resolution.marks == [(2, 0)]
    assert get_card_state(world).marked == {(2, 0)}
    assert session.spins_remaining == 7
    assert session.score == 10
    assert session.last_outcomes[0] == SpinOutcome.of_number(11)
    assert session.status_message == "Great! You found matches!"


def test_spin_request_event_drives_spin():
    world, bus, system = build_session(spins=[miss_row()])
    bus.emit(EVENT_SPIN_REQUEST, source="test")
    session = get_session(world)
    assert session.spins_remaining == 7
    assert session.status_message == "No matches this time. Keep spinning!"


def test_blocker_status_message():
    world, _, system = build_session(spins=[spin_row(c0=SpinOutcome.blocker())])
    system.spin()
    assert get_session(world).status_message == "Blocker appeared! No matches in that column this spin."


def test_marked_cells_are_rescored_every_spin():
    world, _, system = build_session(
        spins=[spin_row(c0=SpinOutcome.of_number(3)), spin_row(c1=SpinOutcome.of_number(16))]
    )
    system.spin()
    system.spin()
    # 10 for one mark, then 20 for two marks.
    assert get_session(world).score == 30


def test_spin_is_noop_when_exhausted_or_over():
    world, _, system = build_session(spins=[])
    session = get_session(world)
    session.spins_remaining = 0
    assert system.spin() is None
    session.spins_remaining = 3
    session.game_active = False
    assert system.spin() is None
    assert system.outcome_generator.calls == 0


def test_wild_blocks_spins_until_resolved():
    world, bus, system = build_session(spins=[spin_row(c0=SpinOutcome.wild())])
    resolved = []
    bus.subscribe(EVENT_SELECTION_RESOLVED, lambda s, **k: resolved.append(k))

    system.spin()
    pending = get_pending(world)
    assert pending.wild_columns == [0]
    assert get_session(world).status_message.startswith("Wild appeared!")
    assert system.spin() is None
    assert system.outcome_generator.calls == 1

    # Wrong column is ignored.
    bus.emit(EVENT_CELL_CLICK, row=0, col=1)
    assert get_card_state(world).marked == set()
    assert system.resolve_pending_wild(1, (0, 1)) is False

    bus.emit(EVENT_CELL_CLICK, row=0, col=0)
    assert get_card_state(world).marked == {(0, 0)}
    assert not pending.has_pending()
    assert resolved == [{"row": 0, "col": 0, "kind": "wild"}]
    assert get_session(world).score == 10
    assert system.spin() is not None


def test_wild_on_fully_marked_column_is_dropped():
    world, _, system = build_session(spins=[spin_row(c0=SpinOutcome.wild())])
    system.line_tracker.apply_marks(line_cells("col-0"))
    system.spin()
    assert not get_pending(world).has_pending()


def test_super_wild_selects_any_unmarked_cell():
    world, bus, system = build_session(
        spins=[spin_row(c0=SpinOutcome.of_number(3), c2=SpinOutcome.super_wild())]
    )
    system.spin()
    pending = get_pending(world)
    assert pending.super_wild
    assert get_session(world).status_message == "Super Wild appeared! Select any unmarked cell on the grid."

    # Already marked cell is ignored.
    bus.emit(EVENT_CELL_CLICK, row=0, col=0)
    assert pending.super_wild

    assert system.resolve_pending_super_wild((4, 4)) is True
    assert get_card_state(world).marked == {(0, 0), (4, 4)}
    assert system.resolve_pending_super_wild((3, 3)) is False
    assert get_session(world).status_message == "Excellent choice! You marked a cell with the Super Wild."


def test_forced_completion_honors_target():
    world, bus, system = build_session(counter=2)
    session = get_session(world)
    assert session.target_slingo_count == 2
    system.line_tracker.apply_marks(_rows_missing_last_column(0, 1))
    session.spins_remaining = 0

    forced = system.ensure_target_met()

    assert forced == ["row-0", "row-1"]
    assert session.slingo_count == 2
    assert {"row-0", "row-1"} <= get_card_state(world).completed_lines


def test_forcing_stops_once_target_met():
    world, _, system = build_session(counter=2)
    system.line_tracker.apply_marks(_rows_missing_last_column(0, 1, 2))
    get_session(world).spins_remaining = 0
    system.ensure_target_met()
    assert get_card_state(world).completed_lines == {"row-0", "row-1"}


def test_last_spin_forces_and_ends_game():
    world, bus, system = build_session(counter=2, spins=[miss_row()])
    session = get_session(world)
    system.line_tracker.apply_marks(_rows_missing_last_column(0, 1))
    session.spins_remaining = 1
    phases = []
    forced = {}
    over = []
    bus.subscribe(EVENT_SESSION_PHASE_CHANGED, lambda s, **k: phases.append(k["new_phase"]))
    bus.subscribe(EVENT_TARGET_FORCED, lambda s, **k: forced.update(k))
    bus.subscribe(EVENT_GAME_OVER, lambda s, **k: over.append(k))

    system.spin()

    assert forced["line_ids"] == ["row-0", "row-1"]
    assert sorted(forced["cells"]) == [(0, 4), (1, 4)]
    assert phases == [SessionPhase.FORCED_COMPLETION, SessionPhase.TERMINAL]
    # 80 for eight marks on the spin, then 200 for two lines and 100 for ten marks.
    assert session.score == 380
    assert not session.game_active
    assert over == [{"score": 380, "slingo_count": 2, "target": 2, "full_house": False}]
    assert session.status_message == "Game over! Thanks for playing Slingo!"
    assert system.spin() is None


def test_no_candidates_ends_game_below_target():
    world, bus, system = build_session(counter=2, spins=[miss_row()])
    session = get_session(world)
    session.spins_remaining = 1
    forced = []
    bus.subscribe(EVENT_TARGET_FORCED, lambda s, **k: forced.append(k))
    system.spin()
    assert forced == []
    assert session.slingo_count == 0
    assert not session.game_active


def test_met_target_skips_forcing():
    world, bus, system = build_session(spins=[spin_row(c4=SpinOutcome.of_number(61))])
    session = get_session(world)
    system.line_tracker.apply_marks([(0, 0), (0, 1), (0, 2), (0, 3)])
    session.spins_remaining = 1
    phases = []
    bus.subscribe(EVENT_SESSION_PHASE_CHANGED, lambda s, **k: phases.append(k["new_phase"]))
    system.spin()
    assert session.slingo_count == 1
    assert session.score == 150
    assert phases == [SessionPhase.TERMINAL]


def test_game_waits_for_pending_selection_before_ending():
    world, bus, system = build_session(spins=[spin_row(c1=SpinOutcome.wild())])
    session = get_session(world)
    session.spins_remaining = 1
    system.spin()
    assert session.game_active
    assert system.ensure_target_met() == []
    bus.emit(EVENT_CELL_CLICK, row=2, col=1)
    assert not session.game_active


def test_full_house_short_circuits():
    world, bus, system = build_session(spins=[spin_row(c4=SpinOutcome.of_number(65))])
    system.line_tracker.apply_marks([(r, c) for r in range(5) for c in range(5) if (r, c) != (4, 4)])
    full_house = []
    over = []
    bus.subscribe(EVENT_FULL_HOUSE, lambda s, **k: full_house.append(k))
    bus.subscribe(EVENT_GAME_OVER, lambda s, **k: over.append(k))

    system.spin()

    session = get_session(world)
    assert session.spins_remaining == 7
    assert session.full_house
    assert not session.game_active
    assert session.slingo_count == 12
    # 12 lines, 25 marked cells, full house bonus.
    assert session.score == 1200 + 250 + 2500
    assert full_house == [{"score": 3950}]
    assert len(over) == 1 and over[0]["full_house"] is True
    assert system.spin() is None


def test_reset_replaces_everything_together():
    world, bus, system = build_session(counter=1, spins=[spin_row(c0=SpinOutcome.wild())])
    system.spin()
    get_flags(world).blocker_used = True
    started = {}
    bus.subscribe(EVENT_GAME_STARTED, lambda s, **k: started.update(k))

    bus.emit(EVENT_NEW_GAME_REQUEST)

    session = get_session(world)
    assert session.game_counter == 2
    assert session.target_slingo_count == 2
    assert session.spins_remaining == 8
    assert session.score == 0
    assert session.game_active
    assert get_card_state(world).marked == set()
    assert get_card_state(world).completed_lines == set()
    assert get_flags(world) == SessionFlags()
    assert not get_pending(world).has_pending()
    for component_type in (Board, CardState, GameSession, PendingSelection, SessionFlags):
        assert len(list(world.get_component(component_type))) == 1
    assert started["game_counter"] == 2
    assert started["target"] == 2
    assert len(started["board"]) == 5


def test_spin_events_report_outcomes_score_and_pending():
    outcomes = spin_row(c0=SpinOutcome.of_number(7), c3=SpinOutcome.wild())
    world, bus, system = build_session(spins=[outcomes])
    revealed = {}
    scores = []
    pending = {}
    bus.subscribe(EVENT_OUTCOMES_REVEALED, lambda s, **k: revealed.update(k))
    bus.subscribe(EVENT_SCORE_CHANGED, lambda s, **k: scores.append(k))
    bus.subscribe(EVENT_PENDING_SELECTION, lambda s, **k: pending.update(k))

    system.spin()

    assert revealed == {"outcomes": outcomes, "spins_remaining": 7}
    assert scores == [{"score": 10, "delta": 10}]
    assert pending == {"wild_columns": [3], "super_wild": False}


def test_super_wild_filling_a_wild_column_releases_the_wild():
    world, bus, system = build_session(
        spins=[spin_row(c0=SpinOutcome.wild(), c2=SpinOutcome.super_wild())]
    )
    system.line_tracker.apply_marks([(0, 0), (1, 0), (2, 0), (3, 0)])
    system.spin()
    pending = get_pending(world)
    assert pending.wild_columns == [0] and pending.super_wild

    assert system.resolve_pending_super_wild((4, 0)) is True

    assert not pending.has_pending()
    assert system.spin() is not None


def test_last_spin_game_ends_after_super_wild_fills_wild_column():
    world, bus, system = build_session(
        spins=[spin_row(c0=SpinOutcome.wild(), c2=SpinOutcome.super_wild())]
    )
    session = get_session(world)
    session.spins_remaining = 1
    system.line_tracker.apply_marks([(0, 0), (1, 0), (2, 0), (3, 0)])
    over = []
    bus.subscribe(EVENT_GAME_OVER, lambda s, **k: over.append(k))
    system.spin()

    assert system.resolve_pending_super_wild((4, 0)) is True

    assert not get_pending(world).has_pending()
    assert session.slingo_count == 1
    assert not session.game_active
    assert len(over) == 1


def test_forcing_waits_until_spins_run_out():
    world, _, system = build_session(counter=2)
    session = get_session(world)
    system.line_tracker.apply_marks([(0, 0), (0, 1), (0, 2), (0, 3)])
    assert session.spins_remaining == 8

    assert system.ensure_target_met() == []

    assert session.phase == SessionPhase.ACTIVE
    assert not get_card_state(world).is_marked(0, 4)
    assert session.game_active

from __future__ import annotations

import random
from typing import Iterable, Sequence

from slingo.components.board import Board
from slingo.components.game_rules import GameRules
from slingo.components.spin_outcome import SpinOutcome
from slingo.events.bus import EventBus
from slingo.systems.game_session_system import GameSessionSystem
from slingo.world import create_world

# Column 0 is [3, 7, 11, 15, 1] top to bottom; other columns count up from their range start.
FIXED_ROWS = [
    [3, 16, 31, 46, 61],
    [7, 17, 32, 47, 62],
    [11, 18, 33, 48, 63],
    [15, 19, 34, 49, 64],
    [1, 20, 35, 50, 65],
]

# No specials, no wilds: every column is a plain number draw.
QUIET_RULES = GameRules(
    blocker_chance=0.0,
    super_wild_chance=0.0,
    bonus_chance=0.0,
    wild_chance=0.0,
)

# In-range numbers that appear nowhere on FIXED_ROWS, one per column.
MISSES = [2, 25, 40, 55, 70]


def miss_row() -> list[SpinOutcome]:
    return [SpinOutcome.of_number(n) for n in MISSES]


def spin_row(**columns: SpinOutcome) -> list[SpinOutcome]:
    """A full spin of misses with selected columns overridden, e.g. spin_row(c0=SpinOutcome.wild())."""
    outcomes = miss_row()
    for name, outcome in columns.items():
        outcomes[int(name[1:])] = outcome
    return outcomes


class ScriptedOutcomes:
    """Stand-in outcome generator replaying fixed spins in order."""

    def __init__(self, spins: Iterable[Sequence[SpinOutcome]]):
        self._spins = [list(spin) for spin in spins]
        self.calls = 0

    def next_spin(self, board, marked, slingo_count, target_count, spins_remaining, flags):
        self.calls += 1
        if self._spins:
            return self._spins.pop(0)
        return miss_row()


def build_session(
    *,
    counter: int = 1,
    rules: GameRules | None = None,
    spins: Iterable[Sequence[SpinOutcome]] | None = None,
    seed: int = 7,
):
    """World, bus and a GameSessionSystem dealt FIXED_ROWS for game `counter`."""
    bus = EventBus()
    rules = rules or QUIET_RULES
    world = create_world(bus, rules=rules, rng=random.Random(seed))
    counters = iter(range(counter, counter + 1000))
    system = GameSessionSystem(world, bus, counter_provider=lambda: next(counters), start_game=False)
    system.reset_game(Board.from_rows(FIXED_ROWS))
    if spins is not None:
        system.outcome_generator = ScriptedOutcomes(spins)
    return world, bus, system

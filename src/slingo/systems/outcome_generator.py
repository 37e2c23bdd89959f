from __future__ import annotations

import logging
import random
from typing import AbstractSet, Dict, List

from slingo.components.board import Board, column_range
from slingo.components.game_rules import GameRules
from slingo.components.session_flags import SessionFlags
from slingo.components.spin_outcome import SpinOutcome
from slingo.systems.board_ops import Position

logger = logging.getLogger(__name__)


def compute_bias(
    spins_remaining: int,
    slingo_count: int,
    target_count: int,
    bias_cap: float,
) -> float:
    """Chance that a numeric column is steered onto an unmarked board value.

    Grows as the line deficit outpaces the spins left after this one.
    """
    remaining_after = spins_remaining - 1
    needed = target_count - slingo_count
    if needed <= 0 or remaining_after <= 0:
        return 0.0
    return min(bias_cap, needed / remaining_after)


class OutcomeGenerator:
    """Produces the five column outcomes of a spin.

    Special symbols are rolled first (blocker, super wild, bonus), each at most once
    per game. Remaining columns may become wilds (capped per game) or numbers, the
    latter biased toward unmarked board values when the game is behind its target.
    Single-use bookkeeping is written back to the SessionFlags passed in.
    """

    def __init__(self, rules: GameRules | None = None, rng: random.Random | None = None):
        self.rules = rules or GameRules()
        self.rng: random.Random = rng or random.Random()

    def next_spin(
        self,
        board: Board,
        marked: AbstractSet[Position],
        slingo_count: int,
        target_count: int,
        spins_remaining: int,
        flags: SessionFlags,
    ) -> List[SpinOutcome]:
        rules = self.rules
        rng = self.rng
        bias = compute_bias(spins_remaining, slingo_count, target_count, rules.bias_cap)

        # Generation order defines precedence when specials land on the same column.
        specials: Dict[int, SpinOutcome] = {}
        if not flags.blocker_used and rng.random() < rules.blocker_chance:
            flags.blocker_used = True
            specials.setdefault(rng.randrange(board.cols), SpinOutcome.blocker())
        if not flags.super_wild_used and rng.random() < rules.super_wild_chance:
            flags.super_wild_used = True
            specials.setdefault(rng.randrange(board.cols), SpinOutcome.super_wild())
        if not flags.bonus_used and rng.random() < rules.bonus_chance:
            flags.bonus_used = True
            specials.setdefault(rng.randrange(board.cols), SpinOutcome.bonus())

        outcomes: List[SpinOutcome] = []
        for col in range(board.cols):
            special = specials.get(col)
            if special is not None:
                outcomes.append(special)
                continue
            if flags.wild_used_count < rules.max_wilds and rng.random() < rules.wild_chance:
                flags.wild_used_count += 1
                outcomes.append(SpinOutcome.wild())
                continue
            outcomes.append(SpinOutcome.of_number(self._column_number(board, marked, col, bias)))

        logger.debug(
            "Spin outcomes %s (bias=%.2f, spins_remaining=%d, slingos=%d/%d)",
            [outcome.label() for outcome in outcomes],
            bias,
            spins_remaining,
            slingo_count,
            target_count,
        )
        return outcomes

    def _column_number(self, board: Board, marked: AbstractSet[Position], col: int, bias: float) -> int:
        low, high = column_range(col)
        if self.rng.random() < bias:
            unmarked_values = [
                board.number_at(row, col)
                for row in range(board.rows)
                if (row, col) not in marked
            ]
            if unmarked_values:
                return self.rng.choice(unmarked_values)
        return self.rng.randint(low, high)

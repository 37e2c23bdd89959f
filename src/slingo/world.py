import random

from esper import World
from .events.bus import EventBus
from slingo.components.auto_play import AutoPlayState
from slingo.components.bonus_collector import BonusCollector
from slingo.components.card_state import CardState
from slingo.components.game_rules import GameRules
from slingo.components.game_session import GameSession
from slingo.components.pending_selection import PendingSelection
from slingo.components.session_flags import SessionFlags


def create_world(
    event_bus: EventBus,
    *,
    rules: GameRules | None = None,
    rng: random.Random | None = None,
    bonus_slots: int | None = None,
) -> World:
    """Build the ECS world and register the shared game resources.

    The board itself is dealt by GameSessionSystem when a game starts; the other
    per-game components live on the same entity and are replaced together on reset.
    """
    world = World()
    rules = rules or GameRules()
    setattr(world, "random", rng or random.Random())
    setattr(world, "rules", rules)

    world.create_entity(
        GameSession(spins_remaining=rules.spins_per_game),
        CardState(),
        SessionFlags(),
        PendingSelection(),
    )
    collector = BonusCollector() if bonus_slots is None else BonusCollector(capacity=bonus_slots)
    world.create_entity(collector, AutoPlayState())
    return world

from esper import World

from slingo.components.bonus_collector import BonusCollector
from slingo.events.bus import (
    EventBus,
    EVENT_BONUS_COLLECTED,
    EVENT_BONUS_COLLECTOR_FULL,
    EVENT_BONUS_TRIGGERED,
    EVENT_GAME_STARTED,
    EVENT_STATUS_MESSAGE,
)
from slingo.utils.singletons import get_or_create


class BonusCollectorSystem:
    """Moves bonus symbols into the first free collector slot.

    Collector slots live for one game and are emptied when a new game starts.
    """
    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_BONUS_TRIGGERED, self.on_bonus_triggered)
        self.event_bus.subscribe(EVENT_GAME_STARTED, self.on_game_started)

    def _collector(self) -> BonusCollector:
        return get_or_create(self.world, BonusCollector)

    def on_bonus_triggered(self, sender, **kwargs):
        collector = self._collector()
        slot = collector.fill_next()
        if slot is None:
            self.event_bus.emit(EVENT_BONUS_COLLECTOR_FULL, capacity=collector.capacity)
            self.event_bus.emit(
                EVENT_STATUS_MESSAGE,
                message="Bonus symbol appeared but all collector spaces are full!",
            )
            return
        self.event_bus.emit(
            EVENT_BONUS_COLLECTED,
            slot=slot,
            filled=collector.filled,
            capacity=collector.capacity,
            column=kwargs.get("column"),
        )

    def on_game_started(self, sender, **kwargs):
        self._collector().filled = 0
